"""Common utilities for otel-compare tools."""

from .decorators import report_tool
from .telemetry import get_meter, get_tracer, log_tool_call, set_span_attribute

__all__ = [
    "get_meter",
    "get_tracer",
    "log_tool_call",
    "report_tool",
    "set_span_attribute",
]
