"""otel-compare: Markdown reports for OpenTelemetry trace exports."""

from .schema import Event, Span, Trace, TraceSet

__all__ = ["Event", "Span", "Trace", "TraceSet"]
__version__ = "0.1.0"
