"""Decorators for report entry points with OpenTelemetry instrumentation."""

import functools
import inspect
import logging
import time
from collections.abc import Callable
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.trace import Status, StatusCode

logger = logging.getLogger(__name__)

# Initialize OTel instruments
tracer = trace.get_tracer("otel_compare.tools")
meter = metrics.get_meter("otel_compare.tools")

report_execution_duration = meter.create_histogram(
    name="otel_compare.report.execution_duration",
    description="Duration of report generation",
    unit="ms",
)
report_execution_count = meter.create_counter(
    name="otel_compare.report.execution_count",
    description="Total number of generated reports",
    unit="1",
)


def _describe(value: Any) -> str:
    # Trace collections can be large; log their size instead of their contents.
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}[len={len(value)}]"
    val_str = repr(value)
    if len(val_str) > 200:
        val_str = val_str[:200] + "...(truncated)"
    return val_str


def report_tool(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator for functions that render a report.

    This decorator provides:
    - An OTel span for every execution
    - OTel metrics (count and duration)
    - Standardized logging of arguments, result size and errors

    Example:
        @report_tool
        def generate_markdown(traces: list[Trace]) -> str:
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        tool_name = func.__name__
        start_time = time.time()
        success = True

        with tracer.start_as_current_span(tool_name) as span:
            span.set_attribute("code.function", tool_name)

            try:
                bound = inspect.signature(func).bind(*args, **kwargs)
                bound.apply_defaults()
                arg_str = ", ".join(
                    f"{k}={_describe(v)}" for k, v in bound.arguments.items()
                )
                for k, v in bound.arguments.items():
                    span.set_attribute(f"arg.{k}", _describe(v))
            except TypeError:
                arg_str = f"args={len(args)}, kwargs={sorted(kwargs)}"

            logger.debug(f"Report Call: '{tool_name}' | Args: {arg_str}")

            try:
                result = func(*args, **kwargs)
                duration_ms = (time.time() - start_time) * 1000
                if isinstance(result, str):
                    span.set_attribute("otel_compare.report.length", len(result))
                logger.debug(
                    f"Report Success: '{tool_name}' | Duration: {duration_ms:.2f}ms"
                )
                return result
            except Exception as e:
                success = False
                duration_ms = (time.time() - start_time) * 1000
                logger.error(
                    f"Report Failed: '{tool_name}' | Duration: {duration_ms:.2f}ms | Error: {e}",
                    exc_info=True,
                )
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise
            finally:
                duration_ms = (time.time() - start_time) * 1000
                attributes = {"code.function": tool_name, "success": str(success).lower()}
                report_execution_duration.record(duration_ms, attributes)
                report_execution_count.add(1, attributes)

    return wrapper
