"""Telemetry and logging setup for otel-compare using OpenTelemetry."""

import json
import logging
import os
import sys
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME as RESOURCE_SERVICE_NAME
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

SERVICE_NAME = "otel-compare"


def get_tracer(name: str) -> trace.Tracer:
    """Returns a tracer for the given module name."""
    return trace.get_tracer(name)


def get_meter(name: str) -> metrics.Meter:
    """Returns a meter for the given module name."""
    return metrics.get_meter(name)


def log_tool_call(logger: logging.Logger, func_name: str, **kwargs: Any) -> None:
    """Logs a call with arguments, truncating long values.

    Args:
        logger: The logger instance to use.
        func_name: Name of the function being called.
        **kwargs: Arguments to log.
    """
    safe_args = {}
    for k, v in kwargs.items():
        val_str = str(v)
        if len(val_str) > 200:
            safe_args[k] = val_str[:200] + "... (truncated)"
        else:
            safe_args[k] = val_str

    logger.debug(f"Tool Call: {func_name} | Args: {safe_args}")


def setup_telemetry(level: int = logging.INFO) -> None:
    """Configures telemetry (traces, metrics, logs) for the CLI.

    Configures:
    - Traces and metrics: OTLP gRPC when OTEL_EXPORTER_OTLP_ENDPOINT is set,
      local SDK providers otherwise
    - Logs: text with trace correlation, or JSON lines when LOG_FORMAT=JSON

    Args:
        level: The logging level to use (default: INFO)
    """
    env_level = os.environ.get("LOG_LEVEL", "").upper()
    if env_level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        level = getattr(logging, env_level)

    from opentelemetry.instrumentation.logging import LoggingInstrumentor

    # Initialize Trace-Log correlation
    LoggingInstrumentor().instrument(set_logging_format=False)

    otlp_endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")

    if otlp_endpoint:
        resource = Resource.create(
            {
                RESOURCE_SERVICE_NAME: SERVICE_NAME,
                "service.namespace": "otel-compare",
            }
        )

        # -- TRACES --
        if os.environ.get("OTEL_TRACES_EXPORTER", "").lower() != "none":
            span_processor = BatchSpanProcessor(
                OTLPSpanExporter(endpoint=otlp_endpoint)
            )

            current_tracer_provider = trace.get_tracer_provider()
            if hasattr(current_tracer_provider, "add_span_processor"):
                current_tracer_provider.add_span_processor(span_processor)
            else:
                tracer_provider = TracerProvider(resource=resource)
                tracer_provider.add_span_processor(span_processor)
                trace.set_tracer_provider(tracer_provider)

        # -- METRICS --
        if os.environ.get("OTEL_METRICS_EXPORTER", "").lower() != "none":
            reader = PeriodicExportingMetricReader(
                OTLPMetricExporter(endpoint=otlp_endpoint),
                export_interval_millis=60000,
            )
            # SDK MeterProviders do not accept readers after construction.
            metrics.set_meter_provider(
                MeterProvider(resource=resource, metric_readers=[reader])
            )
    else:
        if not isinstance(trace.get_tracer_provider(), TracerProvider):
            trace.set_tracer_provider(TracerProvider())
        if not isinstance(metrics.get_meter_provider(), MeterProvider):
            metrics.set_meter_provider(MeterProvider())

    _configure_logging_handlers(level)


class JsonFormatter(logging.Formatter):
    """JSON log formatter with OTel correlation."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": self.formatTime(record, self.datefmt),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "func": record.funcName,
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_obj["trace_id"] = format(span_context.trace_id, "032x")
            log_obj["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def _configure_logging_handlers(level: int) -> None:
    """Internal helper to configure logging handlers."""
    log_format = os.environ.get("LOG_FORMAT", "TEXT").upper()

    if log_format == "JSON":
        # stdout carries the report in dry-run mode
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
        logging.getLogger().handlers = [handler]
        logging.getLogger().setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s [trace_id=%(otelTraceID)s span_id=%(otelSpanID)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            stream=sys.stderr,
            force=True,
        )
        logging.getLogger().setLevel(level)


def set_span_attribute(key: str, value: Any) -> None:
    """Sets an attribute on the current OTel span. Safe to call if no span active."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attribute(key, value)
