"""Decoding of JSON trace exports into Trace models."""

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ...schema import Trace, TraceSet
from ..common import log_tool_call

logger = logging.getLogger(__name__)

_TRACE_LIST = TypeAdapter(list[Trace])


class DecodeError(Exception):
    """Raised when a payload is not a well-formed list of traces."""


def parse_traces(data: bytes | str) -> list[Trace]:
    """Parses a JSON payload into an ordered list of traces.

    Args:
        data: A JSON document whose top level is a list of trace objects.

    Returns:
        The decoded traces, in payload order. An empty list is valid.

    Raises:
        DecodeError: If the payload is not valid JSON or does not match the
            trace schema. The underlying error is chained as ``__cause__``.
    """
    try:
        traces = _TRACE_LIST.validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"error unmarshaling traces: {e}") from e

    logger.debug(f"Decoded {len(traces)} traces")
    return traces


def load_trace_file(path: str | Path) -> TraceSet:
    """Reads a trace export file into a TraceSet labelled with its path.

    Raises:
        OSError: If the file cannot be read.
        DecodeError: If the file content cannot be decoded.
    """
    log_tool_call(logger, "load_trace_file", path=path)
    data = Path(path).read_bytes()
    try:
        traces = parse_traces(data)
    except DecodeError as e:
        raise DecodeError(f"error parsing traces from {path}: {e}") from e.__cause__
    return TraceSet(name=str(path), traces=traces)
