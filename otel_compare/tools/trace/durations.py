"""Duration calculations for traces and spans."""

from datetime import timedelta

from ...schema import Span, Trace

ZERO = timedelta(0)


def span_duration(span: Span) -> timedelta:
    """Returns end - start. Negative for malformed spans; not clamped."""
    return span.end_time - span.start_time


def trace_duration(trace: Trace) -> timedelta:
    """Returns the wall-clock envelope of a trace.

    This is the latest span end minus the earliest span start, not the sum of
    span durations. A trace without spans has zero duration.
    """
    if not trace.spans:
        return ZERO
    earliest = min(s.start_time for s in trace.spans)
    latest = max(s.end_time for s in trace.spans)
    return latest - earliest
