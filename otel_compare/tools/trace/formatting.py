"""Text formatting helpers shared by the Markdown reports."""

import math
from datetime import timedelta

from ...config import DEFAULT_ID_LENGTH

_MILLISECOND = timedelta(milliseconds=1)
_SECOND = timedelta(seconds=1)

NOT_AVAILABLE = "N/A"


def truncate_id(identifier: str, length: int = DEFAULT_ID_LENGTH) -> str:
    """Shortens identifiers longer than ``length`` characters."""
    if len(identifier) > length:
        return identifier[:length]
    return identifier


def format_duration(d: timedelta) -> str:
    """Formats a duration with a µs, ms or s unit.

    Sub-millisecond (and negative) durations are shown in microseconds,
    sub-second durations in whole milliseconds, anything longer in seconds.
    """
    if d < _MILLISECOND:
        return f"{d / timedelta(microseconds=1):.2f}µs"
    if d < _SECOND:
        return f"{float(d // _MILLISECOND):.2f}ms"
    return f"{d.total_seconds():.2f}s"


def percent_change(baseline: timedelta, value: timedelta) -> float | None:
    """Returns the change from baseline in percent, None for a zero baseline."""
    if not baseline:
        return None
    return (value - baseline) / baseline * 100


def format_percent(change: float | None) -> str:
    if change is None or not math.isfinite(change):
        return NOT_AVAILABLE
    return f"{change:.1f}%"


def format_difference(baseline: timedelta, value: timedelta) -> str:
    """Formats ``value - baseline`` with its percentage change."""
    diff = format_duration(value - baseline)
    return f"{diff} ({format_percent(percent_change(baseline, value))})"


def strip_suffix(name: str, suffix: str) -> str:
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name
