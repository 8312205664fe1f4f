"""Trace comparison reports between two or more collections."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from ...config import RenderOptions
from ...schema import Span, Trace, TraceSet
from ..common import get_meter, log_tool_call, report_tool, set_span_attribute
from .durations import ZERO, span_duration, trace_duration
from .formatting import format_difference, format_duration, strip_suffix
from .identity import ROOT_NAME, TraceIdentity, index_traces, lookup_attribute

logger = logging.getLogger(__name__)

meter = get_meter(__name__)

unmatched_traces = meter.create_counter(
    name="otel_compare.comparison.unmatched_traces",
    description="Count of traces present in only some of the compared sets",
    unit="1",
)

PRESENT = "✓"
ABSENT = "✗"
NO_DIFF = "-"
FIRST_SLOWER = "🟢"
FIRST_FASTER = "🔴"


@dataclass(frozen=True)
class DurationSpread:
    """Largest deviation of other durations from the first one."""

    max_diff: timedelta
    first_slower: bool

    @classmethod
    def of(cls, durations: list[timedelta]) -> "DurationSpread":
        """Compares the first duration with every other one.

        Missing entries must already be replaced by zero.
        """
        if len(durations) < 2:
            return cls(ZERO, False)
        first = durations[0]
        max_diff = max(abs(d - first) for d in durations[1:])
        first_slower = any(first > d for d in durations[1:])
        return cls(max_diff, first_slower)

    def render(self) -> str:
        if not self.max_diff:
            return NO_DIFF
        indicator = FIRST_SLOWER if self.first_slower else FIRST_FASTER
        return f"{indicator} {format_duration(self.max_diff)}"


# =============================================================================
# Pairwise comparison
# =============================================================================


@report_tool
def compare_traces(
    first: list[Trace],
    second: list[Trace],
    attribute: str = ROOT_NAME,
    options: RenderOptions | None = None,
) -> str:
    """Compares two trace collections.

    Traces are matched by identity (root span name unless ``attribute`` says
    otherwise). For every match the report shows the trace durations and the
    durations of spans whose names occur in both traces.

    Args:
        first: The baseline traces.
        second: The traces compared against the baseline.
        attribute: Identity rule used to match traces.
        options: Rendering options (unused for pairwise output, accepted for a
            uniform reporter signature).

    Returns:
        The Markdown comparison report.
    """
    identity = TraceIdentity.from_attribute(attribute)
    first_map = index_traces(first, identity)
    second_map = index_traces(second, identity)

    matching = sorted(name for name in first_map if name in second_map)
    only_first = sorted(name for name in first_map if name not in second_map)
    only_second = sorted(name for name in second_map if name not in first_map)

    set_span_attribute("otel_compare.matching_traces", len(matching))
    unmatched_traces.add(len(only_first) + len(only_second), {"mode": "pairwise"})

    lines = [
        "### Trace Comparison",
        "",
        "**Comparison Summary:**",
        "",
        "| Category | Count |",
        "|----------|-------|",
        f"| Matching Traces | {len(matching)} |",
        f"| Only in First File | {len(only_first)} |",
        f"| Only in Second File | {len(only_second)} |",
        "",
    ]

    if matching:
        lines += ["**Matching Traces:**", ""]
        for name in matching:
            lines += _pairwise_details(name, first_map[name], second_map[name])

    if only_first:
        lines += ["**Traces Only in First File:**", ""]
        lines += [f"- {name}" for name in only_first]
        lines.append("")

    if only_second:
        lines += ["**Traces Only in Second File:**", ""]
        lines += [f"- {name}" for name in only_second]
        lines.append("")

    return "\n".join(lines) + "\n"


def _pairwise_details(name: str, t1: Trace, t2: Trace) -> list[str]:
    d1 = trace_duration(t1)
    d2 = trace_duration(t2)

    lines = [
        "<details>",
        f"<summary>{name}</summary>",
        "",
        "**Duration Comparison:**",
        "",
        "| File | Duration |",
        "|------|----------|",
        f"| First | {format_duration(d1)} |",
        f"| Second | {format_duration(d2)} |",
        f"| Difference | {format_difference(d1, d2)} |",
        "",
        "**Span Comparison:**",
        "",
        "| Span Name | First Duration | Second Duration | Difference |",
        "|-----------|----------------|-----------------|------------|",
    ]

    # Later spans with a repeated name replace earlier ones.
    spans1 = {s.name: s for s in t1.spans}
    spans2 = {s.name: s for s in t2.spans}
    for span_name in sorted(spans1):
        if span_name not in spans2:
            continue
        sd1 = span_duration(spans1[span_name])
        sd2 = span_duration(spans2[span_name])
        lines.append(
            f"| {span_name} | {format_duration(sd1)} | {format_duration(sd2)} "
            f"| {format_difference(sd1, sd2)} |"
        )

    lines += ["", "</details>", ""]
    return lines


# =============================================================================
# N-way comparison
# =============================================================================


@report_tool
def compare_multiple_traces(
    trace_sets: list[TraceSet],
    attribute: str,
    options: RenderOptions | None = None,
) -> str:
    """Compares any number of named trace sets in a matrix report.

    The summary lists every identity found in any set with its presence per
    set and the largest duration deviation from the first set (sets lacking
    the identity count as zero). Identities present in every set get a
    detailed block comparing trace attributes and span durations.

    Args:
        trace_sets: The sets to compare; the first one is the baseline.
        attribute: Identity rule used to match traces across sets.
        options: Rendering options.

    Returns:
        The Markdown comparison report.
    """
    options = options or RenderOptions()
    log_tool_call(
        logger,
        "compare_multiple_traces",
        sets=[s.name for s in trace_sets],
        attribute=attribute,
    )

    identity = TraceIdentity.from_attribute(attribute)
    trace_maps = [index_traces(s.traces, identity) for s in trace_sets]
    names = sorted({name for trace_map in trace_maps for name in trace_map})
    labels = [strip_suffix(s.name, options.set_name_suffix) for s in trace_sets]

    set_span_attribute("otel_compare.identity_count", len(names))

    lines = [
        "### Multiple Traces Comparison",
        "",
        "**Comparison Summary:**",
        "",
        _header("Trace Name", labels, "Duration Diff"),
        _separator("------------", len(labels), "------------"),
    ]

    unmatched = 0
    for name in names:
        cells = []
        durations = []
        for trace_map in trace_maps:
            trace = trace_map.get(name)
            if trace is None:
                unmatched += 1
                cells.append(ABSENT)
                durations.append(ZERO)
            else:
                cells.append(PRESENT)
                durations.append(trace_duration(trace))
        cells.append(DurationSpread.of(durations).render())
        lines.append(_row(name, cells))
    unmatched_traces.add(unmatched, {"mode": "multiple"})

    lines += ["", "**Detailed Comparison:**", ""]
    for name in names:
        traces = [trace_map.get(name) for trace_map in trace_maps]
        if any(t is None for t in traces):
            continue
        lines += _multiple_details(name, traces, labels)

    return "\n".join(lines) + "\n"


def _multiple_details(name: str, traces: list[Trace], labels: list[str]) -> list[str]:
    lines = [
        "<details>",
        f"<summary>{name}</summary>",
        "",
        "**Trace Attributes:**",
        "",
        _header("Attribute", labels),
        _separator("-----------", len(labels)),
    ]

    keys = sorted(
        {k for t in traces for k in t.attributes}
        | {k for t in traces for k in t.resource_attributes}
    )
    for key in keys:
        lines.append(_row(key, [lookup_attribute(t, key) for t in traces]))
    lines.append("")

    lines += [
        "**Span Comparison:**",
        "",
        _header("Span Name", labels, "Duration Diff"),
        _separator("-----------", len(labels), "------------"),
    ]

    span_names = sorted({s.name for t in traces for s in t.spans})
    for span_name in span_names:
        spans = [_first_span_named(t, span_name) for t in traces]
        cells = []
        durations = []
        for span in spans:
            if span is None:
                cells.append(ABSENT)
                durations.append(ZERO)
            else:
                d = span_duration(span)
                cells.append(format_duration(d))
                durations.append(d)
        cells.append(DurationSpread.of(durations).render())
        lines.append(_row(span_name, cells))
        lines.append(
            _row("Attributes", [_attribute_summary(span) for span in spans] + [""])
        )

    lines += ["", "</details>", ""]
    return lines


def _first_span_named(trace: Trace, name: str) -> Span | None:
    for span in trace.spans:
        if span.name == name:
            return span
    return None


def _attribute_summary(span: Span | None) -> str:
    if span is None:
        return ""
    return "<br> ".join(sorted(f"{k}: {v}" for k, v in span.attributes.items()))


def _header(first: str, labels: list[str], last: str | None = None) -> str:
    cells = labels + ([last] if last is not None else [])
    return _row(first, cells)


def _separator(dashes: str, columns: int, last: str | None = None) -> str:
    parts = [dashes] * (columns + 1)
    if last is not None:
        parts.append(last)
    return "|" + "|".join(parts) + "|"


def _row(first: str, cells: list[str]) -> str:
    return "| " + " | ".join([first] + cells) + " |"
