"""Markdown report for a single collection of traces."""

import logging

from ...config import RenderOptions
from ...schema import Span, Trace
from ..common import report_tool, set_span_attribute
from .durations import span_duration, trace_duration
from .formatting import format_duration, truncate_id
from .hierarchy import build_span_index, resolve_parent, walk_spans
from .identity import ROOT_NAME, identify

logger = logging.getLogger(__name__)

INFO_HEADING = "### OpenTelemetry Traces Analysis"


@report_tool
def generate_markdown(traces: list[Trace], options: RenderOptions | None = None) -> str:
    """Renders an overview, span details and per-trace hierarchy as Markdown.

    Traces are listed by duration (longest first) and spans within a trace by
    span duration. The hierarchical section keeps the trace's span order. The
    input list and the traces' span lists are never reordered.

    Args:
        traces: Traces to describe.
        options: Rendering options; defaults to RenderOptions().

    Returns:
        The Markdown report.
    """
    options = options or RenderOptions()
    set_span_attribute("otel_compare.trace_count", len(traces))

    ordered = sorted(traces, key=trace_duration, reverse=True)
    span_indexes = [build_span_index(t) for t in ordered]

    lines = [
        "**Traces Overview:**",
        "",
        "| Trace ID | Trace Name | Duration | Spans |",
        "|----------|------------|----------|-------|",
    ]
    for t in ordered:
        lines.append(
            f"| `{truncate_id(t.trace_id, options.id_length)}` "
            f"| {identify(t, ROOT_NAME)} "
            f"| {format_duration(trace_duration(t))} "
            f"| {len(t.spans)} |"
        )

    lines += [
        "",
        "**Span Details:**",
        "",
        "| Trace ID | Span ID | Span Name | Duration | Parent |",
        "|----------|---------|-----------|----------|--------|",
    ]
    for t, index in zip(ordered, span_indexes):
        for span in sorted(t.spans, key=span_duration, reverse=True):
            link = resolve_parent(span, index)
            lines.append(
                f"| `{truncate_id(t.trace_id, options.id_length)}` "
                f"| `{truncate_id(span.span_id, options.id_length)}` "
                f"| {span.name} "
                f"| {format_duration(span_duration(span))} "
                f"| {link.display_name} |"
            )

    lines += ["", "**Trace Details:**", ""]
    for t in ordered:
        lines += _trace_details(t, options)

    return "\n".join(lines) + "\n"


def _trace_details(trace: Trace, options: RenderOptions) -> list[str]:
    lines = [
        "<details>",
        f"<summary>Trace {truncate_id(trace.trace_id, options.id_length)} "
        f"({identify(trace, ROOT_NAME)})</summary>",
        "",
    ]

    if trace.attributes:
        lines += ["**Trace Attributes:**", "", "| Key | Value |", "|-----|--------|"]
        for key in sorted(trace.attributes):
            lines.append(f"| {key} | {trace.attributes[key]} |")
        lines.append("")

    lines += ["**Spans:**", ""]
    rendered = 0
    for depth, span in walk_spans(trace):
        lines += _span_lines(span, "  " * depth)
        rendered += 1
    if rendered < len(trace.spans):
        logger.debug(
            f"Trace {trace.trace_id}: {len(trace.spans) - rendered} spans not reachable from a root span"
        )

    lines += ["</details>", ""]
    return lines


def _span_lines(span: Span, indent: str) -> list[str]:
    lines = [f"{indent}- **{span.name}** ({format_duration(span_duration(span))})"]

    if span.attributes:
        lines.append(f"{indent}  **Attributes:**")
        for key in sorted(span.attributes):
            lines.append(f"{indent}  - {key}: {span.attributes[key]}")

    if span.events:
        lines.append(f"{indent}  **Events:**")
        for event in span.events:
            lines.append(f"{indent}  - {event.name}")
            for key in sorted(event.attributes):
                lines.append(f"{indent}    - {key}: {event.attributes[key]}")

    return lines


@report_tool
def generate_info_comment(
    traces: list[Trace], options: RenderOptions | None = None
) -> str:
    """Renders the single-collection report under the PR comment heading."""
    return f"{INFO_HEADING}\n\n{generate_markdown(traces, options)}"
