"""Trace report tools for otel-compare.

This module provides the trace processing pipeline:
- Decoding of JSON trace exports
- Identity resolution for matching traces across collections
- Duration calculations and span hierarchy reconstruction
- Markdown reports for one, two or many trace collections

Tools:
    Decoding:
        - parse_traces: Decode a JSON payload into traces
        - load_trace_file: Read a file into a named TraceSet

    Analysis:
        - identify: Derive the comparison key of a trace
        - trace_duration / span_duration: Elapsed time calculations
        - walk_spans: Cycle-safe depth-first span traversal

    Reports:
        - generate_markdown: Single collection report
        - compare_traces: Two-collection comparison
        - compare_multiple_traces: N-way comparison matrix
"""

from .comparison import compare_multiple_traces, compare_traces
from .decoder import DecodeError, load_trace_file, parse_traces
from .durations import span_duration, trace_duration
from .formatting import format_duration, truncate_id
from .hierarchy import ParentStatus, build_span_index, resolve_parent, walk_spans
from .identity import IdentityKind, TraceIdentity, identify, index_traces
from .reporting import generate_info_comment, generate_markdown

__all__ = [
    # Decoding
    "DecodeError",
    "load_trace_file",
    "parse_traces",
    # Analysis
    "IdentityKind",
    "ParentStatus",
    "TraceIdentity",
    "build_span_index",
    "identify",
    "index_traces",
    "resolve_parent",
    "span_duration",
    "trace_duration",
    "walk_spans",
    # Formatting
    "format_duration",
    "truncate_id",
    # Reports
    "compare_multiple_traces",
    "compare_traces",
    "generate_info_comment",
    "generate_markdown",
]
