"""Span hierarchy reconstruction: parent lookup and cycle-safe traversal."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from ...schema import Span, Trace

ROOT_LABEL = "root"


class ParentStatus(str, Enum):
    """Outcome of resolving a span's parent reference."""

    ROOT = "root"  # no parent id
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"  # parent id set but not present in the trace


@dataclass(frozen=True)
class ParentLink:
    status: ParentStatus
    parent: Span | None = None

    @property
    def display_name(self) -> str:
        """Parent name, or ``"root"`` for root spans and dangling references."""
        if self.parent is None:
            return ROOT_LABEL
        return self.parent.name


def build_span_index(trace: Trace) -> dict[str, Span]:
    """Maps span ids to spans. The first span with a given id wins."""
    index: dict[str, Span] = {}
    for span in trace.spans:
        index.setdefault(span.span_id, span)
    return index


def resolve_parent(span: Span, index: dict[str, Span]) -> ParentLink:
    if span.is_root:
        return ParentLink(ParentStatus.ROOT)
    parent = index.get(span.parent_span_id)
    if parent is None:
        return ParentLink(ParentStatus.UNRESOLVED)
    return ParentLink(ParentStatus.RESOLVED, parent)


def walk_spans(trace: Trace, root_parent_id: str = "") -> Iterator[tuple[int, Span]]:
    """Yields ``(depth, span)`` pairs in depth-first order.

    The walk starts at spans whose parent id equals ``root_parent_id`` and
    descends into spans whose parent id equals the current span's id. Siblings
    are visited in trace sequence order. Each span is yielded at most once, so
    cyclic or self-referencing parent chains terminate; spans that are not
    reachable from the starting level are not yielded.
    """
    children: dict[str, list[int]] = {}
    for position, span in enumerate(trace.spans):
        children.setdefault(span.parent_span_id, []).append(position)

    visited: set[int] = set()
    stack = [(0, p) for p in reversed(children.get(root_parent_id, []))]
    while stack:
        depth, position = stack.pop()
        if position in visited:
            continue
        visited.add(position)
        span = trace.spans[position]
        yield depth, span
        for child in reversed(children.get(span.span_id, [])):
            if child not in visited:
                stack.append((depth + 1, child))
