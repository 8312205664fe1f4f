"""Trace identity resolution used to match traces across collections."""

from dataclasses import dataclass
from enum import Enum

from ...schema import Trace

TRACE_ID = "trace_id"
ROOT_NAME = "name"
UNKNOWN_TRACE = "Unknown Trace"


class IdentityKind(str, Enum):
    """How a trace identity is derived."""

    TRACE_ID = "trace_id"  # the trace's own identifier
    ROOT_NAME = "root_name"  # name of the root span
    ATTRIBUTE = "attribute"  # trace attribute, then resource attribute


@dataclass(frozen=True)
class TraceIdentity:
    """A resolution rule for the comparison key of a trace."""

    kind: IdentityKind
    key: str = ""

    @classmethod
    def from_attribute(cls, attribute: str) -> "TraceIdentity":
        """Maps an attribute name as given on the command line to a rule."""
        if attribute == TRACE_ID:
            return cls(IdentityKind.TRACE_ID)
        if attribute == ROOT_NAME:
            return cls(IdentityKind.ROOT_NAME)
        return cls(IdentityKind.ATTRIBUTE, attribute)

    def resolve(self, trace: Trace) -> str:
        if self.kind is IdentityKind.TRACE_ID:
            return trace.trace_id
        if self.kind is IdentityKind.ROOT_NAME:
            return root_span_name(trace)
        if self.kind is IdentityKind.ATTRIBUTE:
            return lookup_attribute(trace, self.key, default=trace.trace_id)
        raise ValueError(f"unsupported identity kind: {self.kind!r}")


def root_span_name(trace: Trace) -> str:
    """Returns the first root span's name, else the first span's name."""
    if not trace.spans:
        return UNKNOWN_TRACE
    for span in trace.spans:
        if span.is_root:
            return span.name
    return trace.spans[0].name


def lookup_attribute(trace: Trace, key: str, default: str = "") -> str:
    """Looks up a key in trace attributes, falling back to resource attributes."""
    if key in trace.attributes:
        return trace.attributes[key]
    if key in trace.resource_attributes:
        return trace.resource_attributes[key]
    return default


def identify(trace: Trace, attribute: str | TraceIdentity) -> str:
    """Derives the comparison key of a trace.

    Args:
        trace: The trace to identify.
        attribute: ``"trace_id"``, ``"name"``, any attribute key, or a
            prebuilt TraceIdentity.

    Returns:
        The trace identifier, the root span name (``"Unknown Trace"`` for
        traces without spans), or the attribute value falling back to the
        trace identifier.
    """
    if not isinstance(attribute, TraceIdentity):
        attribute = TraceIdentity.from_attribute(attribute)
    return attribute.resolve(trace)


def index_traces(
    traces: list[Trace], attribute: str | TraceIdentity
) -> dict[str, Trace]:
    """Builds an identity -> trace mapping; later traces replace earlier ones."""
    if not isinstance(attribute, TraceIdentity):
        attribute = TraceIdentity.from_attribute(attribute)
    return {attribute.resolve(t): t for t in traces}
