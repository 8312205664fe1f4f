from otel_compare.tools.trace.hierarchy import (
    ParentStatus,
    build_span_index,
    resolve_parent,
    walk_spans,
)
from tests.fixtures.synthetic_otel_data import make_span, make_trace


def _walk(trace):
    return [(depth, span.name) for depth, span in walk_spans(trace)]


def test_walk_spans_depth_first(checkout_trace):
    assert _walk(checkout_trace) == [
        (0, "checkout"),
        (1, "reserve-stock"),
        (2, "db.query"),
        (1, "charge-card"),
    ]


def test_walk_spans_follows_sequence_order_not_duration():
    trace = make_trace(
        [
            make_span("root", span_id="r", duration_ms=100),
            make_span("short", span_id="a", parent_span_id="r", duration_ms=1),
            make_span("long", span_id="b", parent_span_id="r", duration_ms=90),
        ]
    )
    assert _walk(trace) == [(0, "root"), (1, "short"), (1, "long")]


def test_walk_spans_multiple_roots():
    trace = make_trace(
        [
            make_span("first", span_id="a"),
            make_span("child", span_id="c", parent_span_id="b"),
            make_span("second", span_id="b"),
        ]
    )
    assert _walk(trace) == [(0, "first"), (0, "second"), (1, "child")]


def test_walk_spans_self_parent_terminates():
    trace = make_trace(
        [
            make_span("root", span_id="r"),
            make_span("loop", span_id="r", parent_span_id="r"),
        ]
    )
    assert _walk(trace) == [(0, "root"), (1, "loop")]


def test_walk_spans_cycle_unreachable_from_root():
    trace = make_trace(
        [
            make_span("a", span_id="a", parent_span_id="b"),
            make_span("b", span_id="b", parent_span_id="a"),
        ]
    )
    assert _walk(trace) == []


def test_walk_spans_root_with_empty_id():
    # Children of "" are the roots themselves; each is yielded once.
    trace = make_trace([make_span("anonymous", span_id="")])
    trace = trace.model_copy(
        update={"spans": [trace.spans[0].model_copy(update={"span_id": ""})]}
    )
    assert _walk(trace) == [(0, "anonymous")]


def test_build_span_index_first_wins():
    first = make_span("first", span_id="dup")
    second = make_span("second", span_id="dup")
    index = build_span_index(make_trace([first, second]))
    assert index["dup"] is first


def test_resolve_parent(checkout_trace):
    index = build_span_index(checkout_trace)
    root, stock = checkout_trace.spans[0], checkout_trace.spans[1]

    root_link = resolve_parent(root, index)
    assert root_link.status is ParentStatus.ROOT
    assert root_link.display_name == "root"

    stock_link = resolve_parent(stock, index)
    assert stock_link.status is ParentStatus.RESOLVED
    assert stock_link.parent is root
    assert stock_link.display_name == "checkout"


def test_resolve_parent_unresolved_displays_as_root():
    orphan = make_span("orphan", span_id="o", parent_span_id="missing")
    link = resolve_parent(orphan, build_span_index(make_trace([orphan])))

    assert link.status is ParentStatus.UNRESOLVED
    assert link.parent is None
    assert link.display_name == "root"
