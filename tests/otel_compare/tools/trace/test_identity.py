import pytest

from otel_compare.schema import Trace
from otel_compare.tools.trace.identity import (
    IdentityKind,
    TraceIdentity,
    identify,
    index_traces,
)
from tests.fixtures.synthetic_otel_data import make_span, make_trace


@pytest.mark.parametrize(
    "trace,attribute,expected",
    [
        pytest.param(
            make_trace(
                [
                    make_span("root", span_id="span1"),
                    make_span("child", span_id="span2", parent_span_id="span1"),
                ]
            ),
            "name",
            "root",
            id="root span exists",
        ),
        pytest.param(
            make_trace(
                [
                    make_span("child0", span_id="span0", parent_span_id="span9"),
                    make_span("root", span_id="span1"),
                ]
            ),
            "name",
            "root",
            id="root span not first",
        ),
        pytest.param(
            make_trace(
                [
                    make_span("child1", span_id="span1", parent_span_id="span2"),
                    make_span("child2", span_id="span2", parent_span_id="span1"),
                ]
            ),
            "name",
            "child1",
            id="no root span",
        ),
        pytest.param(make_trace([]), "name", "Unknown Trace", id="empty spans"),
        pytest.param(
            make_trace([make_span("test-span")], trace_id="test-trace"),
            "trace_id",
            "test-trace",
            id="by trace_id",
        ),
        pytest.param(
            make_trace([make_span("test-span")], attributes={"test-attr": "test-value"}),
            "test-attr",
            "test-value",
            id="by attribute",
        ),
        pytest.param(
            make_trace(
                [make_span("test-span")],
                resource_attributes={"test-attr": "test-value"},
            ),
            "test-attr",
            "test-value",
            id="by resource attribute",
        ),
        pytest.param(
            make_trace(
                [],
                attributes={"test-attr": "trace-level"},
                resource_attributes={"test-attr": "resource-level"},
            ),
            "test-attr",
            "trace-level",
            id="trace attribute wins",
        ),
        pytest.param(
            make_trace([make_span("test-span")], trace_id="test-trace"),
            "non-existent",
            "test-trace",
            id="fallback to trace_id",
        ),
    ],
)
def test_identify(trace, attribute, expected):
    assert identify(trace, attribute) == expected


def test_identify_trace_id_ignores_spans():
    trace = Trace(trace_id="abc", attributes={"trace_id": "shadowed"})
    assert identify(trace, "trace_id") == "abc"


def test_from_attribute_dispatch():
    assert TraceIdentity.from_attribute("trace_id").kind is IdentityKind.TRACE_ID
    assert TraceIdentity.from_attribute("name").kind is IdentityKind.ROOT_NAME

    by_route = TraceIdentity.from_attribute("http.route")
    assert by_route.kind is IdentityKind.ATTRIBUTE
    assert by_route.key == "http.route"


def test_identify_accepts_strategy(checkout_trace):
    identity = TraceIdentity(IdentityKind.ATTRIBUTE, "service.name")
    assert identify(checkout_trace, identity) == "shop"


def test_index_traces_last_wins():
    first = make_trace([make_span("checkout")], trace_id="first")
    second = make_trace([make_span("checkout")], trace_id="second")
    other = make_trace([make_span("search")], trace_id="third")

    index = index_traces([first, second, other], "name")

    assert index == {"checkout": second, "search": other}
