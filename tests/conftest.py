"""Shared test fixtures for otel-compare tests."""

from typing import Any

import pytest

from otel_compare.schema import Trace, TraceSet
from tests.fixtures.synthetic_otel_data import (
    exception_event,
    make_span,
    make_trace,
    span_dict,
    trace_dict,
)


@pytest.fixture
def checkout_trace() -> Trace:
    """A three level trace with attributes and events.

    checkout (0-300ms)
      reserve-stock (10-60ms)
        db.query (20-50ms)
      charge-card (70-270ms)
    """
    return make_trace(
        [
            make_span(
                "checkout",
                span_id="root-span-0001",
                duration_ms=300,
                attributes={"http.method": "POST"},
            ),
            make_span(
                "reserve-stock",
                span_id="stock-span-0002",
                parent_span_id="root-span-0001",
                start_ms=10,
                duration_ms=50,
            ),
            make_span(
                "charge-card",
                span_id="card-span-0003",
                parent_span_id="root-span-0001",
                start_ms=70,
                duration_ms=200,
                events=[exception_event("TimeoutError", "gateway timeout")],
            ),
            make_span(
                "db.query",
                span_id="db-span-0004",
                parent_span_id="stock-span-0002",
                start_ms=20,
                duration_ms=30,
                attributes={"db.system": "postgresql", "db.operation": "SELECT"},
            ),
        ],
        trace_id="4bf92f3577b34da6a3ce929d0e0e4736",
        attributes={"http.route": "/checkout"},
        resource_attributes={"service.name": "shop"},
    )


@pytest.fixture
def login_trace() -> Trace:
    return make_trace(
        [make_span("login", span_id="login-root", duration_ms=50)],
        trace_id="00f067aa0ba902b7",
        resource_attributes={"service.name": "auth"},
    )


@pytest.fixture
def sample_payload() -> list[dict[str, Any]]:
    return [
        trace_dict(
            [
                span_dict("GET /users", span_id="s1", duration_ms=120),
                span_dict(
                    "db.query", span_id="s2", parent_span_id="s1", start_ms=10, duration_ms=60
                ),
            ],
            trace_id="trace-a",
            attributes={"http.route": "/users"},
        ),
        trace_dict([], trace_id="trace-empty"),
    ]


@pytest.fixture
def three_sets() -> list[TraceSet]:
    """Three runs of the same workload; 'search' is missing from run-b."""

    def run(name: str, checkout_ms: float, search_ms: float | None) -> TraceSet:
        traces = [
            make_trace(
                [make_span("checkout", span_id="c", duration_ms=checkout_ms)],
                trace_id=f"{name}-checkout",
                attributes={"env": name},
            )
        ]
        if search_ms is not None:
            traces.append(
                make_trace(
                    [make_span("search", span_id="s", duration_ms=search_ms)],
                    trace_id=f"{name}-search",
                )
            )
        return TraceSet(name=f"{name}.json", traces=traces)

    return [run("run-a", 100, 40), run("run-b", 150, None), run("run-c", 100, 60)]
