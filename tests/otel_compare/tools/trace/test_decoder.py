import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from otel_compare.schema import ZERO_TIME
from otel_compare.tools.trace.decoder import DecodeError, load_trace_file, parse_traces
from tests.fixtures.synthetic_otel_data import to_payload


def test_parse_traces_valid():
    data = (
        b'[{"trace_id": "trace1", "spans": [{"span_id": "span1", "name": "test", '
        b'"start_time": "2024-03-07T00:00:00Z", "end_time": "2024-03-07T00:00:01Z"}]}]'
    )
    traces = parse_traces(data)

    assert len(traces) == 1
    span = traces[0].spans[0]
    assert span.span_id == "span1"
    assert span.parent_span_id == ""
    assert span.end_time == datetime(2024, 3, 7, 0, 0, 1, tzinfo=timezone.utc)
    assert traces[0].attributes == {}
    assert traces[0].resource_attributes == {}


def test_parse_traces_empty_array():
    assert parse_traces(b"[]") == []


def test_parse_traces_accepts_str(sample_payload):
    traces = parse_traces(json.dumps(sample_payload))
    assert [t.trace_id for t in traces] == ["trace-a", "trace-empty"]


def test_parse_traces_preserves_order(sample_payload):
    traces = parse_traces(to_payload(sample_payload))
    assert [s.name for s in traces[0].spans] == ["GET /users", "db.query"]
    assert traces[1].spans == []


def test_parse_traces_invalid_json():
    with pytest.raises(DecodeError) as exc_info:
        parse_traces(b"invalid json")
    assert isinstance(exc_info.value.__cause__, ValidationError)


@pytest.mark.parametrize(
    "payload",
    [
        b'{"trace_id": "not-a-list"}',
        b'[{"trace_id": "t", "spans": [{"start_time": "yesterday"}]}]',
        b'[{"trace_id": "t", "attributes": {"retries": 3}}]',
    ],
)
def test_parse_traces_schema_mismatch(payload):
    with pytest.raises(DecodeError):
        parse_traces(payload)


def test_parse_traces_null_collections_are_empty():
    data = (
        b'[{"trace_id": "t", "attributes": null, "resource_attributes": null, '
        b'"spans": [{"span_id": "s", "parent_span_id": null, "attributes": null, "events": null}]}]'
    )
    trace = parse_traces(data)[0]

    assert trace.attributes == {}
    assert trace.spans[0].parent_span_id == ""
    assert trace.spans[0].events == []
    assert trace.spans[0].start_time == ZERO_TIME


def test_parse_traces_naive_timestamps_are_utc():
    data = (
        b'[{"trace_id": "t", "spans": [{"start_time": "2024-03-07T00:00:00", '
        b'"end_time": "2024-03-07T00:00:01Z"}]}]'
    )
    span = parse_traces(data)[0].spans[0]
    assert span.start_time.tzinfo is not None
    assert (span.end_time - span.start_time).total_seconds() == 1


def test_parsed_models_are_frozen():
    trace = parse_traces(b'[{"trace_id": "t"}]')[0]
    with pytest.raises(ValidationError):
        trace.trace_id = "other"


def test_load_trace_file(tmp_path, sample_payload):
    path = tmp_path / "baseline.json"
    path.write_bytes(to_payload(sample_payload))

    trace_set = load_trace_file(path)

    assert trace_set.name == str(path)
    assert len(trace_set.traces) == 2


def test_load_trace_file_names_bad_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{")

    with pytest.raises(DecodeError, match="broken.json"):
        load_trace_file(path)


def test_load_trace_file_missing(tmp_path):
    with pytest.raises(OSError):
        load_trace_file(tmp_path / "missing.json")
