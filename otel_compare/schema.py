"""Pydantic schemas for exported OpenTelemetry trace data.

This module defines the read-only data model shared by the decoder and all
report generators:
- Event: a timestamped annotation on a span
- Span: a single timed operation, optionally parented by another span
- Trace: an ordered collection of spans sharing one trace identifier
- TraceSet: a named collection of traces (usually one input file)

Field names follow the JSON export format, so a payload can be validated
directly into these models.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Zero value of an absent timestamp in the export format.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Event(BaseModel):
    """An event recorded within a span."""

    model_config = ConfigDict(frozen=True)

    time: datetime = Field(default=ZERO_TIME, description="When the event occurred")
    name: str = Field(default="", description="Event name")
    attributes: dict[str, str] = Field(
        default_factory=dict, description="Event attributes"
    )

    @field_validator("attributes", mode="before")
    @classmethod
    def _null_attributes(cls, value):
        return {} if value is None else value

    @field_validator("time")
    @classmethod
    def _utc_time(cls, value: datetime) -> datetime:
        return _as_utc(value)


class Span(BaseModel):
    """A single span in a trace."""

    model_config = ConfigDict(frozen=True)

    span_id: str = Field(default="", description="Span identifier")
    parent_span_id: str = Field(
        default="", description="Parent span identifier, empty for root spans"
    )
    name: str = Field(default="", description="Name/operation of the span")
    start_time: datetime = Field(default=ZERO_TIME, description="Span start")
    end_time: datetime = Field(default=ZERO_TIME, description="Span end")
    attributes: dict[str, str] = Field(
        default_factory=dict, description="Span attributes"
    )
    events: list[Event] = Field(default_factory=list, description="Span events")

    @field_validator("span_id", "parent_span_id", "name", mode="before")
    @classmethod
    def _null_string(cls, value):
        return "" if value is None else value

    @field_validator("attributes", mode="before")
    @classmethod
    def _null_attributes(cls, value):
        return {} if value is None else value

    @field_validator("events", mode="before")
    @classmethod
    def _null_events(cls, value):
        return [] if value is None else value

    @field_validator("start_time", "end_time")
    @classmethod
    def _utc_times(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def is_root(self) -> bool:
        return self.parent_span_id == ""


class Trace(BaseModel):
    """A complete OpenTelemetry trace."""

    model_config = ConfigDict(frozen=True)

    trace_id: str = Field(default="", description="Unique trace identifier")
    spans: list[Span] = Field(default_factory=list, description="Spans in order")
    attributes: dict[str, str] = Field(
        default_factory=dict, description="Trace-level attributes"
    )
    resource_attributes: dict[str, str] = Field(
        default_factory=dict,
        description="Resource attributes, consulted after trace attributes",
    )

    @field_validator("trace_id", mode="before")
    @classmethod
    def _null_trace_id(cls, value):
        return "" if value is None else value

    @field_validator("spans", mode="before")
    @classmethod
    def _null_spans(cls, value):
        return [] if value is None else value

    @field_validator("attributes", "resource_attributes", mode="before")
    @classmethod
    def _null_attributes(cls, value):
        return {} if value is None else value


class TraceSet(BaseModel):
    """A set of traces loaded from a single source."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Source label, usually the input file path")
    traces: list[Trace] = Field(default_factory=list)
