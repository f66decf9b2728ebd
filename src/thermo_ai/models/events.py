"""Pydantic models for booking-event extraction.

Defines the structured data types used in the iCal ingestion pipeline:

- :class:`BookingEvent` -- one calendar entry extracted from a feed.
  Timestamps stay as the model's original ISO 8601 strings so that
  re-serialising an event reproduces them byte-for-byte.
- :class:`ExtractionResult` -- the response validator's output.
- :class:`ActionResult` -- the single-property sync action's contract.
- :class:`LLMResponseSchema` -- schema for Gemini's ``response_schema``
  parameter.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Extended calendar-date and time form; fromisoformat alone also accepts
# the basic form (20240820T143000Z).
_EXTENDED_DATETIME = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")


def parse_utc_timestamp(value: str) -> datetime:
    """Parse an absolute ISO 8601 timestamp expressed in UTC.

    Accepts a ``Z`` suffix or a zero offset (``+00:00``).  Naive values,
    date-only values, and non-zero offsets are rejected.

    Raises:
        ValueError: If *value* is not a UTC ISO 8601 timestamp.
    """
    if not _EXTENDED_DATETIME.match(value):
        raise ValueError(f"not an ISO 8601 date-time: {value!r}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None or parsed.utcoffset() != timedelta(0):
        raise ValueError(f"timestamp is not expressed in UTC: {value!r}")
    return parsed


# ---------------------------------------------------------------------------
# BookingEvent -- one extracted calendar entry
# ---------------------------------------------------------------------------


class BookingEvent(BaseModel):
    """A single booking extracted from an iCalendar feed.

    Attribute names are snake_case; the wire format (model output, HTTP
    responses, property store) uses the camelCase aliases.

    Attributes:
        uid: The VEVENT's UID.  Non-empty.
        summary: Human label (guest name, ``"Reserved"``...).
        start_date: Start as a UTC ISO 8601 string (alias ``startDate``).
        end_date: End as a UTC ISO 8601 string (alias ``endDate``).  Must
            not precede ``start_date``.
        description: Optional free text.
        location: Optional location.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    uid: str = Field(min_length=1)
    summary: str
    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    description: str | None = None
    location: str | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _require_utc_timestamp(cls, value: str) -> str:
        parse_utc_timestamp(value)
        return value

    @model_validator(mode="after")
    def _check_ordering(self) -> BookingEvent:
        if self.end < self.start:
            raise ValueError(
                f"endDate {self.end_date!r} precedes startDate {self.start_date!r}"
            )
        return self

    @property
    def start(self) -> datetime:
        """Parsed start timestamp."""
        return parse_utc_timestamp(self.start_date)

    @property
    def end(self) -> datetime:
        """Parsed end timestamp."""
        return parse_utc_timestamp(self.end_date)

    def to_wire(self) -> dict[str, Any]:
        """Serialise using the camelCase wire names, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# ExtractionResult -- response validator output
# ---------------------------------------------------------------------------


class ExtractionResult(BaseModel):
    """Validated model output for one feed.

    ``error`` and a non-empty ``events`` list may coexist; only the
    reconciler decides what that combination means.

    Attributes:
        events: Events that passed validation, in the model's order.
        error: The model's error text (or the format-mismatch message).
        claimed_count: How many event entries the model returned before
            validation.
    """

    events: list[BookingEvent] = Field(default_factory=list)
    error: str | None = None
    claimed_count: int = 0


# ---------------------------------------------------------------------------
# ActionResult -- single-property sync action contract
# ---------------------------------------------------------------------------


class ActionResult(BaseModel):
    """Result handed to UI callers of the single-property sync action.

    Attributes:
        success: ``False`` only for a hard error or invalid input.
        events: Extracted events (empty on failure).
        error: Failure message, or an advisory caveat on a success.
    """

    success: bool
    events: list[BookingEvent] = Field(default_factory=list)
    error: str | None = None

    def to_wire(self) -> dict[str, Any]:
        """Serialise to ``{success, events, error?}``."""
        payload: dict[str, Any] = {
            "success": self.success,
            "events": [event.to_wire() for event in self.events],
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


# ---------------------------------------------------------------------------
# LLMResponseSchema -- schema for Gemini response_schema
# ---------------------------------------------------------------------------


class LLMResponseEvent(BaseModel):
    """Single-event schema for Gemini's ``response_schema`` parameter.

    Field names are the JSON keys the model must emit, hence camelCase.
    """

    uid: str
    summary: str
    startDate: str  # noqa: N815
    endDate: str  # noqa: N815
    description: str | None = None
    location: str | None = None


class LLMResponseSchema(BaseModel):
    """Top-level schema passed to Gemini's ``response_schema`` parameter.

    Attributes:
        events: List of event objects.
        error: Descriptive error, omitted for valid calendars.
    """

    events: list[LLMResponseEvent]
    error: str | None = None
