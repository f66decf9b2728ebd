"""Data models for thermo-ai."""

from __future__ import annotations

from thermo_ai.models.events import (
    ActionResult,
    BookingEvent,
    ExtractionResult,
    LLMResponseEvent,
    LLMResponseSchema,
    parse_utc_timestamp,
)
from thermo_ai.models.property import (
    FleetSyncReport,
    Property,
    PropertySyncOutcome,
    SyncStatus,
)

__all__ = [
    "ActionResult",
    "BookingEvent",
    "ExtractionResult",
    "FleetSyncReport",
    "LLMResponseEvent",
    "LLMResponseSchema",
    "Property",
    "PropertySyncOutcome",
    "SyncStatus",
    "parse_utc_timestamp",
]
