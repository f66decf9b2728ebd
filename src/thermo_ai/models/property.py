"""Data models for properties and fleet sync results.

- :class:`Property` -- a managed rental with an optional iCal feed URL and
  the result of its most recent sync.
- :class:`SyncStatus` -- per-property outcome tags.
- :class:`PropertySyncOutcome` -- one property's record in a fleet run.
- :class:`FleetSyncReport` -- aggregated result of a fleet run, rendered
  to the HTTP response shape by :meth:`FleetSyncReport.to_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from thermo_ai.models.events import BookingEvent


class Property(BaseModel):
    """A managed property as held by the property repository.

    Attributes:
        id: Repository key.
        name: Display name.
        address: Street address.
        ical_url: Booking feed URL (alias ``icalUrl``), or ``None``.
        synced_booking_events: Events from the last sync; replaced
            wholesale on every attempt.
        last_sync_timestamp: ISO 8601 UTC time of the last attempt.
        last_sync_error: Error (or advisory caveat) from the last attempt.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    address: str = ""
    ical_url: str | None = Field(default=None, alias="icalUrl")
    synced_booking_events: list[BookingEvent] = Field(
        default_factory=list, alias="syncedBookingEvents"
    )
    last_sync_timestamp: str | None = Field(default=None, alias="lastSyncTimestamp")
    last_sync_error: str | None = Field(default=None, alias="lastSyncError")

    @property
    def feed_url(self) -> str | None:
        """The trimmed feed URL, or ``None`` if blank or unset."""
        if self.ical_url is None:
            return None
        stripped = self.ical_url.strip()
        return stripped or None


class SyncStatus(str, Enum):
    """Outcome tag recorded for each property in a fleet sync."""

    SUCCESS = "success"
    SUCCESS_WITH_AI_ISSUES = "success_with_ai_issues"
    ERROR_INVALID_FEED_CONTENT = "error_invalid_feed_content"
    ERROR_PROCESSING = "error_processing"
    SKIPPED = "skipped"

    @property
    def is_success(self) -> bool:
        return self in (SyncStatus.SUCCESS, SyncStatus.SUCCESS_WITH_AI_ISSUES)

    @property
    def is_error(self) -> bool:
        return self in (
            SyncStatus.ERROR_INVALID_FEED_CONTENT,
            SyncStatus.ERROR_PROCESSING,
        )


@dataclass(frozen=True)
class PropertySyncOutcome:
    """Result of one property's sync attempt within a fleet run.

    Attributes:
        property_id: The property's repository key.
        status: Outcome tag.
        events_fetched: Number of events stored for the property.
        message: Error, advisory caveat, or skip reason.
        name: Property display name, for reporting.
    """

    property_id: str
    status: SyncStatus
    events_fetched: int = 0
    message: str | None = None
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "propertyId": self.property_id,
            "name": self.name,
            "status": self.status.value,
            "eventsFetched": self.events_fetched,
        }
        if self.message is not None:
            payload["message"] = self.message
        return payload


@dataclass
class FleetSyncReport:
    """Aggregated result of syncing every property's feed.

    Attributes:
        details: One outcome per property, in repository order.
        duration_seconds: Wall-clock time for the run.
    """

    details: list[PropertySyncOutcome] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def success_count(self) -> int:
        return sum(1 for d in self.details if d.status.is_success)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.details if d.status.is_error)

    @property
    def skipped_count(self) -> int:
        return sum(1 for d in self.details if d.status is SyncStatus.SKIPPED)

    @property
    def total_properties(self) -> int:
        return len(self.details)

    def to_dict(self) -> dict[str, Any]:
        """Render the report as the fleet sync endpoint's JSON body."""
        return {
            "message": "iCal sync process completed.",
            "summary": {
                "successCount": self.success_count,
                "errorCount": self.error_count,
                "skippedCount": self.skipped_count,
                "totalPropertiesQueried": self.total_properties,
            },
            "details": [d.to_dict() for d in self.details],
        }
