"""thermo-ai: iCal booking sync for managed properties.

Fetches iCalendar booking feeds, extracts check-in/check-out events with
Google Gemini, and records the results against each property.
"""

from __future__ import annotations

__version__ = "0.1.0"

from thermo_ai.exceptions import (  # noqa: E402
    FetchError,
    HardExtractionError,
    IcalSyncError,
    InvalidFeedContentError,
    MalformedModelResponseError,
    ModelUnavailableError,
    UnexpectedResponseFormatError,
)
from thermo_ai.models.events import (  # noqa: E402
    ActionResult,
    BookingEvent,
    ExtractionResult,
)
from thermo_ai.models.property import (  # noqa: E402
    FleetSyncReport,
    Property,
    PropertySyncOutcome,
    SyncStatus,
)
from thermo_ai.orchestrator import sync_all_feeds  # noqa: E402
from thermo_ai.pipeline import IcalPipeline, parse_ical_feed_action  # noqa: E402
from thermo_ai.reconcile import OutcomeKind, ReconciledOutcome, is_benign_error, reconcile  # noqa: E402
from thermo_ai.repository import (  # noqa: E402
    InMemoryPropertyRepository,
    JsonFilePropertyRepository,
)
from thermo_ai.response import parse_model_response  # noqa: E402

__all__ = [
    "ActionResult",
    "BookingEvent",
    "ExtractionResult",
    "FetchError",
    "FleetSyncReport",
    "HardExtractionError",
    "IcalPipeline",
    "IcalSyncError",
    "InMemoryPropertyRepository",
    "InvalidFeedContentError",
    "JsonFilePropertyRepository",
    "MalformedModelResponseError",
    "ModelUnavailableError",
    "OutcomeKind",
    "Property",
    "PropertySyncOutcome",
    "ReconciledOutcome",
    "SyncStatus",
    "UnexpectedResponseFormatError",
    "is_benign_error",
    "parse_ical_feed_action",
    "parse_model_response",
    "reconcile",
    "sync_all_feeds",
]
