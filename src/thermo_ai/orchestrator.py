"""Fleet-level iCal sync across every known property.

Each property with a feed URL runs through the single-feed pipeline on
its own.  Any failure is caught and recorded as that property's outcome;
one bad feed never stops the rest of the fleet.  The property record is
touched after every attempt: events (or an empty list), the attempt
time, and the error or advisory text.

Runs are sequential by default.  With ``max_workers > 1`` properties are
processed by a bounded thread pool, which keeps the number of concurrent
Gemini calls within the API's rate limits.  Details are reported in the
repository's order either way.

Two overlapping runs are not mutually excluded; the last write for a
property wins.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any

from thermo_ai.config import DEFAULT_DEADLINE_SECONDS
from thermo_ai.exceptions import InvalidFeedContentError
from thermo_ai.models.property import (
    FleetSyncReport,
    Property,
    PropertySyncOutcome,
    SyncStatus,
)
from thermo_ai.pipeline import IcalPipeline
from thermo_ai.repository import PropertyRepository

logger = logging.getLogger(__name__)

SKIPPED_MESSAGE = "No iCal URL configured"
DEADLINE_MESSAGE = "Sync deadline exceeded"


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def sync_all_feeds(
    repository: PropertyRepository,
    pipeline: IcalPipeline,
    max_workers: int = 1,
    deadline_seconds: float = DEFAULT_DEADLINE_SECONDS,
    clock: Callable[[], float] = time.monotonic,
    now: Callable[[], str] = utc_now_iso,
) -> FleetSyncReport:
    """Sync every property's feed and aggregate the outcomes.

    Args:
        repository: Property store; read once up front, written after
            each property's attempt.
        pipeline: The single-feed pipeline.
        max_workers: Worker pool size; ``1`` processes sequentially.
        deadline_seconds: Wall-clock budget for the whole run.  A
            property not yet started when it runs out is recorded as
            ``error_processing`` without being fetched.  Work already in
            flight is never cancelled.
        clock: Monotonic clock, injectable for tests.
        now: Source of the ISO 8601 sync timestamp, injectable for tests.

    Returns:
        A :class:`FleetSyncReport` with one detail per property.

    Raises:
        Exception: Only if the repository cannot list properties.
    """
    started = clock()
    deadline = started + deadline_seconds

    properties = repository.list()
    logger.info("Starting iCal sync for %d propert(y/ies)", len(properties))

    def _task(prop: Property) -> PropertySyncOutcome:
        try:
            if prop.feed_url is None:
                logger.info("Skipping property %s: no iCal URL", prop.id)
                return PropertySyncOutcome(
                    property_id=prop.id,
                    name=prop.name,
                    status=SyncStatus.SKIPPED,
                    message=SKIPPED_MESSAGE,
                )
            if clock() >= deadline:
                logger.error("Deadline reached before syncing property %s", prop.id)
                return PropertySyncOutcome(
                    property_id=prop.id,
                    name=prop.name,
                    status=SyncStatus.ERROR_PROCESSING,
                    message=DEADLINE_MESSAGE,
                )
            return sync_property(prop, repository, pipeline, now=now)
        except Exception as exc:
            logger.exception("Unhandled error syncing property %s", prop.id)
            return PropertySyncOutcome(
                property_id=prop.id,
                name=prop.name,
                status=SyncStatus.ERROR_PROCESSING,
                message=str(exc) or type(exc).__name__,
            )

    report = FleetSyncReport()
    if max_workers <= 1 or len(properties) <= 1:
        report.details = [_task(prop) for prop in properties]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(_task, prop) for prop in properties]
            report.details = [future.result() for future in futures]

    report.duration_seconds = clock() - started
    logger.info(
        "Sync complete in %.1fs. Success: %d, Errors: %d, Skipped: %d",
        report.duration_seconds,
        report.success_count,
        report.error_count,
        report.skipped_count,
    )
    return report


def sync_property(
    prop: Property,
    repository: PropertyRepository,
    pipeline: IcalPipeline,
    now: Callable[[], str] = utc_now_iso,
) -> PropertySyncOutcome:
    """Run the pipeline for one property and persist the result.

    Never raises for pipeline failures; they become the returned outcome.
    A failed write of the synced events counts as a processing error.
    """
    url = prop.feed_url
    logger.info("Syncing iCal for property %s (%s) from %s", prop.id, prop.name, url)

    try:
        outcome = pipeline.run(url)
        outcome.raise_for_error()
        repository.update(
            prop.id,
            {
                "synced_booking_events": list(outcome.events),
                "last_sync_timestamp": now(),
                "last_sync_error": outcome.error,
            },
        )
    except InvalidFeedContentError as exc:
        return _record_failure(
            prop, repository, SyncStatus.ERROR_INVALID_FEED_CONTENT, str(exc), now()
        )
    except Exception as exc:
        return _record_failure(
            prop,
            repository,
            SyncStatus.ERROR_PROCESSING,
            str(exc) or type(exc).__name__,
            now(),
        )

    status = SyncStatus.SUCCESS_WITH_AI_ISSUES if outcome.error else SyncStatus.SUCCESS
    logger.info(
        "Synced %d event(s) for property %s (%s)",
        len(outcome.events),
        prop.id,
        status.value,
    )
    return PropertySyncOutcome(
        property_id=prop.id,
        name=prop.name,
        status=status,
        events_fetched=len(outcome.events),
        message=outcome.error,
    )


def _record_failure(
    prop: Property,
    repository: PropertyRepository,
    status: SyncStatus,
    message: str,
    timestamp: str,
) -> PropertySyncOutcome:
    logger.error("Error syncing property %s: %s", prop.id, message)
    _persist(
        repository,
        prop.id,
        {
            "synced_booking_events": [],
            "last_sync_timestamp": timestamp,
            "last_sync_error": message,
        },
    )
    return PropertySyncOutcome(
        property_id=prop.id,
        name=prop.name,
        status=status,
        events_fetched=0,
        message=message,
    )


def _persist(
    repository: PropertyRepository, property_id: str, patch: dict[str, Any]
) -> None:
    try:
        repository.update(property_id, patch)
    except Exception:
        logger.exception("Failed to update sync status for property %s", property_id)
