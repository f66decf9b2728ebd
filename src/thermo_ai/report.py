"""Console output for the thermo-ai CLI.

Renders a single-feed :class:`~thermo_ai.models.events.ActionResult` or a
:class:`~thermo_ai.models.property.FleetSyncReport` as plain text.  The
``format_*`` functions return strings; the ``print_*`` wrappers write to
stdout.
"""

from __future__ import annotations

import sys

from thermo_ai.models.events import ActionResult, BookingEvent
from thermo_ai.models.property import FleetSyncReport, PropertySyncOutcome, SyncStatus

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH

_STATUS_TAGS = {
    SyncStatus.SUCCESS: "OK",
    SyncStatus.SUCCESS_WITH_AI_ISSUES: "OK*",
    SyncStatus.ERROR_INVALID_FEED_CONTENT: "INVALID",
    SyncStatus.ERROR_PROCESSING: "FAILED",
    SyncStatus.SKIPPED: "SKIP",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_action_result(url: str, result: ActionResult) -> str:
    """Render a single-feed result.

    Events are shown sorted by start time; the pipeline itself keeps the
    model's order.
    """
    lines: list[str] = [_SEPARATOR, "  THERMOAI iCAL PARSE", _SEPARATOR, ""]
    lines.append(f"  Feed: {url}")

    if not result.success:
        lines.append(f"  Error: {result.error}")
        lines.append(_SEPARATOR)
        return "\n".join(lines)

    if result.error:
        lines.append(f"  Warning: {result.error}")

    if not result.events:
        lines.append("  No bookings found.")
    else:
        lines.append(f"  Found {len(result.events)} booking(s)")
        for idx, event in enumerate(sorted(result.events, key=lambda e: e.start), start=1):
            lines.append("")
            _append_event(lines, idx, event)

    lines.append(_SEPARATOR)
    return "\n".join(lines)


def print_action_result(url: str, result: ActionResult) -> None:
    sys.stdout.write(format_action_result(url, result) + "\n")


def format_fleet_report(report: FleetSyncReport) -> str:
    """Render a fleet sync report: per-property lines, then a summary."""
    lines: list[str] = [_SEPARATOR, "  THERMOAI iCAL FLEET SYNC", _SEPARATOR, ""]
    lines.append("--- PROPERTIES ---")

    if not report.details:
        lines.append("  No properties found.")

    for outcome in report.details:
        _append_outcome(lines, outcome)

    lines.append("")
    lines.append("--- SUMMARY ---")
    lines.append(f"  Properties: {report.total_properties}")
    lines.append(f"  Succeeded: {report.success_count}")
    lines.append(f"  Failed: {report.error_count}")
    lines.append(f"  Skipped: {report.skipped_count}")
    lines.append(f"  Sync duration: {report.duration_seconds:.1f}s")
    lines.append(_SEPARATOR)
    return "\n".join(lines)


def print_fleet_report(report: FleetSyncReport) -> None:
    sys.stdout.write(format_fleet_report(report) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _append_event(lines: list[str], idx: int, event: BookingEvent) -> None:
    lines.append(f"  Booking {idx}: {event.summary}")
    lines.append(f"    When: {_format_range(event)}")
    lines.append(f"    UID: {event.uid}")
    if event.location:
        lines.append(f"    Where: {event.location}")
    if event.description:
        lines.append(f"    Notes: {event.description}")


def _append_outcome(lines: list[str], outcome: PropertySyncOutcome) -> None:
    tag = _STATUS_TAGS[outcome.status]
    label = outcome.name or outcome.property_id
    line = f"  [{tag}] {label} ({outcome.property_id})"
    if outcome.status.is_success:
        line += f" -> {outcome.events_fetched} event(s)"
    lines.append(line)
    if outcome.message:
        lines.append(f"    {outcome.message}")


def _format_range(event: BookingEvent) -> str:
    """Format a booking's start and end in UTC, eliding a same-day end date."""
    start, end = event.start, event.end
    start_str = start.strftime("%a %Y-%m-%d %H:%M UTC")
    if start.date() == end.date():
        return f"{start_str} - {end.strftime('%H:%M UTC')}"
    return f"{start_str} - {end.strftime('%a %Y-%m-%d %H:%M UTC')}"
