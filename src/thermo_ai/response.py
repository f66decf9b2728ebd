"""Parsing and validation of the model's extraction reply.

The reply must be a JSON object.  Each claimed event is validated on its
own against :class:`~thermo_ai.models.events.BookingEvent`; entries that
fail are dropped with a warning so one bad entry never sinks the batch.
If the model claimed events but none survive, and it reported no error
itself, the result carries :data:`UNEXPECTED_FORMAT_MESSAGE` instead of
looking like a clean empty calendar.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from thermo_ai.exceptions import MalformedModelResponseError
from thermo_ai.models.events import BookingEvent, ExtractionResult

logger = logging.getLogger(__name__)

UNEXPECTED_FORMAT_MESSAGE = (
    "AI returned event data in an unexpected format. "
    "Please check iCal feed structure and content."
)


def parse_model_response(raw_text: str) -> ExtractionResult:
    """Parse and validate a raw model reply.

    Args:
        raw_text: The reply text returned by the model.

    Returns:
        An :class:`ExtractionResult` holding the events that passed
        validation (in the model's order) and the model's ``error`` text,
        if any.

    Raises:
        MalformedModelResponseError: If the reply is empty, not valid
            JSON, or not a JSON object.
    """
    if not raw_text or not raw_text.strip():
        raise MalformedModelResponseError(
            "AI returned an empty response", raw_response=raw_text or ""
        )

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        logger.error("Model response is not valid JSON: %s | raw: %s", exc, raw_text)
        raise MalformedModelResponseError(
            f"AI response was not valid JSON: {exc}", raw_response=raw_text
        ) from exc

    if not isinstance(data, dict):
        raise MalformedModelResponseError(
            f"AI response was not a JSON object (got {type(data).__name__})",
            raw_response=raw_text,
        )

    error = _normalise_error(data.get("error"))

    claimed = data.get("events")
    if claimed is None:
        claimed = []
    elif not isinstance(claimed, list):
        logger.warning(
            "Ignoring non-list 'events' value of type %s", type(claimed).__name__
        )
        claimed = []

    events = validate_events(claimed)

    if claimed and not events and error is None:
        logger.warning(
            "Model claimed %d event(s) but none passed validation", len(claimed)
        )
        return ExtractionResult(
            events=[], error=UNEXPECTED_FORMAT_MESSAGE, claimed_count=len(claimed)
        )

    return ExtractionResult(events=events, error=error, claimed_count=len(claimed))


def validate_events(entries: list[Any]) -> list[BookingEvent]:
    """Validate each claimed entry independently, dropping failures.

    Args:
        entries: The raw ``events`` list from the model reply.

    Returns:
        The entries that validated, in their original order.
    """
    validated: list[BookingEvent] = []
    for index, entry in enumerate(entries):
        try:
            validated.append(BookingEvent.model_validate(entry))
        except ValidationError as exc:
            uid = entry.get("uid") if isinstance(entry, dict) else None
            logger.warning(
                "Skipping event #%d (uid=%r): validation failed: %s",
                index,
                uid,
                exc,
            )
    return validated


def _normalise_error(value: Any) -> str | None:
    """Treat ``None`` and blank strings as "no error"."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None
