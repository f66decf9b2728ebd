"""Cheap syntactic gate run on a fetched body before any model call.

Two shape checks exist:

- ``strict``: the trimmed body starts with ``BEGIN:VCALENDAR``.
- ``lenient``: the body contains ``begin:vcalendar`` anywhere, any case.

An optional ``Content-Type`` check (``text/calendar``) runs first when
enabled.  All failures raise :class:`InvalidFeedContentError`.
"""

from __future__ import annotations

import logging

from thermo_ai.exceptions import InvalidFeedContentError

logger = logging.getLogger(__name__)

_CALENDAR_TOKEN = "BEGIN:VCALENDAR"
_CALENDAR_CONTENT_TYPE = "text/calendar"
_PREVIEW_LENGTH = 200


def make_preview(body: str) -> str:
    """Return the first 200 characters of *body* with newlines escaped."""
    return body[:_PREVIEW_LENGTH].replace("\n", "\\n")


def looks_like_icalendar(body: str, strict: bool = False) -> bool:
    """Return ``True`` if *body* is plausibly iCalendar data."""
    if strict:
        return body.strip().startswith(_CALENDAR_TOKEN)
    return _CALENDAR_TOKEN.lower() in body.lower()


def validate_feed_content(
    body: str,
    strict: bool = False,
    content_type: str | None = None,
    require_content_type: bool = False,
) -> None:
    """Reject bodies that are obviously not iCalendar data.

    Args:
        body: The fetched response body.
        strict: Use the ``strict`` shape check instead of ``lenient``.
        content_type: The response's ``Content-Type`` header, if any.
        require_content_type: Also require ``text/calendar``.

    Raises:
        InvalidFeedContentError: If either check fails.  ``preview`` holds
            the start of the body for diagnostics.
    """
    preview = make_preview(body)

    if require_content_type and (
        not content_type or _CALENDAR_CONTENT_TYPE not in content_type.lower()
    ):
        logger.warning("Rejected feed with content type %r", content_type)
        raise InvalidFeedContentError(
            f"Unexpected content type: {content_type or 'N/A'}. "
            f"Expected '{_CALENDAR_CONTENT_TYPE}'. "
            f"Response preview (first {_PREVIEW_LENGTH} chars): '{preview}'",
            preview=preview,
        )

    if not looks_like_icalendar(body, strict=strict):
        logger.warning("Rejected feed that is not iCalendar data: '%s'", preview)
        raise InvalidFeedContentError(
            f"Fetched content is not valid iCalendar data (missing {_CALENDAR_TOKEN}). "
            f"Content preview (first {_PREVIEW_LENGTH} chars): '{preview}'",
            preview=preview,
        )
