"""Shared builders for thermo-ai tests: sample feeds, model replies, and
pipelines with mocked collaborators."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

from thermo_ai.fetcher import FeedFetcher, FetchedFeed
from thermo_ai.pipeline import IcalPipeline

SAMPLE_ICS = """\
BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//OwnerRez//EN
BEGIN:VEVENT
UID:booking-1@ownerrez
SUMMARY:Jane Guest
DTSTART;VALUE=DATE:20240820
DTEND;VALUE=DATE:20240823
END:VEVENT
BEGIN:VEVENT
UID:booking-2@ownerrez
SUMMARY:Reserved
DTSTART;TZID=America/New_York:20240901T150000
DTEND;TZID=America/New_York:20240905T110000
LOCATION:Cozy Downtown Apartment
END:VEVENT
END:VCALENDAR
"""


def make_event_dict(**overrides: object) -> dict:
    """Return a valid model-output event dict (camelCase wire keys)."""
    event = {
        "uid": "booking-1@ownerrez",
        "summary": "Jane Guest",
        "startDate": "2024-08-20T00:00:00.000Z",
        "endDate": "2024-08-23T00:00:00.000Z",
    }
    event.update(overrides)
    return event


def make_model_reply(events: list, error: str | None = None) -> str:
    """Build a raw JSON reply as the model would return it."""
    payload: dict = {"events": events}
    if error is not None:
        payload["error"] = error
    return json.dumps(payload)


def two_event_reply() -> str:
    return make_model_reply(
        [
            make_event_dict(),
            make_event_dict(
                uid="booking-2@ownerrez",
                summary="Reserved",
                startDate="2024-09-01T19:00:00.000Z",
                endDate="2024-09-05T15:00:00.000Z",
                location="Cozy Downtown Apartment",
            ),
        ]
    )


def make_pipeline(
    reply: str = "",
    body: str = SAMPLE_ICS,
    content_type: str | None = "text/calendar; charset=utf-8",
    fetch_error: Exception | None = None,
    strict: bool = False,
    require_content_type: bool = False,
) -> tuple[IcalPipeline, MagicMock, MagicMock]:
    """Build an :class:`IcalPipeline` with a mocked fetcher and model.

    Returns:
        ``(pipeline, fetcher_mock, model_mock)``.
    """
    fetcher = MagicMock(spec=FeedFetcher)
    if fetch_error is not None:
        fetcher.fetch.side_effect = fetch_error
    else:
        fetcher.fetch.side_effect = lambda url: FetchedFeed(
            url=url,
            text=body,
            status_code=200,
            status_text="OK",
            content_type=content_type,
        )

    model = MagicMock()
    model.generate.return_value = reply

    pipeline = IcalPipeline(
        fetcher=fetcher,
        model_client=model,
        strict=strict,
        require_content_type=require_content_type,
    )
    return pipeline, fetcher, model
