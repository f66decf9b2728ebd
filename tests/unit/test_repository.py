"""Tests for the property repositories."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests.helpers import make_event_dict
from thermo_ai.models.events import BookingEvent
from thermo_ai.models.property import Property
from thermo_ai.repository import (
    InMemoryPropertyRepository,
    JsonFilePropertyRepository,
    apply_patch,
    build_repository,
    default_properties,
)

EVENT = BookingEvent.model_validate(make_event_dict())


def _properties() -> list[Property]:
    return [
        Property(id="a", name="Alpha", ical_url="https://example.com/a.ics"),
        Property(id="b", name="Bravo"),
    ]


class TestApplyPatch:
    def test_attribute_and_alias_keys(self) -> None:
        prop = Property(id="a")

        updated = apply_patch(
            prop,
            {"last_sync_error": "boom", "lastSyncTimestamp": "2024-08-20T00:00:00+00:00"},
        )

        assert updated.last_sync_error == "boom"
        assert updated.last_sync_timestamp == "2024-08-20T00:00:00+00:00"
        assert prop.last_sync_error is None

    def test_events_replaced_wholesale(self) -> None:
        prop = Property(id="a", synced_booking_events=[EVENT, EVENT])

        updated = apply_patch(prop, {"synced_booking_events": []})

        assert updated.synced_booking_events == []


class TestProperty:
    @pytest.mark.parametrize(
        ("ical_url", "expected"),
        [
            (None, None),
            ("", None),
            ("   ", None),
            (" https://example.com/x.ics ", "https://example.com/x.ics"),
        ],
    )
    def test_feed_url(self, ical_url: str | None, expected: str | None) -> None:
        assert Property(id="p", ical_url=ical_url).feed_url == expected


class TestInMemoryPropertyRepository:
    def test_list_preserves_order(self) -> None:
        repo = InMemoryPropertyRepository(_properties())

        assert [p.id for p in repo.list()] == ["a", "b"]

    def test_get(self) -> None:
        repo = InMemoryPropertyRepository(_properties())

        assert repo.get("b").name == "Bravo"
        assert repo.get("missing") is None

    def test_update(self) -> None:
        repo = InMemoryPropertyRepository(_properties())

        repo.update("a", {"synced_booking_events": [EVENT], "last_sync_error": None})

        assert repo.get("a").synced_booking_events == [EVENT]

    def test_update_unknown_raises(self) -> None:
        repo = InMemoryPropertyRepository(_properties())

        with pytest.raises(KeyError):
            repo.update("missing", {"last_sync_error": "x"})


class TestJsonFilePropertyRepository:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        repo = JsonFilePropertyRepository(tmp_path / "nothing.json")

        assert repo.list() == []
        assert repo.get("a") is None

    def test_reads_wire_aliases(self, tmp_path: Path) -> None:
        path = tmp_path / "properties.json"
        path.write_text(
            json.dumps([{"id": "a", "name": "Alpha", "icalUrl": "https://example.com/a.ics"}]),
            encoding="utf-8",
        )

        prop = JsonFilePropertyRepository(path).get("a")

        assert prop.feed_url == "https://example.com/a.ics"

    def test_update_persists_to_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "properties.json"
        path.write_text(json.dumps([{"id": "a", "name": "Alpha"}]), encoding="utf-8")
        repo = JsonFilePropertyRepository(path)

        repo.update(
            "a",
            {
                "synced_booking_events": [EVENT],
                "last_sync_timestamp": "2024-08-20T00:00:00+00:00",
            },
        )

        stored = json.loads(path.read_text(encoding="utf-8"))
        assert stored[0]["syncedBookingEvents"] == [make_event_dict()]
        assert stored[0]["lastSyncTimestamp"] == "2024-08-20T00:00:00+00:00"
        assert "lastSyncError" not in stored[0]
        assert JsonFilePropertyRepository(path).get("a").synced_booking_events == [EVENT]
        assert list(tmp_path.glob("*.tmp")) == []

    def test_update_unknown_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "properties.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(KeyError):
            JsonFilePropertyRepository(path).update("missing", {})


class TestBuildRepository:
    def test_default_is_demo_store(self) -> None:
        repo = build_repository(None)

        assert [p.id for p in repo.list()] == [p.id for p in default_properties()]

    def test_demo_store_has_properties_with_and_without_feeds(self) -> None:
        props = default_properties()

        assert any(p.feed_url for p in props)
        assert any(p.feed_url is None for p in props)

    def test_path_gives_json_store(self, tmp_path: Path) -> None:
        assert isinstance(build_repository(tmp_path / "p.json"), JsonFilePropertyRepository)
