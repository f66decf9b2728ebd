"""Property storage behind a small repository interface.

The orchestrator only needs ``get``, ``list``, and ``update``; backing
stores are interchangeable:

- :class:`InMemoryPropertyRepository` -- tests and the demo seed data.
- :class:`JsonFilePropertyRepository` -- a JSON document on disk.

Both serialise access with a lock so a worker pool may update different
properties concurrently.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from thermo_ai.models.property import Property

logger = logging.getLogger(__name__)


class PropertyRepository(Protocol):
    """Storage interface used by the fleet orchestrator."""

    def get(self, property_id: str) -> Property | None: ...

    def list(self) -> list[Property]: ...

    def update(self, property_id: str, patch: dict[str, Any]) -> Property: ...


def apply_patch(prop: Property, patch: dict[str, Any]) -> Property:
    """Return a validated copy of *prop* with *patch* applied.

    *patch* keys may be attribute names or wire aliases.
    """
    data = prop.model_dump(by_alias=True)
    aliases = {
        name: field.alias or name for name, field in Property.model_fields.items()
    }
    for key, value in patch.items():
        data[aliases.get(key, key)] = value
    return Property.model_validate(data)


class InMemoryPropertyRepository:
    """Thread-safe in-memory property store.

    Args:
        properties: Initial properties; order is preserved by :meth:`list`.
    """

    def __init__(self, properties: Iterable[Property] = ()) -> None:
        self._lock = threading.Lock()
        self._properties: dict[str, Property] = {p.id: p for p in properties}

    def get(self, property_id: str) -> Property | None:
        with self._lock:
            return self._properties.get(property_id)

    def list(self) -> list[Property]:
        with self._lock:
            return list(self._properties.values())

    def update(self, property_id: str, patch: dict[str, Any]) -> Property:
        """Apply *patch* to a property.

        Raises:
            KeyError: If *property_id* is unknown.
        """
        with self._lock:
            current = self._properties[property_id]
            updated = apply_patch(current, patch)
            self._properties[property_id] = updated
            return updated


class JsonFilePropertyRepository:
    """Property store persisted as a JSON list on disk.

    Every update rewrites the whole file through a temporary file and
    :func:`os.replace`, so readers never observe a half-written document.

    Args:
        path: Location of the JSON document.  A missing file is treated
            as an empty store.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def get(self, property_id: str) -> Property | None:
        with self._lock:
            return self._load().get(property_id)

    def list(self) -> list[Property]:
        with self._lock:
            return list(self._load().values())

    def update(self, property_id: str, patch: dict[str, Any]) -> Property:
        """Apply *patch* to a property and persist the store.

        Raises:
            KeyError: If *property_id* is unknown.
        """
        with self._lock:
            properties = self._load()
            updated = apply_patch(properties[property_id], patch)
            properties[property_id] = updated
            self._save(properties.values())
            return updated

    def _load(self) -> dict[str, Property]:
        if not self._path.exists():
            return {}
        records = json.loads(self._path.read_text(encoding="utf-8"))
        properties = [Property.model_validate(record) for record in records]
        return {p.id: p for p in properties}

    def _save(self, properties: Iterable[Property]) -> None:
        payload = [
            p.model_dump(mode="json", by_alias=True, exclude_none=True)
            for p in properties
        ]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %s", self._path)


def default_properties() -> list[Property]:
    """Return the demo property list used when no store is configured."""
    sample_feed = "https://app.ownerrez.com/feeds/ical/6b5cb4a943524fd1b9231177736b3053"
    return [
        Property(
            id="property-1",
            name="Cozy Downtown Apartment",
            address="123 Main St, Anytown, USA",
            ical_url=sample_feed,
        ),
        Property(
            id="property-2",
            name="Spacious Suburban House",
            address="456 Oak Ave, Suburbia, USA",
        ),
        Property(
            id="property-3",
            name="Beachfront Condo",
            address="789 Ocean Dr, Beachtown, USA",
            ical_url=sample_feed,
        ),
        Property(
            id="property-4",
            name="Rustic Mountain Cabin",
            address="101 Pine Ln, Mountainville, USA",
        ),
    ]


def build_repository(properties_file: Path | None) -> PropertyRepository:
    """Return a JSON-file store for *properties_file*, else the demo store."""
    if properties_file is not None:
        return JsonFilePropertyRepository(properties_file)
    return InMemoryPropertyRepository(default_properties())
