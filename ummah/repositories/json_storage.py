"""
JSON-file persistence adapter.

Each collection is one JSON array on disk. Every write is a full
read-modify-rewrite of the file, done under the collection lock so that
threads in the same process never lose each other's updates.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Generic, Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from ummah.core.utils import generate_id, utcnow
from ummah.db.models import Entity

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)

# Fields a partial update may never touch.
_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


class StorageError(Exception):
    """Base class for file storage failures."""


class CollectionUnavailableError(StorageError):
    """Raised when a collection (or its directory) cannot be read or parsed."""

    def __init__(self, collection: str, reason: Exception):
        super().__init__(f"Collection '{collection}' is unavailable: {reason}")
        self.collection = collection
        self.reason = reason


class DuplicateEntityError(StorageError):
    """Raised when creating a record with an id already in the collection."""


class JsonCollection(Generic[EntityT]):
    """CRUD helpers over one JSON array file, typed by its entity model."""

    def __init__(self, directory: Path, name: str, filename: str, model: Type[EntityT]) -> None:
        self.directory = Path(directory)
        self.name = name
        self.path = self.directory / filename
        self.model = model
        self.lock = threading.RLock()

    # -------------------------- file access --------------------------
    def _ensure_dir(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _read(self) -> list[EntityT]:
        try:
            self._ensure_dir()
        except OSError as exc:
            raise CollectionUnavailableError(self.name, exc) from exc
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CollectionUnavailableError(self.name, exc) from exc
        if not isinstance(raw, list):
            raise CollectionUnavailableError(self.name, TypeError("expected a JSON array"))
        try:
            return [self.model.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise CollectionUnavailableError(self.name, exc) from exc

    def _write(self, items: list[EntityT]) -> None:
        self._ensure_dir()
        payload = [item.model_dump(mode="json") for item in items]
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    # -------------------------- reads --------------------------
    def all(self) -> list[EntityT]:
        with self.lock:
            return self._read()

    def get(self, entity_id: str) -> Optional[EntityT]:
        for item in self.all():
            if item.id == entity_id:
                return item
        return None

    def find(self, predicate: Callable[[EntityT], bool]) -> list[EntityT]:
        return [item for item in self.all() if predicate(item)]

    def find_one(self, predicate: Callable[[EntityT], bool]) -> Optional[EntityT]:
        for item in self.all():
            if predicate(item):
                return item
        return None

    # -------------------------- writes --------------------------
    def create(self, item: Union[EntityT, Mapping[str, Any]]) -> EntityT:
        data = item.model_dump() if isinstance(item, Entity) else dict(item)
        with self.lock:
            items = self._read()
            taken = {existing.id for existing in items}
            entity_id = data.get("id") or ""
            if entity_id and entity_id in taken:
                raise DuplicateEntityError(f"{self.name} '{entity_id}' already exists")
            while not entity_id or entity_id in taken:
                entity_id = generate_id()
            now = utcnow()
            entity = self.model.model_validate({**data, "id": entity_id, "created_at": now, "updated_at": now})
            items.append(entity)
            self._write(items)
        logger.debug("created %s %s", self.name, entity_id)
        return entity

    def update(self, entity_id: str, fields: Mapping[str, Any]) -> Optional[EntityT]:
        changes = {key: value for key, value in fields.items() if key not in _IMMUTABLE_FIELDS}
        with self.lock:
            items = self._read()
            for index, current in enumerate(items):
                if current.id != entity_id:
                    continue
                merged = {**current.model_dump(), **changes, "updated_at": utcnow()}
                items[index] = self.model.model_validate(merged)
                self._write(items)
                return items[index]
        return None

    def increment(self, entity_id: str, field: str, delta: int = 1, *, floor: int = 0) -> Optional[EntityT]:
        """Adjust an integer counter in place, never letting it drop below floor."""
        with self.lock:
            current = self.get(entity_id)
            if current is None:
                return None
            value = int(getattr(current, field, 0) or 0)
            return self.update(entity_id, {field: max(floor, value + delta)})

    def delete(self, entity_id: str) -> bool:
        with self.lock:
            items = self._read()
            remaining = [item for item in items if item.id != entity_id]
            if len(remaining) == len(items):
                return False
            self._write(remaining)
        logger.debug("deleted %s %s", self.name, entity_id)
        return True
