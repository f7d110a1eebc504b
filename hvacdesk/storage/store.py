"""Typed key-value store for whole collections.

Policy: a missing, unreadable, unparseable or schema-invalid collection
loads as its declared default; a failed write is logged and reported as
``False``. Storage problems never propagate to the caller.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from hvacdesk.config import StorageConfig
from hvacdesk.storage.backends import JsonFileBackend, MemoryBackend, StorageBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionStore:
    """Reads and writes JSON-serialisable collections through a backend."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    def load(self, name: str, default: Any) -> Any:
        """Return the stored value for ``name`` or a copy of ``default``."""
        try:
            raw = self.backend.read(name)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read collection '{name}': {e}; using default")
            return copy.deepcopy(default)

        if raw is None:
            return copy.deepcopy(default)

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupt data in collection '{name}': {e}; using default")
            return copy.deepcopy(default)

    def save(self, name: str, value: Any) -> bool:
        """Persist ``value`` under ``name``. Returns False if the write failed."""
        try:
            text = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            logger.error(f"Collection '{name}' is not JSON-serialisable: {e}")
            return False

        try:
            self.backend.write(name, text)
        except (OSError, ValueError) as e:
            logger.error(f"Could not write collection '{name}': {e}")
            return False
        return True

    def collection(
        self, name: str, type_: Any, default_factory: Callable[[], T]
    ) -> Collection[T]:
        return Collection(self, name, type_, default_factory)

    def records(self, name: str, item_type: type[T]) -> RecordCollection[T]:
        return RecordCollection(self, name, item_type)


class Collection(Generic[T]):
    """A named collection validated against a type on the way in and out."""

    def __init__(
        self,
        store: CollectionStore,
        name: str,
        type_: Any,
        default_factory: Callable[[], T],
    ):
        self.store = store
        self.name = name
        self.default_factory = default_factory
        self._adapter: TypeAdapter[T] = TypeAdapter(type_)

    def load(self) -> T:
        raw = self.store.load(self.name, None)
        if raw is None:
            return self.default_factory()
        try:
            return self._adapter.validate_python(raw)
        except PydanticValidationError as e:
            logger.warning(
                f"Collection '{self.name}' does not match its schema "
                f"({e.error_count()} errors); using default"
            )
            return self.default_factory()

    def save(self, value: T) -> bool:
        data = self._adapter.dump_python(value, mode="json", by_alias=True)
        return self.store.save(self.name, data)


class RecordCollection(Collection[list[T]]):
    """A list collection validated one record at a time.

    Records that fail validation are logged and left out of ``load()``; the
    next ``save()`` writes them back unchanged after the valid records.
    """

    def __init__(self, store: CollectionStore, name: str, item_type: type[T]):
        super().__init__(store, name, list[item_type], list)
        self._item_adapter: TypeAdapter[T] = TypeAdapter(item_type)
        self._rejected: list[Any] = []

    def load(self) -> list[T]:
        raw = self.store.load(self.name, None)
        self._rejected = []
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning(f"Collection '{self.name}' is not a list; using default")
            return []

        records: list[T] = []
        for index, entry in enumerate(raw):
            try:
                records.append(self._item_adapter.validate_python(entry))
            except PydanticValidationError as e:
                record_id = entry.get("id") if isinstance(entry, dict) else None
                logger.warning(
                    f"Skipping record {index} (id={record_id!r}) in collection "
                    f"'{self.name}': {e.error_count()} validation errors"
                )
                self._rejected.append(entry)
        return records

    def save(self, value: list[T]) -> bool:
        data = self._adapter.dump_python(value, mode="json", by_alias=True)
        return self.store.save(self.name, [*data, *self._rejected])


def create_store(config: StorageConfig) -> CollectionStore:
    """Build a store for the configured backend."""
    if config.backend == "memory":
        return CollectionStore(MemoryBackend())
    return CollectionStore(JsonFileBackend(config.data_dir))
