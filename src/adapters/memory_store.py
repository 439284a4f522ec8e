"""
In-Memory Collection Store (CollectionStorePort implementation).

Holds the whole database document in a dict. Collections are the top-level
list-valued entries; any other top-level value is kept and returned by
state() but is not addressable as a collection.

Key behaviors:
- New ids: max numeric id + 1, or a uuid4 string when ids are not all numeric
- Ids are matched by string form
- Each operation holds an RLock, so single operations are atomic
- Records handed out are deep copies
- A mutation is rolled back when `_on_change` raises
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any
from uuid import uuid4

from src.core.ports.store import CollectionNotFoundError, DuplicateIdError
from src.domain.entities import Collection, DatabaseState, Record, RemovableRef
from src.domain.removable import find_removable
from src.domain.values import ids_equal, is_number

logger = logging.getLogger(__name__)


class InMemoryCollectionStore:
    """
    Dict-backed implementation of CollectionStorePort.

    Subclasses hook persistence through `_on_change`, which is called after
    every successful mutation while the lock is still held.
    """

    def __init__(
        self,
        data: DatabaseState | None = None,
        *,
        foreign_key_suffix: str = "Id",
    ) -> None:
        self._data: DatabaseState = copy.deepcopy(data) if data else {}
        self._lock = threading.RLock()
        self.foreign_key_suffix = foreign_key_suffix

    # --- Internal helpers ---

    def _records(self, name: str) -> Collection | None:
        records = self._data.get(name)
        if isinstance(records, list):
            return records
        return None

    def _require(self, name: str) -> Collection:
        records = self._records(name)
        if records is None:
            raise CollectionNotFoundError(f"Collection '{name}' does not exist")
        return records

    def _find_index(self, records: Collection, record_id: Any) -> int | None:
        for index, record in enumerate(records):
            if isinstance(record, dict) and ids_equal(record.get("id"), record_id):
                return index
        return None

    def _next_id(self, records: Collection) -> Any:
        ids = [r.get("id") for r in records if isinstance(r, dict) and "id" in r]
        if not ids:
            return 1
        if all(is_number(i) for i in ids):
            return int(max(ids)) + 1
        return str(uuid4())

    def _on_change(self) -> None:
        """Called after each successful mutation."""
        pass

    @contextmanager
    def _committing(self, name: str) -> Iterator[None]:
        """
        Run a mutation of collection `name`, then `_on_change`.

        If either raises, the collection is restored so memory never runs
        ahead of what `_on_change` managed to persist.
        """
        backup = copy.deepcopy(self._data.get(name))
        try:
            yield
            self._on_change()
        except BaseException:
            self._data[name] = backup
            raise

    # --- Reads ---

    def has_collection(self, name: str) -> bool:
        with self._lock:
            return self._records(name) is not None

    def get_collection(self, name: str) -> Collection | None:
        with self._lock:
            records = self._records(name)
            if records is None:
                return None
            return copy.deepcopy(records)

    def filter(self, name: str, predicate: Callable[[Record], bool]) -> Collection:
        with self._lock:
            records = self._records(name) or []
            return [copy.deepcopy(r) for r in records if predicate(r)]

    def get_by_id(self, name: str, record_id: Any) -> Record | None:
        with self._lock:
            records = self._records(name)
            if records is None:
                return None
            index = self._find_index(records, record_id)
            if index is None:
                return None
            return copy.deepcopy(records[index])

    def state(self) -> DatabaseState:
        with self._lock:
            return copy.deepcopy(self._data)

    def collection_names(self) -> list[str]:
        with self._lock:
            return [name for name, value in self._data.items() if isinstance(value, list)]

    # --- Writes ---

    def insert(self, name: str, record: Record) -> Record:
        with self._lock:
            records = self._require(name)
            stored = copy.deepcopy(record)

            if stored.get("id") is None:
                stored["id"] = self._next_id(records)
            elif self._find_index(records, stored["id"]) is not None:
                raise DuplicateIdError(
                    f"Insert failed, duplicate id '{stored['id']}' in '{name}'"
                )

            with self._committing(name):
                records.append(stored)
            return copy.deepcopy(stored)

    def update_by_id(self, name: str, record_id: Any, partial: Record) -> Record | None:
        with self._lock:
            records = self._records(name)
            if records is None:
                return None
            index = self._find_index(records, record_id)
            if index is None:
                return None

            changes = {k: copy.deepcopy(v) for k, v in partial.items() if k != "id"}
            with self._committing(name):
                records[index].update(changes)
            return copy.deepcopy(records[index])

    def replace_by_id(self, name: str, record_id: Any, full: Record) -> Record | None:
        with self._lock:
            records = self._records(name)
            if records is None:
                return None
            index = self._find_index(records, record_id)
            if index is None:
                return None

            record_key = records[index]["id"]
            replacement = {k: copy.deepcopy(v) for k, v in full.items() if k != "id"}
            with self._committing(name):
                records[index] = {"id": record_key, **replacement}
            return copy.deepcopy(records[index])

    def remove_by_id(self, name: str, record_id: Any) -> Record | None:
        with self._lock:
            records = self._records(name)
            if records is None:
                return None
            index = self._find_index(records, record_id)
            if index is None:
                return None

            with self._committing(name):
                removed = records.pop(index)
            return removed

    # --- Cascade ---

    def get_removable(self, state: DatabaseState) -> list[RemovableRef]:
        removable = find_removable(state, self.foreign_key_suffix)
        if removable:
            logger.debug("Found %d dangling record(s)", len(removable))
        return removable
