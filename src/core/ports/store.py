"""
Collection Store Port.

Protocol-based interface for the storage engine behind the collections API.
Implementations: in-memory (tests, ephemeral servers) and JSON file (default).

Invariants:
- Every record in a collection has a unique `id`; the store assigns one when absent
- Ids are compared by string form ("1" finds the record with id 1)
- Individual operations are atomic; nothing spans more than one operation
- Returned records are copies; mutating them never changes stored state
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from src.domain.entities import Collection, DatabaseState, Record, RemovableRef


class StoreError(Exception):
    """Base exception for store operations."""

    pass


class CollectionNotFoundError(StoreError):
    """Raised when writing to a collection that does not exist."""

    pass


class DuplicateIdError(StoreError):
    """Raised when inserting a record whose id is already taken."""

    pass


class CollectionStorePort(Protocol):
    """
    Storage engine interface consumed by the query, relations and mutation
    components.
    """

    def has_collection(self, name: str) -> bool:
        """True when `name` is a collection (a list-valued entry)."""
        ...

    def get_collection(self, name: str) -> Collection | None:
        """Materialize a collection in insertion order, or None if absent."""
        ...

    def filter(self, name: str, predicate: Callable[[Record], bool]) -> Collection:
        """Records of `name` matching `predicate` (empty if absent)."""
        ...

    def get_by_id(self, name: str, record_id: Any) -> Record | None:
        """Get a record by id."""
        ...

    def insert(self, name: str, record: Record) -> Record:
        """
        Insert a record, assigning an id when it has none.

        Raises:
            CollectionNotFoundError: If the collection does not exist
            DuplicateIdError: If the record's id already exists
        """
        ...

    def update_by_id(self, name: str, record_id: Any, partial: Record) -> Record | None:
        """Merge `partial` onto the record; the id is never changed."""
        ...

    def replace_by_id(self, name: str, record_id: Any, full: Record) -> Record | None:
        """Replace the record body, keeping its id."""
        ...

    def remove_by_id(self, name: str, record_id: Any) -> Record | None:
        """Remove and return a record."""
        ...

    def get_removable(self, state: DatabaseState) -> list[RemovableRef]:
        """Records of `state` that reference records that no longer exist."""
        ...

    def state(self) -> DatabaseState:
        """Snapshot of the whole database document."""
        ...
