"""
Mutation component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.entities import DatabaseState, Record, RemovableRef


class MutationStorePort(Protocol):
    """Write access needed by create, update and delete."""

    def insert(self, name: str, record: Record) -> Record:
        """Insert a record; the store assigns the id."""
        ...

    def update_by_id(self, name: str, record_id: Any, partial: Record) -> Record | None:
        """Merge fields onto a record."""
        ...

    def replace_by_id(self, name: str, record_id: Any, full: Record) -> Record | None:
        """Replace a record's body."""
        ...

    def remove_by_id(self, name: str, record_id: Any) -> Record | None:
        """Remove a record."""
        ...

    def get_removable(self, state: DatabaseState) -> list[RemovableRef]:
        """Records that reference something that no longer exists."""
        ...

    def state(self) -> DatabaseState:
        """Snapshot of the database document."""
        ...
