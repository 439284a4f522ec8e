"""
Relations component port definitions.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from src.domain.entities import Collection, Record


class RelatedStorePort(Protocol):
    """Read access needed to resolve embedded and expanded records."""

    def has_collection(self, name: str) -> bool:
        """Check whether a collection exists."""
        ...

    def filter(self, name: str, predicate: Callable[[Record], bool]) -> Collection:
        """Records of a collection matching a predicate."""
        ...

    def get_by_id(self, name: str, record_id: Any) -> Record | None:
        """Get a record by id."""
        ...
