"""
Query component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol

from src.components.relations.ports import RelatedStorePort
from src.domain.entities import Collection, Record


class QueryStorePort(RelatedStorePort, Protocol):
    """Read access needed by list and show queries."""

    def get_collection(self, name: str) -> Collection | None:
        """Materialize a collection, or None if it does not exist."""
        ...

    def get_by_id(self, name: str, record_id: Any) -> Record | None:
        """Get a record by id."""
        ...


class QueryRulesPort(Protocol):
    """Port for query configuration."""

    def get_default_page_limit(self) -> int:
        """Page size used when `_page` is given without `_limit`."""
        ...

    def get_foreign_key_suffix(self) -> str:
        """Suffix of foreign key fields ("Id" in "postId")."""
        ...
