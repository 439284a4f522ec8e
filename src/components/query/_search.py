"""Full-text search (`_q`) over every field of a record."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.domain.entities import Record
from src.domain.values import MISSING, to_query_string


def deep_contains(value: Any, needle: str) -> bool:
    """True if `needle` (lower-case) occurs in `value` or anything nested in it."""
    if value is None or value is MISSING or not needle:
        return False
    if isinstance(value, Mapping):
        return any(deep_contains(v, needle) for v in value.values())
    if isinstance(value, list):
        return any(deep_contains(v, needle) for v in value)
    return needle in to_query_string(value).lower()


def apply_search(records: list[Record], query: str | None) -> list[Record]:
    if not query:
        return records
    needle = query.lower()
    return [r for r in records if deep_contains(r, needle)]
