"""
Relations component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.entities import Record


@dataclass(frozen=True)
class ResolveRelationsInput:
    """
    Input for attaching related records.

    `records` belong to `collection`; they are copied before anything is
    attached, so callers may pass records straight from the store.
    """

    collection: str
    records: list[Record]
    embed: tuple[str, ...] = ()
    expand: tuple[str, ...] = ()
    foreign_key_suffix: str = "Id"


@dataclass(frozen=True)
class ResolveRelationsOutput:
    records: list[Record] = field(default_factory=list)
