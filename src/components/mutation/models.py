"""
Mutation component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.entities import Record, RemovableRef


@dataclass(frozen=True)
class CreateRecordInput:
    """Input for creating a record."""

    collection: str
    body: dict[str, Any]


@dataclass(frozen=True)
class UpdateRecordInput:
    """
    Input for updating a record.

    partial=True merges the body onto the stored record (PATCH);
    partial=False replaces the whole record (PUT).
    """

    collection: str
    record_id: str
    body: dict[str, Any]
    partial: bool = True


@dataclass(frozen=True)
class DeleteRecordInput:
    """Input for deleting a record and its dependents."""

    collection: str
    record_id: str


@dataclass(frozen=True)
class RecordOutput:
    """Output of create/update. `record` is None when the id was not found."""

    record: Record | None = None
    created: bool = False


@dataclass(frozen=True)
class DeleteRecordOutput:
    """Output of delete. `removed` is None when the id was not found."""

    removed: Record | None = None
    cascaded: tuple[RemovableRef, ...] = field(default_factory=tuple)
