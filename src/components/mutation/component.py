"""
Mutation component - create, update, replace and delete records.

Shell Layer - wraps results in output models. Path ids are passed as
received; the store matches them by string form.
"""

from __future__ import annotations

from ._impl import create_record, delete_record, update_record
from .models import (
    CreateRecordInput,
    DeleteRecordInput,
    DeleteRecordOutput,
    RecordOutput,
    UpdateRecordInput,
)
from .ports import MutationStorePort

# --- Component Entry Points ---


def run_create(inp: CreateRecordInput, *, store: MutationStorePort) -> RecordOutput:
    """
    Create a record.

    Raises:
        CollectionNotFoundError: If the collection does not exist
        DuplicateIdError: If the body carries an id that is already taken
    """
    record = create_record(store, inp.collection, inp.body)
    return RecordOutput(record=record, created=True)


def run_update(inp: UpdateRecordInput, *, store: MutationStorePort) -> RecordOutput:
    """Merge (partial) or replace a record; record is None when not found."""
    record = update_record(
        store,
        inp.collection,
        inp.record_id,
        inp.body,
        partial=inp.partial,
    )
    return RecordOutput(record=record)


def run_delete(inp: DeleteRecordInput, *, store: MutationStorePort) -> DeleteRecordOutput:
    """Delete a record, then its dangling dependents in every collection."""
    removed, cascaded = delete_record(store, inp.collection, inp.record_id)
    return DeleteRecordOutput(removed=removed, cascaded=tuple(cascaded))
