"""
Record mutation with input coercion and cascade delete.

Key behaviors:
- Top-level body values are coerced ("5" -> 5, "true" -> True); nested
  values are stored as sent
- Delete removes the record, then every record the store reports as
  dangling; how deep that goes is up to the store's removability scan
"""

from __future__ import annotations

import logging
from typing import Any

from src.domain.entities import Record, RemovableRef
from src.domain.values import to_native

from .ports import MutationStorePort

logger = logging.getLogger(__name__)


def coerce_body(body: dict[str, Any]) -> Record:
    return {key: to_native(value) for key, value in body.items()}


def create_record(store: MutationStorePort, collection: str, body: dict[str, Any]) -> Record:
    return store.insert(collection, coerce_body(body))


def update_record(
    store: MutationStorePort,
    collection: str,
    record_id: Any,
    body: dict[str, Any],
    *,
    partial: bool,
) -> Record | None:
    values = coerce_body(body)
    if partial:
        return store.update_by_id(collection, record_id, values)
    return store.replace_by_id(collection, record_id, values)


def cascade_remove(store: MutationStorePort) -> list[RemovableRef]:
    """Remove every record the store reports as dangling."""
    removable = store.get_removable(store.state())
    removed: list[RemovableRef] = []
    for ref in removable:
        if store.remove_by_id(ref.name, ref.id) is not None:
            removed.append(ref)
    if removed:
        logger.info(
            "Cascade removed %d record(s): %s",
            len(removed),
            ", ".join(f"{r.name}/{r.id}" for r in removed),
        )
    return removed


def delete_record(
    store: MutationStorePort,
    collection: str,
    record_id: Any,
) -> tuple[Record | None, list[RemovableRef]]:
    removed = store.remove_by_id(collection, record_id)
    if removed is None:
        return None, []
    return removed, cascade_remove(store)
