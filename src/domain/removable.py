"""
Dangling reference detection for cascade delete.

A record is removable when one of its foreign keys ("<singular>Id") names an
existing collection but no record in that collection carries the referenced
id. The scan repeats until nothing new is found, so records that only become
dangling because a dependent was removed are reported as well.

Invariants:
- Collections that do not exist never make a reference dangling
- A null foreign key is not a reference
- Each (collection, id) pair is reported once, in discovery order
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.domain.entities import RemovableRef
from src.domain.naming import pluralize
from src.domain.values import to_query_string


def _referenced_collection(key: str, suffix: str) -> str | None:
    if not suffix or len(key) <= len(suffix) or not key.endswith(suffix):
        return None
    return pluralize(key[: -len(suffix)])


def find_removable(
    state: Mapping[str, Any],
    foreign_key_suffix: str = "Id",
) -> list[RemovableRef]:
    """
    List every record, in any collection, whose foreign key dangles.

    Args:
        state: Whole database document (collection name -> list of records).
        foreign_key_suffix: Suffix that marks a foreign key field.

    Returns:
        RemovableRef entries, direct dependents first.
    """
    collections = {
        name: records for name, records in state.items() if isinstance(records, list)
    }

    # Live ids per collection, as strings
    live_ids: dict[str, set[str]] = {
        name: {
            to_query_string(record["id"])
            for record in records
            if isinstance(record, Mapping) and record.get("id") is not None
        }
        for name, records in collections.items()
    }

    removable: list[RemovableRef] = []
    changed = True
    while changed:
        changed = False
        for name, records in collections.items():
            for record in records:
                if not isinstance(record, Mapping) or record.get("id") is None:
                    continue
                record_key = to_query_string(record["id"])
                if record_key not in live_ids[name]:
                    continue

                for key, value in record.items():
                    target = _referenced_collection(key, foreign_key_suffix)
                    if target is None or target not in collections or value is None:
                        continue
                    if to_query_string(value) not in live_ids[target]:
                        removable.append(RemovableRef(name=name, id=record["id"]))
                        live_ids[name].discard(record_key)
                        changed = True
                        break

    return removable
