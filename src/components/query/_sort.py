"""
Sort engine.

`_sort=author.name,-views` sorts by author name ascending, then views
descending. Python's sort is stable, so sorting once per key from the last
key to the first yields a multi-key ordering where ties keep input order.
"""

from __future__ import annotations

from src.domain.entities import Record
from src.domain.values import get_path, sort_key

from .models import SortDirection, SortSpec


def parse_sort(raw: str) -> tuple[SortSpec, ...]:
    specs: list[SortSpec] = []
    for part in raw.split(","):
        part = part.strip()
        if part.startswith("-"):
            field_path, direction = part[1:], SortDirection.DESC
        else:
            field_path, direction = part, SortDirection.ASC
        if field_path:
            specs.append(SortSpec(field_path=field_path, direction=direction))
    return tuple(specs)


def apply_sort(records: list[Record], specs: tuple[SortSpec, ...]) -> list[Record]:
    if not specs:
        return records

    ordered = list(records)
    for spec in reversed(specs):
        ordered.sort(
            key=lambda r, path=spec.field_path: sort_key(get_path(r, path)),
            reverse=spec.direction is SortDirection.DESC,
        )
    return ordered
