"""Field projection (`_fields=a,b,c`)."""

from __future__ import annotations

from collections.abc import Mapping

from src.domain.entities import Record


def parse_fields(raw: str) -> tuple[str, ...]:
    return tuple(f.strip() for f in raw.split(",") if f.strip())


def apply_projection(records: list[Record], fields: tuple[str, ...]) -> list[Record]:
    """
    Shallow pick: only the listed top-level keys, missing keys stay absent.

    Scalar entries have no keys to pick and project to an empty mapping.
    """
    if not fields:
        return records
    return [
        {k: r[k] for k in fields if k in r} if isinstance(r, Mapping) else {}
        for r in records
    ]
