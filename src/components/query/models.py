"""
Query component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.domain.entities import Record

# --- Operators ---


class Operator(str, Enum):
    """Filter operator."""

    LT = "lt"
    GT = "gt"
    LTE = "lte"
    GTE = "gte"
    NE = "ne"
    LIKE = "like"
    IN = "in"
    EQ = "eq"

    @property
    def is_range(self) -> bool:
        return self in (Operator.LT, Operator.GT, Operator.LTE, Operator.GTE)


# Tried in this order at each position: compound tokens before their
# single-character prefixes.
OPERATOR_TOKENS: tuple[tuple[str, Operator], ...] = (
    ("~=", Operator.LIKE),
    ("=~", Operator.LIKE),
    ("!=", Operator.NE),
    ("<=", Operator.LTE),
    (">=", Operator.GTE),
    ("<", Operator.LT),
    (">", Operator.GT),
    ("|=", Operator.IN),
    ("=", Operator.EQ),
    ("~", Operator.LIKE),
)

# Query-key shortcuts: "views_gte=10" filters views >= 10
SUFFIX_OPERATORS: dict[str, Operator] = {
    "_lte": Operator.LTE,
    "_gte": Operator.GTE,
    "_ne": Operator.NE,
    "_like": Operator.LIKE,
}


# --- Filter / Sort ---


@dataclass(frozen=True)
class FilterPredicate:
    """One field/operator pair; its values are OR-combined."""

    field_path: str
    operator: Operator
    values: tuple[Any, ...]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    field_path: str
    direction: SortDirection = SortDirection.ASC


# --- Pagination ---


@dataclass(frozen=True)
class PageRequest:
    """Page-number pagination (_page/_limit)."""

    page: int = 1
    limit: int = 10


@dataclass(frozen=True)
class EndSliceRequest:
    """Offset/end slice (_offset/_end). `end` is None when unparseable."""

    offset: int = 0
    end: int | None = None


@dataclass(frozen=True)
class LimitSliceRequest:
    """Offset/limit slice (_offset/_limit). `limit` is None when unparseable."""

    offset: int = 0
    limit: int | None = None


PaginationRequest = PageRequest | EndSliceRequest | LimitSliceRequest


@dataclass(frozen=True)
class PageInfo:
    """Page slice with navigation page numbers (None when not applicable)."""

    items: list[Record]
    current: int | None = None
    first: int | None = None
    prev: int | None = None
    next: int | None = None
    last: int | None = None


@dataclass(frozen=True)
class PaginationResult:
    items: list[Record]
    total_count: int | None = None
    links: dict[str, str] = field(default_factory=dict)


# --- Parsed query ---


@dataclass(frozen=True)
class ListQuery:
    """Query parameters after parsing, stripping and pruning."""

    search: str | None = None
    predicates: tuple[FilterPredicate, ...] = ()
    sort: tuple[SortSpec, ...] = ()
    pagination: PaginationRequest | None = None
    fields: tuple[str, ...] = ()
    embed: tuple[str, ...] = ()
    expand: tuple[str, ...] = ()


# --- Input Models ---


@dataclass(frozen=True)
class ListRecordsInput:
    """Input for listing a collection."""

    collection: str
    params: tuple[tuple[str, str], ...] = ()
    url: str = ""


@dataclass(frozen=True)
class ShowRecordInput:
    """Input for fetching one record."""

    collection: str
    record_id: str
    params: tuple[tuple[str, str], ...] = ()


# --- Output Models ---


@dataclass(frozen=True)
class ListRecordsOutput:
    """Output of a list query. `found` is False for an unknown collection."""

    records: list[Record] = field(default_factory=list)
    total_count: int | None = None
    links: dict[str, str] = field(default_factory=dict)
    found: bool = True


@dataclass(frozen=True)
class ShowRecordOutput:
    """Output of a show query. `record` is None when the id does not exist."""

    record: Record | None = None
