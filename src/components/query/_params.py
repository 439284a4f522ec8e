"""
Query parameter parsing.

Turns the raw (key, value) pairs of a request into a ListQuery:
- control parameters (_q, _sort, _page, ...) are pulled out
- `callback` and `_` are ignored
- `field=value` and `field_<suffix>=value` become filter predicates
- keys that are neither control parameters, suffix shortcuts, nor fields of
  any record are dropped
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.domain.entities import Record
from src.domain.values import has_path

from ._filter import build_predicates, parse_filter_expression
from ._paginate import DEFAULT_PAGE_LIMIT, parse_pagination
from ._project import parse_fields
from ._sort import parse_sort
from .models import SUFFIX_OPERATORS, ListQuery, Operator

logger = logging.getLogger(__name__)

CONTROL_PARAMS = frozenset(
    {"_q", "_filter", "_sort", "_embed", "_expand", "_fields", "_page", "_limit", "_offset", "_end"}
)
PASS_THROUGH_PARAMS = frozenset({"callback", "_"})

Params = Sequence[tuple[str, str]]


def first_value(params: Params, key: str) -> str | None:
    for k, v in params:
        if k == key:
            return v
    return None


def split_values(params: Params, key: str) -> tuple[str, ...]:
    """All comma-separated values of a possibly repeated key, de-duplicated."""
    seen: dict[str, None] = {}
    for k, v in params:
        if k != key:
            continue
        for part in v.split(","):
            part = part.strip()
            if part:
                seen.setdefault(part, None)
    return tuple(seen)


def match_suffix(key: str) -> tuple[str, Operator] | None:
    for suffix, operator in SUFFIX_OPERATORS.items():
        if key.endswith(suffix) and len(key) > len(suffix):
            return key[: -len(suffix)], operator
    return None


class FieldIndex:
    """Answers "does any record have this field?" without rescanning for plain keys."""

    def __init__(self, records: Sequence[Record]) -> None:
        self._records = records
        self._top_level: set[str] = set()
        for record in records:
            if isinstance(record, dict):
                self._top_level.update(record.keys())
        self._paths: dict[str, bool] = {}

    def __contains__(self, key: str) -> bool:
        if key in self._top_level:
            return True
        if "." not in key and "[" not in key:
            return False
        if key not in self._paths:
            self._paths[key] = any(has_path(r, key) for r in self._records)
        return self._paths[key]


def parse_list_query(
    params: Params,
    records: Sequence[Record],
    *,
    default_limit: int = DEFAULT_PAGE_LIMIT,
) -> ListQuery:
    """
    Build a ListQuery from raw query parameters.

    Args:
        params: Raw (key, value) pairs in request order; keys may repeat.
        records: Collection the query runs against (used for key pruning).
        default_limit: Page size when `_page` is given without `_limit`.
    """
    fields = FieldIndex(records)
    clauses: list[tuple[str, Operator, str]] = []

    for key, value in params:
        if key in CONTROL_PARAMS or key in PASS_THROUGH_PARAMS:
            continue
        suffixed = match_suffix(key)
        if suffixed is not None:
            field_path, operator = suffixed
            clauses.append((field_path, operator, value))
        elif key in fields:
            clauses.append((key, Operator.EQ, value))
        else:
            logger.debug("Dropping unknown query parameter %r", key)

    for expression in (v for k, v in params if k == "_filter"):
        clauses.extend(parse_filter_expression(expression))

    sort_raw = ",".join(split_values(params, "_sort"))

    return ListQuery(
        search=first_value(params, "_q") or None,
        predicates=build_predicates(clauses),
        sort=parse_sort(sort_raw) if sort_raw else (),
        pagination=parse_pagination(
            page=first_value(params, "_page"),
            limit=first_value(params, "_limit"),
            offset=first_value(params, "_offset"),
            end=first_value(params, "_end"),
            default_limit=default_limit,
        ),
        fields=parse_fields(",".join(split_values(params, "_fields"))),
        embed=split_values(params, "_embed"),
        expand=split_values(params, "_expand"),
    )
