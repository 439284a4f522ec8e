"""
Filter predicate engine.

Parses the `_filter` expression language and evaluates predicates against
records.

Expression grammar:
    clause ("," clause)*
    clause := field operator value
    operator := "~=" | "=~" | "!=" | "<=" | ">=" | "<" | ">" | "|=" | "=" | "~"

Key behaviors:
- Operators are tokenized left to right, compound tokens first
- A clause with anything other than exactly one operator is dropped
- Values for the same (field, operator) are OR-combined
- Distinct predicates are AND-combined
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from src.domain.entities import Record
from src.domain.values import (
    MISSING,
    compare_values,
    deep_equal,
    get_path,
    strict_equal,
    to_native,
    to_query_string,
)

from .models import OPERATOR_TOKENS, FilterPredicate, Operator

logger = logging.getLogger(__name__)


# --- Parsing ---


def tokenize_clause(clause: str) -> list[str | Operator]:
    """
    Split a clause into text and operator tokens.

    "views>=10" -> ["views", Operator.GTE, "10"]
    """
    tokens: list[str | Operator] = []
    buffer: list[str] = []
    i = 0
    while i < len(clause):
        for symbol, operator in OPERATOR_TOKENS:
            if clause.startswith(symbol, i):
                tokens.append("".join(buffer))
                tokens.append(operator)
                buffer = []
                i += len(symbol)
                break
        else:
            buffer.append(clause[i])
            i += 1
    tokens.append("".join(buffer))
    return tokens


def parse_clause(clause: str) -> tuple[str, Operator, str] | None:
    """Parse one `field<op>value` clause, or None when malformed."""
    tokens = tokenize_clause(clause)
    if len(tokens) != 3:
        return None
    field_path, operator, value = tokens
    if not isinstance(operator, Operator):
        return None
    return str(field_path), operator, str(value)


def parse_filter_expression(expression: str) -> list[tuple[str, Operator, str]]:
    """Parse a comma-separated filter expression; malformed clauses are skipped."""
    clauses: list[tuple[str, Operator, str]] = []
    for clause in expression.split(","):
        parsed = parse_clause(clause)
        if parsed is None:
            logger.debug("Ignoring malformed filter clause %r", clause)
            continue
        clauses.append(parsed)
    return clauses


def build_predicates(
    clauses: Iterable[tuple[str, Operator, str]],
) -> tuple[FilterPredicate, ...]:
    """Group raw clauses by (field, operator) and coerce their values."""
    grouped: dict[tuple[str, Operator], list[Any]] = {}
    for field_path, operator, raw in clauses:
        grouped.setdefault((field_path, operator), []).append(to_native(raw))

    return tuple(
        FilterPredicate(field_path=field_path, operator=operator, values=tuple(values))
        for (field_path, operator), values in grouped.items()
    )


# --- Evaluation ---


_RANGE_CHECKS = {
    Operator.LT: lambda c: c < 0,
    Operator.GT: lambda c: c > 0,
    Operator.LTE: lambda c: c <= 0,
    Operator.GTE: lambda c: c >= 0,
}


def _like(field_value: Any, pattern: Any) -> bool:
    if field_value is MISSING:
        return False
    try:
        regex = re.compile(to_query_string(pattern), re.IGNORECASE)
    except re.error:
        logger.debug("Invalid like pattern %r", pattern)
        return False
    return regex.search(to_query_string(field_value)) is not None


def _in(field_value: Any, value: Any) -> bool:
    if field_value is MISSING:
        return False
    alternatives = [to_native(part) for part in to_query_string(value).split("|")]
    if isinstance(field_value, list):
        return any(strict_equal(item, alt) for item in field_value for alt in alternatives)
    return any(strict_equal(field_value, alt) for alt in alternatives)


def matches_value(operator: Operator, field_value: Any, value: Any) -> bool:
    """Evaluate a single operator against one predicate value."""
    if operator.is_range:
        comparison = compare_values(field_value, value)
        return comparison is not None and _RANGE_CHECKS[operator](comparison)
    if operator is Operator.NE:
        return field_value is MISSING or not deep_equal(field_value, value)
    if operator is Operator.LIKE:
        return _like(field_value, value)
    if operator is Operator.IN:
        return _in(field_value, value)
    return field_value is not MISSING and deep_equal(field_value, value)


def matches_predicate(record: Record, predicate: FilterPredicate) -> bool:
    field_value = get_path(record, predicate.field_path)
    return any(matches_value(predicate.operator, field_value, v) for v in predicate.values)


def matches_all(record: Record, predicates: Iterable[FilterPredicate]) -> bool:
    return all(matches_predicate(record, p) for p in predicates)


def apply_filters(
    records: list[Record],
    predicates: tuple[FilterPredicate, ...],
) -> list[Record]:
    """Keep records that pass every predicate."""
    if not predicates:
        return records
    return [r for r in records if matches_all(r, predicates)]
