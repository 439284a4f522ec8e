"""
Dynamic value helpers for schema-less records.

Records are plain JSON-like trees (dict / list / str / int / float / bool / None).
Everything in the query pipeline goes through the helpers here so that the
same rules apply to coercion, path lookup, equality and ordering.

Key behaviors:
- Query-string scalars are coerced to native values ("true" -> True, "42" -> 42)
- Dotted paths resolve into nested mappings and sequences ("author.name", "tags.0")
- A missing path yields the MISSING sentinel, never None
- Equality is strict about bool vs number, numeric across int/float
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

# --- Absent sentinel ---


class _Missing:
    """Marker for a path that does not exist on a record."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# --- Coercion ---

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def to_native(value: Any) -> Any:
    """
    Convert a raw query-string scalar into a native value.

    "true"/"false" become booleans, "null" becomes None, and strings that
    fully parse as finite numbers become int (when integral) or float.
    Anything else, including non-string input, is returned unchanged.
    """
    if not isinstance(value, str):
        return value

    # Padded or empty strings are kept verbatim
    if value == "" or value.strip() != value:
        return value

    if value == "true":
        return True
    if value == "false":
        return False
    if value == "null":
        return None

    if _INTEGER_RE.match(value):
        return int(value)

    if _NUMBER_RE.match(value):
        number = float(value)
        if not math.isfinite(number):
            return value
        if number.is_integer():
            return int(number)
        return number

    return value


def to_query_string(value: Any) -> str:
    """
    Render a value the way it would appear in a query string.

    Inverse of to_native for scalars: True -> "true", None -> "null",
    3.0 -> "3". Lists are comma-joined and mappings become compact JSON.
    """
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), sort_keys=False, default=str)
    if isinstance(value, Sequence):
        return ",".join(to_query_string(v) for v in value)
    return str(value)


# --- Path lookup ---

_BRACKET_RE = re.compile(r"\[(\d+)\]")


def split_path(path: str) -> list[str]:
    """Split "a.b[0].c" into ["a", "b", "0", "c"]."""
    normalized = _BRACKET_RE.sub(r".\1", path)
    return [part for part in normalized.split(".") if part != ""] or [path]


def get_path(record: Any, path: str) -> Any:
    """
    Resolve a dotted path on a record.

    Returns MISSING when any segment does not exist.
    """
    if isinstance(record, Mapping) and path in record:
        return record[path]

    current = record
    for part in split_path(path):
        if isinstance(current, Mapping):
            if part not in current:
                return MISSING
            current = current[part]
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return MISSING
            current = current[index]
        else:
            return MISSING
    return current


def has_path(record: Any, path: str) -> bool:
    return get_path(record, path) is not MISSING


# --- Equality ---


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equal(left: Any, right: Any) -> bool:
    """Scalar equality that never treats True as 1."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if is_number(left) and is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return bool(left == right)


def deep_equal(left: Any, right: Any) -> bool:
    """Structural equality over nested mappings and lists."""
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(deep_equal(left[k], right[k]) for k in left)
    if isinstance(left, list) and isinstance(right, list):
        if len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right, strict=True))
    if isinstance(left, (Mapping, list)) or isinstance(right, (Mapping, list)):
        return False
    return strict_equal(left, right)


def ids_equal(left: Any, right: Any) -> bool:
    """Record ids match by their string form, so 1 and "1" are the same id."""
    if left is None or right is None or left is MISSING or right is MISSING:
        return False
    return to_query_string(left) == to_query_string(right)


# --- Ordering ---


def _as_comparable_number(value: Any) -> float | None:
    if is_number(value):
        return float(value)
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        native = to_native(value)
        if is_number(native):
            return float(native)
    return None


def compare_values(left: Any, right: Any) -> int | None:
    """
    Three-way comparison for range operators.

    Returns -1/0/1, or None when the two values are not comparable.
    Numbers compare numerically, strings lexicographically, and a number
    against a numeric string numerically.
    """
    if left is MISSING or right is MISSING or left is None or right is None:
        return None

    if isinstance(left, str) and isinstance(right, str):
        return (left > right) - (left < right)

    a = _as_comparable_number(left)
    b = _as_comparable_number(right)
    if a is None or b is None:
        return None
    return (a > b) - (a < b)


def sort_key(value: Any) -> tuple[int, Any]:
    """
    Total-order key for sorting mixed values.

    Ascending order: numbers, strings, booleans, structures, then null/absent.
    """
    if is_number(value):
        return (0, float(value))
    if isinstance(value, str):
        return (1, value)
    if isinstance(value, bool):
        return (2, int(value))
    if value is None or value is MISSING:
        return (4, 0)
    return (3, json.dumps(value, sort_keys=True, default=str))
