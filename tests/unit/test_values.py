"""
Tests for dynamic value helpers.

Covers query-string coercion, dotted path lookup, strict equality and the
mixed-type ordering used by sort.
"""

import pytest

from src.domain.values import (
    MISSING,
    compare_values,
    deep_equal,
    get_path,
    has_path,
    ids_equal,
    sort_key,
    split_path,
    strict_equal,
    to_native,
    to_query_string,
)


class TestToNative:
    """Query-string scalar coercion."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("true", True),
            ("false", False),
            ("null", None),
            ("42", 42),
            ("-7", -7),
            ("1.5", 1.5),
            ("1e3", 1000),
            ("2.0", 2),
        ],
    )
    def test_coerces_literals(self, raw, expected) -> None:
        result = to_native(raw)
        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize("raw", ["", " 1", "1 ", "abc", "nan", "Infinity", "1,2", "True"])
    def test_keeps_strings(self, raw) -> None:
        assert to_native(raw) == raw

    def test_non_strings_pass_through(self) -> None:
        value = {"a": 1}
        assert to_native(value) is value
        assert to_native(3) == 3


class TestToQueryString:
    """Inverse stringification."""

    def test_scalars(self) -> None:
        assert to_query_string(True) == "true"
        assert to_query_string(False) == "false"
        assert to_query_string(None) == "null"
        assert to_query_string(3.0) == "3"
        assert to_query_string(1.5) == "1.5"
        assert to_query_string(12) == "12"
        assert to_query_string("x") == "x"

    def test_structures(self) -> None:
        assert to_query_string([1, "a", True]) == "1,a,true"
        assert to_query_string({"a": 1}) == '{"a":1}'

    @pytest.mark.parametrize("value", [True, False, None, 0, 17, -3, 2.5, "hello"])
    def test_round_trips_through_to_native(self, value) -> None:
        assert to_native(to_query_string(value)) == value


class TestPaths:
    """Dotted path lookup."""

    def test_split_path_brackets(self) -> None:
        assert split_path("a.b[0].c") == ["a", "b", "0", "c"]
        assert split_path("plain") == ["plain"]

    def test_nested_lookup(self) -> None:
        record = {"author": {"name": "Ada", "tags": ["x", "y"]}}
        assert get_path(record, "author.name") == "Ada"
        assert get_path(record, "author.tags.1") == "y"
        assert get_path(record, "author.tags[0]") == "x"

    def test_missing_paths(self) -> None:
        record = {"author": {"name": "Ada", "tags": ["x"]}}
        assert get_path(record, "author.email") is MISSING
        assert get_path(record, "author.tags.5") is MISSING
        assert get_path(record, "author.name.first") is MISSING
        assert get_path(record, "nope") is MISSING

    def test_null_is_present(self) -> None:
        assert get_path({"a": None}, "a") is None
        assert has_path({"a": None}, "a")
        assert not has_path({}, "a")

    def test_literal_dotted_key_wins(self) -> None:
        assert get_path({"a.b": 1, "a": {"b": 2}}, "a.b") == 1

    def test_missing_is_falsy_singleton(self) -> None:
        assert not MISSING
        assert repr(MISSING) == "MISSING"


class TestEquality:
    """Strict scalar and structural equality."""

    def test_bool_is_not_number(self) -> None:
        assert not strict_equal(True, 1)
        assert not strict_equal(0, False)
        assert strict_equal(True, True)

    def test_numeric_across_int_float(self) -> None:
        assert strict_equal(1, 1.0)

    def test_string_is_not_number(self) -> None:
        assert not strict_equal("1", 1)

    def test_deep_equal(self) -> None:
        assert deep_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})
        assert not deep_equal({"a": [1]}, {"a": [True]})
        assert not deep_equal([1, 2], [1])
        assert not deep_equal({"a": 1}, [1])

    def test_ids_equal_by_string_form(self) -> None:
        assert ids_equal(1, "1")
        assert ids_equal("abc", "abc")
        assert not ids_equal(1, 2)
        assert not ids_equal(None, None)
        assert not ids_equal(MISSING, "1")


class TestOrdering:
    """Range comparison and sort keys."""

    def test_compare_numbers(self) -> None:
        assert compare_values(1, 2) == -1
        assert compare_values(2.5, 2) == 1
        assert compare_values(3, 3.0) == 0

    def test_compare_number_with_numeric_string(self) -> None:
        assert compare_values(5, "10") == -1
        assert compare_values("10", 5) == 1

    def test_compare_strings_lexicographically(self) -> None:
        assert compare_values("10", "9") == -1
        assert compare_values("b", "a") == 1

    def test_not_comparable(self) -> None:
        assert compare_values(5, "x") is None
        assert compare_values(None, 1) is None
        assert compare_values(MISSING, 1) is None
        assert compare_values({"a": 1}, 1) is None

    def test_sort_key_total_order(self) -> None:
        values = [None, {"a": 1}, True, "b", 2, MISSING, "a", 1.5]
        ordered = sorted(values, key=sort_key)
        assert ordered[:5] == [1.5, 2, "a", "b", True]
        assert ordered[5] == {"a": 1}
        assert ordered[6] is None or ordered[6] is MISSING


class TestLargeIntegers:
    """Integral literals beyond float precision stay exact."""

    def test_large_integer_is_exact(self) -> None:
        assert to_native("9007199254740993") == 9007199254740993
        assert to_native("-9007199254740993") == -9007199254740993

    def test_large_integer_round_trips(self) -> None:
        assert to_query_string(to_native("123456789012345678901")) == "123456789012345678901"
