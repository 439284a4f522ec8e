"""Tests for query parameter parsing and key pruning."""

from src.components.query import (
    FilterPredicate,
    LimitSliceRequest,
    Operator,
    PageRequest,
    SortDirection,
    SortSpec,
    parse_list_query,
)
from src.components.query._params import FieldIndex, match_suffix, split_values

RECORDS = [
    {"id": 1, "title": "a", "views": 3, "author": {"name": "Ada"}},
    {"id": 2, "title": "b", "published": True},
]


class TestHelpers:
    def test_split_values_repeated_and_comma_separated(self) -> None:
        params = [("_embed", "comments,likes"), ("_embed", "likes"), ("_embed", " tags ")]
        assert split_values(params, "_embed") == ("comments", "likes", "tags")

    def test_match_suffix(self) -> None:
        assert match_suffix("views_gte") == ("views", Operator.GTE)
        assert match_suffix("views_lte") == ("views", Operator.LTE)
        assert match_suffix("title_like") == ("title", Operator.LIKE)
        assert match_suffix("id_ne") == ("id", Operator.NE)
        assert match_suffix("_gte") is None
        assert match_suffix("views") is None

    def test_field_index(self) -> None:
        index = FieldIndex(RECORDS)
        assert "published" in index
        assert "author.name" in index
        assert "author.email" not in index
        assert "unknown" not in index


class TestParseListQuery:
    def test_empty(self) -> None:
        query = parse_list_query([], RECORDS)
        assert query.predicates == ()
        assert query.pagination is None
        assert query.search is None

    def test_control_params(self) -> None:
        query = parse_list_query(
            [
                ("_q", "hello"),
                ("_sort", "views,-title"),
                ("_page", "2"),
                ("_fields", "id,title"),
                ("_expand", "author"),
            ],
            RECORDS,
            default_limit=7,
        )
        assert query.search == "hello"
        assert query.sort == (
            SortSpec("views", SortDirection.ASC),
            SortSpec("title", SortDirection.DESC),
        )
        assert query.pagination == PageRequest(page=2, limit=7)
        assert query.fields == ("id", "title")
        assert query.expand == ("author",)

    def test_field_shortcuts(self) -> None:
        query = parse_list_query([("title", "a"), ("title", "b"), ("views_gte", "2")], RECORDS)
        assert query.predicates == (
            FilterPredicate("title", Operator.EQ, ("a", "b")),
            FilterPredicate("views", Operator.GTE, (2,)),
        )

    def test_unknown_keys_dropped(self) -> None:
        query = parse_list_query([("nope", "1"), ("callback", "cb"), ("_", "123")], RECORDS)
        assert query.predicates == ()

    def test_nested_field_shortcut(self) -> None:
        query = parse_list_query([("author.name", "Ada")], RECORDS)
        assert query.predicates == (FilterPredicate("author.name", Operator.EQ, ("Ada",)),)

    def test_filter_expression_merges_with_shortcuts(self) -> None:
        query = parse_list_query([("id", "1"), ("_filter", "id=2,views>1")], RECORDS)
        assert query.predicates == (
            FilterPredicate("id", Operator.EQ, (1, 2)),
            FilterPredicate("views", Operator.GT, (1,)),
        )

    def test_limit_slice(self) -> None:
        query = parse_list_query([("_limit", "2"), ("_offset", "1")], RECORDS)
        assert query.pagination == LimitSliceRequest(offset=1, limit=2)

    def test_empty_search_disabled(self) -> None:
        assert parse_list_query([("_q", "")], RECORDS).search is None
