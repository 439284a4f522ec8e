"""
Relations component unit tests.

Tests embed/expand resolution with a mock store.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from src.components.relations import (
    ResolveRelationsInput,
    embed_children,
    expand_parents,
    run_resolve,
)
from src.domain.values import ids_equal

# --- Mock Store ---


class MockRelatedStore:
    """Minimal read-only store for testing."""

    def __init__(self, data: dict[str, list[dict[str, Any]]]) -> None:
        self._data = data

    def has_collection(self, name: str) -> bool:
        return name in self._data

    def filter(self, name: str, predicate: Callable[[dict], bool]) -> list[dict]:
        return [dict(r) for r in self._data.get(name, []) if predicate(r)]

    def get_by_id(self, name: str, record_id: Any) -> dict | None:
        for r in self._data.get(name, []):
            if ids_equal(r.get("id"), record_id):
                return dict(r)
        return None


@pytest.fixture
def store() -> MockRelatedStore:
    return MockRelatedStore(
        {
            "users": [{"id": 1, "name": "Ada"}],
            "posts": [{"id": 1, "userId": 1}, {"id": 2, "userId": 5}, {"id": 3, "userId": None}],
            "comments": [
                {"id": 1, "postId": 1},
                {"id": 2, "postId": "1"},
                {"id": 3, "postId": 2},
                {"id": 4},
            ],
            "people": [{"id": 7, "name": "Grace"}],
        }
    )


# --- Embed Tests ---


class TestEmbed:
    """Test one-to-many embedding."""

    def test_embeds_matching_children(self, store) -> None:
        record = embed_children({"id": 1}, "posts", ("comments",), store)
        assert record["comments"] == [{"id": 1, "postId": 1}]

    def test_match_is_strict(self, store) -> None:
        """A string "1" does not match the numeric id 1."""
        record = embed_children({"id": 1}, "posts", ("comments",), store)
        assert 2 not in [c["id"] for c in record["comments"]]

    def test_no_children_gives_empty_list(self, store) -> None:
        record = embed_children({"id": 3}, "posts", ("comments",), store)
        assert record["comments"] == []

    def test_unknown_collection_skipped(self, store) -> None:
        record = embed_children({"id": 1}, "posts", ("likes",), store)
        assert "likes" not in record

    def test_record_without_id_gets_no_children(self) -> None:
        """Children with a null foreign key do not attach to a record lacking an id."""
        store = MockRelatedStore({"comments": [{"id": 1, "postId": None}, {"id": 2}]})
        record = embed_children({"title": "draft"}, "posts", ("comments",), store)
        assert record["comments"] == []

    def test_scalar_children_never_match(self) -> None:
        store = MockRelatedStore({"tags": ["a", "b"]})
        record = embed_children({"id": 1}, "posts", ("tags",), store)
        assert record["tags"] == []


# --- Expand Tests ---


class TestExpand:
    """Test many-to-one expansion."""

    def test_expands_parent(self, store) -> None:
        record = expand_parents({"id": 1, "userId": 1}, ("user",), store)
        assert record["user"] == {"id": 1, "name": "Ada"}

    def test_dangling_reference_leaves_key_absent(self, store) -> None:
        record = expand_parents({"id": 2, "userId": 5}, ("user",), store)
        assert "user" not in record

    def test_null_reference(self, store) -> None:
        record = expand_parents({"id": 3, "userId": None}, ("user",), store)
        assert "user" not in record

    def test_irregular_plural(self, store) -> None:
        record = expand_parents({"id": 1, "personId": 7}, ("person",), store)
        assert record["person"]["name"] == "Grace"

    def test_custom_suffix(self, store) -> None:
        record = expand_parents({"id": 1, "user_id": 1}, ("user",), store, "_id")
        assert record["user"]["name"] == "Ada"


# --- Component Tests ---


class TestRunResolve:
    """Test the component entry point."""

    def test_copies_input_records(self, store) -> None:
        records = [{"id": 1, "userId": 1}]
        result = run_resolve(
            ResolveRelationsInput(
                collection="posts",
                records=records,
                embed=("comments",),
                expand=("user",),
            ),
            store=store,
        )
        assert result.records[0]["user"]["name"] == "Ada"
        assert len(result.records[0]["comments"]) == 1
        assert records == [{"id": 1, "userId": 1}]

    def test_nothing_requested(self, store) -> None:
        result = run_resolve(
            ResolveRelationsInput(collection="posts", records=[{"id": 1}]),
            store=store,
        )
        assert result.records == [{"id": 1}]

    def test_scalar_records_pass_through(self, store) -> None:
        result = run_resolve(
            ResolveRelationsInput(
                collection="tags",
                records=["a", 2],
                embed=("comments",),
                expand=("user",),
            ),
            store=store,
        )
        assert result.records == ["a", 2]
