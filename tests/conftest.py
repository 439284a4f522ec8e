import copy

import pytest
from fastapi.testclient import TestClient

from src.adapters.memory_store import InMemoryCollectionStore
from src.api.deps import get_rules, get_store
from src.api.main import app
from src.rules.models import Rules

SAMPLE_STATE = {
    "users": [
        {"id": 1, "name": "Ada", "email": "ada@example.com", "active": True},
        {"id": 2, "name": "Grace", "email": "grace@example.com", "active": False},
    ],
    "posts": [
        {"id": 1, "title": "json-server", "userId": 1, "views": 100, "tags": ["api", "json"]},
        {"id": 2, "title": "Hello world", "userId": 1, "views": 10, "tags": ["intro"]},
        {"id": 3, "title": "Sorting things", "userId": 2, "views": 50, "tags": []},
    ],
    "comments": [
        {"id": 1, "body": "nice", "postId": 1},
        {"id": 2, "body": "great post", "postId": 1},
        {"id": 3, "body": "hello", "postId": 2},
    ],
    "profile": {"name": "typicode"},
}


@pytest.fixture
def sample_state() -> dict:
    return copy.deepcopy(SAMPLE_STATE)


@pytest.fixture
def store(sample_state) -> InMemoryCollectionStore:
    return InMemoryCollectionStore(sample_state)


@pytest.fixture
def rules() -> Rules:
    return Rules()


@pytest.fixture
def client(store, rules):
    """TestClient wired to an in-memory store."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_rules] = lambda: rules
    yield TestClient(app)
    app.dependency_overrides.clear()
