"""
Service routes: health and the whole-database dump.

Registered before the collection router so `/{name}` never captures them.
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.adapters.memory_store import InMemoryCollectionStore
from src.api.deps import get_store

router = APIRouter()


@router.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}


@router.get("/db")
def dump_database(store: InMemoryCollectionStore = Depends(get_store)) -> dict[str, Any]:
    """Full database document."""
    return store.state()
