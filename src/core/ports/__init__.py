# json-collections-api: Ports (Protocol Interfaces)
# Abstract interfaces for adapters; no implementations here

from src.core.ports.store import (
    CollectionNotFoundError,
    CollectionStorePort,
    DuplicateIdError,
    StoreError,
)

__all__ = [
    "CollectionNotFoundError",
    "CollectionStorePort",
    "DuplicateIdError",
    "StoreError",
]
