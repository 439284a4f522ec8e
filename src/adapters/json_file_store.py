"""
JSON File Collection Store (CollectionStorePort implementation).

Persists the database document to a single JSON file, rewriting it after
every successful mutation.

Key behaviors:
- Missing file is created with an empty document
- Writes go to a temp file next to the target, then os.replace (atomic swap)
- The document root must be a JSON object
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from src.adapters.memory_store import InMemoryCollectionStore
from src.core.ports.store import StoreError
from src.domain.entities import DatabaseState

logger = logging.getLogger(__name__)


def load_document(path: Path) -> DatabaseState:
    """
    Read a database document from disk.

    Raises:
        StoreError: If the file is not valid JSON or its root is not an object
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise StoreError(f"Database root in {path} must be an object")
    return data


class JsonFileCollectionStore(InMemoryCollectionStore):
    """
    File-backed store.

    The whole document lives in memory; the file is the durable copy.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        foreign_key_suffix: str = "Id",
        persist: bool = True,
        indent: int = 2,
    ) -> None:
        self.path = Path(path)
        self.persist = persist
        self.indent = indent

        if self.path.exists():
            data = load_document(self.path)
        else:
            data = {}
            if persist:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._write(data)
                logger.info("Created empty database at %s", self.path)

        super().__init__(data, foreign_key_suffix=foreign_key_suffix)
        logger.info(
            "Loaded %s with collections: %s",
            self.path,
            ", ".join(self.collection_names()) or "(none)",
        )

    def _write(self, data: DatabaseState) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=self.indent, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _on_change(self) -> None:
        if self.persist:
            self._write(self._data)
