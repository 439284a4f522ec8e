import logging
import os
from pathlib import Path

from src.rules.models import Rules

logger = logging.getLogger(__name__)


def resolve_db_path(rules: Rules, base_dir: Path, override: str | None = None) -> Path:
    """Database file path; relative paths are taken from base_dir."""
    path = Path(override or rules.store.path)
    if not path.is_absolute():
        path = base_dir / path
    return path


def validate_store_rules(rules: Rules, db_path: Path) -> None:
    """
    Validate operational requirements before startup.

    Raises:
        ValueError: If the database location cannot be used with these rules
    """
    # 1. Read-only servers never write, so the file must already exist
    if rules.server.read_only and not db_path.exists():
        raise ValueError(f"Read-only mode needs an existing database at {db_path}")

    # 2. Persisting servers must be able to write next to the file
    if rules.store.persist and not rules.server.read_only:
        parent = db_path.parent
        if parent.exists() and not os.access(parent, os.W_OK):
            raise ValueError(f"Database directory {parent} is not writable")

    logger.info("Configuration validated (db=%s, persist=%s)", db_path, rules.store.persist)
