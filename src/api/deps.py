import logging
import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, HTTPException, Request, status

from src.adapters.json_file_store import JsonFileCollectionStore
from src.adapters.memory_store import InMemoryCollectionStore
from src.app_shell.config import resolve_db_path
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("JCA_RULES_PATH", self.base_dir / "rules.yaml"))
        # Overrides rules.store.path when set
        self.db_path: str | None = os.environ.get("JCA_DB_PATH")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    if not settings.rules_path.exists():
        logger.info("No rules file at %s, using defaults", settings.rules_path)
        return Rules()
    return load_rules(settings.rules_path)


# --- Store ---
def build_store(rules: Rules, settings: Settings) -> InMemoryCollectionStore:
    """Create the store described by the rules (JSON file unless persist is off)."""
    path = resolve_db_path(rules, settings.base_dir, settings.db_path)
    return JsonFileCollectionStore(
        path,
        foreign_key_suffix=rules.store.foreign_key_suffix,
        persist=rules.store.persist,
    )


def get_store(request: Request) -> InMemoryCollectionStore:
    """
    Store shared by every request of this app.

    Created by the lifespan handler; built lazily when the app runs without it.
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        settings = get_settings()
        store = build_store(get_rules(settings), settings)
        request.app.state.store = store
    return store


# --- Guards ---
def require_writable(rules: Rules = Depends(get_rules)) -> None:
    """Reject mutating requests when the server runs read-only."""
    if rules.server.read_only:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Server is running in read-only mode",
        )
