import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.deps import build_store, get_rules, get_settings
from src.app_shell.config import resolve_db_path, validate_store_rules
from src.core.ports.store import StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and the database on startup (fail-fast)
    try:
        rules = get_rules(settings)
        if getattr(app.state, "store", None) is None:
            validate_store_rules(
                rules, resolve_db_path(rules, settings.base_dir, settings.db_path)
            )
            app.state.store = build_store(rules, settings)
        logger.info(
            "Serving %d collections", len(app.state.store.collection_names())
        )
    except (OSError, ValueError, StoreError) as e:
        logger.critical("Startup failed: %s", e)
        sys.exit(1)

    yield
    # Shutdown cleanup if needed


def create_app() -> FastAPI:
    settings = get_settings()
    rules = get_rules(settings)

    app = FastAPI(
        title=rules.server.title,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # --- Routers ---
    from src.api.routes import collections, meta

    # meta first: /health and /db must win over /{name}
    app.include_router(meta.router, tags=["Meta"])
    app.include_router(collections.router, tags=["Collections"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=rules.server.cors_origins,
        allow_credentials="*" not in rules.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count", "Link"],
    )
    return app


app = create_app()
