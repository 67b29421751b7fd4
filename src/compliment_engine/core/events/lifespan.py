"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: logging, the key-value store, engine services
- Application shutdown: closing the Redis connection pool
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from compliment_engine.core.config import Settings, StoreBackend, get_settings
from compliment_engine.observability.logging import get_logger, setup_logging
from compliment_engine.services.compliments import ComplimentGenerator
from compliment_engine.services.favorites import FavoritesService
from compliment_engine.storage import (
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    ResilientStore,
    close_redis_pool,
    init_redis_pool,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from compliment_engine.storage import KeyValueStore

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    store = ResilientStore(await _init_store(settings))
    app.state.store = store
    app.state.compliment_generator = ComplimentGenerator.from_settings(store, settings)
    app.state.favorites_service = FavoritesService.from_settings(store, settings)

    logger.info(
        "Application startup complete",
        store=type(store.store).__name__,
    )


async def _init_store(settings: Settings) -> KeyValueStore:
    """Pick the configured backend, falling back to memory without Redis."""
    if settings.compliments.store.backend == StoreBackend.MEMORY:
        logger.info("Using in-memory compliment store")
        return InMemoryKeyValueStore()

    try:
        client = await init_redis_pool(settings)
    except Exception:
        logger.exception(
            "Failed to initialize Redis - continuing with in-memory store"
        )
        return InMemoryKeyValueStore()
    return RedisKeyValueStore(client)


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services.

    Args:
        app: The FastAPI application instance.
    """
    logger.info("Shutting down application")

    await close_redis_pool()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Uses the settings the app was created with, if any.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
