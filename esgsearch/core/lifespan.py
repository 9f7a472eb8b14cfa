"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (cache, recent
search log, telemetry, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from esgsearch.application.use_cases.recent_searches import RecentSearchLog
from esgsearch.core.config import get_settings
from esgsearch.infrastructure.cache import (
    CacheRecentSearchStore,
    CacheService,
    InMemoryRecentSearchStore,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Redis cache (if enabled), recent search log (Redis-backed
    when the cache connected, in-memory otherwise), client tracing when
    create_app enabled telemetry.
    Shutdown order: cache disconnect, telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    cache: CacheService | None = None
    if settings.redis_enabled:
        cache = CacheService()
        await cache.connect()
    app.state.cache = cache

    if cache is not None and cache.is_available():
        store = CacheRecentSearchStore(cache)
    else:
        logger.info("Recent searches kept in process memory")
        store = InMemoryRecentSearchStore()
    app.state.recent_search_log = RecentSearchLog(
        store, capacity=settings.recent_search_capacity
    )

    from esgsearch.infrastructure.persistence import database

    telemetry = getattr(app.state, "telemetry", None)
    if telemetry is not None:
        telemetry.instrument_clients(
            database.get_engine(),
            redis_enabled=cache is not None and cache.is_available(),
        )

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        app.state.cache = None

    if telemetry is not None:
        telemetry.shutdown()
        logger.info("Telemetry shutdown complete")

    await database.dispose_engine()
