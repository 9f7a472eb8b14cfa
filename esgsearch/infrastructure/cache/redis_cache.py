"""Redis-based key-value cache.

Async Redis with JSON values and optional TTL. Backs the recent search
store; key format lives in keys.py (DRY). When Redis is unreachable
reads return None and writes return False, so search keeps working
without history.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import redis.asyncio as redis

from esgsearch.core.config import get_settings

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis cache service with optional TTL.

    Uses esgsearch.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. When given,
                the service is considered connected.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=(
                    self.settings.redis_password.get_secret_value()
                    if self.settings.redis_password
                    else None
                ),
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after a dropped connection. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring error while closing dropped Redis connection")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        action: str,
        key: str,
        command: Callable[[redis.Redis], Awaitable[Any]],
    ) -> Any | None:
        """Run one Redis command, retrying once after a dropped connection.

        Returns None when Redis is unavailable or the command fails.
        """
        if not self.is_available() or self.redis is None:
            return None
        try:
            return await command(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if not await self._reconnect() or self.redis is None:
                logger.warning("Cache %s unavailable for key %s (Redis disconnected)", action, key)
                return None
        except redis.RedisError:
            logger.exception("Cache %s error for key %s", action, key)
            return None
        try:
            return await command(self.redis)
        except redis.RedisError:
            logger.exception("Cache %s error for key %s after reconnect", action, key)
            return None

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing, unreadable or unavailable.

        Args:
            key: Cache key (use esgsearch.infrastructure.cache.keys builders).
        """
        value = await self._run("get", key, lambda client: client.get(key))
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning("Cache value for key %s is not valid JSON; ignoring it", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value; without ttl the key never expires. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Optional time-to-live in seconds.
        """
        serialized = json.dumps(value)
        if ttl is None:
            written = await self._run("set", key, lambda client: client.set(key, serialized))
        else:
            written = await self._run(
                "set", key, lambda client: client.setex(key, ttl, serialized)
            )
        if written is None:
            return False
        logger.debug("Cache SET: %s (TTL: %s)", key, ttl)
        return True
