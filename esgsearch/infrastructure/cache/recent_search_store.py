"""Recent search stores (IRecentSearchStore): in-process dict or Redis."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from esgsearch.infrastructure.cache.keys import recent_search_key

if TYPE_CHECKING:
    from esgsearch.infrastructure.cache.cache_protocol import CacheProtocol

logger = logging.getLogger(__name__)


class InMemoryRecentSearchStore:
    """Per-process store; used when Redis is disabled or unreachable, and in tests."""

    def __init__(self) -> None:
        self._terms: dict[str, list[str]] = {}

    async def get(self, scope: str) -> list[str]:
        return list(self._terms.get(scope, []))

    async def set(self, scope: str, terms: list[str]) -> None:
        self._terms[scope] = list(terms)


class CacheRecentSearchStore:
    """Recent searches in the shared cache, one JSON list per scope, no expiry."""

    def __init__(self, cache: "CacheProtocol") -> None:
        self.cache = cache

    async def get(self, scope: str) -> list[str]:
        value = await self.cache.get(recent_search_key(scope))
        if not isinstance(value, list):
            return []
        return [t for t in value if isinstance(t, str)]

    async def set(self, scope: str, terms: list[str]) -> None:
        stored = await self.cache.set(recent_search_key(scope), list(terms), ttl=None)
        if not stored:
            logger.warning("Recent searches not persisted for scope %s (cache unavailable)", scope)
