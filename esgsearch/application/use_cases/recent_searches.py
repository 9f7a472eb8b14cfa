"""Recent search log: bounded, deduplicated, most-recent-first terms per scope."""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import TYPE_CHECKING

from esgsearch.core.constants import RECENT_SEARCH_CAPACITY

if TYPE_CHECKING:
    from esgsearch.application.interfaces.repositories import IRecentSearchStore

logger = logging.getLogger(__name__)


class RecentSearchLog:
    """Most-recently-used list of search terms, one per user scope.

    Writes for one scope are serialized with an asyncio.Lock so concurrent
    searches by the same user cannot drop each other's term. Locks are held
    weakly and disappear once no write for their scope is in flight.
    """

    def __init__(
        self,
        store: "IRecentSearchStore",
        capacity: int = RECENT_SEARCH_CAPACITY,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.store = store
        self.capacity = capacity
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, scope: str) -> asyncio.Lock:
        lock = self._locks.get(scope)
        if lock is None:
            lock = self._locks[scope] = asyncio.Lock()
        return lock

    async def record(self, scope: str, term: str) -> list[str]:
        """Move term to the front of scope's list (insert if new) and evict beyond capacity.

        Returns:
            The updated list, most recent first.
        """
        async with self._lock_for(scope):
            current = await self.store.get(scope)
            updated = [term, *(t for t in current if t != term)][: self.capacity]
            await self.store.set(scope, updated)
        logger.debug("Recorded recent search for scope %s (%d stored)", scope, len(updated))
        return updated

    async def list(self, scope: str) -> list[str]:
        """Return recent terms for scope, most recent first; [] if none recorded."""
        terms = await self.store.get(scope)
        return terms[: self.capacity]
