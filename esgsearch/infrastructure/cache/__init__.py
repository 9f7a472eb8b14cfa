"""Cache: Redis service, key builders and recent search stores.

CacheService uses esgsearch.core.config; key format is in keys.py (DRY).
"""

from esgsearch.infrastructure.cache.cache_protocol import CacheProtocol
from esgsearch.infrastructure.cache.keys import recent_search_key
from esgsearch.infrastructure.cache.recent_search_store import (
    CacheRecentSearchStore,
    InMemoryRecentSearchStore,
)
from esgsearch.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheRecentSearchStore",
    "CacheService",
    "InMemoryRecentSearchStore",
    "recent_search_key",
]
