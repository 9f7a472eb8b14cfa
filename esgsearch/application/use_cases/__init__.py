"""Application use cases: one entry point per workflow."""

from esgsearch.application.use_cases.recent_searches import RecentSearchLog
from esgsearch.application.use_cases.search import SearchService

__all__ = [
    "RecentSearchLog",
    "SearchService",
]
