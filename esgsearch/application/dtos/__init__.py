"""Application DTOs (no ORM dependency)."""

from esgsearch.application.dtos.search import RawCandidate, SearchRequest, SearchResult

__all__ = [
    "RawCandidate",
    "SearchRequest",
    "SearchResult",
]
