"""Search API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from esgsearch.application.dtos.search import SearchResult
from esgsearch.domain.enums import SearchKind, SearchTypeFilter


class SearchResultItemResponse(BaseModel):
    """Single ranked hit; kind + id identify the record to open."""

    id: str
    kind: SearchKind = Field(..., description="report | data_entry | document | comment")
    title: str
    description: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    relevance: int = Field(..., ge=0, description="Only comparable within one search")
    high_relevance: bool = False

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultItemResponse":
        return cls(
            id=result.id,
            kind=result.kind,
            title=result.title,
            description=result.description,
            metadata=dict(result.metadata),
            created_at=result.created_at,
            relevance=result.relevance,
            high_relevance=result.is_high_relevance,
        )


class SearchResponse(BaseModel):
    """Federated search response (ranked best first)."""

    query: str
    type: SearchTypeFilter
    total: int
    results: list[SearchResultItemResponse]


class RecentSearchesResponse(BaseModel):
    """Recent search terms for the caller, most recent first."""

    searches: list[str]
