"""Search API: federated search across reports, data entries, documents, comments."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from esgsearch.api.v1.dependencies import (
    CallerScope,
    get_caller_scope,
    get_recent_search_log,
    get_search_service,
)
from esgsearch.application.dtos.search import SearchRequest
from esgsearch.application.use_cases.recent_searches import RecentSearchLog
from esgsearch.application.use_cases.search import SearchService
from esgsearch.core.constants import SEARCH_TERM_MAX_LENGTH
from esgsearch.core.limiter import limit_search
from esgsearch.domain.enums import SearchTypeFilter
from esgsearch.schemas.search import (
    RecentSearchesResponse,
    SearchResponse,
    SearchResultItemResponse,
)

router = APIRouter()


@router.get(
    "",
    response_model=SearchResponse,
    responses={503: {"description": "Every searched collection failed"}},
)
@limit_search
async def search(
    request: Request,
    scope: Annotated[CallerScope, Depends(get_caller_scope)],
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query("", max_length=SEARCH_TERM_MAX_LENGTH, description="Search term"),
    type: SearchTypeFilter = Query(
        SearchTypeFilter.ALL, description="all | report | data_entry | document | comment"
    ),
) -> SearchResponse:
    """Search within the caller's organization; empty q returns no results."""
    results = await search_svc.search(
        SearchRequest(
            term=q,
            tenant_id=scope.tenant_id,
            type_filter=type,
            user_id=scope.user_id,
        )
    )
    return SearchResponse(
        query=q.strip(),
        type=type,
        total=len(results),
        results=[SearchResultItemResponse.from_result(r) for r in results],
    )


@router.get("/recent", response_model=RecentSearchesResponse)
async def recent_searches(
    scope: Annotated[CallerScope, Depends(get_caller_scope)],
    recent_log: Annotated[RecentSearchLog, Depends(get_recent_search_log)],
) -> RecentSearchesResponse:
    """Recent search terms for the caller, most recent first."""
    return RecentSearchesResponse(searches=await recent_log.list(scope.history_scope))
