"""Health check endpoint. No dependencies; used for liveness checks."""

from fastapi import APIRouter, Request

from esgsearch.infrastructure.cache import CacheRecentSearchStore
from esgsearch.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok status and where recent searches are currently kept."""
    log = getattr(request.app.state, "recent_search_log", None)
    backend = (
        "redis"
        if log is not None and isinstance(log.store, CacheRecentSearchStore)
        else "memory"
    )
    return HealthResponse(recent_search_backend=backend)
