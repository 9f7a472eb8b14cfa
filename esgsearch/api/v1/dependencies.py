"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the caller scope, the record store, the
collection adapters and the search use cases. Routes depend only on these,
never on infrastructure directly; tests override get_search_adapters and
get_recent_search_log.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from esgsearch.application.dtos.search import history_scope
from esgsearch.application.use_cases.recent_searches import RecentSearchLog
from esgsearch.application.use_cases.search import SearchService
from esgsearch.core.config import get_settings
from esgsearch.core.tenant_validation import (
    is_valid_tenant_id_format,
    is_valid_user_id_format,
)
from esgsearch.infrastructure.cache import InMemoryRecentSearchStore
from esgsearch.infrastructure.persistence.database import get_session_factory
from esgsearch.infrastructure.persistence.repositories import (
    CollectionSearchRepository,
    SqlRecordStore,
    build_search_repositories,
)


@dataclass(frozen=True)
class CallerScope:
    """Tenant (organization) and optional user the request acts for."""

    tenant_id: str
    user_id: str | None = None

    @property
    def history_scope(self) -> str:
        return history_scope(self.tenant_id, self.user_id)


def get_caller_scope(request: Request) -> CallerScope:
    """Resolve tenant ID (required) and user ID (optional) from trusted gateway headers."""
    settings = get_settings()
    tenant_id = request.headers.get(settings.tenant_header_name)
    if not tenant_id:
        raise HTTPException(
            status_code=400,
            detail=f"Missing required header: {settings.tenant_header_name}",
        )
    if not is_valid_tenant_id_format(tenant_id):
        raise HTTPException(
            status_code=400,
            detail="Invalid tenant ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
        )
    user_id = request.headers.get(settings.user_header_name) or None
    if user_id is not None and not is_valid_user_id_format(user_id):
        raise HTTPException(
            status_code=400,
            detail="Invalid user ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
        )
    return CallerScope(tenant_id=tenant_id, user_id=user_id)


def get_record_store() -> SqlRecordStore:
    """Record store over the shared session factory (resolved per adapter query)."""
    return SqlRecordStore(get_session_factory)


def get_search_adapters(
    record_store: Annotated[SqlRecordStore, Depends(get_record_store)],
) -> list[CollectionSearchRepository]:
    """One collection adapter per searchable kind."""
    return build_search_repositories(record_store)


def get_recent_search_log(request: Request) -> RecentSearchLog:
    """Recent search log from app state (created at startup; in-memory if startup did not run)."""
    log = getattr(request.app.state, "recent_search_log", None)
    if log is None:
        log = RecentSearchLog(
            InMemoryRecentSearchStore(),
            capacity=get_settings().recent_search_capacity,
        )
        request.app.state.recent_search_log = log
    return log


def get_search_service(
    adapters: Annotated[
        list[CollectionSearchRepository], Depends(get_search_adapters)
    ],
    recent_searches: Annotated[RecentSearchLog, Depends(get_recent_search_log)],
) -> SearchService:
    """Federated search use case (adapters + recent search log + settings)."""
    settings = get_settings()
    return SearchService(
        adapters,
        recent_searches,
        limit_per_kind=settings.search_result_limit_per_kind,
        adapter_timeout_seconds=settings.search_adapter_timeout_seconds,
    )
