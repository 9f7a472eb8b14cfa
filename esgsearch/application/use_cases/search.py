"""Federated search use case.

Fans a term out to the collection adapters selected by the type filter,
scores and merges their candidates into one ranked list, and records the
term in the caller's recent search log.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from esgsearch.application.dtos.search import RawCandidate, SearchRequest, SearchResult
from esgsearch.application.services.relevance_scorer import score_candidate
from esgsearch.core.constants import (
    SEARCH_ADAPTER_TIMEOUT_SECONDS,
    SEARCH_RESULT_LIMIT_PER_KIND,
)
from esgsearch.domain.enums import SearchKind, SearchTypeFilter
from esgsearch.domain.exceptions import (
    SearchAdapterException,
    SearchUnavailableException,
    ValidationException,
)
from esgsearch.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from esgsearch.application.interfaces.repositories import (
        ICollectionSearchRepository,
    )
    from esgsearch.application.use_cases.recent_searches import RecentSearchLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _AdapterOutcome:
    """Result of one adapter call: candidates, or the failure that replaced them."""

    kind: SearchKind
    candidates: tuple[RawCandidate, ...] = ()
    error: SearchAdapterException | None = None


def _sort_key(result: SearchResult) -> tuple[int, float, int, str]:
    return (
        -result.relevance,
        -result.created_at.timestamp(),
        result.kind.sort_order,
        result.id,
    )


def rank_results(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Sort by relevance desc, then created_at desc, then fixed kind order, then id."""
    return sorted(results, key=_sort_key)


def to_search_result(term: str, candidate: RawCandidate) -> SearchResult:
    """Project a scored candidate into a SearchResult."""
    return SearchResult(
        id=candidate.id,
        kind=candidate.kind,
        title=candidate.title,
        description=candidate.description,
        metadata=dict(candidate.metadata),
        created_at=candidate.created_at,
        relevance=score_candidate(term, candidate),
    )


def parse_type_filter(value: str | SearchTypeFilter) -> SearchTypeFilter:
    """Return SearchTypeFilter for value; raise ValidationException if unknown."""
    if isinstance(value, SearchTypeFilter):
        return value
    try:
        return SearchTypeFilter(value)
    except ValueError:
        raise ValidationException(
            f"Invalid type filter {value!r}; expected one of: "
            + ", ".join(SearchTypeFilter.values()),
            field="type",
        ) from None


class SearchService:
    """Federated search across reports, data entries, documents and comments (tenant-scoped)."""

    def __init__(
        self,
        adapters: Iterable["ICollectionSearchRepository"],
        recent_searches: "RecentSearchLog | None" = None,
        *,
        limit_per_kind: int = SEARCH_RESULT_LIMIT_PER_KIND,
        adapter_timeout_seconds: float = SEARCH_ADAPTER_TIMEOUT_SECONDS,
    ) -> None:
        self.adapters: dict[SearchKind, ICollectionSearchRepository] = {
            adapter.kind: adapter for adapter in adapters
        }
        self.recent_searches = recent_searches
        self.limit_per_kind = limit_per_kind
        self.adapter_timeout_seconds = adapter_timeout_seconds

    def _select_adapters(
        self, type_filter: SearchTypeFilter
    ) -> list["ICollectionSearchRepository"]:
        selected = []
        for kind in type_filter.kinds():
            adapter = self.adapters.get(kind)
            if adapter is not None:
                selected.append(adapter)
            elif type_filter is not SearchTypeFilter.ALL:
                raise ValidationException(
                    f"No search adapter registered for {kind.value!r}",
                    field="type",
                )
        return selected

    async def _run_adapter(
        self,
        adapter: "ICollectionSearchRepository",
        term: str,
        tenant_id: str,
    ) -> _AdapterOutcome:
        """Call one adapter with its own timeout; convert any failure into an outcome."""
        try:
            candidates = await asyncio.wait_for(
                adapter.find(term, tenant_id, self.limit_per_kind),
                timeout=self.adapter_timeout_seconds,
            )
        except asyncio.TimeoutError:
            error = SearchAdapterException(
                adapter.kind.value,
                f"timed out after {self.adapter_timeout_seconds} seconds",
            )
        except Exception as e:
            error = SearchAdapterException(adapter.kind.value, str(e) or type(e).__name__)
        else:
            return _AdapterOutcome(kind=adapter.kind, candidates=tuple(candidates))
        logger.warning(
            "Search adapter failed: kind=%s tenant=%s reason=%s",
            error.kind,
            tenant_id,
            error.reason,
        )
        return _AdapterOutcome(kind=adapter.kind, error=error)

    @traced("search.federated_search")
    async def search(self, request: SearchRequest) -> list[SearchResult]:
        """Run a federated search and return results ranked best first.

        An empty or whitespace-only term returns [] without querying any
        adapter or touching the recent search log. Individual adapter
        failures contribute zero results.

        Raises:
            SearchUnavailableException: Every selected adapter failed.
            ValidationException: The type filter names a kind with no adapter.
        """
        term = request.normalized_term
        if not term:
            logger.debug("Empty search term; skipping search")
            return []

        adapters = self._select_adapters(request.type_filter)
        add_span_attributes(
            **{
                "search.tenant_id": request.tenant_id,
                "search.type_filter": request.type_filter.value,
                "search.adapter_count": len(adapters),
            }
        )
        if not adapters:
            return []

        # gather keeps argument order, so completion order never reaches the merge.
        outcomes = await asyncio.gather(
            *(self._run_adapter(a, term, request.tenant_id) for a in adapters)
        )
        failures = [o.error for o in outcomes if o.error is not None]
        if len(failures) == len(outcomes):
            logger.error(
                "All search adapters failed for tenant %s (%d selected)",
                request.tenant_id,
                len(outcomes),
            )
            raise SearchUnavailableException(failures)

        results = rank_results(
            to_search_result(term, candidate)
            for outcome in outcomes
            for candidate in outcome.candidates
        )
        add_span_attributes(
            **{"search.result_count": len(results), "search.failed_adapters": len(failures)}
        )
        logger.info(
            "Search completed: tenant=%s type=%s results=%d failed_adapters=%d",
            request.tenant_id,
            request.type_filter.value,
            len(results),
            len(failures),
        )

        await self._remember(request.history_scope, term)
        return results

    async def _remember(self, scope: str, term: str) -> None:
        if self.recent_searches is None:
            return
        try:
            await self.recent_searches.record(scope, term)
        except Exception:
            logger.exception("Failed to record recent search for scope %s", scope)

    async def search_term(
        self,
        term: str,
        type_filter: str | SearchTypeFilter,
        tenant_id: str,
        user_id: str | None = None,
    ) -> list[SearchResult]:
        """Caller-facing search(term, type_filter, tenant) form."""
        return await self.search(
            SearchRequest(
                term=term,
                tenant_id=tenant_id,
                type_filter=parse_type_filter(type_filter),
                user_id=user_id,
            )
        )
