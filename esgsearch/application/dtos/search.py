"""DTOs for federated search (no dependency on ORM)."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from esgsearch.core.constants import HIGH_RELEVANCE_THRESHOLD, SCOPE_SEP
from esgsearch.domain.enums import SearchKind, SearchTypeFilter

MetadataValue = str | int | float | None


@dataclass(frozen=True)
class RawCandidate:
    """One record returned by a collection adapter, before scoring.

    text_fields holds the scorable fields of the record by name; the scorer
    picks them in the kind's field order. title, description and metadata
    are the display projection built by the adapter.
    """

    kind: SearchKind
    id: str
    created_at: datetime
    title: str
    description: str
    text_fields: Mapping[str, str | None]
    metadata: Mapping[str, MetadataValue] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchResult:
    """Single ranked search hit (read-model, discarded after the response)."""

    id: str
    kind: SearchKind
    title: str
    description: str
    metadata: Mapping[str, MetadataValue]
    created_at: datetime
    relevance: int

    @property
    def is_high_relevance(self) -> bool:
        return self.relevance > HIGH_RELEVANCE_THRESHOLD


@dataclass(frozen=True)
class SearchRequest:
    """Search input: term, type filter and the caller's tenant/user scope."""

    term: str
    tenant_id: str
    type_filter: SearchTypeFilter = SearchTypeFilter.ALL
    user_id: str | None = None

    @property
    def normalized_term(self) -> str:
        return self.term.strip()

    @property
    def history_scope(self) -> str:
        return history_scope(self.tenant_id, self.user_id)


def history_scope(tenant_id: str, user_id: str | None = None) -> str:
    """Recent-search scope: the tenant, narrowed to the user when known."""
    if user_id:
        return f"{tenant_id}{SCOPE_SEP}{user_id}"
    return tenant_id
