"""Repositories: record store text filter and per-kind search adapters."""

from esgsearch.infrastructure.persistence.repositories.record_store import (
    SqlRecordStore,
    escape_like,
)
from esgsearch.infrastructure.persistence.repositories.search_repo import (
    CollectionSearchRepository,
    CommentSearchRepository,
    DataEntrySearchRepository,
    DocumentSearchRepository,
    ReportSearchRepository,
    build_search_repositories,
)

__all__ = [
    "CollectionSearchRepository",
    "CommentSearchRepository",
    "DataEntrySearchRepository",
    "DocumentSearchRepository",
    "ReportSearchRepository",
    "SqlRecordStore",
    "build_search_repositories",
    "escape_like",
]
