"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain enums only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

from esgsearch.domain.enums import RecordTable, SearchKind

if TYPE_CHECKING:
    from esgsearch.application.dtos.search import RawCandidate


class IRecordStore(Protocol):
    """Protocol for the tenant-scoped text filter primitive of the record store."""

    async def query_text(
        self,
        table: RecordTable,
        tenant_id: str,
        fields: Sequence[str],
        substring: str,
        limit: int,
    ) -> list[Any]:
        """Return up to limit rows of table in tenant whose fields contain substring (case-insensitive, any field)."""


class ICollectionSearchRepository(Protocol):
    """Protocol for one collection adapter (report, data entry, document or comment).

    find() raises on any store failure; the search orchestrator decides how
    a failing collection affects the overall search.
    """

    kind: SearchKind

    async def find(
        self, term: str, tenant_id: str, limit: int
    ) -> list["RawCandidate"]:
        """Return up to limit candidates in tenant matching term."""


class IRecentSearchStore(Protocol):
    """Protocol for scoped persistence of recent search terms (key -> ordered list)."""

    async def get(self, scope: str) -> list[str]:
        """Return stored terms for scope, most recent first; [] when none."""

    async def set(self, scope: str, terms: list[str]) -> None:
        """Replace stored terms for scope."""
