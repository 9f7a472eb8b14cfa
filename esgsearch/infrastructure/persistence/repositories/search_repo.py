"""Collection search adapters: one per searchable kind.

Each adapter asks the record store for tenant rows whose designated text
fields contain the term, and projects them into RawCandidate (scorable
fields plus display title, description and metadata). Store errors
propagate; the search use case decides how a failed kind is handled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from esgsearch.application.dtos.search import RawCandidate
from esgsearch.domain.enums import RecordTable, SearchKind
from esgsearch.shared.telemetry.tracing import traced
from esgsearch.shared.utils.datetime import ensure_utc

if TYPE_CHECKING:
    from esgsearch.application.interfaces.repositories import IRecordStore
    from esgsearch.infrastructure.persistence.models import (
        Comment,
        DataEntry,
        Document,
        EsgReport,
        User,
    )


class CollectionSearchRepository:
    """Shared find() for the adapters; subclasses set table, fields and the projection."""

    kind: ClassVar[SearchKind]
    table: ClassVar[RecordTable]
    search_fields: ClassVar[tuple[str, ...]]

    def __init__(self, record_store: "IRecordStore") -> None:
        self.record_store = record_store

    @traced("search.adapter.find")
    async def find(self, term: str, tenant_id: str, limit: int) -> list[RawCandidate]:
        """Return up to limit candidates in tenant whose search fields contain term."""
        rows = await self.record_store.query_text(
            self.table, tenant_id, self.search_fields, term, limit
        )
        return [self._to_candidate(row) for row in rows]

    def _to_candidate(self, row: Any) -> RawCandidate:
        raise NotImplementedError


class ReportSearchRepository(CollectionSearchRepository):
    """Reports: title, description."""

    kind = SearchKind.REPORT
    table = RecordTable.ESG_REPORTS
    search_fields = ("title", "description")

    def _to_candidate(self, row: "EsgReport") -> RawCandidate:
        return RawCandidate(
            kind=self.kind,
            id=row.id,
            created_at=ensure_utc(row.created_at),
            title=row.title,
            description=row.description or "",
            text_fields={"title": row.title, "description": row.description},
            metadata={"framework": row.framework, "status": row.status},
        )


class DataEntrySearchRepository(CollectionSearchRepository):
    """Data entries: metric_name, notes; joined with the owning report's title."""

    kind = SearchKind.DATA_ENTRY
    table = RecordTable.DATA_ENTRIES
    search_fields = ("metric_name", "notes")

    def _to_candidate(self, row: "DataEntry") -> RawCandidate:
        report = row.report
        return RawCandidate(
            kind=self.kind,
            id=row.id,
            created_at=ensure_utc(row.created_at),
            title=row.metric_name,
            description=row.notes or "",
            text_fields={"metric_name": row.metric_name, "notes": row.notes},
            metadata={
                "report": report.title if report is not None else None,
                "value": row.value,
                "unit": row.unit,
                "report_id": row.report_id,
            },
        )


class DocumentSearchRepository(CollectionSearchRepository):
    """Documents: name, description."""

    kind = SearchKind.DOCUMENT
    table = RecordTable.DOCUMENTS
    search_fields = ("name", "description")

    def _to_candidate(self, row: "Document") -> RawCandidate:
        return RawCandidate(
            kind=self.kind,
            id=row.id,
            created_at=ensure_utc(row.created_at),
            title=row.name,
            description=row.description or "",
            text_fields={"name": row.name, "description": row.description},
            metadata={"type": row.type, "size": row.size, "report_id": row.report_id},
        )


def _author_name(user: "User | None") -> str:
    if user is None:
        return ""
    return f"{user.first_name or ''} {user.last_name or ''}".strip()


class CommentSearchRepository(CollectionSearchRepository):
    """Comments: content only; title is synthesized from the report title."""

    kind = SearchKind.COMMENT
    table = RecordTable.COMMENTS
    search_fields = ("content",)

    def _to_candidate(self, row: "Comment") -> RawCandidate:
        report_title = row.report.title if row.report is not None else None
        return RawCandidate(
            kind=self.kind,
            id=row.id,
            created_at=ensure_utc(row.created_at),
            title=f"Comment on {report_title or 'Report'}",
            description=row.content,
            text_fields={"content": row.content},
            metadata={
                "author": _author_name(row.author),
                "report": report_title,
                "report_id": row.report_id,
            },
        )


def build_search_repositories(
    record_store: "IRecordStore",
) -> list[CollectionSearchRepository]:
    """One adapter per kind, in fixed kind order."""
    return [
        ReportSearchRepository(record_store),
        DataEntrySearchRepository(record_store),
        DocumentSearchRepository(record_store),
        CommentSearchRepository(record_store),
    ]
