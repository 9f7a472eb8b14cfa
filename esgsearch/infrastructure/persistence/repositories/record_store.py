"""Record store text filter: case-insensitive substring match, tenant-scoped.

Implements IRecordStore over the ESG reporting tables. Each call opens its
own session so adapters can query concurrently. The session factory is
looked up per query, not at construction, so an unconfigured database
only surfaces when a search actually reaches the store.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from esgsearch.domain.enums import RecordTable
from esgsearch.infrastructure.persistence.models import (
    Comment,
    DataEntry,
    Document,
    EsgReport,
)

_MODELS: dict[RecordTable, Any] = {
    RecordTable.ESG_REPORTS: EsgReport,
    RecordTable.DATA_ENTRIES: DataEntry,
    RecordTable.DOCUMENTS: Document,
    RecordTable.COMMENTS: Comment,
}


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so value matches literally (escape char: backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _tenant_scoped(table: RecordTable, tenant_id: str) -> Select[Any]:
    """Base SELECT for table restricted to tenant, with display joins eager-loaded."""
    if table is RecordTable.ESG_REPORTS:
        return select(EsgReport).where(EsgReport.organization_id == tenant_id)
    if table is RecordTable.DATA_ENTRIES:
        return (
            select(DataEntry)
            .where(DataEntry.organization_id == tenant_id)
            .options(selectinload(DataEntry.report))
        )
    if table is RecordTable.DOCUMENTS:
        return select(Document).where(Document.organization_id == tenant_id)
    # Comments are scoped through their report.
    return (
        select(Comment)
        .join(Comment.report)
        .where(EsgReport.organization_id == tenant_id)
        .options(selectinload(Comment.report), selectinload(Comment.author))
    )


class SqlRecordStore:
    """query_text primitive over SQLAlchemy (ILIKE across fields, OR-combined)."""

    def __init__(
        self, get_session_factory: Callable[[], async_sessionmaker[AsyncSession]]
    ) -> None:
        self.get_session_factory = get_session_factory

    async def query_text(
        self,
        table: RecordTable,
        tenant_id: str,
        fields: Sequence[str],
        substring: str,
        limit: int,
    ) -> list[Any]:
        """Return up to limit ORM rows of table in tenant where any field contains substring.

        Rows are ordered newest first (id breaks ties) and their display
        relationships are loaded, so they stay usable after the session closes.

        Raises:
            ValueError: fields is empty, names a column the table does not have,
                or limit is below 1.
            SqlNotConfiguredException: The session factory has no database to use.
        """
        if not fields:
            raise ValueError("query_text requires at least one field")
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        model = _MODELS[table]
        columns = []
        for name in fields:
            column = getattr(model, name, None)
            if column is None:
                raise ValueError(f"{table.value} has no column {name!r}")
            columns.append(column)

        pattern = f"%{escape_like(substring)}%"
        stmt = (
            _tenant_scoped(table, tenant_id)
            .where(or_(*(c.ilike(pattern, escape="\\") for c in columns)))
            .order_by(model.created_at.desc(), model.id)
            .limit(limit)
        )
        session_factory = self.get_session_factory()
        async with session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())
