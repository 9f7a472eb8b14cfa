"""Pytest configuration and fixtures for esg-search.

Uses esgsearch.main:app for HTTP tests (defaults: no DATABASE_URL, Redis and
telemetry only start in lifespan, which ASGITransport does not run). API
tests override the adapter dependency; record store tests get their own
file-backed SQLite database via aiosqlite.
"""

import asyncio
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from esgsearch.application.dtos.search import RawCandidate
from esgsearch.application.use_cases.recent_searches import RecentSearchLog
from esgsearch.core.limiter import limiter
from esgsearch.domain.enums import SearchKind
from esgsearch.infrastructure.cache import InMemoryRecentSearchStore
from esgsearch.infrastructure.persistence.database import Base
from esgsearch.infrastructure.persistence.repositories import SqlRecordStore
from esgsearch.main import app

TENANT = "org-1"
OTHER_TENANT = "org-2"


def at(day: int, hour: int = 12) -> datetime:
    """Fixed UTC timestamp in January 2025."""
    return datetime(2025, 1, day, hour, 0, 0, tzinfo=timezone.utc)


def candidate(
    kind: SearchKind,
    id: str,
    created_at: datetime | None = None,
    **text_fields: str | None,
) -> RawCandidate:
    """RawCandidate whose display title/description are its first two text fields."""
    values = list(text_fields.values())
    return RawCandidate(
        kind=kind,
        id=id,
        created_at=created_at or at(1),
        title=(values[0] if values else None) or "",
        description=(values[1] if len(values) > 1 else None) or "",
        text_fields=text_fields,
    )


class FakeAdapter:
    """Collection adapter returning fixed candidates, optionally late or failing."""

    def __init__(
        self,
        kind: SearchKind,
        candidates: list[RawCandidate] | None = None,
        *,
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.kind = kind
        self.candidates = candidates or []
        self.delay = delay
        self.error = error
        self.calls: list[tuple[str, str, int]] = []

    async def find(self, term: str, tenant_id: str, limit: int) -> list[RawCandidate]:
        self.calls.append((term, tenant_id, limit))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.candidates)


@pytest.fixture
def recent_log() -> RecentSearchLog:
    """Fresh in-memory recent search log (capacity 5)."""
    return RecentSearchLog(InMemoryRecentSearchStore())


@pytest.fixture
async def client(recent_log: RecentSearchLog) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI).

    Puts a fresh recent search log on app.state and resets rate limit
    counters; dependency overrides are cleared after the test.
    """
    app.state.recent_search_log = recent_log
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def session_factory(tmp_path) -> async_sessionmaker[AsyncSession]:
    """Session factory over a fresh SQLite file holding the record store schema.

    A file rather than :memory: so every session the record store opens sees
    the same rows.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'search.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def record_store(session_factory: async_sessionmaker[AsyncSession]) -> SqlRecordStore:
    """SqlRecordStore over the test database."""
    return SqlRecordStore(lambda: session_factory)


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]):
    """Insert ORM rows in one committed transaction: await seed(row, ...)."""

    async def _seed(*rows) -> None:
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()

    return _seed
