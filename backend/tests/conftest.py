"""Pytest configuration and fixtures."""

import os

# Keep the application's global engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timezone
from typing import AsyncGenerator
from uuid import uuid4

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app.api.deps import get_analyzer
from backend.app.db.base import Base, get_db
from backend.app.main import app
from backend.app.services.query_store import QueryStore
from backend.app.services.records import QueryAnalysis, QueryRecord

OWNER_A = "owner-a"


class FixedAnalyzer:
    """Analyzer returning the same analysis for every query."""

    def __init__(self, analysis: QueryAnalysis | None = None):
        self.analysis = analysis or QueryAnalysis(
            safety="unsafe",
            risk_level="high",
            confidence=0.9,
            category="Prompt Injection",
            severity=8,
            emotion="angry",
            emotion_emoji="😠",
            reason="Attempt to override instructions",
        )
        self.calls: list[str] = []

    async def analyze(self, text: str) -> QueryAnalysis:
        self.calls.append(text)
        return self.analysis


def make_analysis(
    flagged: bool = False,
    risk_level: str = "low",
    category: str | None = "Technical",
    emotion: str | None = "neutral",
    confidence: float = 0.8,
) -> QueryAnalysis:
    """Analysis whose safety verdict matches the flagged state."""
    return QueryAnalysis(
        safety="unsafe" if flagged else "safe",
        risk_level=risk_level,
        confidence=confidence,
        category=category,
        emotion=emotion,
    )


def _create_test_engine():
    return create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )


@pytest.fixture
def make_record():
    """Factory for immutable query records."""

    def _make(
        created_at: datetime,
        flagged: bool = False,
        risk_level: str = "low",
        category: str | None = "Technical",
        emotion: str | None = "neutral",
        confidence: float = 0.8,
        response_time: int = 100,
        owner_id: str = OWNER_A,
    ) -> QueryRecord:
        return QueryRecord.from_analysis(
            id=str(uuid4()),
            owner_id=owner_id,
            text="sample query",
            created_at=created_at,
            analysis=make_analysis(flagged, risk_level, category, emotion, confidence),
            response_time=response_time,
        )

    return _make


@pytest.fixture(scope="function")
async def test_session_factory():
    """
    Create a fresh in-memory database and return its session factory.

    All sessions from the factory share one connection, so data committed by
    one session is visible to the others.
    """
    engine = _create_test_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_db(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def query_store(test_db) -> QueryStore:
    """Record store bound to the test database."""
    return QueryStore(test_db)


@pytest.fixture
def seed_query(query_store):
    """Insert an analyzed query with explicit attributes."""

    async def _seed(
        owner_id: str = OWNER_A,
        created_at: datetime | None = None,
        flagged: bool = False,
        risk_level: str = "low",
        category: str | None = "Technical",
        emotion: str | None = "neutral",
        confidence: float = 0.8,
        response_time: int = 100,
        text: str = "sample query",
    ):
        return await query_store.add(
            owner_id=owner_id,
            text=text,
            analysis=make_analysis(flagged, risk_level, category, emotion, confidence),
            response_time=response_time,
            created_at=created_at or datetime.now(timezone.utc),
        )

    return _seed


@pytest.fixture
def fixed_analyzer() -> FixedAnalyzer:
    """Deterministic analyzer used by the API tests."""
    return FixedAnalyzer()


@pytest.fixture(scope="function")
async def test_client_with_db(
    test_session_factory,
    fixed_analyzer,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client with in-memory database.

    Overrides the app's database dependency with the test database and the
    analyzer with a deterministic one.
    """
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_analyzer] = lambda: fixed_analyzer

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
