"""Shared API dependencies."""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.config import settings
from backend.app.db.base import get_db
from backend.app.services.analyzer import MockSafetyAnalyzer, SafetyAnalyzer
from backend.app.services.query_store import QueryStore
from backend.app.services.report_builder import ReportBuilder

# Global analyzer instance
_analyzer: SafetyAnalyzer | None = None


async def get_owner_id(
    x_user_id: str = Header(..., min_length=1, max_length=64, description="Requesting owner ID"),
) -> str:
    """Resolve the owner every read and write is scoped to."""
    return x_user_id


def get_analyzer() -> SafetyAnalyzer:
    """Get or create the safety analyzer instance."""
    global _analyzer
    if _analyzer is None:
        _analyzer = MockSafetyAnalyzer(seed=settings.analyzer_seed)
    return _analyzer


def get_query_store(db: AsyncSession = Depends(get_db)) -> QueryStore:
    """Record store bound to the request's database session."""
    return QueryStore(db)


def get_report_builder(
    db: AsyncSession = Depends(get_db),
    store: QueryStore = Depends(get_query_store),
) -> ReportBuilder:
    """Report builder bound to the request's database session."""
    return ReportBuilder(db, store=store, tz=settings.timezone)
