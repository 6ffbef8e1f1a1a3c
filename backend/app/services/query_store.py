"""Record store: owner-scoped persistence and retrieval of query records."""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import InvalidRangeError, QueryNotFoundError
from backend.app.models.enums import RiskLevel
from backend.app.models.query import Query
from backend.app.services.records import QueryAnalysis, QueryRecord
from backend.app.utils.time_buckets import as_utc

logger = logging.getLogger(__name__)


def to_naive_utc(moment: datetime) -> datetime:
    """Convert a datetime to the naive UTC form stored in the database."""
    return as_utc(moment).replace(tzinfo=None)


@dataclass
class QueryFilters:
    """Filters narrowing the record set before pagination or aggregation."""

    flagged: bool | None = None
    risk_level: str | None = None
    category: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None

    def __post_init__(self):
        if self.date_from and self.date_to and as_utc(self.date_from) > as_utc(self.date_to):
            raise InvalidRangeError(self.date_from, self.date_to)

    def apply(self, statement: Select) -> Select:
        """Add WHERE clauses for every filter that is set."""
        if self.flagged is not None:
            statement = statement.where(Query.flagged == self.flagged)
        if self.risk_level:
            statement = statement.where(Query.risk_level == self.risk_level)
        if self.category:
            statement = statement.where(Query.category == self.category)
        if self.date_from:
            statement = statement.where(Query.created_at >= to_naive_utc(self.date_from))
        if self.date_to:
            statement = statement.where(Query.created_at <= to_naive_utc(self.date_to))
        return statement


@dataclass(frozen=True)
class OwnerSummary:
    """Headline counts over an owner's records."""

    total: int
    flagged: int
    average_confidence: float
    average_response_time: float

    @property
    def safe(self) -> int:
        return self.total - self.flagged


class QueryStore:
    """Async query interface over the persisted query records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(
        self,
        owner_id: str,
        text: str,
        analysis: QueryAnalysis,
        response_time: int = 0,
        ip_address: str | None = None,
        user_agent: str | None = None,
        created_at: datetime | None = None,
    ) -> Query:
        """Persist a newly analyzed query; flagged is derived from the analysis."""
        query = Query(
            owner_id=owner_id,
            text=text,
            safety=analysis.safety,
            risk_level=analysis.risk_level,
            confidence=analysis.confidence,
            category=analysis.category,
            severity=analysis.severity,
            emotion=analysis.emotion,
            emotion_emoji=analysis.emotion_emoji,
            reason=analysis.reason,
            ai_response=analysis.ai_response,
            flagged=analysis.is_unsafe,
            response_time=response_time,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        if created_at is not None:
            query.created_at = to_naive_utc(created_at)

        self.db.add(query)
        await self.db.commit()
        await self.db.refresh(query)
        return query

    async def get(self, owner_id: str, query_id: str) -> Query:
        """
        Get one query owned by owner_id.

        Raises:
            QueryNotFoundError: If the query does not exist or has another owner
        """
        result = await self.db.execute(
            select(Query).where(Query.id == query_id, Query.owner_id == owner_id)
        )
        query = result.scalar_one_or_none()
        if not query:
            raise QueryNotFoundError(query_id)
        return query

    async def list_queries(
        self,
        owner_id: str,
        filters: QueryFilters | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Query], int]:
        """
        List an owner's queries newest first.

        Returns:
            Tuple of (queries on the requested page, total matching count)
        """
        filters = filters or QueryFilters()
        base = filters.apply(select(Query).where(Query.owner_id == owner_id))

        count_result = await self.db.execute(
            select(func.count()).select_from(base.subquery())
        )
        total = count_result.scalar_one()

        result = await self.db.execute(
            base.order_by(Query.created_at.desc(), Query.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def latest(self, owner_id: str, limit: int) -> list[Query]:
        """Most recent queries of an owner."""
        result = await self.db.execute(
            select(Query)
            .where(Query.owner_id == owner_id)
            .order_by(Query.created_at.desc(), Query.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    def _range_statement(self, owner_id: str, start: datetime, end: datetime) -> Select:
        return select(Query).where(
            Query.owner_id == owner_id,
            Query.created_at >= to_naive_utc(start),
            Query.created_at < to_naive_utc(end),
        )

    async def count_in_range(self, owner_id: str, start: datetime, end: datetime) -> int:
        """Number of an owner's records with created_at in [start, end)."""
        statement = self._range_statement(owner_id, start, end)
        result = await self.db.execute(
            select(func.count()).select_from(statement.subquery())
        )
        return result.scalar_one()

    async def fetch_records(self, owner_id: str, start: datetime, end: datetime) -> list[QueryRecord]:
        """
        Snapshot of an owner's records with created_at in [start, end).

        Records are returned oldest first as immutable QueryRecord values.
        """
        result = await self.db.execute(
            self._range_statement(owner_id, start, end).order_by(Query.created_at, Query.id)
        )
        records = [QueryRecord.from_model(query) for query in result.scalars().all()]
        logger.debug(f"[STORE] Fetched {len(records)} records for owner {owner_id}")
        return records

    async def summary(self, owner_id: str, since: datetime | None = None) -> OwnerSummary:
        """Totals and averages over an owner's records, optionally since a moment."""
        statement = select(
            func.count(Query.id),
            func.sum(case((Query.flagged.is_(True), 1), else_=0)),
            func.avg(Query.confidence),
            func.avg(Query.response_time),
        ).where(Query.owner_id == owner_id)
        if since is not None:
            statement = statement.where(Query.created_at >= to_naive_utc(since))

        result = await self.db.execute(statement)
        total, flagged, avg_confidence, avg_response_time = result.one()
        return OwnerSummary(
            total=total or 0,
            flagged=int(flagged or 0),
            average_confidence=float(avg_confidence or 0.0),
            average_response_time=float(avg_response_time or 0.0),
        )

    async def count_high_risk_since(self, owner_id: str, since: datetime) -> int:
        """Number of high-risk queries of an owner since a moment."""
        result = await self.db.execute(
            select(func.count(Query.id)).where(
                Query.owner_id == owner_id,
                Query.risk_level == RiskLevel.HIGH.value,
                Query.created_at >= to_naive_utc(since),
            )
        )
        return result.scalar_one()
