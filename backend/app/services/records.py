"""
Immutable query record values consumed by the aggregation engine.

The engine never touches ORM objects: the record store converts rows into
these frozen dataclasses so a fetched snapshot cannot change underneath a
running aggregation.
"""

from dataclasses import dataclass
from datetime import datetime

from backend.app.models.enums import SafetyVerdict
from backend.app.models.query import Query


@dataclass(frozen=True)
class QueryAnalysis:
    """Structured safety analysis of one query."""

    safety: str
    risk_level: str
    confidence: float
    category: str | None = "None"
    severity: int = 1
    emotion: str | None = "neutral"
    emotion_emoji: str = "😐"
    reason: str | None = None
    ai_response: str | None = None

    @property
    def is_unsafe(self) -> bool:
        return self.safety == SafetyVerdict.UNSAFE.value


@dataclass(frozen=True)
class QueryRecord:
    """One scored query event, scoped to its owner."""

    id: str
    owner_id: str
    text: str
    created_at: datetime
    flagged: bool
    analysis: QueryAnalysis
    response_time: int = 0

    @classmethod
    def from_analysis(
        cls,
        id: str,
        owner_id: str,
        text: str,
        created_at: datetime,
        analysis: QueryAnalysis,
        response_time: int = 0,
    ) -> "QueryRecord":
        """Build a record whose flagged state is derived from the analysis."""
        return cls(
            id=id,
            owner_id=owner_id,
            text=text,
            created_at=created_at,
            flagged=analysis.is_unsafe,
            analysis=analysis,
            response_time=response_time,
        )

    @classmethod
    def from_model(cls, query: Query) -> "QueryRecord":
        """Convert a persisted Query row into an immutable record."""
        return cls(
            id=query.id,
            owner_id=query.owner_id,
            text=query.text,
            created_at=query.created_at,
            flagged=query.flagged,
            analysis=QueryAnalysis(
                safety=query.safety,
                risk_level=query.risk_level,
                confidence=query.confidence,
                category=query.category,
                severity=query.severity,
                emotion=query.emotion,
                emotion_emoji=query.emotion_emoji,
                reason=query.reason,
                ai_response=query.ai_response,
            ),
            response_time=query.response_time,
        )
