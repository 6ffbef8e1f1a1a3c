"""Query-related schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from backend.app.core.config import settings
from backend.app.models.enums import EmotionType, QueryCategory, RiskLevel, SafetyVerdict
from backend.app.schemas.common import Pagination


class QueryAnalyzeRequest(BaseModel):
    """Schema for submitting a query for analysis."""

    query: str = Field(
        ...,
        min_length=1,
        max_length=settings.max_query_length,
        description="Query text to analyze"
    )
    options: dict[str, Any] | None = Field(
        default=None,
        description="Analyzer options (reserved)"
    )


class EmotionalAnalysis(BaseModel):
    """Dominant emotion of an analyzed query."""

    dominant: EmotionType = Field(..., description="Dominant emotion")
    emoji: str = Field(..., description="Display emoji")
    confidence: float = Field(..., ge=0, le=1, description="Analyzer confidence")


class QueryAnalyzeResponse(BaseModel):
    """Schema for the analysis result returned to the submitter."""

    id: str = Field(..., description="Query ID")
    query: str = Field(..., description="Submitted text")
    safety: SafetyVerdict = Field(..., description="Safety verdict")
    risk_level: RiskLevel = Field(..., description="Risk level")
    confidence: float = Field(..., ge=0, le=1, description="Analyzer confidence")
    categories: list[str] = Field(..., description="Assigned categories")
    severity: int = Field(..., ge=1, le=10, description="Severity (1-10)")
    flagged: bool = Field(..., description="Whether the query was flagged as unsafe")
    flags: list[str] = Field(default_factory=list, description="Reasons for flagging")
    emotional_analysis: EmotionalAnalysis = Field(..., description="Emotion analysis")
    response_time: int = Field(..., ge=0, description="Analysis time in milliseconds")
    timestamp: datetime = Field(..., description="Submission timestamp")


class QueryResponse(BaseModel):
    """Schema for a stored query record."""

    id: str = Field(..., description="Query ID")
    text: str = Field(..., description="Query text")
    safety: SafetyVerdict = Field(..., description="Safety verdict")
    risk_level: RiskLevel = Field(..., description="Risk level")
    confidence: float = Field(..., description="Analyzer confidence")
    category: QueryCategory | None = Field(None, description="Content category")
    severity: int = Field(..., description="Severity (1-10)")
    emotion: EmotionType | None = Field(None, description="Dominant emotion")
    emotion_emoji: str = Field(..., description="Display emoji")
    reason: str | None = Field(None, description="Analyzer rationale")
    ai_response: str | None = Field(None, description="Model reply placeholder")
    flagged: bool = Field(..., description="Whether the query is flagged")
    response_time: int = Field(..., description="Analysis time in milliseconds")
    created_at: datetime = Field(..., description="Submission timestamp")

    model_config = {"from_attributes": True}


class QueryListResponse(BaseModel):
    """Schema for a paginated query list."""

    queries: list[QueryResponse] = Field(..., description="Queries on this page")
    pagination: Pagination = Field(..., description="Pagination metadata")


class QueryActivity(BaseModel):
    """Compact query entry for activity feeds."""

    id: str = Field(..., description="Query ID")
    query: str = Field(..., description="Query text (possibly truncated)")
    risk_level: RiskLevel = Field(..., description="Risk level")
    confidence: float = Field(..., description="Analyzer confidence")
    emotion: EmotionType | None = Field(None, description="Dominant emotion")
    flagged: bool = Field(..., description="Whether the query is flagged")
    timestamp: datetime = Field(..., description="Submission timestamp")

    @classmethod
    def from_query(cls, query: Any, text: str | None = None) -> "QueryActivity":
        """Build an activity entry from a stored query, optionally replacing its text."""
        return cls(
            id=query.id,
            query=text if text is not None else query.text,
            risk_level=query.risk_level,
            confidence=query.confidence,
            emotion=query.emotion,
            flagged=query.flagged,
            timestamp=query.created_at,
        )
