"""Dashboard and analytics schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class TodayStats(BaseModel):
    """Counts for the current calendar day."""

    queries: int = Field(..., description="Queries submitted today")
    flagged: int = Field(..., description="Flagged queries today")
    safe: int = Field(..., description="Safe queries today")


class DashboardStatsResponse(BaseModel):
    """Headline dashboard statistics."""

    total_queries: int = Field(..., description="All-time query count")
    flagged_queries: int = Field(..., description="All-time flagged count")
    safe_queries: int = Field(..., description="All-time safe count")
    average_risk_score: float = Field(..., description="Mean analyzer confidence (2 dp)")
    today_stats: TodayStats = Field(..., description="Today's subset")
    average_response_time: int = Field(..., description="Mean response time in ms")


class Alert(BaseModel):
    """Active dashboard alert."""

    type: str = Field(..., description="Alert type")
    title: str = Field(..., description="Alert title")
    message: str = Field(..., description="Alert message")
    timestamp: datetime = Field(..., description="Alert time")
    severity: str = Field(..., description="Alert severity")


class RiskLevelShare(BaseModel):
    """Share of one risk level."""

    name: str = Field(..., description="Display name, e.g. 'Low Risk'")
    level: str = Field(..., description="Risk level key")
    value: int = Field(..., ge=0, le=100, description="Percentage of total")


class CategoryCount(BaseModel):
    """Count of one category."""

    name: str = Field(..., description="Category")
    count: int = Field(..., description="Number of queries")


class EmotionShare(BaseModel):
    """Share of one emotion."""

    emotion: str = Field(..., description="Emotion type")
    percentage: int = Field(..., ge=0, le=100, description="Percentage of total")


class WeeklyTrendPoint(BaseModel):
    """Daily safe/flagged counts of the overview window."""

    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    day: str = Field(..., description="Weekday abbreviation")
    safe: int = Field(..., description="Safe queries")
    flagged: int = Field(..., description="Flagged queries")


class AnalyticsOverviewResponse(BaseModel):
    """Analytics overview over the trailing window."""

    risk_levels: list[RiskLevelShare]
    categories: list[CategoryCount]
    emotional_analysis: list[EmotionShare]
    weekly_trends: list[WeeklyTrendPoint]


class TrendPoint(BaseModel):
    """One day of the trend series."""

    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    total: int = Field(..., description="Queries that day")
    safe: int = Field(..., description="Safe queries that day")
    flagged: int = Field(..., description="Flagged queries that day")
    average_confidence: float = Field(..., description="Mean confidence that day (2 dp)")
