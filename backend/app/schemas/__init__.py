"""Pydantic schemas for API request/response validation."""

from backend.app.schemas.common import Pagination
from backend.app.schemas.query import (
    QueryAnalyzeRequest,
    QueryAnalyzeResponse,
    QueryResponse,
    QueryListResponse,
    QueryActivity,
)
from backend.app.schemas.dashboard import (
    DashboardStatsResponse,
    Alert,
    AnalyticsOverviewResponse,
    TrendPoint,
)
from backend.app.schemas.report import (
    DateRange,
    ReportCreate,
    ReportResponse,
    ReportSummary,
    ReportListResponse,
    ReportDownloadResponse,
)

__all__ = [
    "Pagination",
    "QueryAnalyzeRequest",
    "QueryAnalyzeResponse",
    "QueryResponse",
    "QueryListResponse",
    "QueryActivity",
    "DashboardStatsResponse",
    "Alert",
    "AnalyticsOverviewResponse",
    "TrendPoint",
    "DateRange",
    "ReportCreate",
    "ReportResponse",
    "ReportSummary",
    "ReportListResponse",
    "ReportDownloadResponse",
]
