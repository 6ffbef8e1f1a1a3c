"""Report-related schemas."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.app.models.enums import ReportFormat, ReportStatus, ReportType
from backend.app.schemas.common import Pagination


class DateRange(BaseModel):
    """Inclusive calendar-day range."""

    model_config = ConfigDict(populate_by_name=True)

    date_from: date = Field(..., alias="from", description="First day (inclusive)")
    date_to: date = Field(..., alias="to", description="Last day (inclusive)")

    @model_validator(mode="after")
    def validate_order(self) -> "DateRange":
        """Validate the range does not end before it starts."""
        if self.date_from > self.date_to:
            raise ValueError("date range 'from' must not be after 'to'")
        return self


class ReportCreate(BaseModel):
    """Schema for requesting a new report."""

    name: str = Field(..., min_length=1, max_length=200, description="Report name")
    type: ReportType = Field(..., description="Report type")
    date_range: DateRange = Field(..., description="Covered calendar days")
    format: ReportFormat = Field(..., description="Export format tag")


class ReportResponse(BaseModel):
    """Schema for a full report, including its data."""

    id: str
    name: str
    type: ReportType
    date_range: DateRange
    format: ReportFormat
    status: ReportStatus
    data: dict[str, Any] | None = None
    error_message: str | None = None
    file_size_bytes: int
    download_count: int
    created_at: datetime
    completed_at: datetime | None = None


class ReportSummary(BaseModel):
    """Schema for a report list entry (no data payload)."""

    id: str
    name: str
    type: ReportType
    date: str = Field(..., description="Creation day (YYYY-MM-DD)")
    queries: int = Field(..., description="Total queries covered")
    flagged: int = Field(..., description="Flagged queries covered")
    format: str = Field(..., description="Upper-case format tag")
    size: str = Field(..., description="Human readable data size")
    status: ReportStatus
    created_at: datetime
    completed_at: datetime | None = None


class ReportListResponse(BaseModel):
    """Schema for a paginated report list."""

    reports: list[ReportSummary]
    pagination: Pagination


class ReportDownloadResponse(BaseModel):
    """Schema for a report download."""

    data: dict[str, Any]
    format: ReportFormat
