"""Report API endpoints."""

from fastapi import APIRouter, Depends, Query as QueryParam, status

from backend.app.api.deps import get_owner_id, get_report_builder
from backend.app.core.config import settings
from backend.app.models.enums import ReportStatus, ReportType
from backend.app.models.report import Report
from backend.app.schemas.common import Pagination
from backend.app.schemas.report import (
    DateRange,
    ReportCreate,
    ReportDownloadResponse,
    ReportListResponse,
    ReportResponse,
    ReportSummary,
)
from backend.app.services.report_builder import ReportBuilder
from backend.app.utils.formatting import format_file_size

router = APIRouter(prefix="/reports", tags=["reports"])


def _to_report_response(report: Report) -> ReportResponse:
    """
    Convert Report model to ReportResponse.

    Args:
        report: Report model with its data loaded

    Returns:
        ReportResponse object
    """
    return ReportResponse(
        id=report.id,
        name=report.name,
        type=report.report_type,
        date_range=DateRange(date_from=report.date_from, date_to=report.date_to),
        format=report.format,
        status=report.status,
        data=report.data,
        error_message=report.error_message,
        file_size_bytes=report.file_size_bytes,
        download_count=report.download_count,
        created_at=report.created_at,
        completed_at=report.completed_at,
    )


def _to_report_summary(report: Report) -> ReportSummary:
    """Convert Report model to a list entry without touching its data."""
    return ReportSummary(
        id=report.id,
        name=report.name,
        type=report.report_type,
        date=report.created_at.date().isoformat(),
        queries=report.total_queries,
        flagged=report.flagged_queries,
        format=report.format.upper(),
        size=format_file_size(report.file_size_bytes),
        status=report.status,
        created_at=report.created_at,
        completed_at=report.completed_at,
    )


@router.post("/generate", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def generate_report(
    report_data: ReportCreate,
    owner_id: str = Depends(get_owner_id),
    builder: ReportBuilder = Depends(get_report_builder),
) -> ReportResponse:
    """
    Generate a report over the requested calendar days.

    A report whose generation fails is still created and returned with
    status "failed".
    """
    report = await builder.create_report(
        owner_id=owner_id,
        name=report_data.name,
        report_type=report_data.type.value,
        date_from=report_data.date_range.date_from,
        date_to=report_data.date_range.date_to,
        report_format=report_data.format.value,
    )
    return _to_report_response(report)


@router.get("/", response_model=ReportListResponse)
async def list_reports(
    page: int = QueryParam(1, ge=1),
    limit: int = QueryParam(10, ge=1, le=settings.max_report_page_size),
    report_type: ReportType | None = QueryParam(None, alias="type"),
    report_status: ReportStatus | None = QueryParam(None, alias="status"),
    owner_id: str = Depends(get_owner_id),
    builder: ReportBuilder = Depends(get_report_builder),
) -> ReportListResponse:
    """List the owner's reports newest first."""
    reports, total = await builder.list_reports(
        owner_id,
        report_type=report_type.value if report_type else None,
        status=report_status.value if report_status else None,
        page=page,
        limit=limit,
    )
    return ReportListResponse(
        reports=[_to_report_summary(report) for report in reports],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: str,
    owner_id: str = Depends(get_owner_id),
    builder: ReportBuilder = Depends(get_report_builder),
) -> ReportResponse:
    """Get one of the owner's reports including its data."""
    report = await builder.get_report(report_id, owner_id)
    return _to_report_response(report)


@router.post("/{report_id}/download", response_model=ReportDownloadResponse)
async def download_report(
    report_id: str,
    owner_id: str = Depends(get_owner_id),
    builder: ReportBuilder = Depends(get_report_builder),
) -> ReportDownloadResponse:
    """Return a completed report's data and format tag, counting the download."""
    download = await builder.download_report(report_id, owner_id)
    return ReportDownloadResponse(data=download.data, format=download.format)
