"""Report builder: persisted, stateful snapshots of one aggregation."""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import defer

from backend.app.core.config import settings
from backend.app.core.exceptions import (
    AggregationLimitError,
    InvalidRangeError,
    ReportNotFoundError,
    ReportNotReadyError,
    ValidationError,
)
from backend.app.models.enums import ReportFormat, ReportStatus, ReportType
from backend.app.models.report import Report
from backend.app.services.aggregation import aggregate_records
from backend.app.services.query_store import QueryStore
from backend.app.utils.time_buckets import range_bounds_utc, resolve_timezone, to_calendar_day

logger = logging.getLogger(__name__)

MAX_REPORT_NAME_LENGTH = 200


@dataclass(frozen=True)
class ReportDownload:
    """Stored report data plus the requested export format tag."""

    data: dict[str, Any]
    format: str


def serialized_size(data: dict[str, Any]) -> int:
    """Size in bytes of the compact UTF-8 JSON encoding of data."""
    return len(json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


def _require_member(value: str, allowed: type, field: str) -> str:
    values = [member.value for member in allowed]
    if value not in values:
        raise ValidationError(f"{field} must be one of {values}, got {value!r}", field=field)
    return value


class ReportBuilder:
    """
    Create, list and download report snapshots.

    A report moves from "generating" to exactly one of "completed" or
    "failed" and never changes state again. Failures while fetching or
    aggregating records are recorded on the report instead of raised.
    """

    def __init__(
        self,
        db: AsyncSession,
        store: QueryStore | None = None,
        tz: tzinfo | str | None = None,
        max_records: int | None = None,
    ):
        self.db = db
        self.store = store or QueryStore(db)
        self.tz = resolve_timezone(tz if tz is not None else settings.timezone)
        self.max_records = max_records or settings.report_max_records

    def _validate_request(
        self,
        name: str,
        report_type: str,
        date_from: date | datetime,
        date_to: date | datetime,
        report_format: str,
    ) -> tuple[str, date, date]:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Report name is required", field="name")
        if len(name) > MAX_REPORT_NAME_LENGTH:
            raise ValidationError(
                f"Report name cannot exceed {MAX_REPORT_NAME_LENGTH} characters", field="name"
            )
        _require_member(report_type, ReportType, "type")
        _require_member(report_format, ReportFormat, "format")

        first_day = to_calendar_day(date_from, self.tz)
        last_day = to_calendar_day(date_to, self.tz)
        if first_day > last_day:
            raise InvalidRangeError(first_day, last_day)
        return name, first_day, last_day

    async def create_report(
        self,
        owner_id: str,
        name: str,
        report_type: str,
        date_from: date | datetime,
        date_to: date | datetime,
        report_format: str,
    ) -> Report:
        """
        Create a report and generate its data synchronously.

        Args:
            owner_id: Owner whose records are aggregated
            name: Report name
            report_type: One of ReportType values
            date_from: First calendar day of the report
            date_to: Last calendar day of the report, inclusive
            report_format: Export format tag (ReportFormat value)

        Returns:
            Persisted Report in status "completed" or "failed"

        Raises:
            ValidationError: If the request is malformed
            InvalidRangeError: If date_from is after date_to
        """
        name, first_day, last_day = self._validate_request(
            name, report_type, date_from, date_to, report_format
        )

        report = Report(
            owner_id=owner_id,
            name=name,
            report_type=report_type,
            date_from=first_day,
            date_to=last_day,
            format=report_format,
            status=ReportStatus.GENERATING.value,
        )
        self.db.add(report)
        await self.db.commit()
        await self.db.refresh(report)
        logger.info(f"[REPORT] Generating report {report.id} for owner {owner_id} ({first_day} - {last_day})")

        try:
            lower, upper = range_bounds_utc(first_day, last_day, self.tz)
            record_count = await self.store.count_in_range(owner_id, lower, upper)
            if record_count > self.max_records:
                raise AggregationLimitError(record_count, self.max_records)

            records = await self.store.fetch_records(owner_id, lower, upper)
            result = aggregate_records(records, first_day, last_day, tz=self.tz)
        except Exception as e:
            logger.error(f"[REPORT] Report {report.id} failed: {e}")
            await self.db.rollback()
            await self.db.refresh(report)
            report.status = ReportStatus.FAILED.value
            report.error_message = str(e) or e.__class__.__name__
            report.completed_at = datetime.utcnow()
            await self.db.commit()
            return report

        data = result.to_dict()
        report.data = data
        report.total_queries = result.total_count
        report.flagged_queries = result.flagged_count
        report.file_size_bytes = serialized_size(data)
        report.status = ReportStatus.COMPLETED.value
        report.completed_at = datetime.utcnow()
        await self.db.commit()

        logger.info(f"[REPORT] Completed report {report.id} with {result.total_count} queries")
        return report

    async def get_report(self, report_id: str, owner_id: str) -> Report:
        """
        Get a report owned by owner_id.

        Raises:
            ReportNotFoundError: If the report does not exist or has another owner
        """
        result = await self.db.execute(
            select(Report).where(Report.id == report_id, Report.owner_id == owner_id)
        )
        report = result.scalar_one_or_none()
        if not report:
            raise ReportNotFoundError(report_id)
        return report

    async def download_report(self, report_id: str, owner_id: str) -> ReportDownload:
        """
        Return a completed report's data and count the download.

        Raises:
            ReportNotFoundError: If the report does not exist or has another owner
            ReportNotReadyError: If the report is not completed
        """
        report = await self.get_report(report_id, owner_id)
        if report.status != ReportStatus.COMPLETED.value:
            raise ReportNotReadyError(report_id, report.status)

        report.download_count += 1
        await self.db.commit()
        logger.info(f"[REPORT] Download #{report.download_count} of report {report_id}")
        return ReportDownload(data=report.data or {}, format=report.format)

    async def list_reports(
        self,
        owner_id: str,
        report_type: str | None = None,
        status: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Report], int]:
        """
        List an owner's reports newest first, without their data payload.

        Returns:
            Tuple of (reports on the requested page, total matching count)
        """
        if page < 1:
            raise ValidationError("page must be a positive integer", field="page")
        if limit < 1:
            raise ValidationError("limit must be a positive integer", field="limit")
        if status is not None:
            _require_member(status, ReportStatus, "status")

        statement = select(Report).where(Report.owner_id == owner_id)
        if report_type:
            statement = statement.where(Report.report_type == report_type)
        if status:
            statement = statement.where(Report.status == status)

        count_result = await self.db.execute(
            select(func.count()).select_from(statement.subquery())
        )
        total = count_result.scalar_one()

        result = await self.db.execute(
            statement.options(defer(Report.data))
            .order_by(Report.created_at.desc(), Report.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total
