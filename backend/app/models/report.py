"""Report model for storing generated report snapshots."""

from datetime import date, datetime
import uuid

from sqlalchemy import String, Integer, Date, DateTime, JSON, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db.base import Base
from backend.app.models.enums import ReportStatus


class Report(Base):
    """Report model capturing one aggregation over a date range."""

    __tablename__ = "reports"
    __table_args__ = (
        Index("ix_reports_owner_created", "owner_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    report_type: Mapped[str] = mapped_column(String(50), nullable=False)
    date_from: Mapped[date] = mapped_column(Date, nullable=False)
    date_to: Mapped[date] = mapped_column(Date, nullable=False)
    format: Mapped[str] = mapped_column(String(10), nullable=False)

    # Generation status: generating -> completed | failed
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ReportStatus.GENERATING.value,
        index=True,
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Aggregation snapshot (JSON) and its denormalized headline counts
    data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    total_queries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    flagged_queries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    file_size_bytes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, name={self.name}, status={self.status})>"
