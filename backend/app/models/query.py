"""Query record model."""

import uuid
from datetime import datetime
from sqlalchemy import String, Text, Float, Integer, Boolean, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db.base import Base
from backend.app.models.enums import QueryCategory, EmotionType


class Query(Base):
    """
    Query model representing one scored query submission.

    Records are written once by the submission pipeline and never updated.

    Attributes:
        id: Unique query identifier (UUID)
        owner_id: Owning user/tenant; every read is scoped by it
        text: Original query text
        safety: Safety verdict (safe/unsafe/unknown)
        risk_level: Risk level (low/medium/high)
        confidence: Analyzer confidence (0-1)
        category: Content category
        severity: Severity (1-10)
        emotion: Dominant emotion type
        emotion_emoji: Display emoji for the emotion
        reason: Analyzer rationale
        ai_response: Model reply placeholder
        flagged: True when safety is "unsafe"
        response_time: Analysis duration in milliseconds
        ip_address: Submitting client address
        user_agent: Submitting client user agent
        created_at: Submission timestamp (UTC)
    """

    __tablename__ = "queries"
    __table_args__ = (
        Index("ix_queries_owner_created", "owner_id", "created_at"),
        Index("ix_queries_flagged_created", "flagged", "created_at"),
        Index("ix_queries_risk_created", "risk_level", "created_at"),
        Index("ix_queries_category_created", "category", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        index=True,
    )
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    safety: Mapped[str] = mapped_column(String(20), nullable=False)
    risk_level: Mapped[str] = mapped_column(String(20), nullable=False)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        default=QueryCategory.NONE.value,
    )
    severity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    emotion: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        default=EmotionType.NEUTRAL.value,
    )
    emotion_emoji: Mapped[str] = mapped_column(String(16), nullable=False, default="😐")
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    ai_response: Mapped[str | None] = mapped_column(Text, nullable=True)

    flagged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    response_time: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Analysis duration in milliseconds",
    )
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Query(id={self.id}, owner_id={self.owner_id}, "
            f"risk_level={self.risk_level}, flagged={self.flagged})>"
        )
