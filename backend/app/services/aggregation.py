"""
Query analytics aggregation engine.

This module turns a set of query records and a calendar-day range into
summary statistics: totals, category/risk/emotion breakdowns and daily
buckets. Everything here is a pure function of its inputs; record retrieval
and persistence happen in the callers.
"""

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, Iterable

import numpy as np

from backend.app.core.exceptions import InvalidRangeError, ValidationError
from backend.app.models.enums import EmotionType, RiskLevel
from backend.app.services.records import QueryRecord
from backend.app.utils.time_buckets import (
    as_utc,
    iter_days,
    local_date,
    resolve_timezone,
    to_calendar_day,
)

UNKNOWN_CATEGORY = "Unknown"
DEFAULT_EMOTION = EmotionType.NEUTRAL.value
RISK_LEVELS = tuple(level.value for level in RiskLevel)
SUPPORTED_BUCKETING = ("daily",)


@dataclass(frozen=True)
class BreakdownEntry:
    """Count and share of one group within a breakdown."""

    key: str
    count: int
    percentage: int


@dataclass(frozen=True)
class DailyBucket:
    """Counts for one calendar day."""

    date: date
    total_count: int
    flagged_count: int
    safe_count: int
    average_confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "total_count": self.total_count,
            "flagged_count": self.flagged_count,
            "safe_count": self.safe_count,
            "average_confidence": self.average_confidence,
        }


@dataclass(frozen=True)
class AggregationResult:
    """Summary statistics over a set of query records and a day range."""

    start: date
    end: date
    total_count: int
    flagged_count: int
    safe_count: int
    average_confidence: float
    average_response_time: float
    category_breakdown: tuple[BreakdownEntry, ...]
    risk_level_breakdown: tuple[BreakdownEntry, ...]
    emotional_breakdown: tuple[BreakdownEntry, ...]
    daily_stats: tuple[DailyBucket, ...]

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-serializable representation with stable key order."""
        return {
            "date_range": {"from": self.start.isoformat(), "to": self.end.isoformat()},
            "total_count": self.total_count,
            "flagged_count": self.flagged_count,
            "safe_count": self.safe_count,
            "average_confidence": self.average_confidence,
            "average_response_time": self.average_response_time,
            "category_breakdown": [
                {"category": e.key, "count": e.count, "percentage": e.percentage}
                for e in self.category_breakdown
            ],
            "risk_level_breakdown": [
                {"level": e.key, "count": e.count, "percentage": e.percentage}
                for e in self.risk_level_breakdown
            ],
            "emotional_breakdown": [
                {"emotion": e.key, "count": e.count, "percentage": e.percentage}
                for e in self.emotional_breakdown
            ],
            "daily_stats": [bucket.to_dict() for bucket in self.daily_stats],
        }


def percentage(count: int, total: int) -> int:
    """
    Integer share of `count` in `total`, rounding halves up.

    Returns 0 when total is 0.
    """
    if total <= 0:
        return 0
    return int(math.floor(count / total * 100 + 0.5))


def mean(values: list[float]) -> float:
    """Arithmetic mean, 0.0 for an empty list."""
    if not values:
        return 0.0
    return float(np.mean(values))


def _breakdown(counts: dict[str, int], total: int) -> tuple[BreakdownEntry, ...]:
    return tuple(
        BreakdownEntry(key=key, count=count, percentage=percentage(count, total))
        for key, count in counts.items()
    )


def _daily_bucket(day: date, records: list[QueryRecord]) -> DailyBucket:
    flagged = sum(1 for record in records if record.flagged)
    return DailyBucket(
        date=day,
        total_count=len(records),
        flagged_count=flagged,
        safe_count=len(records) - flagged,
        average_confidence=mean([record.analysis.confidence for record in records]),
    )


def _check_range(start: date | datetime, end: date | datetime, first_day: date, last_day: date) -> None:
    if isinstance(start, datetime) and isinstance(end, datetime):
        if as_utc(start) > as_utc(end):
            raise InvalidRangeError(start, end)
    if first_day > last_day:
        raise InvalidRangeError(start, end)


def aggregate_records(
    records: Iterable[QueryRecord],
    start: date | datetime,
    end: date | datetime,
    tz: tzinfo | str | None = None,
    bucketing: str = "daily",
) -> AggregationResult:
    """
    Aggregate query records over the calendar days from start to end.

    The caller is responsible for scoping `records` to one owner and to the
    range; totals count every record passed in, while daily buckets only see
    records whose local calendar day falls inside the range.

    Args:
        records: Query records already filtered by owner and time range
        start: First day of the range (datetimes are mapped to their local day)
        end: Last day of the range, inclusive
        tz: Time zone for calendar-day assignment (default UTC)
        bucketing: Time bucketing, only "daily" is supported

    Returns:
        AggregationResult

    Raises:
        InvalidRangeError: If start is after end
        ValidationError: If bucketing is not supported
    """
    if bucketing not in SUPPORTED_BUCKETING:
        raise ValidationError(f"Unsupported bucketing: {bucketing}", field="bucketing")

    zone = resolve_timezone(tz)
    first_day = to_calendar_day(start, zone)
    last_day = to_calendar_day(end, zone)
    _check_range(start, end, first_day, last_day)

    snapshot = list(records)
    total = len(snapshot)
    flagged = sum(1 for record in snapshot if record.flagged)

    category_counts: dict[str, int] = {}
    risk_counts: dict[str, int] = {level: 0 for level in RISK_LEVELS}
    emotion_counts: dict[str, int] = {}
    records_by_day: dict[date, list[QueryRecord]] = defaultdict(list)

    for record in snapshot:
        analysis = record.analysis
        category = analysis.category or UNKNOWN_CATEGORY
        category_counts[category] = category_counts.get(category, 0) + 1
        risk_counts[analysis.risk_level] = risk_counts.get(analysis.risk_level, 0) + 1
        emotion = analysis.emotion or DEFAULT_EMOTION
        emotion_counts[emotion] = emotion_counts.get(emotion, 0) + 1
        records_by_day[local_date(record.created_at, zone)].append(record)

    # sorted() is stable, so equal counts keep first-encountered order
    category_breakdown = tuple(
        sorted(_breakdown(category_counts, total), key=lambda entry: -entry.count)
    )

    daily_stats = tuple(
        _daily_bucket(day, records_by_day.get(day, []))
        for day in iter_days(first_day, last_day)
    )

    return AggregationResult(
        start=first_day,
        end=last_day,
        total_count=total,
        flagged_count=flagged,
        safe_count=total - flagged,
        average_confidence=mean([record.analysis.confidence for record in snapshot]),
        average_response_time=mean([float(record.response_time) for record in snapshot]),
        category_breakdown=category_breakdown,
        risk_level_breakdown=_breakdown(risk_counts, total),
        emotional_breakdown=_breakdown(emotion_counts, total),
        daily_stats=daily_stats,
    )
