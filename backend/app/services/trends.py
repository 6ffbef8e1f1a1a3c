"""
Dashboard, overview and trend views built on the aggregation engine.

Each view computes its own window, fetches the owner's records through the
record store and selects the fields its caller needs from the aggregation.
"""

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any

from backend.app.core.exceptions import ValidationError
from backend.app.services.aggregation import AggregationResult, aggregate_records
from backend.app.services.query_store import QueryStore
from backend.app.utils.time_buckets import range_bounds_utc, today, trailing_window

logger = logging.getLogger(__name__)

RISK_BUCKET_NAMES = {
    "low": "Low Risk",
    "medium": "Medium Risk",
    "high": "High Risk",
}


def build_overview(result: AggregationResult) -> dict[str, Any]:
    """Select the analytics overview fields from an aggregation."""
    return {
        "risk_levels": [
            {
                "name": RISK_BUCKET_NAMES.get(entry.key, entry.key),
                "level": entry.key,
                "value": entry.percentage,
            }
            for entry in result.risk_level_breakdown
        ],
        "categories": [
            {"name": entry.key, "count": entry.count}
            for entry in result.category_breakdown
        ],
        "emotional_analysis": [
            {"emotion": entry.key, "percentage": entry.percentage}
            for entry in result.emotional_breakdown
        ],
        "weekly_trends": [
            {
                "date": bucket.date.isoformat(),
                "day": bucket.date.strftime("%a"),
                "safe": bucket.safe_count,
                "flagged": bucket.flagged_count,
            }
            for bucket in result.daily_stats
        ],
    }


def build_trend(result: AggregationResult) -> list[dict[str, Any]]:
    """One trend point per day of an aggregation."""
    return [
        {
            "date": bucket.date.isoformat(),
            "total": bucket.total_count,
            "safe": bucket.safe_count,
            "flagged": bucket.flagged_count,
            "average_confidence": round(bucket.average_confidence, 2),
        }
        for bucket in result.daily_stats
    ]


async def aggregate_trailing_days(
    store: QueryStore,
    owner_id: str,
    days: int,
    tz: tzinfo,
    now: datetime | None = None,
) -> AggregationResult:
    """Aggregate an owner's records over the trailing `days` calendar days."""
    if days <= 0:
        raise ValidationError(f"days must be positive, got {days}", field="days")

    try:
        start_day, end_day = trailing_window(days, today(tz, now))
        lower, upper = range_bounds_utc(start_day, end_day, tz)
    except OverflowError:
        raise ValidationError(f"days is too large, got {days}", field="days")
    records = await store.fetch_records(owner_id, lower, upper)
    return aggregate_records(records, start_day, end_day, tz=tz)


async def get_overview(
    store: QueryStore,
    owner_id: str,
    tz: tzinfo,
    days: int = 7,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Analytics overview over the trailing window ending today."""
    result = await aggregate_trailing_days(store, owner_id, days, tz, now)
    return build_overview(result)


async def get_trend(
    store: QueryStore,
    owner_id: str,
    days: int,
    tz: tzinfo,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """Per-day trend points over the trailing `days` days ending today."""
    result = await aggregate_trailing_days(store, owner_id, days, tz, now)
    return build_trend(result)


async def get_dashboard_stats(
    store: QueryStore,
    owner_id: str,
    tz: tzinfo,
    now: datetime | None = None,
) -> dict[str, Any]:
    """All-time totals, today's subset and average response time for an owner."""
    overall = await store.summary(owner_id)
    lower, _ = range_bounds_utc(today(tz, now), today(tz, now), tz)
    todays = await store.summary(owner_id, since=lower)

    return {
        "total_queries": overall.total,
        "flagged_queries": overall.flagged,
        "safe_queries": overall.safe,
        "average_risk_score": round(overall.average_confidence, 2),
        "today_stats": {
            "queries": todays.total,
            "flagged": todays.flagged,
            "safe": todays.safe,
        },
        "average_response_time": int(round(overall.average_response_time)),
    }


async def get_alerts(
    store: QueryStore,
    owner_id: str,
    window_hours: int,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """Active alerts for an owner; currently only high-risk activity."""
    moment = now if now is not None else datetime.now(timezone.utc)
    high_risk = await store.count_high_risk_since(owner_id, moment - timedelta(hours=window_hours))

    alerts = []
    if high_risk > 0:
        logger.info(f"[ALERT] {high_risk} high-risk queries for owner {owner_id}")
        alerts.append({
            "type": "high-risk",
            "title": "High Risk Query Detected",
            "message": f"{high_risk} high-risk queries detected in the last {window_hours} hours",
            "timestamp": moment,
            "severity": "high",
        })
    return alerts
