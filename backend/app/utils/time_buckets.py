"""
Calendar-day helpers for bucketing query records.

Records are stored with naive UTC timestamps. Every helper here takes the
time zone explicitly so day boundaries never depend on the host's local time.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterator
from zoneinfo import ZoneInfo


def resolve_timezone(tz: tzinfo | str | None) -> tzinfo:
    """
    Resolve a time zone argument.

    Args:
        tz: tzinfo instance, IANA name, or None for UTC

    Returns:
        tzinfo instance
    """
    if tz is None:
        return timezone.utc
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def as_utc(moment: datetime) -> datetime:
    """Return an aware UTC datetime, treating naive values as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def local_date(moment: datetime, tz: tzinfo) -> date:
    """Calendar day of an instant in the given time zone."""
    return as_utc(moment).astimezone(tz).date()


def to_calendar_day(value: date | datetime, tz: tzinfo) -> date:
    """Normalize a date or datetime to a calendar day in the given time zone."""
    if isinstance(value, datetime):
        return local_date(value, tz)
    return value


def day_start_utc(day: date, tz: tzinfo) -> datetime:
    """Naive UTC instant at which the given local calendar day begins."""
    local_midnight = datetime(day.year, day.month, day.day, tzinfo=tz)
    return local_midnight.astimezone(timezone.utc).replace(tzinfo=None)


def range_bounds_utc(start: date, end: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """
    Naive UTC bounds covering whole local days from start to end inclusive.

    Returns:
        Tuple of (inclusive lower bound, exclusive upper bound)
    """
    return day_start_utc(start, tz), day_start_utc(end + timedelta(days=1), tz)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def today(tz: tzinfo, now: datetime | None = None) -> date:
    """Current calendar day in the given time zone."""
    moment = now if now is not None else datetime.now(timezone.utc)
    return local_date(moment, tz)


def trailing_window(days: int, end: date) -> tuple[date, date]:
    """Inclusive window of `days` calendar days ending on `end`."""
    return end - timedelta(days=days - 1), end
