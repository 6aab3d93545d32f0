"""
Calendar-day helpers.

Every "day" in Langify (daily stats, streaks, leaderboard windows, admin
activity) is a ``datetime.date`` in one configured timezone
(``LANGIFY_TIMEZONE``, default UTC). Timestamps are stored as timezone-aware UTC
datetimes.
"""
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Iterator, Optional
from zoneinfo import ZoneInfo

from langify.core.config import settings


@lru_cache(maxsize=8)
def get_timezone(name: Optional[str] = None) -> tzinfo:
    """Resolve a timezone name, defaulting to the configured one."""
    name = name or settings.timezone
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime (the storage convention)."""
    return datetime.now(timezone.utc)


def to_calendar_day(moment: datetime, tz_name: Optional[str] = None) -> date:
    """
    Convert a stored timestamp to its calendar day in the configured timezone.

    Naive datetimes (as SQLite returns them) are taken to be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(get_timezone(tz_name)).date()


def today(tz_name: Optional[str] = None) -> date:
    """Today's calendar day in the configured timezone."""
    return datetime.now(get_timezone(tz_name)).date()


def window_start(end_day: date, days: int) -> date:
    """First day of the ``days``-long window ending on ``end_day`` (inclusive)."""
    return end_day - timedelta(days=days - 1)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
