"""
Wall-clock helpers for event timestamps and progress records.

Timer delays use the engine Clock; these helpers are only for stamping
events and bucketing sessions by calendar day.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def day_key(ts: Optional[datetime] = None) -> str:
    """
    Calendar-day bucket for a timestamp.

    Args:
        ts: Timestamp to bucket, defaults to now

    Returns:
        ISO date string (YYYY-MM-DD) in UTC
    """
    ts = ts or utc_now()
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).date().isoformat()


def reading_streak(days: set[str], today: Optional[date] = None) -> int:
    """
    Count consecutive days ending today that have at least one session.

    Args:
        days: ISO date strings with recorded reading
        today: Reference day, defaults to the current UTC date

    Returns:
        Length of the streak, 0 if nothing was read today
    """
    today = today or utc_now().date()
    streak = 0
    while (today - timedelta(days=streak)).isoformat() in days:
        streak += 1
    return streak
