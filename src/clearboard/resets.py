"""Daily and weekly reset schedule calculations."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from .config import TimeRange
from .models import as_utc

DAILY_RESET_HOUR = 17
MONTH_RESET_CYCLES = 4


def _now() -> datetime:
    return datetime.now(timezone.utc)


def daily_reset(at: Optional[datetime] = None) -> datetime:
    """Return the most recent 17:00 UTC at or before ``at``."""
    moment = as_utc(at) if at is not None else _now()
    reset = moment.replace(hour=DAILY_RESET_HOUR, minute=0, second=0, microsecond=0)
    if moment < reset:
        reset -= timedelta(days=1)
    return reset


def weekly_reset(at: Optional[datetime] = None) -> datetime:
    """Return the most recent Tuesday daily reset at or before ``at``."""
    reset = daily_reset(at)
    # isoweekday() is Monday=1..Sunday=7; % 7 gives Sunday=0..Saturday=6.
    weekday = reset.isoweekday() % 7
    days_since_tuesday = (weekday + 5) % 7
    return reset - timedelta(days=days_since_tuesday)


def monthly_reset(at: Optional[datetime] = None) -> datetime:
    """Four weekly resets back from the current week, not a calendar month."""
    return weekly_reset(at) - timedelta(weeks=MONTH_RESET_CYCLES)


def range_cutoff(time_range: TimeRange, now: Optional[datetime] = None) -> Optional[datetime]:
    """Earliest ``period`` kept for a time range, or None for all time."""
    if time_range is TimeRange.TODAY:
        return daily_reset(now)
    if time_range is TimeRange.WEEK:
        return weekly_reset(now)
    if time_range is TimeRange.MONTH:
        return monthly_reset(now)
    return None
