"""Day arithmetic between the garden's epoch and a given date."""

from datetime import date, timedelta
from typing import Optional


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is earlier)."""
    return (end - start).days


def days_since_start(today: date, start_date: date, end_date: Optional[date] = None) -> int:
    """
    Number of flowers to show on ``today``.

    Clamped to zero before the epoch and, when ``end_date`` is given, to the
    number of days between the epoch and ``end_date``.
    """
    count = days_between(start_date, today)
    if end_date is not None:
        count = min(count, days_between(start_date, end_date))
    return max(0, count)


def date_for_day(start_date: date, day_index: int) -> str:
    """ISO date a given day index was planted on."""
    return (start_date + timedelta(days=day_index)).isoformat()
