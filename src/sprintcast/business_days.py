"""Working-day calendar arithmetic (Monday to Friday, no holidays)."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from .context import get_today

SATURDAY = 5  # date.weekday() value; Sunday is 6


def coerce_date(value: Any) -> date | None:
    """Normalize a date-like value to a ``date``.

    Accepts ``date``, ``datetime`` (time of day dropped) and ISO strings
    (``2024-01-05`` or ``2024-01-05T09:30``). Anything else, including empty
    strings, gives None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def is_business_day(day: date) -> bool:
    """Check whether a day falls on Monday-Friday."""
    return day.weekday() < SATURDAY


def add_business_days(start: Any, days: float) -> date:
    """Advance ``days`` working days from ``start``.

    ``days <= 0`` returns the start date itself. An invalid or missing start
    falls back to today. Fractional counts round up (2.5 advances 3 days).
    """
    current = coerce_date(start)
    if current is None:
        return get_today()
    if days <= 0:
        return current

    count = 0
    while count < days:
        current += timedelta(days=1)
        if is_business_day(current):
            count += 1
    return current


def business_day_diff(start: Any, end: Any) -> int:
    """Count working days ``d`` with ``start < d <= end``.

    Returns 0 when ``end`` precedes ``start`` or either date is invalid, so
    ``business_day_diff(d, add_business_days(d, n)) == n`` for a weekday ``d``.
    """
    start_day = coerce_date(start)
    end_day = coerce_date(end)
    if start_day is None or end_day is None or end_day < start_day:
        return 0

    # Whole weeks contribute five days each; walk the remainder
    total_days = (end_day - start_day).days
    weeks, remainder = divmod(total_days, 7)
    count = weeks * 5
    current = start_day + timedelta(weeks=weeks)
    for _ in range(remainder):
        current += timedelta(days=1)
        if is_business_day(current):
            count += 1
    return count
