from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def working_days(start: date, end: date) -> list[date]:
    """Every Monday-Friday date in ``[start, end]``, ascending.

    Used as the denominator of attendance rates. An inverted range yields
    an empty list.
    """
    days: list[date] = []
    current = start
    while current <= end:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed, floored."""
    return int((end - start).total_seconds() // 60)
