from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Calendar day in UTC; the scheduler and the lifecycle rules share this clock."""
    return utc_now().date()


def add_months(d: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month.

    2024-01-31 + 1 month -> 2024-02-29.
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


_DOW_EN = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
_MON_EN = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_day_date(d: date | datetime | str | None) -> str:
    """Return 'Fri 05 Oct'.

    Accepts ISO date/datetime strings (with optional trailing 'Z').
    """
    if d is None:
        return ""
    if isinstance(d, str):
        s = d.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            d = datetime.fromisoformat(s)
        except ValueError:
            try:
                d = datetime.combine(date.fromisoformat(s), time(0, 0))
            except ValueError:
                return s
    day = as_date(d)
    return f"{_DOW_EN[day.weekday()]} {day.day:02d} {_MON_EN[day.month - 1]}"
