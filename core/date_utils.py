"""Shared date and time utilities.

Provides Sunday-first day-of-week helpers, day-name lookups and ISO
date parsing used by the window builder and the CLI.
"""
from __future__ import annotations

import datetime as _dt
from typing import Any, List

__all__ = [
    "DAY_NAMES",
    "DAY_MAP",
    "day_of_week",
    "day_names",
    "parse_date",
]

# Sunday-first abbreviations; index is the day-of-week integer (0 = Sunday)
DAY_NAMES = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']

# Day-of-week name/abbreviation to Sunday-first integer
DAY_MAP = {
    "sunday": 0,
    "sun": 0,
    "monday": 1,
    "mon": 1,
    "tuesday": 2,
    "tue": 2,
    "tues": 2,
    "wednesday": 3,
    "wed": 3,
    "thursday": 4,
    "thu": 4,
    "thur": 4,
    "thurs": 4,
    "friday": 5,
    "fri": 5,
    "saturday": 6,
    "sat": 6,
}


def day_of_week(d: _dt.date) -> int:
    """Return the Sunday-first day-of-week integer (0 = Sunday .. 6 = Saturday)."""
    return (d.weekday() + 1) % 7


def day_names(days: List[int]) -> List[str]:
    """Map day-of-week integers to abbreviations, skipping anything out of range.

    Examples:
        [1, 3, 5] -> ['Mon', 'Wed', 'Fri']
        [0, 9] -> ['Sun']
    """
    return [DAY_NAMES[d] for d in days if isinstance(d, int) and 0 <= d < len(DAY_NAMES)]


def parse_date(value: Any) -> _dt.date:
    """Parse a YYYY-MM-DD string (or a datetime/date) into a date.

    Raises:
        ValueError: if the value is not an ISO date.
    """
    if isinstance(value, _dt.datetime):
        return value.date()
    if isinstance(value, _dt.date):
        return value
    s = str(value or "").strip()
    if 'T' in s:
        s = s.split('T', 1)[0]
    return _dt.date.fromisoformat(s)
