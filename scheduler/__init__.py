"""Recurring schedule evaluation for a weekly calendar grid."""
from __future__ import annotations

from .describe import cell_entries, describe_schedule
from .evaluator import evaluate, matches_cell, parse_slot, parse_time_of_day, schedules_for_cell
from .model import (
    DailyRule,
    MonthlyRule,
    Schedule,
    WeeklyRule,
    normalize_schedule,
    normalize_schedules,
    sort_newest_first,
)
from .window import CalendarWindow, build_calendar_window

__version__ = "0.1.0"

__all__ = [
    "CalendarWindow",
    "DailyRule",
    "MonthlyRule",
    "Schedule",
    "WeeklyRule",
    "build_calendar_window",
    "cell_entries",
    "describe_schedule",
    "evaluate",
    "matches_cell",
    "normalize_schedule",
    "normalize_schedules",
    "parse_slot",
    "parse_time_of_day",
    "schedules_for_cell",
    "sort_newest_first",
]
