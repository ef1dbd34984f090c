"""Recurrence evaluation against the weekly grid.

Everything here is pure: no clock reads, no I/O, no shared state, and no
exceptions for malformed schedules. A schedule that cannot be parsed
simply never occupies a cell.
"""
from __future__ import annotations

import datetime as _dt
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from core.date_utils import day_of_week

from .model import DailyRule, MonthlyRule, Schedule, WeeklyRule
from .window import CalendarWindow

logger = logging.getLogger(__name__)

Cell = Tuple[int, str]
Grid = Dict[Cell, List[Schedule]]


def _parse_hhmm(text: str) -> Optional[Tuple[int, int]]:
    parts = text.split(":")
    if len(parts) < 2:
        return None
    hour, minute = parts[0].strip(), parts[1].strip()
    # plain ASCII digits only; int() would also take "1_0", signs and non-ASCII digits
    if not all(p.isascii() and p.isdigit() for p in (hour, minute)):
        return None
    return int(hour), int(minute)


def parse_time_of_day(text: Optional[str]) -> Optional[Tuple[int, int]]:
    """Hour and minute of a stored time, truncated to ``HH:MM``.

    Examples:
        '09:30:00' -> (9, 30)
        '14:00' -> (14, 0)
        'noon' -> None
    """
    if not isinstance(text, str):
        return None
    return _parse_hhmm(text[:5])


def parse_slot(label: Optional[str]) -> Optional[Tuple[int, int]]:
    """Hour and minute of a grid slot label such as ``'08:00'``."""
    if not isinstance(label, str):
        return None
    return _parse_hhmm(label)


def matches_cell(schedule: Schedule, date: _dt.date, time_slot: str) -> bool:
    """True when an active schedule fires on ``date`` at exactly ``time_slot``."""
    if not schedule.is_active:
        return False

    slot = parse_slot(time_slot)
    at = parse_time_of_day(schedule.time_of_day)
    if slot is None or at is None or slot != at:
        return False

    rule = schedule.rule
    if isinstance(rule, DailyRule):
        return True
    if isinstance(rule, WeeklyRule):
        return day_of_week(date) in rule.days
    if isinstance(rule, MonthlyRule):
        # Day 31 never fires in shorter months; there is no rollover
        return rule.day is not None and date.day == rule.day
    return False


def schedules_for_cell(
    schedules: Sequence[Schedule],
    window: CalendarWindow,
    day_index: int,
    time_slot: str,
) -> List[Schedule]:
    """Schedules occupying one cell, in input order."""
    if not 0 <= day_index < len(window.days):
        return []
    date = window.days[day_index]
    return [s for s in schedules if matches_cell(s, date, time_slot)]


def evaluate(schedules: Sequence[Schedule], window: CalendarWindow) -> Grid:
    """Map every (day_index, time_slot) of ``window`` to its matching schedules.

    All cells are present, empty ones included. Within a cell schedules keep
    the relative order of ``schedules``.
    """
    snapshot = tuple(schedules)
    grid: Grid = {}
    placed = 0
    for day_index, date, slot in window.cells():
        matched = [s for s in snapshot if matches_cell(s, date, slot)]
        grid[(day_index, slot)] = matched
        placed += len(matched)
    logger.debug(
        "evaluated %d schedules over week of %s: %d placements",
        len(snapshot),
        window.days[0].isoformat(),
        placed,
    )
    return grid
