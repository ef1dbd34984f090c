"""Weekly calendar window: seven Sunday-first days by 24 hourly slots."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from core.constants import DAYS_PER_WEEK, TIME_SLOTS
from core.date_utils import day_of_week

Reference = Union[_dt.datetime, _dt.date]


@dataclass(frozen=True)
class CalendarWindow:
    week_start: _dt.datetime
    days: Tuple[_dt.date, ...]
    time_slots: Tuple[str, ...]
    today: _dt.date

    @property
    def today_index(self) -> Optional[int]:
        try:
            return self.days.index(self.today)
        except ValueError:
            return None

    def is_today(self, day_index: int) -> bool:
        return self.today_index == day_index

    def cells(self):
        """Yield every (day_index, date, time_slot) in row-major day order."""
        for day_index, d in enumerate(self.days):
            for slot in self.time_slots:
                yield day_index, d, slot


def build_calendar_window(reference: Reference) -> CalendarWindow:
    """Return the window for the week containing ``reference``.

    The week starts on the Sunday on or before the reference date, at
    midnight. Only the calendar date of ``reference`` is used, so any two
    instants on the same day produce equal windows. A timezone-aware
    reference keeps its own wall-clock date; nothing is converted.
    """
    if isinstance(reference, _dt.datetime):
        ref_date = reference.date()
    elif isinstance(reference, _dt.date):
        ref_date = reference
    else:
        raise TypeError(f"reference must be a date or datetime, got {type(reference).__name__}")

    start_date = ref_date - _dt.timedelta(days=day_of_week(ref_date))
    week_start = _dt.datetime(start_date.year, start_date.month, start_date.day)
    days = tuple(start_date + _dt.timedelta(days=i) for i in range(DAYS_PER_WEEK))
    return CalendarWindow(
        week_start=week_start,
        days=days,
        time_slots=TIME_SLOTS,
        today=ref_date,
    )
