"""Human-readable schedule summaries and renderer-facing cell entries."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from core.date_utils import day_names

from .model import DailyRule, MonthlyRule, Schedule, WeeklyRule

NOT_SET = "Not set"


def short_time(schedule: Schedule) -> str:
    return (schedule.time_of_day or "")[:5]


def describe_schedule(schedule: Schedule) -> str:
    """One-line summary, e.g. 'Weekly on Mon, Wed at 08:00'."""
    time = short_time(schedule)
    rule = schedule.rule
    if isinstance(rule, DailyRule):
        return f"Daily at {time}"
    if isinstance(rule, WeeklyRule):
        names = day_names(list(schedule.days_order or sorted(rule.days)))
        return f"Weekly on {', '.join(names) if names else NOT_SET} at {time}"
    if isinstance(rule, MonthlyRule):
        return f"Monthly on day {rule.day or NOT_SET} at {time}"
    return "Not configured"


def cell_entry(schedule: Schedule) -> Dict[str, Any]:
    return {
        "id": schedule.id,
        "label": schedule.label,
        "unbounded": schedule.is_unbounded,
    }


def cell_entries(cell: Sequence[Schedule]) -> List[Dict[str, Any]]:
    return [cell_entry(s) for s in cell]


def schedule_row(schedule: Schedule) -> Dict[str, Any]:
    """Listing row for the describe command."""
    return {
        "id": schedule.id,
        "name": schedule.name,
        "suite": schedule.suite_name or "",
        "status": "Active" if schedule.is_active else "Paused",
        "when": describe_schedule(schedule),
        "unbounded": schedule.is_unbounded,
        "timezone": schedule.timezone or "",
        # paused schedules show no next run
        "next_run": (schedule.next_run_at or "") if schedule.is_active else "",
        "last_run": schedule.last_run_at or "",
    }
