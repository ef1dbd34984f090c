"""Schedule records and their recurrence rules.

Storage hands us loose dicts keyed by a ``schedule_type`` discriminator
with optional ``days_of_week`` / ``day_of_month`` fields. Here they are
coerced into a ``Schedule`` whose ``rule`` carries only the field its
kind needs. Anything unrecognized degrades to a schedule that never
matches instead of raising.
"""
from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from core.constants import (
    REPEAT_ALWAYS,
    SCHEDULE_DAILY,
    SCHEDULE_MONTHLY,
    SCHEDULE_WEEKLY,
)
from core.date_utils import DAY_MAP

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyRule:
    kind = SCHEDULE_DAILY


@dataclass(frozen=True)
class WeeklyRule:
    days: FrozenSet[int] = frozenset()  # 0 = Sunday .. 6 = Saturday
    kind = SCHEDULE_WEEKLY


@dataclass(frozen=True)
class MonthlyRule:
    day: Optional[int] = None  # 1..31; None never matches
    kind = SCHEDULE_MONTHLY


Rule = Union[DailyRule, WeeklyRule, MonthlyRule]


@dataclass(frozen=True)
class Schedule:
    """A recurring trigger definition as shown on the weekly grid."""

    id: Any
    name: str = ""
    is_active: bool = False
    rule: Optional[Rule] = None
    time_of_day: str = ""
    repeat_type: Optional[str] = None
    suite_name: Optional[str] = None
    created_at: Optional[str] = None
    timezone: Optional[str] = None
    next_run_at: Optional[str] = None
    last_run_at: Optional[str] = None
    # Weekday order as stored, for descriptions ("Wed, Mon")
    days_order: Tuple[int, ...] = ()

    @property
    def schedule_type(self) -> Optional[str]:
        return self.rule.kind if self.rule is not None else None

    @property
    def label(self) -> str:
        """Associated suite name when known, otherwise the schedule's own name."""
        return self.suite_name or self.name

    @property
    def is_unbounded(self) -> bool:
        return self.repeat_type == REPEAT_ALWAYS


def _coerce_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s if s else None


def _coerce_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    if isinstance(v, str):
        return v.strip().lower() in ("true", "yes", "on", "1", "active")
    return False


def _coerce_int(v: Any) -> Optional[int]:
    """Integer from an int or a digit string; bools and floats with fractions are rejected."""
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if v.is_integer() else None
    if isinstance(v, str):
        s = v.strip()
        if s.lstrip("-").isdigit():
            return int(s)
    return None


def _coerce_weekday(v: Any) -> Optional[int]:
    if isinstance(v, str) and v.strip().lower() in DAY_MAP:
        return DAY_MAP[v.strip().lower()]
    d = _coerce_int(v)
    if d is None or not 0 <= d <= 6:
        return None
    return d


def _normalize_days_of_week(v: Any) -> Tuple[int, ...]:
    if v is None:
        return ()
    if isinstance(v, (str, int)):
        v = [v]
    if not isinstance(v, (list, tuple, set, frozenset)):
        logger.debug("days_of_week of type %s ignored", type(v).__name__)
        return ()
    out: List[int] = []
    for raw in v:
        d = _coerce_weekday(raw)
        if d is None:
            logger.debug("dropping invalid weekday %r", raw)
            continue
        if d not in out:
            out.append(d)
    return tuple(out)


def _normalize_day_of_month(v: Any) -> Optional[int]:
    d = _coerce_int(v)
    if d is None or not 1 <= d <= 31:
        if v is not None:
            logger.debug("invalid day_of_month %r", v)
        return None
    return d


def _suite_name(record: Mapping[str, Any]) -> Optional[str]:
    for key in ("test_suites", "test_suite"):
        suite = record.get(key)
        if isinstance(suite, Mapping):
            name = _coerce_str(suite.get("name"))
            if name:
                return name
    return _coerce_str(record.get("suite_name"))


def _build_rule(kind: Optional[str], days: Tuple[int, ...], day_of_month: Optional[int]) -> Optional[Rule]:
    if kind == SCHEDULE_DAILY:
        return DailyRule()
    if kind == SCHEDULE_WEEKLY:
        return WeeklyRule(days=frozenset(days))
    if kind == SCHEDULE_MONTHLY:
        return MonthlyRule(day=day_of_month)
    return None


def normalize_schedule(record: Mapping[str, Any]) -> Schedule:
    """Return a ``Schedule`` for one storage record.

    Accepted keys:
      - id, name, is_active
      - schedule_type (alias: frequency): 'daily' | 'weekly' | 'monthly'
      - time_of_day: 'HH:MM' or 'HH:MM:SS'
      - days_of_week: list of 0..6 (0 = Sunday) or day names, weekly only
      - day_of_month: 1..31, monthly only
      - repeat_type: e.g. 'always'
      - test_suites / test_suite: {name: ...}, or suite_name
      - created_at, timezone
      - next_run_at, last_run_at: display only, never used for matching

    Raises:
        ValueError: if the record is not a mapping.
    """
    if not isinstance(record, Mapping):
        raise ValueError(f"Schedule record must be a mapping, got {type(record).__name__}")

    kind_raw = _coerce_str(record.get("schedule_type") or record.get("frequency"))
    kind = kind_raw.lower() if kind_raw else None
    days = _normalize_days_of_week(record.get("days_of_week")) if kind == SCHEDULE_WEEKLY else ()
    day_of_month = _normalize_day_of_month(record.get("day_of_month")) if kind == SCHEDULE_MONTHLY else None
    rule = _build_rule(kind, days, day_of_month)
    if rule is None:
        logger.debug("schedule %r has unsupported type %r", record.get("id"), kind_raw)

    repeat_type = _coerce_str(record.get("repeat_type"))
    return Schedule(
        id=record.get("id"),
        name=_coerce_str(record.get("name")) or "",
        is_active=_coerce_bool(record.get("is_active")),
        rule=rule,
        time_of_day=_coerce_str(record.get("time_of_day")) or "",
        repeat_type=repeat_type.lower() if repeat_type else None,
        suite_name=_suite_name(record),
        created_at=_coerce_str(record.get("created_at")),
        timezone=_coerce_str(record.get("timezone")),
        next_run_at=_coerce_str(record.get("next_run_at")),
        last_run_at=_coerce_str(record.get("last_run_at")),
        days_order=days,
    )


def normalize_schedules(records: Iterable[Mapping[str, Any]]) -> List[Schedule]:
    return [normalize_schedule(r) for r in records]


def parse_created_at(value: Optional[str]) -> Optional[_dt.datetime]:
    """Aware datetime for an ISO ``created_at``; naive values are taken as UTC.

    Examples:
        '2024-01-01T12:00:00+05:00' -> 2024-01-01 07:00 UTC
        '2024-01-01T09:00:00Z' -> 2024-01-01 09:00 UTC
        '2024-01-01' -> 2024-01-01 00:00 UTC
        'yesterday' -> None
    """
    if not value:
        return None
    s = value.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        parsed = _dt.datetime.fromisoformat(s)
    except ValueError:
        logger.debug("unparseable created_at %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_dt.timezone.utc)
    return parsed


def sort_newest_first(schedules: Iterable[Schedule]) -> List[Schedule]:
    """Order by ``created_at`` instant descending.

    Schedules without a parseable timestamp go last; ties keep input order.
    """
    keyed = [(s, parse_created_at(s.created_at)) for s in schedules]
    dated = [pair for pair in keyed if pair[1] is not None]
    undated = [s for s, at in keyed if at is None]
    dated.sort(key=lambda pair: pair[1], reverse=True)
    return [s for s, _ in dated] + undated
