"""Schedule grid pipeline components."""
from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from core.cli_output import OutputFormat, OutputWriter
from core.constants import UNBOUNDED_MARK
from core.date_utils import DAY_NAMES, day_of_week
from core.pipeline import BaseProducer, SafeProcessor
from core.yamlio import dump_yaml

from .describe import cell_entries, schedule_row
from .evaluator import Grid, evaluate
from .model import Schedule, normalize_schedules, sort_newest_first
from .store import load_schedule_records
from .window import CalendarWindow, build_calendar_window

logger = logging.getLogger(__name__)

RecordLoader = Callable[[Path], List[Dict[str, Any]]]


def _load_schedules(loader: RecordLoader, path: Path) -> List[Schedule]:
    records = loader(path)
    schedules = sort_newest_first(normalize_schedules(records))
    logger.debug("loaded %d schedules from %s", len(schedules), path)
    return schedules


@dataclass
class WeekRequest:
    schedules_path: Path
    reference: _dt.date
    include_inactive: bool = False
    out_path: Optional[Path] = None


@dataclass
class WeekResult:
    window: CalendarWindow
    schedules: List[Schedule]
    grid: Grid
    out_path: Optional[Path] = None


class WeekProcessor(SafeProcessor[WeekRequest, WeekResult]):
    """Load schedules and place them on the week containing the reference date."""

    def __init__(self, loader: RecordLoader = load_schedule_records) -> None:
        self._loader = loader

    def _process_safe(self, payload: WeekRequest) -> WeekResult:
        schedules = _load_schedules(self._loader, payload.schedules_path)
        if not payload.include_inactive:
            # Inactive schedules never match; dropping them only trims the listing
            schedules = [s for s in schedules if s.is_active]
        window = build_calendar_window(payload.reference)
        grid = evaluate(schedules, window)
        return WeekResult(window=window, schedules=schedules, grid=grid, out_path=payload.out_path)


def _day_header(window: CalendarWindow, day_index: int) -> str:
    d = window.days[day_index]
    head = f"{DAY_NAMES[day_of_week(d)]} {d.day}"
    return f"*{head}" if window.is_today(day_index) else head


def _cell_text(cell: List[Schedule]) -> str:
    return ", ".join(
        f"{s.label} {UNBOUNDED_MARK}" if s.is_unbounded else s.label for s in cell
    )


def week_document(result: WeekResult) -> Dict[str, Any]:
    """Serializable form of a week: one entry per day with its occupied slots."""
    window = result.window
    days: List[Dict[str, Any]] = []
    for day_index, d in enumerate(window.days):
        slots = {
            slot: cell_entries(result.grid[(day_index, slot)])
            for slot in window.time_slots
            if result.grid[(day_index, slot)]
        }
        days.append({
            "index": day_index,
            "date": d.isoformat(),
            "day": DAY_NAMES[day_of_week(d)],
            "today": window.is_today(day_index),
            "slots": slots,
        })
    return {
        "week_start": window.week_start.isoformat(),
        "time_slots": list(window.time_slots),
        "days": days,
    }


def week_rows(result: WeekResult, *, compact: bool = True) -> List[Dict[str, str]]:
    """Table rows: one per time slot, one column per day."""
    window = result.window
    headers = ["Time"] + [_day_header(window, i) for i in range(len(window.days))]
    rows: List[Dict[str, str]] = []
    for slot in window.time_slots:
        cells = [_cell_text(result.grid[(i, slot)]) for i in range(len(window.days))]
        if compact and not any(cells):
            continue
        rows.append(dict(zip(headers, [slot] + cells)))
    return rows


class WeekProducer(BaseProducer):
    """Print the weekly grid in the requested format."""

    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self._out = writer or OutputWriter()

    def _produce_success(self, payload: WeekResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if payload.out_path is not None:
            dump_yaml(str(payload.out_path), week_document(payload))
            self._out.print(f"Wrote week of {payload.window.days[0].isoformat()} to {payload.out_path}")
            return

        fmt = self._out.format
        if fmt in (OutputFormat.JSON, OutputFormat.YAML):
            self._out.print_data(week_document(payload))
            return

        window = payload.window
        headers = ["Time"] + [_day_header(window, i) for i in range(len(window.days))]
        self._out.print(f"Week of {window.days[0].isoformat()} ({len(payload.schedules)} schedules)")
        rows = week_rows(payload, compact=fmt != OutputFormat.TABLE)
        if not rows:
            self._out.print("No scheduled runs this week.")
            return
        # Text and table both render as a table; text skips empty hours
        self._out.print_table(rows, headers)


@dataclass
class DescribeRequest:
    schedules_path: Path


@dataclass
class DescribeResult:
    rows: List[Dict[str, Any]]


class DescribeProcessor(SafeProcessor[DescribeRequest, DescribeResult]):
    """List schedules newest first with a one-line recurrence summary."""

    def __init__(self, loader: RecordLoader = load_schedule_records) -> None:
        self._loader = loader

    def _process_safe(self, payload: DescribeRequest) -> DescribeResult:
        schedules = _load_schedules(self._loader, payload.schedules_path)
        return DescribeResult(rows=[schedule_row(s) for s in schedules])


class DescribeProducer(BaseProducer):
    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self._out = writer or OutputWriter()

    def _produce_success(self, payload: DescribeResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        if not payload.rows:
            self._out.print("No schedules yet.")
            return
        if self._out.format != OutputFormat.TEXT:
            self._out.print_data(payload.rows)
            return
        for row in payload.rows:
            title = row["name"] or str(row["id"])
            if row["suite"]:
                title = f"{title} ({row['suite']})"
            mark = f" {UNBOUNDED_MARK}" if row["unbounded"] else ""
            self._out.print(f"[{row['status']}] {title}: {row['when']}{mark}")
            if row["timezone"]:
                self._out.print(f"    Timezone: {row['timezone']}")
            if row["next_run"]:
                self._out.print(f"    Next run: {row['next_run']}")
            if row["last_run"]:
                self._out.print(f"    Last run: {row['last_run']}")
