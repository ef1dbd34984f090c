"""Schedule Grid CLI

Shows which recurring test-suite schedules fall on which hour of a week:
- ``week`` renders the Sunday-first 7 x 24 grid for the week of --date
- ``describe`` lists schedules newest first with a one-line summary

Schedules are read from a YAML/JSON file (a list of records, or a mapping
with a ``schedules:`` list). Nothing is executed or persisted.
"""
from __future__ import annotations

import argparse
import datetime as _dt
from pathlib import Path
from typing import List, Optional

from core.cli_errors import UsageError
from core.cli_framework import CLIApp
from core.constants import DEFAULT_SCHEDULES_PATH
from core.date_utils import parse_date
from core.pipeline import run_pipeline

from . import __version__
from .pipeline import (
    DescribeProcessor,
    DescribeProducer,
    DescribeRequest,
    WeekProcessor,
    WeekProducer,
    WeekRequest,
)


app = CLIApp(
    "schedule-grid",
    "Weekly calendar view of recurring test-suite schedules.",
    version=__version__,
)


def _reference_date(value: Optional[str]) -> _dt.date:
    # The CLI is the only place the wall clock is read
    if not value:
        return _dt.date.today()
    try:
        return parse_date(value)
    except ValueError as exc:
        raise UsageError(f"Invalid --date {value!r}; expected YYYY-MM-DD") from exc


@app.command("week", help="Show the weekly schedule grid")
@app.argument("--schedules", default=DEFAULT_SCHEDULES_PATH, help=f"Schedules YAML/JSON path (default {DEFAULT_SCHEDULES_PATH})")
@app.argument("--date", help="Any date in the week to show, YYYY-MM-DD (default today)")
@app.argument("--include-inactive", action="store_true", help="Count paused schedules in the summary (they never occupy cells)")
@app.argument("--out", help="Write the week as YAML to this path instead of printing")
def cmd_week(args: argparse.Namespace) -> int:
    request = WeekRequest(
        schedules_path=Path(getattr(args, "schedules")),
        reference=_reference_date(getattr(args, "date", None)),
        include_inactive=bool(getattr(args, "include_inactive", False)),
        out_path=Path(args.out) if getattr(args, "out", None) else None,
    )
    return run_pipeline(request, WeekProcessor(), WeekProducer(args._output))


@app.command("describe", help="List schedules with their recurrence summary")
@app.argument("--schedules", default=DEFAULT_SCHEDULES_PATH, help=f"Schedules YAML/JSON path (default {DEFAULT_SCHEDULES_PATH})")
def cmd_describe(args: argparse.Namespace) -> int:
    request = DescribeRequest(schedules_path=Path(getattr(args, "schedules")))
    return run_pipeline(request, DescribeProcessor(), DescribeProducer(args._output))


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI."""
    return app.run(argv)


if __name__ == "__main__":
    raise SystemExit(main())
