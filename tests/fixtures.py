"""Shared test fixtures and utilities.

Common schedule records, YAML helpers and output capture used across the
scheduler test suite.
"""

from __future__ import annotations

import datetime as dt
import io
import os
import tempfile
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List

REPO_ROOT = Path(__file__).resolve().parents[1]

# Sunday 2024-01-07 .. Saturday 2024-01-13
WEEK_OF_JAN_7 = dt.date(2024, 1, 7)
TUESDAY_JAN_9 = dt.date(2024, 1, 9)
# Sunday 2024-04-14 .. Saturday 2024-04-20, all inside 30-day April
WEEK_IN_APRIL = dt.date(2024, 4, 14)


# -----------------------------------------------------------------------------
# Schedule records
# -----------------------------------------------------------------------------


def record(**overrides: Any) -> Dict[str, Any]:
    """A storage-shaped schedule record; active daily 09:00 unless overridden."""
    base: Dict[str, Any] = {
        "id": 1,
        "name": "Smoke",
        "is_active": True,
        "schedule_type": "daily",
        "time_of_day": "09:00:00",
        "days_of_week": None,
        "day_of_month": None,
        "repeat_type": None,
    }
    base.update(overrides)
    return base


def occupied(grid: Dict[Any, List[Any]]) -> Dict[Any, List[Any]]:
    """Only the non-empty cells of an evaluated grid."""
    return {k: v for k, v in grid.items() if v}


def ids(schedules: Iterable[Any]) -> List[Any]:
    return [s.id for s in schedules]


# -----------------------------------------------------------------------------
# YAML helpers
# -----------------------------------------------------------------------------


def write_yaml(data: Any, dir: str, filename: str = "schedules.yaml") -> str:
    """Write data to a YAML file under ``dir``, return the path."""
    import yaml

    p = os.path.join(dir, filename)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return p


@contextmanager
def temp_yaml_file(data: Any, filename: str = "schedules.yaml") -> Iterator[str]:
    """Context manager that yields a path to a temporary YAML file."""
    with tempfile.TemporaryDirectory() as td:
        yield write_yaml(data, td, filename)


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_output():
    """Capture stdout and stderr; yields (out, err) buffers."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        yield out, err
