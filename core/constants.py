"""Shared constants used across the scheduler packages.

Grid geometry and schedule markers live here so the evaluator, the CLI
and the tests agree on the same values.
"""

from __future__ import annotations

from typing import Tuple

# -----------------------------------------------------------------------------
# Weekly grid
# -----------------------------------------------------------------------------

DAYS_PER_WEEK = 7
SLOTS_PER_DAY = 24

# Hourly slot labels, "00:00" .. "23:00"
TIME_SLOTS: Tuple[str, ...] = tuple(f"{h:02d}:00" for h in range(SLOTS_PER_DAY))


# -----------------------------------------------------------------------------
# Schedule kinds and markers
# -----------------------------------------------------------------------------

SCHEDULE_DAILY = "daily"
SCHEDULE_WEEKLY = "weekly"
SCHEDULE_MONTHLY = "monthly"

REPEAT_ALWAYS = "always"
UNBOUNDED_MARK = "∞"


# -----------------------------------------------------------------------------
# CLI defaults
# -----------------------------------------------------------------------------

DEFAULT_SCHEDULES_PATH = "config/schedules.yaml"
