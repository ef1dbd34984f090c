"""Read schedule records from a YAML or JSON file.

Accepted shapes::

    schedules:
      - {id: 1, name: Nightly, is_active: true, schedule_type: daily, time_of_day: "02:00:00"}

or a bare top-level list of the same records.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Union

from core.cli_errors import ConfigError, NotFoundError
from core.yamlio import load_yaml

SCHEDULES_KEY = "schedules"


def load_schedule_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Return the raw schedule records stored at ``path``.

    Raises:
        NotFoundError: the file does not exist.
        ConfigError: the file is not a list of mappings (or a mapping with one).
    """
    p = Path(path)
    if not p.exists():
        raise NotFoundError(f"Schedules file not found: {p}", hint="Pass --schedules PATH")
    try:
        data = load_yaml(str(p))
    except RuntimeError:
        # missing PyYAML; not a problem with the file itself
        raise
    except Exception as exc:
        raise ConfigError(f"Failed to read schedules from {p}: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get(SCHEDULES_KEY)
        if data is None:
            return []
    if not isinstance(data, list):
        raise ConfigError(
            f"Invalid schedules file {p}: expected a list",
            hint=f"Use a top-level list or a '{SCHEDULES_KEY}:' key",
        )
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ConfigError(f"Invalid schedules file {p}: entry {i} is not a mapping")
    return data
