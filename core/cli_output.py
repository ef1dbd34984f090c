"""CLI output formatting utilities.

Provides consistent output formatting for the schedule grid CLI.
Supports text, JSON, YAML, and table formats.
"""
from __future__ import annotations

import datetime as _dt
import json
import sys
from dataclasses import dataclass, asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, TextIO

from .yamlio import _require_yaml


class OutputFormat(str, Enum):
    """Output format options."""
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: OutputFormat = OutputFormat.TEXT
    quiet: bool = False
    file: Optional[TextIO] = None

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self.file or sys.stdout


class OutputWriter:
    """Handles formatted output for CLI commands."""

    def __init__(self, config: Optional[OutputConfig] = None):
        self.config = config or OutputConfig()

    @property
    def format(self) -> OutputFormat:
        return self.config.format

    def print(self, *args, **kwargs) -> None:
        """Print to the configured output stream."""
        if self.config.quiet:
            return
        kwargs.setdefault("file", self.config.stream)
        print(*args, **kwargs)

    def print_data(self, data: Any, headers: Optional[List[str]] = None) -> None:
        """Print data in the configured format.

        Args:
            data: Data to print (dict, list, dataclass, or any serializable object).
            headers: Optional column headers for table format.
        """
        fmt = self.config.format

        if fmt == OutputFormat.JSON:
            self._print_json(data)
        elif fmt == OutputFormat.YAML:
            self._print_yaml(data)
        elif fmt == OutputFormat.TABLE:
            self.print_table(data, headers)
        else:
            self._print_text(data)

    def print_dict(self, data: Dict[str, Any], *, separator: str = ": ", indent: int = 0) -> None:
        prefix = " " * indent
        for key, value in data.items():
            self.print(f"{prefix}{key}{separator}{value}")

    def _print_json(self, data: Any) -> None:
        normalized = normalize_for_output(data)
        self.print(json.dumps(normalized, indent=2, ensure_ascii=False))

    def _print_yaml(self, data: Any) -> None:
        yaml = _require_yaml()
        normalized = normalize_for_output(data)
        self.print(yaml.safe_dump(normalized, default_flow_style=False, sort_keys=False, allow_unicode=True))

    def _row_to_strings(self, row: Any, headers: Optional[List[str]] = None) -> List[str]:
        if isinstance(row, dict):
            return [str(row.get(h, "")) for h in headers] if headers else [str(v) for v in row.values()]
        if isinstance(row, (list, tuple)):
            return [str(v) for v in row]
        return [str(row)]

    def _calculate_column_widths(self, headers: List[str], str_rows: List[List[str]]) -> List[int]:
        widths = [len(h) for h in headers]
        for str_row in str_rows:
            for i, val in enumerate(str_row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(val))
        return widths

    def print_table(self, data: Any, headers: Optional[List[str]] = None) -> None:
        """Print data as a table."""
        rows = self._to_rows(data)
        if not rows:
            return

        # Determine headers from first row if not provided
        if headers is None and isinstance(rows[0], dict):
            headers = list(rows[0].keys())

        if not headers:
            for row in rows:
                self.print(" | ".join(self._row_to_strings(row)))
            return

        str_rows = [self._row_to_strings(row, headers) for row in rows]
        widths = self._calculate_column_widths(headers, str_rows)

        header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
        self.print(header_line)
        self.print("-" * len(header_line))
        for str_row in str_rows:
            padded = [str_row[i].ljust(widths[i]) if i < len(widths) else str_row[i]
                      for i in range(len(str_row))]
            self.print(" | ".join(padded).rstrip())

    def _print_text(self, data: Any) -> None:
        if isinstance(data, str):
            self.print(data)
        elif isinstance(data, dict):
            self.print_dict(data)
        elif isinstance(data, (list, tuple)):
            for item in data:
                self.print(item)
        elif is_dataclass(data) and not isinstance(data, type):
            self.print_dict(asdict(data))
        else:
            self.print(str(data))

    def _to_rows(self, data: Any) -> List[Any]:
        if isinstance(data, (list, tuple)):
            return list(data)
        if isinstance(data, dict):
            return [data]
        if is_dataclass(data) and not isinstance(data, type):
            return [asdict(data)]
        return [data]


def normalize_for_output(data: Any) -> Any:
    """Normalize data for JSON/YAML serialization.

    Dataclasses become dicts, sets become sorted lists, dates become ISO strings.
    """
    if is_dataclass(data) and not isinstance(data, type):
        return normalize_for_output(asdict(data))
    if isinstance(data, dict):
        return {str(k): normalize_for_output(v) for k, v in data.items()}
    if isinstance(data, (set, frozenset)):
        return [normalize_for_output(v) for v in sorted(data)]
    if isinstance(data, (list, tuple)):
        return [normalize_for_output(v) for v in data]
    if isinstance(data, Enum):
        return data.value
    if isinstance(data, (_dt.date, _dt.datetime)):
        return data.isoformat()
    return data
