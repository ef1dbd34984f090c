"""Shared YAML read/write helpers for the schedule grid CLI."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

__all__ = ["load_yaml", "dump_yaml"]


def _require_yaml():
    try:
        import yaml  # type: ignore

        return yaml
    except ImportError as exc:  # pragma: no cover - runtime guard
        raise RuntimeError("PyYAML not installed. Run: pip install pyyaml") from exc


def load_yaml(path: Optional[str]) -> Any:
    """Load a YAML (or JSON) file; returns None if missing or empty.

    The root is returned as parsed, so callers decide whether a list or a
    mapping is acceptable.
    """
    if not path:
        return None
    yaml = _require_yaml()
    p = Path(path)
    if not p.exists():
        return None
    text = p.read_text(encoding="utf-8")
    if not text.strip():
        return None
    return yaml.safe_load(text)


def dump_yaml(path: str, data: Any) -> None:
    """Write data to YAML with stable ordering for humans."""
    yaml = _require_yaml()
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8"
    )
