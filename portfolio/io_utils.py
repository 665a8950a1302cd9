"""Stable JSON files and stderr messages shared by the CLI commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any


def stable_json_dumps(obj: object) -> str:
    """Sorted keys, two-space indent and a trailing newline, so reruns diff cleanly."""
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_json_stable(path: Path, data: Any) -> Path:
    """Write ``data`` to ``path`` in the stable layout, creating parent folders."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stable_json_dumps(data), encoding="utf-8")
    return path


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)


__all__ = ["stable_json_dumps", "warn", "write_json_stable"]
