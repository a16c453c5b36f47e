from __future__ import annotations

"""Explain Mode: one-line traces at quiz milestones.

Turned on by ``--explain`` or ``explain: true`` in the config. Points in a
payload are printed as rounded ``[x, y]`` pairs so traces stay short.
"""

import json
from typing import Any, Dict

from ..geometry.vectors import Point

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def _compact(value: Any) -> Any:
    if isinstance(value, Point):
        return [round(value.x, 1), round(value.y, 1)]
    return str(value)


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    try:
        line = json.dumps(payload or {}, separators=(",", ":"), ensure_ascii=False, default=_compact)
    except (TypeError, ValueError):
        line = "{}"
    print(f"[EXPLAIN] {event} :: {line}")
