from __future__ import annotations

"""SVG path strings for drawn points (event payloads only)."""

from typing import Sequence

from .vectors import Point


def _round(value: float, precision: int = 1) -> float:
    multiplier = precision * 10
    return round(multiplier * value) / multiplier


def _fmt(value: float) -> str:
    rounded = _round(value)
    if rounded == int(rounded):
        return str(int(rounded))
    return str(rounded)


def get_path_string(points: Sequence[Point], close: bool = False) -> str:
    if not points:
        return ""
    start = points[0]
    parts = [f"M {_fmt(start.x)} {_fmt(start.y)}"]
    for point in points[1:]:
        parts.append(f"L {_fmt(point.x)} {_fmt(point.y)}")
    path = " ".join(parts)
    if close:
        path += "Z"
    return path
