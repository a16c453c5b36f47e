"""Shared character fixtures for the test suite."""

from __future__ import annotations

from typing import List

from hanziquiz.geometry.vectors import Point
from hanziquiz.positioner import Positioner

# Stroke 0: left-to-right across the middle. Stroke 1: top-to-bottom (y-up space).
HORIZONTAL = [[100, 500], [300, 500], [500, 500], [700, 500], [900, 500]]
VERTICAL = [[500, 800], [500, 600], [500, 400], [500, 200], [500, 0]]
# A second horizontal 200 units below the first
LOW_HORIZONTAL = [[100, 300], [300, 300], [500, 300], [700, 300], [900, 300]]

CROSS_JSON = {
    "strokes": ["M 100 500 L 900 500", "M 500 800 L 500 0"],
    "medians": [HORIZONTAL, VERTICAL],
    "radStrokes": [1],
}

TWO_BARS_JSON = {
    "strokes": ["M 100 500 L 900 500", "M 100 300 L 900 300"],
    "medians": [HORIZONTAL, LOW_HORIZONTAL],
}

# Far below the character box; nowhere near either stroke
FAR_AWAY = [[0, -100], [250, -100], [500, -100], [750, -100], [1000, -100]]


def points(raw) -> List[Point]:
    return [Point(float(x), float(y)) for x, y in raw]


def to_surface(raw, positioner: Positioner = None) -> List[List[float]]:
    """Canonical medians → drawing-surface coordinates."""
    positioner = positioner or Positioner()
    out = []
    for p in points(raw):
        q = positioner.convert_internal_point(p)
        out.append([q.x, q.y])
    return out
