from __future__ import annotations

"""Point and vector math used by the stroke matcher.

Every function here is pure and works on sequences of :class:`Point`.
Coordinates are canonical character space unless a caller says otherwise.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Sequence

import numpy as np


@dataclass(frozen=True)
class Point:
    x: float
    y: float


def as_point(value: Any) -> Point:
    """Coerce a ``Point``, an ``(x, y)`` pair or an ``{"x", "y"}`` mapping."""
    if isinstance(value, Point):
        return value
    if isinstance(value, dict):
        return Point(float(value["x"]), float(value["y"]))
    x, y = value
    return Point(float(x), float(y))


def subtract(p1: Point, p2: Point) -> Point:
    return Point(p1.x - p2.x, p1.y - p2.y)


def magnitude(point: Point) -> float:
    return math.hypot(point.x, point.y)


def distance(p1: Point, p2: Point) -> float:
    return magnitude(subtract(p1, p2))


def equals(p1: Point, p2: Point) -> bool:
    return p1.x == p2.x and p1.y == p2.y


def length(points: Sequence[Point]) -> float:
    """Sum of the segment lengths of a polyline."""
    total = 0.0
    for prev, cur in zip(points, points[1:]):
        total += distance(prev, cur)
    return total


def cosine_similarity(v1: Point, v2: Point) -> float:
    """dot(v1, v2) / (|v1| |v2|), or 0 when either vector has no length."""
    denom = magnitude(v1) * magnitude(v2)
    if denom == 0:
        return 0.0
    return (v1.x * v2.x + v1.y * v2.y) / denom


def rotate(points: Sequence[Point], theta: float) -> List[Point]:
    """Rotate every point about the origin by ``theta`` radians."""
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return [Point(cos_t * p.x - sin_t * p.y, sin_t * p.x + cos_t * p.y) for p in points]


def outline_curve(curve: Sequence[Point], num_points: int = 30) -> List[Point]:
    """Resample ``curve`` to ``num_points`` points evenly spaced along its length."""
    if len(curve) < 2:
        return list(curve)
    cur_length = length(curve)
    if cur_length == 0:
        return [curve[0]]
    segment_len = cur_length / (num_points - 1)
    outline = [curve[0]]
    last = curve[0]
    remaining = list(curve[1:])
    for _ in range(num_points - 2):
        needed = segment_len
        while remaining:
            nxt = remaining[0]
            seg = distance(last, nxt)
            if seg < needed:
                needed -= seg
                last = nxt
                remaining.pop(0)
                continue
            ratio = needed / seg
            last = Point(last.x + ratio * (nxt.x - last.x), last.y + ratio * (nxt.y - last.y))
            outline.append(last)
            break
    outline.append(curve[-1])
    return outline


def subdivide_curve(curve: Sequence[Point], max_len: float = 0.05) -> List[Point]:
    """Insert points so that no segment is longer than ``max_len``."""
    if not curve:
        return []
    out = [curve[0]]
    for prev, cur in zip(curve, curve[1:]):
        seg = distance(prev, cur)
        if seg > max_len:
            pieces = int(math.ceil(seg / max_len))
            for k in range(1, pieces):
                t = k / pieces
                out.append(Point(prev.x + t * (cur.x - prev.x), prev.y + t * (cur.y - prev.y)))
        out.append(cur)
    return out


def normalize_curve(curve: Sequence[Point]) -> List[Point]:
    """Translate the curve to start at the origin and scale it to unit length.

    Only meaningful for comparing shapes; absolute position is discarded.
    """
    outlined = outline_curve(curve)
    if not outlined:
        return []
    origin = outlined[0]
    translated = [subtract(p, origin) for p in outlined]
    scale = length(translated)
    if scale == 0:
        return translated
    scaled = [Point(p.x / scale, p.y / scale) for p in translated]
    return subdivide_curve(scaled)


def frechet_dist(curve1: Sequence[Point], curve2: Sequence[Point]) -> float:
    """Discrete Fréchet distance between two point sequences.

    ``coupling[i, j]`` holds the smallest bottleneck distance of any monotone
    pairing from ``(0, 0)`` to ``(i, j)``.
    """
    if not curve1 or not curve2:
        return math.inf
    a = np.array([(p.x, p.y) for p in curve1], dtype=float)
    b = np.array([(p.x, p.y) for p in curve2], dtype=float)
    dists = np.hypot(a[:, None, 0] - b[None, :, 0], a[:, None, 1] - b[None, :, 1])

    coupling = np.empty_like(dists)
    coupling[:, 0] = np.maximum.accumulate(dists[:, 0])
    coupling[0, :] = np.maximum.accumulate(dists[0, :])
    rows, cols = dists.shape
    for i in range(1, rows):
        for j in range(1, cols):
            best_prev = min(coupling[i - 1, j], coupling[i - 1, j - 1], coupling[i, j - 1])
            coupling[i, j] = max(best_prev, dists[i, j])
    return float(coupling[-1, -1])
