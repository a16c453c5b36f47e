from __future__ import annotations

"""Polyline simplification: radial distance pass followed by Ramer-Douglas-Peucker."""

from typing import List, Optional, Sequence

from .vectors import Point


def _sq_dist(p1: Point, p2: Point) -> float:
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return dx * dx + dy * dy


def _sq_seg_dist(p: Point, p1: Point, p2: Point) -> float:
    """Squared distance from ``p`` to the segment ``p1``-``p2``."""
    x, y = p1.x, p1.y
    dx = p2.x - x
    dy = p2.y - y

    if dx != 0 or dy != 0:
        t = ((p.x - x) * dx + (p.y - y) * dy) / (dx * dx + dy * dy)
        if t > 1:
            x, y = p2.x, p2.y
        elif t > 0:
            x += dx * t
            y += dy * t

    dx = p.x - x
    dy = p.y - y
    return dx * dx + dy * dy


def simplify_radial_dist(points: Sequence[Point], sq_tolerance: float) -> List[Point]:
    prev = points[0]
    kept = [prev]
    point: Optional[Point] = None
    for point in points[1:]:
        if _sq_dist(point, prev) > sq_tolerance:
            kept.append(point)
            prev = point
    if point is not None and prev is not point:
        kept.append(point)
    return kept


def _simplify_dp_step(
    points: Sequence[Point], first: int, last: int, sq_tolerance: float, simplified: List[Point]
) -> None:
    max_sq_dist = sq_tolerance
    index: Optional[int] = None

    for i in range(first + 1, last):
        sq_dist = _sq_seg_dist(points[i], points[first], points[last])
        if sq_dist > max_sq_dist:
            index = i
            max_sq_dist = sq_dist

    if index is not None and max_sq_dist > sq_tolerance:
        if index - first > 1:
            _simplify_dp_step(points, first, index, sq_tolerance, simplified)
        simplified.append(points[index])
        if last - index > 1:
            _simplify_dp_step(points, index, last, sq_tolerance, simplified)


def simplify_douglas_peucker(points: Sequence[Point], sq_tolerance: float) -> List[Point]:
    last = len(points) - 1
    simplified = [points[0]]
    _simplify_dp_step(points, 0, last, sq_tolerance, simplified)
    simplified.append(points[last])
    return simplified


def simplify(points: Sequence[Point], tolerance: Optional[float] = 1.0, highest_quality: bool = False) -> List[Point]:
    """Reduce the number of points in a polyline.

    Inputs with two points or fewer come back unchanged. The first and last
    points are always kept and the input order is preserved.

    Args:
        points: Polyline to simplify.
        tolerance: Distance below which points are dropped. ``None`` means 1.
        highest_quality: Skip the radial distance pre-pass.
    """
    if len(points) <= 2:
        return list(points)

    sq_tolerance = tolerance * tolerance if tolerance is not None else 1.0

    pts = list(points) if highest_quality else simplify_radial_dist(points, sq_tolerance)
    return simplify_douglas_peucker(pts, sq_tolerance)
