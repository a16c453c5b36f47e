from __future__ import annotations

"""Character, reference stroke and user stroke models."""

from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Sequence, Tuple

from ..geometry.vectors import Point, distance, length, subtract


@dataclass(frozen=True)
class Stroke:
    """One reference stroke of a character.

    ``points`` are the stroke medians in canonical character space. Derived
    geometry is computed on first use and cached on the instance.
    """

    path: str
    points: Tuple[Point, ...]
    stroke_num: int
    is_in_radical: bool = False

    def get_starting_point(self) -> Point:
        return self.points[0]

    def get_ending_point(self) -> Point:
        return self.points[-1]

    @cached_property
    def _length(self) -> float:
        return length(self.points)

    @cached_property
    def _vectors(self) -> Tuple[Point, ...]:
        return tuple(subtract(cur, prev) for prev, cur in zip(self.points, self.points[1:]))

    def get_length(self) -> float:
        return self._length

    def get_vectors(self) -> List[Point]:
        return list(self._vectors)

    def get_distance(self, point: Point) -> float:
        # Nearest sample point, not nearest segment; matching thresholds are tuned for this.
        return min(distance(stroke_point, point) for stroke_point in self.points)

    def get_average_distance(self, points: Sequence[Point]) -> float:
        total = sum(self.get_distance(point) for point in points)
        return total / len(points)


@dataclass(frozen=True)
class Character:
    symbol: str
    strokes: Tuple[Stroke, ...]

    def __post_init__(self) -> None:
        for i, stroke in enumerate(self.strokes):
            if stroke.stroke_num != i:
                raise ValueError(f"stroke {i} of {self.symbol!r} has stroke_num {stroke.stroke_num}")

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)


@dataclass
class UserStroke:
    """A stroke being drawn. ``points`` and ``external_points`` stay index-aligned."""

    id: int
    points: List[Point] = field(default_factory=list)
    external_points: List[Point] = field(default_factory=list)

    def append_point(self, point: Point, external_point: Point) -> None:
        self.points.append(point)
        self.external_points.append(external_point)
