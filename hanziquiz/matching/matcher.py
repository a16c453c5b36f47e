from __future__ import annotations

"""Stroke matcher: decides whether a drawn stroke is the expected one.

A candidate passes only if it is close to the reference stroke on average,
starts and ends near it, points the same way, has a similar shape and is not
much shorter. If a later, not yet drawn stroke fits the candidate better, the
target stroke is re-graded with reduced leniency.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..character.models import Character, Stroke, UserStroke
from ..geometry.vectors import (
    Point,
    cosine_similarity,
    distance,
    equals,
    frechet_dist,
    length,
    normalize_curve,
    rotate,
    subtract,
)
from .thresholds import DEFAULT_THRESHOLDS, MatchThresholds

SHAPE_FIT_ROTATIONS = (
    math.pi / 16,
    math.pi / 32,
    0.0,
    -math.pi / 32,
    -math.pi / 16,
)

# Added to both lengths so very short strokes don't blow up the ratio
LENGTH_PADDING = 25


@dataclass(frozen=True)
class StrokeMatchMeta:
    is_stroke_backwards: bool = False


@dataclass(frozen=True)
class StrokeMatchResult:
    is_match: bool
    meta: StrokeMatchMeta = field(default_factory=StrokeMatchMeta)


@dataclass(frozen=True)
class MatchData:
    is_match: bool
    avg_dist: float
    meta: StrokeMatchMeta = field(default_factory=StrokeMatchMeta)

    def to_result(self) -> StrokeMatchResult:
        return StrokeMatchResult(is_match=self.is_match, meta=self.meta)


def strip_duplicates(points: Sequence[Point]) -> List[Point]:
    """Drop consecutive identical points."""
    if len(points) < 2:
        return list(points)
    deduped = [points[0]]
    for point in points[1:]:
        if not equals(point, deduped[-1]):
            deduped.append(point)
    return deduped


def _edge_vectors(points: Sequence[Point]) -> List[Point]:
    return [subtract(cur, prev) for prev, cur in zip(points, points[1:])]


def start_and_end_matches(points: Sequence[Point], stroke: Stroke, leniency: float, thresholds: MatchThresholds) -> bool:
    limit = thresholds.start_and_end_dist * leniency
    starting_dist = distance(stroke.get_starting_point(), points[0])
    ending_dist = distance(stroke.get_ending_point(), points[-1])
    return starting_dist <= limit and ending_dist <= limit


def direction_matches(points: Sequence[Point], stroke: Stroke, thresholds: MatchThresholds) -> bool:
    edge_vectors = _edge_vectors(points)
    stroke_vectors = stroke.get_vectors()
    if not edge_vectors or not stroke_vectors:
        return False
    similarities = [
        max(cosine_similarity(stroke_vector, edge_vector) for stroke_vector in stroke_vectors)
        for edge_vector in edge_vectors
    ]
    avg_similarity = sum(similarities) / len(similarities)
    return avg_similarity > thresholds.cosine_similarity


def length_matches(points: Sequence[Point], stroke: Stroke, leniency: float, thresholds: MatchThresholds) -> bool:
    ratio = (length(points) + LENGTH_PADDING) / (stroke.get_length() + LENGTH_PADDING)
    return leniency * ratio >= thresholds.min_len


def shape_fit(curve1: Sequence[Point], curve2: Sequence[Point], leniency: float, thresholds: MatchThresholds) -> bool:
    norm_curve1 = normalize_curve(curve1)
    norm_curve2 = normalize_curve(curve2)
    min_dist = min(frechet_dist(norm_curve1, rotate(norm_curve2, theta)) for theta in SHAPE_FIT_ROTATIONS)
    return min_dist <= thresholds.frechet * leniency


def _evaluate(
    points: Sequence[Point],
    stroke: Stroke,
    leniency: float,
    is_outline_visible: bool,
    thresholds: MatchThresholds,
) -> MatchData:
    avg_dist = stroke.get_average_distance(points)
    # Stricter once the outline is shown or after the first stroke
    dist_mod = 0.5 if is_outline_visible or stroke.stroke_num > 0 else 1.0
    if avg_dist > thresholds.avg_dist * dist_mod * leniency:
        return MatchData(is_match=False, avg_dist=avg_dist)

    is_match = (
        start_and_end_matches(points, stroke, leniency, thresholds)
        and direction_matches(points, stroke, thresholds)
        and shape_fit(points, stroke.points, leniency, thresholds)
        and length_matches(points, stroke, leniency, thresholds)
    )
    return MatchData(is_match=is_match, avg_dist=avg_dist)


def get_match_data(
    points: Sequence[Point],
    stroke: Stroke,
    *,
    leniency: float = 1.0,
    is_outline_visible: bool = False,
    check_backwards: bool = True,
    thresholds: Optional[MatchThresholds] = None,
) -> MatchData:
    """Grade ``points`` against one reference stroke.

    When the forward pass fails and ``check_backwards`` is set, the reversed
    points are graded too. A reversed fit does not make the stroke a match;
    it only sets ``meta.is_stroke_backwards`` so callers can decide.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    forward = _evaluate(points, stroke, leniency, is_outline_visible, thresholds)
    if forward.is_match or not check_backwards:
        return forward

    backward = _evaluate(list(reversed(points)), stroke, leniency, is_outline_visible, thresholds)
    if backward.is_match:
        return MatchData(
            is_match=False,
            avg_dist=forward.avg_dist,
            meta=StrokeMatchMeta(is_stroke_backwards=True),
        )
    return forward


def stroke_matches(
    user_stroke: UserStroke,
    character: Character,
    stroke_num: int,
    *,
    leniency: Optional[float] = None,
    is_outline_visible: bool = False,
    thresholds: Optional[MatchThresholds] = None,
) -> StrokeMatchResult:
    """Decide whether ``user_stroke`` is stroke ``stroke_num`` of ``character``.

    Never raises for any point sequence; fewer than two distinct points is
    simply not a match.
    """
    leniency = leniency or 1.0
    thresholds = thresholds or DEFAULT_THRESHOLDS
    strokes = character.strokes
    points = strip_duplicates(user_stroke.points)

    if len(points) < 2:
        return StrokeMatchResult(is_match=False)

    target = get_match_data(
        points,
        strokes[stroke_num],
        leniency=leniency,
        is_outline_visible=is_outline_visible,
        thresholds=thresholds,
    )
    if not target.is_match:
        return target.to_result()

    # A better fit among strokes not yet drawn suggests the wrong stroke was drawn
    closest_match_dist = target.avg_dist
    for later_stroke in strokes[stroke_num + 1:]:
        later = get_match_data(
            points,
            later_stroke,
            leniency=leniency,
            is_outline_visible=is_outline_visible,
            check_backwards=False,
            thresholds=thresholds,
        )
        if later.is_match and later.avg_dist < closest_match_dist:
            closest_match_dist = later.avg_dist

    if closest_match_dist < target.avg_dist:
        # Between 0.3 and 0.6 depending on how much closer the rival stroke is
        leniency_adjustment = (0.6 * (closest_match_dist + target.avg_dist)) / (2 * target.avg_dist)
        regraded = get_match_data(
            points,
            strokes[stroke_num],
            leniency=leniency * leniency_adjustment,
            is_outline_visible=is_outline_visible,
            thresholds=thresholds,
        )
        return regraded.to_result()

    return target.to_result()
