from .matcher import (
    MatchData,
    StrokeMatchMeta,
    StrokeMatchResult,
    get_match_data,
    strip_duplicates,
    stroke_matches,
)
from .thresholds import DEFAULT_THRESHOLDS, MatchThresholds

__all__ = [
    "DEFAULT_THRESHOLDS",
    "MatchData",
    "MatchThresholds",
    "StrokeMatchMeta",
    "StrokeMatchResult",
    "get_match_data",
    "strip_duplicates",
    "stroke_matches",
]
