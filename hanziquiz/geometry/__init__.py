from .vectors import (
    Point,
    as_point,
    cosine_similarity,
    distance,
    equals,
    frechet_dist,
    length,
    normalize_curve,
    rotate,
    subtract,
)
from .simplify import simplify
from .paths import get_path_string

__all__ = [
    "Point",
    "as_point",
    "cosine_similarity",
    "distance",
    "equals",
    "frechet_dist",
    "length",
    "normalize_curve",
    "rotate",
    "subtract",
    "simplify",
    "get_path_string",
]
