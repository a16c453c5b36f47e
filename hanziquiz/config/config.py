from __future__ import annotations

"""Configuration loading and validation for hanziquiz.

This module loads YAML configuration, applies defaults, and validates
that thresholds and surface sizes are sane before a session is built.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml
from pydantic import ValidationError

from ..matching.thresholds import MatchThresholds
from ..policy.hints import DEFAULT_HINT_AFTER_MISSES


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Invalid values are reported on stdout and replaced by their defaults so
    a session can always be built from the result.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    # Shallow defaults for missing sections
    for section in ("quiz", "positioner", "matching", "stats"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}
    cfg.setdefault("explain", False)

    quiz = cfg["quiz"]
    pos = cfg["positioner"]
    matching = cfg["matching"]
    stats = cfg["stats"]

    # Apply section defaults
    quiz.setdefault("leniency", 1.2)
    quiz.setdefault("accept_backwards_strokes", False)
    quiz.setdefault("show_hint_after_misses", DEFAULT_HINT_AFTER_MISSES)
    quiz.setdefault("quiz_start_stroke_num", 0)
    quiz.setdefault("is_outline_visible", False)
    quiz.setdefault("simplify_tolerance", 1)

    pos.setdefault("width", 300)
    pos.setdefault("height", 300)
    pos.setdefault("padding", 0)

    stats.setdefault("output_path", "./quiz_stats.json")
    stats.setdefault("show_summary", True)
    stats.setdefault("store_dir", None)

    # Range validations
    leniency = quiz.get("leniency")
    if not isinstance(leniency, (int, float)) or leniency <= 0:
        print(f"WARNING: Invalid leniency '{leniency}', using 1.2.")
        quiz["leniency"] = 1.2

    hint = quiz.get("show_hint_after_misses")
    if hint is not False and (not isinstance(hint, int) or hint < 1):
        print(f"WARNING: Invalid show_hint_after_misses '{hint}', using {DEFAULT_HINT_AFTER_MISSES}.")
        quiz["show_hint_after_misses"] = DEFAULT_HINT_AFTER_MISSES

    tolerance = quiz.get("simplify_tolerance")
    if not isinstance(tolerance, (int, float)) or tolerance < 0:
        print(f"WARNING: Invalid simplify_tolerance '{tolerance}', using 1.")
        quiz["simplify_tolerance"] = 1

    for key, default in (("width", 300), ("height", 300)):
        value = pos.get(key)
        if not isinstance(value, (int, float)) or value <= 0:
            print(f"WARNING: Invalid positioner {key} '{value}', using {default}.")
            pos[key] = default
    padding = pos.get("padding")
    if (
        not isinstance(padding, (int, float))
        or padding < 0
        or 2 * padding >= min(pos["width"], pos["height"])
    ):
        print(f"WARNING: Invalid positioner padding '{padding}', using 0.")
        pos["padding"] = 0

    try:
        cfg["matching"] = MatchThresholds.model_validate(matching).model_dump()
    except ValidationError as exc:
        print(f"WARNING: Invalid matching thresholds, using defaults ({exc.error_count()} errors).")
        cfg["matching"] = MatchThresholds().model_dump()

    return cfg
