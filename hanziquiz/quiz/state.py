from __future__ import annotations

"""Quiz state snapshots, quiz parameters and event payloads."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..geometry.vectors import Point
from ..policy.hints import DEFAULT_HINT_AFTER_MISSES


def frozen_mistakes(mistakes: Optional[Mapping[int, int]] = None) -> Mapping[int, int]:
    return MappingProxyType(dict(mistakes or {}))


@dataclass(frozen=True)
class DrawnPath:
    path_string: str
    points: List[Point]


@dataclass(frozen=True)
class StrokeData:
    """Payload of ``on_mistake`` and the ``mistake``/``correct_stroke`` bus events."""

    character: str
    drawn_path: DrawnPath
    is_backwards: bool
    stroke_num: int
    mistakes_on_stroke: int
    total_mistakes: int
    strokes_remaining: int


@dataclass(frozen=True)
class QuizParams:
    """Options for one quiz run.

    ``leniency=None`` uses the configured default. Closer to 0 grades more
    strictly. ``show_hint_after_misses=False`` disables hints.
    """

    leniency: Optional[float] = None
    show_hint_after_misses: Union[int, bool] = DEFAULT_HINT_AFTER_MISSES
    accept_backwards_strokes: bool = False
    quiz_start_stroke_num: int = 0
    is_outline_visible: bool = False
    on_mistake: Optional[Callable[[StrokeData], None]] = None
    on_correct_stroke: Optional[Callable[[], None]] = None
    on_complete: Optional[Callable[[Dict[str, Any]], None]] = None

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], **overrides: Any) -> "QuizParams":
        """Resolve params: config ``quiz`` section → explicit overrides."""
        quiz = cfg.get("quiz", {})
        params: Dict[str, Any] = {
            "leniency": quiz.get("leniency"),
            "show_hint_after_misses": quiz.get("show_hint_after_misses", DEFAULT_HINT_AFTER_MISSES),
            "accept_backwards_strokes": bool(quiz.get("accept_backwards_strokes", False)),
            "quiz_start_stroke_num": int(quiz.get("quiz_start_stroke_num", 0)),
            "is_outline_visible": bool(quiz.get("is_outline_visible", False)),
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)


@dataclass(frozen=True)
class QuizState:
    """Immutable snapshot; every transition publishes a new one."""

    active: bool
    character: str
    index: int = 0
    mistakes: Mapping[int, int] = field(default_factory=frozen_mistakes)
    params: Optional[QuizParams] = None

    @property
    def total_mistakes(self) -> int:
        """Number of distinct strokes that recorded at least one mistake."""
        return len(self.mistakes)
