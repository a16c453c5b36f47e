from __future__ import annotations

"""Writer session: loads one character and owns the quiz for it.

The session is CLI-agnostic and front-end ready. Character data comes from
an injected loader; the session never fetches anything itself. Parsed
characters are cached per symbol and shared read-only between sessions.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Protocol

from ..character.models import Character
from ..character.parse import parse_char_data
from ..matching.thresholds import MatchThresholds
from ..positioner import Positioner
from ..quiz.quiz import DEFAULT_LENIENCY, SIMPLIFY_TOLERANCE, Quiz
from .events import EventBus
from .explain import trace as xtrace

CharacterLoader = Callable[[str], Mapping[str, Any]]

_CHARACTER_CACHE: Dict[str, Character] = {}


class Animator(Protocol):
    def cancel(self) -> None: ...


class NullAnimator:
    """Stand-in when nothing animates strokes."""

    def cancel(self) -> None:
        return None


@dataclass(frozen=True)
class LoadState:
    status: Literal["idle", "pending", "resolved", "rejected"]
    character: Optional[Character] = None
    error: Optional[BaseException] = None


class WriterSession:
    def __init__(
        self,
        symbol: str,
        loader: CharacterLoader,
        *,
        positioner: Optional[Positioner] = None,
        animator: Optional[Animator] = None,
        bus: Optional[EventBus] = None,
        thresholds: Optional[MatchThresholds] = None,
        default_leniency: float = DEFAULT_LENIENCY,
        simplify_tolerance: float = SIMPLIFY_TOLERANCE,
        cache: Optional[Dict[str, Character]] = None,
    ) -> None:
        self.symbol = symbol
        self.loader = loader
        self.positioner = positioner or Positioner()
        self.animator = animator or NullAnimator()
        self.bus = bus or EventBus()
        self.thresholds = thresholds
        self.default_leniency = default_leniency
        self.simplify_tolerance = simplify_tolerance
        self._cache = _CHARACTER_CACHE if cache is None else cache
        self.load_state = LoadState(status="idle")
        self.quiz = self._make_quiz(None)

    @classmethod
    def from_config(cls, symbol: str, loader: CharacterLoader, cfg: Dict[str, Any], **kwargs: Any) -> "WriterSession":
        quiz_cfg = cfg.get("quiz", {})
        return cls(
            symbol,
            loader,
            positioner=Positioner.from_config(cfg),
            thresholds=MatchThresholds.from_config(cfg),
            default_leniency=float(quiz_cfg.get("leniency") or DEFAULT_LENIENCY),
            simplify_tolerance=float(quiz_cfg.get("simplify_tolerance", SIMPLIFY_TOLERANCE)),
            **kwargs,
        )

    @property
    def character(self) -> Optional[Character]:
        return self.load_state.character

    def load(self) -> LoadState:
        """Resolve the current symbol, from cache when possible."""
        cached = self._cache.get(self.symbol)
        if cached is not None:
            return self._resolve(cached)

        self.load_state = LoadState(status="pending")
        try:
            raw = self.loader(self.symbol)
            character = parse_char_data(self.symbol, raw)
        except Exception as exc:
            return self._reject(exc)

        self._cache[self.symbol] = character
        return self._resolve(character)

    def refetch(self) -> LoadState:
        """Drop the cached character and load it again."""
        self._cache.pop(self.symbol, None)
        return self.load()

    def set_character(self, symbol: str) -> LoadState:
        """Switch to another character; the old quiz is discarded."""
        self.symbol = symbol
        self.load_state = LoadState(status="idle")
        self.quiz = self._make_quiz(None)
        return self.load()

    def _resolve(self, character: Character) -> LoadState:
        self.load_state = LoadState(status="resolved", character=character)
        self.quiz = self._make_quiz(character)
        xtrace("character_loaded", {"character": self.symbol, "strokes": character.stroke_count})
        self.bus.emit("character_loaded", character)
        return self.load_state

    def _reject(self, exc: BaseException) -> LoadState:
        self.load_state = LoadState(status="rejected", error=exc)
        self.quiz = self._make_quiz(None)
        xtrace("character_failed", {"character": self.symbol, "error": repr(exc)})
        self.bus.emit("character_failed", exc)
        return self.load_state

    def _make_quiz(self, character: Optional[Character]) -> Quiz:
        return Quiz(
            character,
            symbol=self.symbol,
            positioner=self.positioner,
            cancel_animation=self.animator.cancel,
            bus=self.bus,
            thresholds=self.thresholds,
            default_leniency=self.default_leniency,
            simplify_tolerance=self.simplify_tolerance,
        )
