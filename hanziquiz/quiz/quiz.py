from __future__ import annotations

"""Quiz: stroke-by-stroke progression through one character.

This is the only stateful part of the engine. Each transition computes a
complete new :class:`QuizState`, publishes it through the store and only
then fires the lifecycle callbacks.
"""

import sys
from typing import Any, Callable, Dict, Iterable, Optional

from ..app.events import EventBus
from ..app.explain import trace as xtrace
from ..character.models import Character, Stroke, UserStroke
from ..errors import HanziQuizError, NoActiveQuiz, NotReady
from ..geometry.paths import get_path_string
from ..geometry.simplify import simplify
from ..geometry.vectors import as_point
from ..matching.matcher import StrokeMatchResult, stroke_matches
from ..matching.thresholds import DEFAULT_THRESHOLDS, MatchThresholds
from ..policy.hints import HintAfterMisses, HintPolicy
from ..positioner import Positioner
from .state import DrawnPath, QuizParams, QuizState, StrokeData
from .store import QuizStore

DEFAULT_LENIENCY = 1.2
SIMPLIFY_TOLERANCE = 1.0


class Quiz:
    def __init__(
        self,
        character: Optional[Character],
        *,
        symbol: Optional[str] = None,
        positioner: Optional[Positioner] = None,
        cancel_animation: Optional[Callable[[], None]] = None,
        bus: Optional[EventBus] = None,
        thresholds: Optional[MatchThresholds] = None,
        default_leniency: float = DEFAULT_LENIENCY,
        simplify_tolerance: float = SIMPLIFY_TOLERANCE,
    ) -> None:
        self.character = character
        self.symbol = symbol if symbol is not None else (character.symbol if character else "")
        self.positioner = positioner or Positioner()
        self.cancel_animation = cancel_animation
        self.bus = bus or EventBus()
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self.default_leniency = default_leniency
        self.simplify_tolerance = simplify_tolerance
        self.store = QuizStore(QuizState(active=False, character=self.symbol))

    @property
    def state(self) -> QuizState:
        return self.store.get_state()

    def start(self, params: Optional[QuizParams] = None) -> bool:
        """Begin a quiz. Returns False (and does nothing) if no character is loaded."""
        if self.character is None:
            self._report(NotReady(f"Can't start quiz, character {self.symbol!r} not loaded yet"), warn=True)
            return False
        params = params or QuizParams()

        if self.cancel_animation is not None:
            self.cancel_animation()

        last_index = self.character.stroke_count - 1
        index = max(min(int(params.quiz_start_stroke_num or 0), last_index), 0)

        self.store.set_state(active=True, index=index, mistakes={}, params=params)
        xtrace("quiz_started", {"character": self.symbol, "index": index})
        return True

    def stop(self) -> None:
        self.store.set_state(active=False, index=0, mistakes={}, params=None)
        xtrace("quiz_stopped", {"character": self.symbol})

    def check(self, points: Iterable[Any]) -> Optional[StrokeMatchResult]:
        """Grade one finished gesture given in drawing-surface coordinates.

        Returns the match result, or None when the check was ignored (no
        active quiz, or an empty gesture).
        """
        state = self.store.get_state()
        if not state.active or self.character is None:
            self._report(NoActiveQuiz(f"No active quiz for {self.symbol!r}"))
            return None

        external_points = [as_point(p) for p in points]
        if not external_points:
            xtrace("empty_gesture", {"character": self.symbol})
            return None

        index = state.index
        params = state.params or QuizParams()
        user_stroke = UserStroke(id=index)
        for external_point in simplify(external_points, self.simplify_tolerance):
            user_stroke.append_point(self.positioner.convert_external_point(external_point), external_point)

        result = stroke_matches(
            user_stroke,
            self.character,
            index,
            leniency=params.leniency or self.default_leniency,
            is_outline_visible=params.is_outline_visible,
            thresholds=self.thresholds,
        )
        is_accepted = result.is_match or (result.meta.is_stroke_backwards and params.accept_backwards_strokes)
        xtrace(
            "stroke_checked",
            {
                "character": self.symbol,
                "index": index,
                "match": result.is_match,
                "backwards": result.meta.is_stroke_backwards,
                "accepted": bool(is_accepted),
            },
        )

        if not is_accepted:
            self._on_rejected(state, params, user_stroke, result)
        else:
            self._on_accepted(state, params, user_stroke, result)
        return result

    def hint_stroke(self, policy: Optional[HintPolicy] = None) -> Optional[Stroke]:
        """Stroke to highlight once the current stroke has been missed often enough."""
        state = self.store.get_state()
        if not state.active or self.character is None or state.params is None:
            return None
        policy = policy or HintAfterMisses(state.params.show_hint_after_misses)
        decision = policy.decide(state.index, state.mistakes.get(state.index, 0))
        if decision.action != "hint":
            return None
        return self.character.strokes[state.index]

    # --- transitions ---

    def _on_rejected(
        self, state: QuizState, params: QuizParams, user_stroke: UserStroke, result: StrokeMatchResult
    ) -> None:
        index = state.index
        mistakes = dict(state.mistakes)
        mistakes[index] = mistakes.get(index, 0) + 1
        new_state = self.store.set_state(mistakes=mistakes)

        data = self._stroke_data(new_state, user_stroke, result)
        self._emit("mistake", data, params.on_mistake, data)

    def _on_accepted(
        self, state: QuizState, params: QuizParams, user_stroke: UserStroke, result: StrokeMatchResult
    ) -> None:
        assert self.character is not None
        data = self._stroke_data(state, user_stroke, result)
        is_last = state.index >= self.character.stroke_count - 1

        if not is_last:
            self.store.set_state(index=state.index + 1)
            self._emit("correct_stroke", data, params.on_correct_stroke)
            return

        summary: Dict[str, Any] = {
            "character": self.character.symbol,
            "total_mistakes": state.total_mistakes,
        }
        self.store.set_state(active=False, index=0, mistakes={}, params=None)
        xtrace("quiz_complete", summary)
        self._emit("correct_stroke", data, params.on_correct_stroke)
        self._emit("complete", summary, params.on_complete, summary)

    # --- helpers ---

    def _stroke_data(self, state: QuizState, user_stroke: UserStroke, result: StrokeMatchResult) -> StrokeData:
        assert self.character is not None
        return StrokeData(
            character=self.symbol,
            drawn_path=DrawnPath(
                path_string=get_path_string(user_stroke.points),
                points=list(user_stroke.points),
            ),
            is_backwards=result.meta.is_stroke_backwards,
            stroke_num=state.index,
            mistakes_on_stroke=state.mistakes.get(state.index, 0),
            total_mistakes=state.total_mistakes,
            strokes_remaining=self.character.stroke_count - state.index,
        )

    def _emit(self, event: str, payload: Any, handler: Optional[Callable[..., None]], *args: Any) -> None:
        if handler is not None:
            try:
                handler(*args)
            except Exception as exc:
                xtrace("handler_failed", {"event": event, "error": repr(exc)})
        self.bus.emit(event, payload)

    def _report(self, condition: HanziQuizError, warn: bool = False) -> None:
        if warn:
            print(f"WARNING: {condition}", file=sys.stderr)
        xtrace(type(condition).__name__, {"character": self.symbol, "message": str(condition)})
