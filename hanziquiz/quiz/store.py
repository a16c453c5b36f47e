from __future__ import annotations

"""Observable holder of the current :class:`QuizState`."""

from dataclasses import replace
from typing import Any, Callable, List

from ..app.explain import trace as xtrace
from .state import QuizState, frozen_mistakes

Listener = Callable[[QuizState], None]


class QuizStore:
    def __init__(self, initial: QuizState) -> None:
        self._state = initial
        self._listeners: List[Listener] = []

    def get_state(self) -> QuizState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_state(self, **changes: Any) -> QuizState:
        """Replace the snapshot, then notify listeners with the new one."""
        if "mistakes" in changes:
            changes["mistakes"] = frozen_mistakes(changes["mistakes"])
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as exc:
                xtrace("listener_failed", {"error": repr(exc)})
        return self._state
