from __future__ import annotations

"""Tiny pub/sub event bus for writer sessions.

Events published by the quiz: ``mistake``, ``correct_stroke``, ``complete``.
Events published by the writer session: ``character_loaded``,
``character_failed``.
"""

from typing import Any, Callable, Dict, List

from .explain import trace as xtrace

Handler = Callable[[Any], None]


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Handler]] = {}

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        self._subs.setdefault(event, []).append(handler)

        def unsubscribe() -> None:
            handlers = self._subs.get(event, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def emit(self, event: str, payload: Any = None) -> None:
        for h in list(self._subs.get(event, [])):
            try:
                h(payload)
            except Exception as exc:
                # Best effort; one observer must not break the others
                xtrace("handler_failed", {"event": event, "error": repr(exc)})
