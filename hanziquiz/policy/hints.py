from __future__ import annotations

"""Hint policies: when to reveal the expected stroke after repeated misses."""

from dataclasses import dataclass
from typing import Literal, Protocol, Union

DEFAULT_HINT_AFTER_MISSES = 3


@dataclass(frozen=True)
class Decision:
    action: Literal["retry", "hint"]
    mistakes: int


class HintPolicy(Protocol):
    def decide(self, stroke_num: int, mistakes_on_stroke: int) -> Decision: ...


class HintAfterMisses:
    """Fewer than ``threshold`` misses → retry; otherwise → hint.

    ``threshold=False`` never hints. ``None`` or ``0`` fall back to the default.
    """

    def __init__(self, threshold: Union[int, bool, None] = DEFAULT_HINT_AFTER_MISSES) -> None:
        if threshold is False:
            self.threshold = None
        else:
            self.threshold = int(threshold or DEFAULT_HINT_AFTER_MISSES)

    def decide(self, stroke_num: int, mistakes_on_stroke: int) -> Decision:
        if self.threshold is not None and mistakes_on_stroke >= self.threshold:
            return Decision(action="hint", mistakes=mistakes_on_stroke)
        return Decision(action="retry", mistakes=mistakes_on_stroke)
