from __future__ import annotations

"""Error taxonomy.

Only ``MalformedCharacterData`` is ever raised to callers. ``NotReady`` and
``NoActiveQuiz`` describe conditions the quiz reports and then ignores.
"""


class HanziQuizError(Exception):
    """Base class for all hanziquiz errors."""


class MalformedCharacterData(HanziQuizError, ValueError):
    """Raw stroke data is missing fields or has mismatched stroke/median counts."""


class NotReady(HanziQuizError):
    """A quiz was started before its character finished loading."""


class NoActiveQuiz(HanziQuizError):
    """A stroke was checked while no quiz was running."""
