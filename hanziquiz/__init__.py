"""hanziquiz package initialization.

Stroke recognition and stroke-order quizzing for Hanzi/Kanji characters.
The most used entry points are re-exported here so applications can simply
``from hanziquiz import WriterSession, QuizParams``.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .app.events import EventBus
from .app.writer import LoadState, WriterSession
from .character import Character, Stroke, UserStroke, parse_char_data
from .errors import HanziQuizError, MalformedCharacterData, NoActiveQuiz, NotReady
from .geometry import Point, simplify
from .matching import MatchThresholds, StrokeMatchResult, stroke_matches
from .positioner import Positioner
from .quiz import Quiz, QuizParams, QuizState, StrokeData

__all__ = [
    "__version__",
    "Character",
    "EventBus",
    "HanziQuizError",
    "LoadState",
    "MalformedCharacterData",
    "MatchThresholds",
    "NoActiveQuiz",
    "NotReady",
    "Point",
    "Positioner",
    "Quiz",
    "QuizParams",
    "QuizState",
    "Stroke",
    "StrokeData",
    "StrokeMatchResult",
    "UserStroke",
    "WriterSession",
    "parse_char_data",
    "simplify",
    "stroke_matches",
]
