from .quiz import Quiz
from .state import DrawnPath, QuizParams, QuizState, StrokeData
from .store import QuizStore

__all__ = ["DrawnPath", "Quiz", "QuizParams", "QuizState", "QuizStore", "StrokeData"]
