from .hints import DEFAULT_HINT_AFTER_MISSES, Decision, HintAfterMisses, HintPolicy

__all__ = ["DEFAULT_HINT_AFTER_MISSES", "Decision", "HintAfterMisses", "HintPolicy"]
