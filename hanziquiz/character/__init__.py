from .models import Character, Stroke, UserStroke
from .parse import CharacterJson, parse_char_data

__all__ = ["Character", "CharacterJson", "Stroke", "UserStroke", "parse_char_data"]
