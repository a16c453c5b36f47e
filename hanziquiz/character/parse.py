from __future__ import annotations

"""Parse ``{strokes, medians, radStrokes}`` payloads into :class:`Character`.

This is the hanzi-writer-data JSON layout; field names are kept as-is so
existing character databases load without conversion.
"""

from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import MalformedCharacterData
from ..geometry.vectors import Point
from .models import Character, Stroke


class CharacterJson(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    strokes: List[str] = Field(min_length=1)
    medians: List[List[Tuple[float, float]]]
    rad_strokes: Optional[List[int]] = Field(default=None, alias="radStrokes")

    @model_validator(mode="after")
    def _medians_match_strokes(self) -> "CharacterJson":
        if len(self.strokes) != len(self.medians):
            raise ValueError(
                f"{len(self.strokes)} stroke paths but {len(self.medians)} median lists"
            )
        for i, median in enumerate(self.medians):
            if not median:
                raise ValueError(f"stroke {i} has no median points")
        return self


def parse_char_data(symbol: str, char_json: Union[Mapping[str, Any], CharacterJson]) -> Character:
    """Build a Character from raw stroke data.

    Raises:
        MalformedCharacterData: if fields are missing or the stroke and median
            counts differ. No partial Character is ever returned.
    """
    if isinstance(char_json, CharacterJson):
        data = char_json
    else:
        try:
            data = CharacterJson.model_validate(char_json)
        except ValidationError as exc:
            raise MalformedCharacterData(f"Bad stroke data for {symbol!r}: {exc}") from exc

    radicals = set(data.rad_strokes or ())
    strokes = tuple(
        Stroke(
            path=path,
            points=tuple(Point(x, y) for x, y in data.medians[index]),
            stroke_num=index,
            is_in_radical=index in radicals,
        )
        for index, path in enumerate(data.strokes)
    )
    return Character(symbol=symbol, strokes=strokes)
