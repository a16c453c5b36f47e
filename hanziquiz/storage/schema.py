from __future__ import annotations

"""Schema constants and Pydantic models for Parquet-backed quiz stats."""

from datetime import datetime, timezone

import pandas as pd
from pydantic import BaseModel, Field, ValidationInfo, field_validator

# --- Constants ---

DTYPES = {
    "session_id": "string",
    # timezone-aware UTC timestamps
    "session_start": pd.DatetimeTZDtype(tz="UTC"),
    "character": "string",
    "stroke_num": "UInt16",
    "attempts": "UInt16",
    "mistakes": "UInt16",
    "backwards": "UInt16",
    "completed": "boolean",
}


# --- Pydantic models ---

class StrokeStatsRow(BaseModel):
    session_id: str
    session_start: datetime
    character: str = Field(min_length=1)
    stroke_num: int = Field(ge=0, le=65535)
    attempts: int = Field(ge=1, le=65535)
    mistakes: int = Field(default=0, ge=0, le=65535)
    backwards: int = Field(default=0, ge=0, le=65535)
    completed: bool = False

    @field_validator("mistakes", "backwards")
    @classmethod
    def _le_attempts(cls, v: int, info: ValidationInfo) -> int:
        attempts = int(info.data.get("attempts", 0))
        if v > attempts:
            raise ValueError(f"{info.field_name} must be <= attempts")
        return v

    @field_validator("session_start")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
