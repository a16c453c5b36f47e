from __future__ import annotations

"""Stroke matching thresholds using Pydantic."""

from typing import Any, Dict

from pydantic import BaseModel, Field


class MatchThresholds(BaseModel):
    """Tunable limits for the stroke classifier.

    - avg_dist: mean point-to-stroke distance, bigger = more lenient
    - cosine_similarity: -1..1, smaller = more lenient
    - start_and_end_dist: endpoint distance, bigger = more lenient
    - frechet: normalized shape distance, bigger = more lenient
    - min_len: length ratio, smaller = more lenient
    """

    model_config = {"frozen": True}

    avg_dist: float = Field(350, gt=0)
    cosine_similarity: float = Field(0, ge=-1, le=1)
    start_and_end_dist: float = Field(250, gt=0)
    frechet: float = Field(0.4, gt=0)
    min_len: float = Field(0.35, ge=0)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "MatchThresholds":
        return cls.model_validate(cfg.get("matching", {}))


DEFAULT_THRESHOLDS = MatchThresholds()
