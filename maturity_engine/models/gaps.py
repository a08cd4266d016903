"""
Capability Gap Input Models
maturity_engine/models/gaps.py
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from maturity_engine.scoring.utils import clamp_score


class MaturitySummary(BaseModel):
    """Category scores and stage from a data or AI maturity result."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    category_scores: Dict[str, float] = Field(default_factory=dict)
    maturity_stage: int = Field(default=1)

    @field_validator("category_scores", mode="before")
    @classmethod
    def clamp_scores(cls, v):
        if not isinstance(v, dict):
            return {}
        return {k: clamp_score(s) for k, s in v.items()}


class GapTargets(BaseModel):
    """Target stages; None means the highest stage of the scale."""

    model_config = ConfigDict(frozen=True)

    target_data_stage: Optional[int] = None
    target_ai_stage: Optional[int] = None
