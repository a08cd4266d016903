"""
Maturity Progress Models
maturity_engine/models/progress.py

History points are supplied in chronological order by the caller; the
engine never reads clocks, so elapsed time is given in months.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from maturity_engine.models.enumerations import TargetArea
from maturity_engine.scoring.utils import clamp_score


class MaturityPoint(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    data_maturity_index: float = 0.0
    ai_maturity_score: float = 0.0
    label: Optional[str] = Field(default=None, description="Caller's own marker, e.g. a date")

    @field_validator("data_maturity_index", "ai_maturity_score", mode="before")
    @classmethod
    def clamp_scores(cls, v):
        return clamp_score(v)


class MaturityGoal(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    goal_type: TargetArea = TargetArea.DATA
    target_score: float = 0.0
    months_until_target: Optional[float] = None

    @field_validator("goal_type")
    @classmethod
    def single_area(cls, v):
        if v is TargetArea.BOTH:
            raise ValueError("goal_type must be 'data' or 'ai'")
        return v

    @field_validator("target_score", mode="before")
    @classmethod
    def clamp_target(cls, v):
        return clamp_score(v)
