"""
Digital Twin Input Models
maturity_engine/models/twin.py

Integrated context the digital twin is built from, plus the interventions
and goals it is simulated and optimised against. Every section is optional;
missing values fall back to a mid-market default.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from maturity_engine.models.enumerations import InterventionType, RiskLevel, TwinGoalType
from maturity_engine.scoring.utils import as_number, clamp, clamp_score

DEFAULT_REVENUE = 5_000_000.0
DEFAULT_MARGIN_PCT = 10.0


class TwinMaturity(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    data_maturity_index: float = 50.0
    data_maturity_stage: int = 2
    ai_maturity_score: float = 50.0
    ai_maturity_stage: int = 2
    category_scores: Dict[str, float] = Field(default_factory=dict)

    @field_validator("data_maturity_index", "ai_maturity_score", mode="before")
    @classmethod
    def clamp_scores(cls, v):
        return clamp_score(v, 50.0)

    @field_validator("data_maturity_stage", mode="before")
    @classmethod
    def clamp_data_stage(cls, v):
        return int(clamp(as_number(v, 2.0), 1, 6))

    @field_validator("ai_maturity_stage", mode="before")
    @classmethod
    def clamp_ai_stage(cls, v):
        return int(clamp(as_number(v, 2.0), 1, 7))


class TwinFinancial(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    revenue: float = DEFAULT_REVENUE
    profit_margin_pct: float = DEFAULT_MARGIN_PCT
    valuation: Optional[float] = Field(default=None, description="Defaults to 2.5 × revenue")
    revenue_upside: Optional[float] = None
    cost_reduction: Optional[float] = None

    @field_validator("revenue", mode="before")
    @classmethod
    def non_negative_revenue(cls, v):
        return max(0.0, as_number(v, DEFAULT_REVENUE))

    @field_validator("profit_margin_pct", mode="before")
    @classmethod
    def clamp_margin(cls, v):
        return clamp_score(v, DEFAULT_MARGIN_PCT)

    @field_validator("valuation", "revenue_upside", "cost_reduction", mode="before")
    @classmethod
    def numeric_or_none(cls, v):
        return as_number(v)


class TwinRisk(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    overall_risk_score: float = 50.0
    risk_level: Optional[RiskLevel] = Field(default=None, description="Derived from the score when absent")
    category_scores: Dict[str, float] = Field(default_factory=dict)

    @field_validator("overall_risk_score", mode="before")
    @classmethod
    def clamp_overall(cls, v):
        return clamp_score(v, 50.0)

    @field_validator("risk_level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class TwinCapabilities(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    gap_count: int = 0
    high_priority_count: int = 0
    areas: List[str] = Field(default_factory=list)
    top_gaps: List[str] = Field(default_factory=list)


class TwinRoadmap(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    total_initiatives: int = 0
    completed: int = 0
    in_progress: int = 0
    target_data_maturity: Optional[float] = None
    target_ai_maturity: Optional[float] = None
    progress_pct: Optional[float] = None


class TwinContext(BaseModel):
    """Latest outputs of the maturity, financial and risk calculators."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    maturity: TwinMaturity = Field(default_factory=TwinMaturity)
    financial: TwinFinancial = Field(default_factory=TwinFinancial)
    risk: TwinRisk = Field(default_factory=TwinRisk)
    capabilities: TwinCapabilities = Field(default_factory=TwinCapabilities)
    roadmap: TwinRoadmap = Field(default_factory=TwinRoadmap)

    @field_validator("maturity", "financial", "risk", "capabilities", "roadmap", mode="before")
    @classmethod
    def none_is_default(cls, v):
        return {} if v is None else v


class TwinIntervention(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    type: InterventionType
    target: str = ""
    intensity: float = Field(default=0.5, description="Clamped to 0-1")
    duration_months: Optional[float] = Field(default=None, description="Defaults to 12")
    description: str = ""

    @field_validator("intensity", mode="before")
    @classmethod
    def clamp_intensity(cls, v):
        return clamp(as_number(v, 0.0), 0.0, 1.0)


class TwinGoal(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    type: TwinGoalType
    target_value: float = 0.0
    horizon_months: int = Field(default=12, description="Clamped to 6-48")
    minimize_risk: bool = False
