"""
Portfolio Company Models
maturity_engine/models/portfolio.py

Latest per-company outputs from every calculator, as consumed by the
portfolio analysis and the acquisition scanner. Non-numeric values read
as missing.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from maturity_engine.scoring.utils import as_number

METRIC_FIELDS = (
    "data_maturity_index",
    "ai_maturity_score",
    "revenue_upside",
    "profit_margin_expansion_value",
    "cost_reduction",
    "total_investment",
    "expected_roi_pct",
    "payback_period_years",
    "overall_risk_score",
    "current_valuation",
    "potential_valuation",
    "valuation_upside",
    "valuation_upside_pct",
)


class CompanySnapshot(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    organisation_id: str
    name: str = ""
    industry: Optional[str] = None

    data_maturity_index: Optional[float] = None
    ai_maturity_score: Optional[float] = None
    revenue_upside: Optional[float] = None
    profit_margin_expansion_value: Optional[float] = None
    cost_reduction: Optional[float] = None
    total_investment: Optional[float] = Field(default=None, description="Spend to reach target maturity")
    expected_roi_pct: Optional[float] = None
    payback_period_years: Optional[float] = None
    overall_risk_score: Optional[float] = None
    risk_level: Optional[str] = None
    current_valuation: Optional[float] = None
    potential_valuation: Optional[float] = None
    valuation_upside: Optional[float] = None
    valuation_upside_pct: Optional[float] = None

    @field_validator(*METRIC_FIELDS, mode="before")
    @classmethod
    def numeric_or_none(cls, v):
        return as_number(v)

    @field_validator("risk_level", mode="before")
    @classmethod
    def level_value(cls, v):
        return getattr(v, "value", v)


class AcquisitionFilters(BaseModel):
    """Bounds are inclusive; missing metrics count as 0."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    industry: Optional[str] = None
    min_valuation: Optional[float] = None
    max_valuation: Optional[float] = None
    min_data_maturity: Optional[float] = None
    max_data_maturity: Optional[float] = None
    min_ai_maturity: Optional[float] = None
    max_ai_maturity: Optional[float] = None
