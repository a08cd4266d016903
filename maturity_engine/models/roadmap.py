"""
Roadmap Input Models
maturity_engine/models/roadmap.py
"""

from typing import List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from maturity_engine.models.enumerations import ActionArea, PrioritizationStrategy, PriorityLevel
from maturity_engine.scoring.utils import as_number, clamp_score


class RoadmapGap(BaseModel):
    """
    A capability gap to schedule.

    Accepts a CapabilityGap (via from_attributes) or a plain mapping. When
    ``area`` is not given it is derived from ``dimension``.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    description: str
    dimension: Optional[str] = None
    area: Optional[ActionArea] = None
    gap: float = Field(default=0.0, description="Severity in maturity points, 0-100")
    priority_level: Optional[PriorityLevel] = None

    @field_validator("dimension", mode="before")
    @classmethod
    def dimension_value(cls, v):
        return getattr(v, "value", v)

    @field_validator("gap", mode="before")
    @classmethod
    def clamp_gap(cls, v):
        return clamp_score(v)


SUMMARY_FIELDS = ("revenue_upside", "profit_margin_expansion_value", "cost_reduction", "total_impact")


class FinancialImpactSummary(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    revenue_upside: Optional[float] = None
    profit_margin_expansion_value: Optional[float] = None
    cost_reduction: Optional[float] = None
    total_impact: Optional[float] = None

    @property
    def resolved_total(self) -> float:
        """Explicit total, else the sum of the parts (negatives ignored)."""
        total = as_number(self.total_impact)
        if total is None:
            total = sum(
                as_number(v, 0.0)
                for v in (self.revenue_upside, self.profit_margin_expansion_value, self.cost_reduction)
            )
        return max(0.0, total)


class RoadmapInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_data_maturity: float = 0.0
    current_ai_maturity: float = 0.0
    target_data_maturity: float = 100.0
    target_ai_maturity: float = 100.0
    capability_gaps: Optional[List[RoadmapGap]] = None
    financial_impact: Optional[FinancialImpactSummary] = None
    prioritization: PrioritizationStrategy = PrioritizationStrategy.STRATEGIC_ALIGNMENT

    @field_validator("capability_gaps", mode="before")
    @classmethod
    def coerce_gaps(cls, v):
        if v is None:
            return None
        return [RoadmapGap.model_validate(g, from_attributes=True) for g in v]

    @field_validator("financial_impact", mode="before")
    @classmethod
    def coerce_summary(cls, v):
        if v is None or isinstance(v, FinancialImpactSummary):
            return v
        if isinstance(v, dict):
            return v

        # FinancialModelReport: revenue and cost come from its summary
        report_summary = getattr(v, "summary", None)
        if isinstance(report_summary, Mapping):
            return FinancialImpactSummary(
                revenue_upside=as_number(report_summary.get("total_revenue_upside")),
                cost_reduction=as_number(report_summary.get("total_cost_savings")),
                total_impact=as_number(report_summary.get("net_profit_increase")),
            )

        if not any(hasattr(v, name) for name in SUMMARY_FIELDS):
            raise ValueError(
                f"financial_impact must be a mapping, a financial impact result or a "
                f"financial model report, not {type(v).__name__}"
            )
        return FinancialImpactSummary(
            **{name: as_number(getattr(v, name, None)) for name in SUMMARY_FIELDS}
        )
