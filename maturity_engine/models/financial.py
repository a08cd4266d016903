"""
Financial Input Models
maturity_engine/models/financial.py

Field bounds are deliberately loose: scores and rates are clamped by the
calculators rather than rejected here.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FinancialImpactInputs(BaseModel):
    """Inputs for revenue upside, margin expansion and cost reduction."""

    model_config = ConfigDict(frozen=True)

    revenue: float = Field(..., description="Annual revenue")
    profit_margin_pct: float = Field(default=10.0, description="Current profit margin (%)")
    headcount: Optional[float] = Field(default=None, description="Employees; used when operational_cost is absent")
    operational_cost: Optional[float] = Field(default=None, description="Annual operating cost base")
    data_maturity: float = Field(default=0.0, description="Data maturity index 0-100")
    ai_maturity: float = Field(default=0.0, description="AI maturity score 0-100")
    industry: Optional[str] = Field(default=None, description="Benchmark id or industry name")


class FinancialModelInputs(FinancialImpactInputs):
    """Inputs for the composed revenue / cost / profit model."""

    growth_rate_pct: Optional[float] = Field(default=None, description="Expected organic growth (%)")
    tax_rate_pct: float = Field(default=25.0, description="Effective tax rate (%)")
