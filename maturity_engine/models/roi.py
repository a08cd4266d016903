"""
ROI & Investment Input Model
maturity_engine/models/roi.py
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ROIInvestmentInputs(BaseModel):
    """Current/target maturity plus expected benefits."""

    model_config = ConfigDict(frozen=True)

    current_data_maturity: float = Field(default=0.0, description="0-100")
    target_data_maturity: float = Field(default=0.0, description="0-100, must be ≥ current")
    current_ai_maturity: float = Field(default=0.0, description="0-100")
    target_ai_maturity: float = Field(default=0.0, description="0-100, must be ≥ current")
    estimated_financial_benefits: float = Field(default=0.0, description="Total benefits over the horizon")
    annual_benefits: Optional[float] = Field(default=None, description="Defaults to estimated_financial_benefits")
