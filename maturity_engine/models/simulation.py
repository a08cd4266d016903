"""
Simulation Input Models
maturity_engine/models/simulation.py

Scenario parameters for the strategic decision simulator and the
investment simulation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from maturity_engine.models.enumerations import (
    AdoptionPace,
    CompetitiveAction,
    InvestmentLevel,
    MarketConditions,
    TargetArea,
)


class ScenarioParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    investment_level: InvestmentLevel = InvestmentLevel.MEDIUM
    adoption_pace: AdoptionPace = AdoptionPace.MODERATE
    market_conditions: MarketConditions = MarketConditions.STABLE
    competitive_action: CompetitiveAction = CompetitiveAction.STATUS_QUO
    investment_amount: Optional[float] = Field(
        default=None, description="Planned spend; reported against cumulative profit"
    )
    horizon_years: int = Field(default=5, description="Clamped to 1-10")


class StrategicScenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    parameters: ScenarioParameters = Field(default_factory=ScenarioParameters)


class SimulationContext(BaseModel):
    """Starting position of the organisation."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    current_data_maturity: float = 0.0
    current_ai_maturity: float = 0.0
    current_revenue: float = 0.0
    current_profit: Optional[float] = None
    current_valuation: Optional[float] = None


class InvestmentScenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    investment_amount: float = 0.0
    target_area: TargetArea = TargetArea.BOTH
    time_horizon_years: float = Field(default=3.0, description="Clamped to 0.5-10")
    current_revenue: Optional[float] = Field(default=None, description="Default 10,000,000")
    current_margin_pct: Optional[float] = Field(default=None, description="Default 10")
