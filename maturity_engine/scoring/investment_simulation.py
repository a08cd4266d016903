"""
Investment Simulation
maturity_engine/scoring/investment_simulation.py

Maturity and financial impact of a single spend, with diminishing returns
and a benefit delay.

  diminishing(inv, scale) = 1 − 0.35 × (1 − e^(−inv/scale))
                            scale: data 500,000, AI 700,000
  points                  = spend / EFFICIENCY × diminishing     (capped at headroom)
  revenue uplift %        = 2% + gain/100 × 12%                  (gain > 0)
  margin expansion pts    = min(5, gain × 0.08)
  profit increase         = 0.4 × revenue uplift + margin value + revenue × 1% × gain/20
  time to benefit         = min(0.4 × horizon, 2) + 0.5 × horizon
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.models.enumerations import TargetArea
from maturity_engine.models.simulation import InvestmentScenario
from maturity_engine.scoring.utils import as_number, clamp, clamp_score, to_decimal

logger = structlog.get_logger(__name__)

DATA_SCALE = 500_000
AI_SCALE = 700_000
DIMINISHING_CEILING = 0.35
DEFAULT_REVENUE = 10_000_000
DEFAULT_MARGIN_PCT = 10.0


@dataclass(frozen=True)
class InvestmentSimulationResult:
    investment_amount: Decimal
    target_area: TargetArea
    time_horizon_years: Decimal
    simulated_data_maturity_improvement: Decimal
    simulated_ai_maturity_improvement: Decimal
    projected_data_maturity: Decimal
    projected_ai_maturity: Decimal
    projected_revenue_increase: Decimal
    projected_profit_increase: Decimal
    effective_time_to_benefit_years: Decimal
    annualised_benefit: Decimal
    return_per_unit: Decimal
    margin_pct: Decimal


@dataclass(frozen=True)
class ScenarioComparisonItem:
    scenario_index: int
    investment_amount: Decimal
    target_area: TargetArea
    projected_profit_increase: Decimal
    return_per_unit: Decimal
    effective_time_to_benefit_years: Decimal
    rank_by_impact: int
    rank_by_cost_effectiveness: int
    risk_indicator: str             # low | medium | high


@dataclass(frozen=True)
class InvestmentComparison:
    scenarios: List[ScenarioComparisonItem]
    best_by_impact: Optional[int]
    best_by_cost_effectiveness: Optional[int]


def diminishing_factor(investment: float, scale: float) -> float:
    """Effective fraction of spend; 1.0 at zero, approaching 0.65."""
    if scale <= 0:
        return 1.0
    return 1 - DIMINISHING_CEILING * (1 - math.exp(-investment / scale))


def simulate_investment_impact(
    scenario: InvestmentScenario,
    current_data: float,
    current_ai: float,
    settings: Optional[Settings] = None,
) -> InvestmentSimulationResult:
    settings = settings or get_settings()
    investment = max(0.0, as_number(scenario.investment_amount, 0.0))
    horizon = clamp(as_number(scenario.time_horizon_years, 3.0), 0.5, 10.0)
    revenue = max(0.0, as_number(scenario.current_revenue, DEFAULT_REVENUE))
    margin_pct = as_number(scenario.current_margin_pct, DEFAULT_MARGIN_PCT)
    data_now = clamp_score(current_data)
    ai_now = clamp_score(current_ai)

    data_spend = ai_spend = 0.0
    if scenario.target_area is TargetArea.DATA:
        data_spend = investment
    elif scenario.target_area is TargetArea.AI:
        ai_spend = investment
    else:
        data_spend = ai_spend = investment / 2

    # Diminishing returns are driven by the total commitment, not the split
    data_points = data_spend / settings.DATA_EFFICIENCY * diminishing_factor(investment, DATA_SCALE)
    ai_points = ai_spend / settings.AI_EFFICIENCY * diminishing_factor(investment, AI_SCALE)
    data_gain = min(100 - data_now, data_points)
    ai_gain = min(100 - ai_now, ai_points)

    projected_data = clamp(data_now + data_gain)
    projected_ai = clamp(ai_now + ai_gain)
    maturity_gain = max(0.0, (projected_data + projected_ai) / 2 - (data_now + ai_now) / 2)

    revenue_uplift_pct = 0.02 + maturity_gain / 100 * 0.12 if maturity_gain > 0 else 0.0
    revenue_increase = revenue * revenue_uplift_pct
    margin_expansion_pct = min(5.0, maturity_gain * 0.08)
    profit_increase = (
        revenue_increase * 0.4
        + revenue * margin_expansion_pct / 100
        + revenue * 0.01 * (maturity_gain / 20)
    )

    time_to_benefit = min(horizon * 0.4, 2.0) + horizon * 0.5
    return_per_unit = profit_increase / investment if investment > 0 else 0.0

    logger.info(
        "investment_simulated",
        investment=investment,
        target_area=scenario.target_area.value,
        data_gain=round(data_gain, 2),
        ai_gain=round(ai_gain, 2),
    )

    return InvestmentSimulationResult(
        investment_amount=to_decimal(investment),
        target_area=scenario.target_area,
        time_horizon_years=to_decimal(horizon),
        simulated_data_maturity_improvement=to_decimal(data_gain),
        simulated_ai_maturity_improvement=to_decimal(ai_gain),
        projected_data_maturity=to_decimal(projected_data),
        projected_ai_maturity=to_decimal(projected_ai),
        projected_revenue_increase=to_decimal(revenue_increase),
        projected_profit_increase=to_decimal(profit_increase),
        effective_time_to_benefit_years=to_decimal(time_to_benefit),
        annualised_benefit=to_decimal(profit_increase / horizon),
        return_per_unit=to_decimal(return_per_unit),
        margin_pct=to_decimal(margin_pct),
    )


def risk_indicator(time_to_benefit: float, return_per_unit: float) -> str:
    if time_to_benefit > 3:
        time_risk = 1.0
    elif time_to_benefit > 1.5:
        time_risk = 0.5
    else:
        time_risk = 0.0
    if return_per_unit < 0.5:
        return_risk = 1.0
    elif return_per_unit < 1:
        return_risk = 0.5
    else:
        return_risk = 0.0
    score = time_risk + return_risk
    if score >= 1.5:
        return "high"
    if score >= 0.5:
        return "medium"
    return "low"


def compare_investment_scenarios(
    results: Sequence[InvestmentSimulationResult],
) -> InvestmentComparison:
    """Rank by profit impact and by return per unit; ties keep input order."""
    indices = range(len(results))
    by_impact = sorted(indices, key=lambda i: (-results[i].projected_profit_increase, i))
    by_return = sorted(indices, key=lambda i: (-results[i].return_per_unit, i))
    impact_rank = {i: rank for rank, i in enumerate(by_impact, start=1)}
    return_rank = {i: rank for rank, i in enumerate(by_return, start=1)}

    scenarios = [
        ScenarioComparisonItem(
            scenario_index=i,
            investment_amount=r.investment_amount,
            target_area=r.target_area,
            projected_profit_increase=r.projected_profit_increase,
            return_per_unit=r.return_per_unit,
            effective_time_to_benefit_years=r.effective_time_to_benefit_years,
            rank_by_impact=impact_rank[i],
            rank_by_cost_effectiveness=return_rank[i],
            risk_indicator=risk_indicator(
                float(r.effective_time_to_benefit_years), float(r.return_per_unit)
            ),
        )
        for i, r in enumerate(results)
    ]

    return InvestmentComparison(
        scenarios=scenarios,
        best_by_impact=by_impact[0] if by_impact else None,
        best_by_cost_effectiveness=by_return[0] if by_return else None,
    )
