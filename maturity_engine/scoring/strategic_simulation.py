"""
Strategic Decision Simulator
maturity_engine/scoring/strategic_simulation.py

Discrete-time projection of maturity, financials, competitive position and
risk for a named scenario. No randomness: identical inputs reproduce
identical yearly series.

Per year:
  rate        = base(level) × investment × pace × market × competitive
  Δmaturity   = rate × (100 − current) / 100
  mf          = (data + ai) / 200
  revenue    *= 1 + 0.03 + mf × 0.08 × market
  profit      = revenue × (baseline_margin + mf × 0.05)
  valuation   = revenue × (2 + 1.5 × mf) × calibration
  competitive ← smooth(avg maturity − 10 if competitors invest heavily)
  risk        ← smooth(50 − mf × 20 + 15 if market volatile)

  smooth(target) = previous + α × (target − previous),  α = SIMULATION_SMOOTHING

When the scenario names an investment_amount the outcome also reports
cumulative profit net of it and profit per unit invested.

Comparison composite (higher is better):
  0.4 × valuation / max valuation + 0.4 × profit / max profit
  + 0.2 × (1 − avg risk / 100)
Ties keep input order.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Sequence

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.models.enumerations import (
    AdoptionPace,
    CompetitiveAction,
    InvestmentLevel,
    MarketConditions,
)
from maturity_engine.models.simulation import (
    ScenarioParameters,
    SimulationContext,
    StrategicScenario,
)
from maturity_engine.scoring.utils import as_number, clamp, clamp_score, mean, to_decimal

logger = structlog.get_logger(__name__)

INVESTMENT_MULTIPLIER = {
    InvestmentLevel.LOW: 0.4,
    InvestmentLevel.MEDIUM: 1.0,
    InvestmentLevel.HIGH: 1.8,
}
PACE_MULTIPLIER = {
    AdoptionPace.CONSERVATIVE: 0.6,
    AdoptionPace.MODERATE: 1.0,
    AdoptionPace.AGGRESSIVE: 1.4,
}
MARKET_MULTIPLIER = {
    MarketConditions.STABLE: 1.0,
    MarketConditions.VOLATILE: 0.85,
    MarketConditions.GROWTH: 1.25,
}
COMPETITIVE_MULTIPLIER = {
    CompetitiveAction.STATUS_QUO: 1.0,
    CompetitiveAction.INVESTS_HEAVILY: 0.9,
}
BASE_DATA_GAIN = {InvestmentLevel.LOW: 4.0, InvestmentLevel.MEDIUM: 7.0, InvestmentLevel.HIGH: 12.0}
BASE_AI_GAIN = {InvestmentLevel.LOW: 3.0, InvestmentLevel.MEDIUM: 6.0, InvestmentLevel.HIGH: 10.0}

BASE_REVENUE_GROWTH = 0.03
MATURITY_REVENUE_GROWTH = 0.08
DEFAULT_MARGIN = 0.10
MATURITY_MARGIN_GAIN = 0.05
BASE_VALUATION_MULTIPLE = 2.0
MATURITY_VALUATION_MULTIPLE = 1.5
COMPETITOR_PRESSURE = 10.0
VOLATILITY_RISK = 15.0
MIN_HORIZON = 1
MAX_HORIZON = 10

COMPOSITE_WEIGHTS = {"valuation": 0.4, "profit": 0.4, "risk": 0.2}


@dataclass(frozen=True)
class YearlyOutcome:
    year: int
    data_maturity: Decimal
    ai_maturity: Decimal
    revenue: Decimal
    profit: Decimal
    valuation: Decimal
    competitive_score: Decimal
    risk_score: Decimal


@dataclass(frozen=True)
class SimulationOutcome:
    scenario_name: str
    parameters: ScenarioParameters
    horizon_years: int
    yearly: List[YearlyOutcome]
    end_data_maturity: Decimal
    end_ai_maturity: Decimal
    end_revenue: Decimal
    end_profit: Decimal
    end_valuation: Decimal
    end_competitive_score: Decimal
    end_risk_score: Decimal
    total_profit_over_horizon: Decimal
    avg_risk_over_horizon: Decimal
    investment_amount: Optional[Decimal] = None
    net_profit_after_investment: Optional[Decimal] = None
    profit_to_investment: Optional[Decimal] = None     # None without a positive investment


@dataclass(frozen=True)
class ScenarioRecommendation:
    scenario_index: int
    scenario_name: str
    objective: str                  # maximize_profit | minimize_risk | balance
    score: Decimal
    trade_offs: List[str] = field(default_factory=list)
    risks: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RankedOutcome:
    rank: int
    scenario_index: int
    scenario_name: str
    composite_score: Decimal


@dataclass(frozen=True)
class OutcomeComparison:
    ranking: List[RankedOutcome]
    best_balanced: Optional[int]
    best_by_profit: Optional[int]
    best_by_risk: Optional[int]
    recommendations: List[ScenarioRecommendation]


def define_strategic_scenario(name: str, parameters: Optional[Any] = None) -> StrategicScenario:
    """
    Build a scenario, filling unspecified parameters with defaults.

    Examples:
        >>> define_strategic_scenario("Base").parameters.horizon_years
        5
    """
    if parameters is None:
        params = ScenarioParameters()
    elif isinstance(parameters, ScenarioParameters):
        params = parameters
    else:
        params = ScenarioParameters.model_validate(
            {k: v for k, v in dict(parameters).items() if v is not None}
        )
    return StrategicScenario(name=name, parameters=params)


class StrategicDecisionSimulator:
    """Runs one scenario against a starting context."""

    def __init__(
        self,
        scenario: StrategicScenario,
        context: Any,
        settings: Optional[Settings] = None,
    ):
        self.scenario = scenario
        self.context = SimulationContext.model_validate(context, from_attributes=True)
        self.settings = settings or get_settings()

    def run(self) -> SimulationOutcome:
        p = self.scenario.parameters
        alpha = self.settings.SIMULATION_SMOOTHING
        horizon = int(clamp(as_number(p.horizon_years, 5), MIN_HORIZON, MAX_HORIZON))

        market = MARKET_MULTIPLIER[p.market_conditions]
        competitive = COMPETITIVE_MULTIPLIER[p.competitive_action]
        rate_factor = (
            INVESTMENT_MULTIPLIER[p.investment_level]
            * PACE_MULTIPLIER[p.adoption_pace]
            * market
            * competitive
        )
        data_rate = BASE_DATA_GAIN[p.investment_level] * rate_factor
        ai_rate = BASE_AI_GAIN[p.investment_level] * rate_factor

        data_m = clamp_score(self.context.current_data_maturity)
        ai_m = clamp_score(self.context.current_ai_maturity)
        revenue = max(0.0, as_number(self.context.current_revenue, 0.0))

        current_profit = as_number(self.context.current_profit)
        if revenue > 0 and current_profit is not None:
            baseline_margin = clamp(current_profit / revenue, -1.0, 1.0)
        else:
            baseline_margin = DEFAULT_MARGIN

        mf = (data_m + ai_m) / 200
        calibration = 1.0
        current_valuation = as_number(self.context.current_valuation)
        if current_valuation is not None and current_valuation > 0 and revenue > 0:
            calibration = current_valuation / (
                revenue * (BASE_VALUATION_MULTIPLE + MATURITY_VALUATION_MULTIPLE * mf)
            )

        pressure = COMPETITOR_PRESSURE if p.competitive_action is CompetitiveAction.INVESTS_HEAVILY else 0.0
        volatility = VOLATILITY_RISK if p.market_conditions is MarketConditions.VOLATILE else 0.0
        competitive_score = (data_m + ai_m) / 2
        risk_score = clamp(50 - mf * 20 + volatility)

        yearly: List[YearlyOutcome] = []
        for year in range(1, horizon + 1):
            data_m = clamp(data_m + data_rate * (100 - data_m) / 100)
            ai_m = clamp(ai_m + ai_rate * (100 - ai_m) / 100)
            mf = (data_m + ai_m) / 200

            revenue *= 1 + BASE_REVENUE_GROWTH + mf * MATURITY_REVENUE_GROWTH * market
            profit = revenue * (baseline_margin + mf * MATURITY_MARGIN_GAIN)
            valuation = revenue * (BASE_VALUATION_MULTIPLE + MATURITY_VALUATION_MULTIPLE * mf) * calibration

            competitive_target = clamp((data_m + ai_m) / 2 - pressure)
            risk_target = clamp(50 - mf * 20 + volatility)
            competitive_score = clamp(competitive_score + alpha * (competitive_target - competitive_score))
            risk_score = clamp(risk_score + alpha * (risk_target - risk_score))

            yearly.append(
                YearlyOutcome(
                    year=year,
                    data_maturity=to_decimal(data_m),
                    ai_maturity=to_decimal(ai_m),
                    revenue=to_decimal(revenue),
                    profit=to_decimal(profit),
                    valuation=to_decimal(valuation),
                    competitive_score=to_decimal(competitive_score),
                    risk_score=to_decimal(risk_score),
                )
            )

        last = yearly[-1]
        total_profit = sum((y.profit for y in yearly), Decimal("0.00"))
        avg_risk = to_decimal(mean([float(y.risk_score) for y in yearly]))

        investment = as_number(p.investment_amount)
        if investment is not None and investment >= 0:
            invested = to_decimal(investment)
            net_after_investment = total_profit - invested
            profit_multiple = (
                (total_profit / invested).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
                if invested > 0 else None
            )
        else:
            invested = net_after_investment = profit_multiple = None

        logger.info(
            "strategic_simulation_completed",
            scenario=self.scenario.name,
            horizon_years=horizon,
            end_valuation=float(last.valuation),
            avg_risk=float(avg_risk),
        )

        return SimulationOutcome(
            scenario_name=self.scenario.name,
            parameters=p,
            horizon_years=horizon,
            yearly=yearly,
            end_data_maturity=last.data_maturity,
            end_ai_maturity=last.ai_maturity,
            end_revenue=last.revenue,
            end_profit=last.profit,
            end_valuation=last.valuation,
            end_competitive_score=last.competitive_score,
            end_risk_score=last.risk_score,
            total_profit_over_horizon=total_profit,
            avg_risk_over_horizon=avg_risk,
            investment_amount=invested,
            net_profit_after_investment=net_after_investment,
            profit_to_investment=profit_multiple,
        )


def composite_scores(outcomes: Sequence[SimulationOutcome]) -> List[float]:
    """Composite per outcome, in input order."""
    max_valuation = max((float(o.end_valuation) for o in outcomes), default=0.0)
    max_profit = max((float(o.total_profit_over_horizon) for o in outcomes), default=0.0)
    scores = []
    for o in outcomes:
        valuation_norm = float(o.end_valuation) / max_valuation if max_valuation > 0 else 0.0
        profit_norm = float(o.total_profit_over_horizon) / max_profit if max_profit > 0 else 0.0
        risk_norm = 1 - clamp(float(o.avg_risk_over_horizon)) / 100
        scores.append(
            COMPOSITE_WEIGHTS["valuation"] * valuation_norm
            + COMPOSITE_WEIGHTS["profit"] * profit_norm
            + COMPOSITE_WEIGHTS["risk"] * risk_norm
        )
    return scores


def compare_outcomes(outcomes: Sequence[SimulationOutcome]) -> OutcomeComparison:
    """
    Rank simulated scenarios and recommend one per objective.

    Ranking is by composite score, descending; equal composites keep input
    order. best_by_profit and best_by_risk break ties the same way.
    """
    if not outcomes:
        return OutcomeComparison(
            ranking=[], best_balanced=None, best_by_profit=None, best_by_risk=None, recommendations=[]
        )

    scores = composite_scores(outcomes)
    order = sorted(range(len(outcomes)), key=lambda i: (-scores[i], i))
    ranking = [
        RankedOutcome(
            rank=rank,
            scenario_index=i,
            scenario_name=outcomes[i].scenario_name,
            composite_score=to_decimal(scores[i], 4),
        )
        for rank, i in enumerate(order, start=1)
    ]

    best_profit = min(
        range(len(outcomes)), key=lambda i: (-outcomes[i].total_profit_over_horizon, i)
    )
    best_risk = min(range(len(outcomes)), key=lambda i: (outcomes[i].avg_risk_over_horizon, i))
    best_balanced = order[0]

    profit_leader = outcomes[best_profit]
    recommendations = [
        ScenarioRecommendation(
            scenario_index=best_profit,
            scenario_name=profit_leader.scenario_name,
            objective="maximize_profit",
            score=profit_leader.total_profit_over_horizon,
            trade_offs=["Highest total profit over horizon", "May entail higher risk or investment"],
            risks=[
                "Above-average risk exposure"
                if profit_leader.avg_risk_over_horizon > 50
                else "Moderate risk"
            ],
        )
    ]
    if best_risk != best_profit:
        risk_leader = outcomes[best_risk]
        recommendations.append(
            ScenarioRecommendation(
                scenario_index=best_risk,
                scenario_name=risk_leader.scenario_name,
                objective="minimize_risk",
                score=Decimal("100.00") - risk_leader.avg_risk_over_horizon,
                trade_offs=["Lowest risk profile", "Profit may be lower than aggressive scenarios"],
                risks=["Conservative outcome may lag competitors in fast-moving markets"],
            )
        )
    recommendations.append(
        ScenarioRecommendation(
            scenario_index=best_balanced,
            scenario_name=outcomes[best_balanced].scenario_name,
            objective="balance",
            score=to_decimal(scores[best_balanced], 4),
            trade_offs=["Best combined valuation, profit and risk", "Suitable for steady transformation"],
            risks=["May not maximize any single dimension"],
        )
    )

    logger.info(
        "simulation_outcomes_compared",
        scenarios=len(outcomes),
        best_balanced=outcomes[best_balanced].scenario_name,
    )

    return OutcomeComparison(
        ranking=ranking,
        best_balanced=best_balanced,
        best_by_profit=best_profit,
        best_by_risk=best_risk,
        recommendations=recommendations,
    )


def run_scenarios(
    scenarios: Sequence[StrategicScenario],
    context: Any,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """Run each scenario independently against the same context, then compare."""
    outcomes = [StrategicDecisionSimulator(s, context, settings).run() for s in scenarios]
    return {"outcomes": outcomes, "comparison": compare_outcomes(outcomes)}
