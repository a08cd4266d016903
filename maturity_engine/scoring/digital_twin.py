"""
Enterprise Digital Twin
maturity_engine/scoring/digital_twin.py

A causal model of the organisation built from the latest maturity,
financial and risk outputs. Nodes carry current values; edges carry the
assumed causal strength between them:

  data maturity → AI maturity      0.8
  AI maturity   → revenue          0.6
  AI maturity   → profit           0.5
  data maturity → risk            −0.5
  revenue       → valuation        0.7

Simulation (horizon 1-60 months). Each intervention contributes
``points × intensity × effective_months / 12`` where effective months are
min(duration or 12, horizon):

  investment in data        data +8
  investment in AI / ML     ai +7
  governance                data +5, risk −6
  technology                ai +6, data +3
  capability / process      ai +4, data +3

Then, with mf = (data + ai) / 200:

  revenue   = revenue × (1 + 0.02 + 0.06 × mf) ^ (horizon / 12)
  margin    = margin + 4 × mf
  valuation = revenue × (2 + 1.2 × mf)

The twin never reads clocks; simulated states carry ``months_ahead``.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional, Sequence, Tuple

import structlog

from maturity_engine.models.enumerations import InterventionType, RiskLevel, TwinGoalType
from maturity_engine.models.twin import (
    TwinCapabilities,
    TwinContext,
    TwinGoal,
    TwinIntervention,
    TwinMaturity,
    TwinRisk,
    TwinRoadmap,
)
from maturity_engine.scoring.ai_maturity import AIMaturityCalculator
from maturity_engine.scoring.capability_gaps import ideal_score
from maturity_engine.scoring.data_maturity import DataMaturityCalculator
from maturity_engine.scoring.utils import as_number, clamp, to_decimal

logger = structlog.get_logger(__name__)

DEFAULT_VALUATION_MULTIPLE = 2.5
SIMULATION_CONFIDENCE = (Decimal("0.75"), Decimal("0.95"))
PLAN_CONFIDENCE = Decimal("0.78")
MIN_STAGE_GAP = 5.0

# (source, target, strength, label)
CAUSAL_LINKS: Tuple[Tuple[str, str, float, str], ...] = (
    ("data_maturity", "ai_maturity", 0.8, "Data quality → AI accuracy"),
    ("ai_maturity", "revenue", 0.6, "AI → Revenue upside"),
    ("ai_maturity", "profit", 0.5, "Efficiency → Profit"),
    ("data_maturity", "risk", -0.5, "Governance → Risk reduction"),
    ("revenue", "valuation", 0.7, "Revenue → Valuation"),
)

# intervention type → (data points, ai points, risk points) per year at full intensity
INTERVENTION_EFFECTS = {
    InterventionType.GOVERNANCE: (5.0, 0.0, -6.0),
    InterventionType.TECHNOLOGY: (3.0, 6.0, 0.0),
    InterventionType.CAPABILITY: (3.0, 4.0, 0.0),
    InterventionType.PROCESS: (3.0, 4.0, 0.0),
}
DATA_INVESTMENT_POINTS = 8.0
AI_INVESTMENT_POINTS = 7.0


@dataclass(frozen=True)
class TwinNode:
    id: str
    label: str
    node_type: str          # maturity | financial | risk
    value: Decimal
    unit: str


@dataclass(frozen=True)
class TwinEdge:
    source_id: str
    target_id: str
    strength: Decimal
    label: str


@dataclass(frozen=True)
class TwinFinancialState:
    revenue: Decimal
    profit: Decimal
    profit_margin_pct: Decimal
    valuation: Decimal
    revenue_upside: Optional[Decimal] = None
    cost_reduction: Optional[Decimal] = None


@dataclass(frozen=True)
class DigitalTwinState:
    version: int
    maturity: TwinMaturity
    financial: TwinFinancialState
    risk: TwinRisk
    capabilities: TwinCapabilities
    roadmap: TwinRoadmap
    nodes: List[TwinNode]
    edges: List[TwinEdge]
    label: Optional[str] = None
    months_ahead: int = 0


@dataclass(frozen=True)
class SimulatedTwinState:
    state: DigitalTwinState
    months_ahead: int
    interventions_applied: List[TwinIntervention]
    confidence_interval: Tuple[Decimal, Decimal] = SIMULATION_CONFIDENCE


@dataclass(frozen=True)
class OptimizedAction:
    order: int
    intervention: TwinIntervention
    start_month: int
    end_month: int


@dataclass(frozen=True)
class OptimizedTransformationPlan:
    goal: TwinGoal
    actions: List[OptimizedAction]
    projected_final_state: DigitalTwinState
    total_duration_months: int
    confidence_score: Decimal = PLAN_CONFIDENCE
    trade_offs: List[str] = field(default_factory=list)
    risks: List[str] = field(default_factory=list)


def twin_risk_level(score: float) -> RiskLevel:
    if score > 60:
        return RiskLevel.HIGH
    if score > 35:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def build_graph(
    maturity: TwinMaturity, financial: TwinFinancialState, risk: TwinRisk
) -> Tuple[List[TwinNode], List[TwinEdge]]:
    nodes = [
        TwinNode("data_maturity", "Data maturity", "maturity", to_decimal(maturity.data_maturity_index), "0-100"),
        TwinNode("ai_maturity", "AI maturity", "maturity", to_decimal(maturity.ai_maturity_score), "0-100"),
        TwinNode("revenue", "Revenue", "financial", financial.revenue, "currency"),
        TwinNode("profit", "Profit", "financial", financial.profit, "currency"),
        TwinNode("valuation", "Valuation", "financial", financial.valuation, "currency"),
        TwinNode("risk", "Risk score", "risk", to_decimal(risk.overall_risk_score), "0-100"),
    ]
    edges = [
        TwinEdge(source, target, to_decimal(strength, 1), label)
        for source, target, strength, label in CAUSAL_LINKS
    ]
    return nodes, edges


def build_digital_twin_state(
    context: Any = None, label: Optional[str] = None, version: int = 1, months_ahead: int = 0
) -> DigitalTwinState:
    """
    Assemble a twin state from integrated context.

    ``context`` may be a TwinContext, a mapping with any of its sections or
    None. Valuation defaults to 2.5 × revenue; risk level is derived from
    the risk score when not supplied.
    """
    ctx = TwinContext.model_validate(context or {})
    revenue = ctx.financial.revenue
    margin = ctx.financial.profit_margin_pct
    valuation = ctx.financial.valuation
    if valuation is None:
        valuation = revenue * DEFAULT_VALUATION_MULTIPLE

    financial = TwinFinancialState(
        revenue=to_decimal(revenue),
        profit=to_decimal(revenue * margin / 100),
        profit_margin_pct=to_decimal(margin),
        valuation=to_decimal(valuation),
        revenue_upside=None if ctx.financial.revenue_upside is None else to_decimal(ctx.financial.revenue_upside),
        cost_reduction=None if ctx.financial.cost_reduction is None else to_decimal(ctx.financial.cost_reduction),
    )
    risk = ctx.risk
    if risk.risk_level is None:
        risk = risk.model_copy(update={"risk_level": twin_risk_level(risk.overall_risk_score)})

    nodes, edges = build_graph(ctx.maturity, financial, risk)
    return DigitalTwinState(
        version=version,
        maturity=ctx.maturity,
        financial=financial,
        risk=risk,
        capabilities=ctx.capabilities,
        roadmap=ctx.roadmap,
        nodes=nodes,
        edges=edges,
        label=label,
        months_ahead=months_ahead,
    )


def intervention_effect(intervention: TwinIntervention) -> Tuple[float, float, float]:
    """(data, ai, risk) points per year at the intervention's intensity."""
    target = intervention.target.lower()
    if intervention.type is InterventionType.INVESTMENT:
        if "data" in target:
            points = (DATA_INVESTMENT_POINTS, 0.0, 0.0)
        elif "ai" in target or "ml" in target:
            points = (0.0, AI_INVESTMENT_POINTS, 0.0)
        else:
            points = (0.0, 0.0, 0.0)
    else:
        points = INTERVENTION_EFFECTS[intervention.type]
    return tuple(p * intervention.intensity for p in points)


def _intervention(ident: str, kind: InterventionType, target: str, intensity: float,
                  duration: int, description: str) -> TwinIntervention:
    return TwinIntervention(
        id=ident, type=kind, target=target, intensity=intensity,
        duration_months=duration, description=description,
    )


class EnterpriseDigitalTwin:
    """Holds one organisation's twin state; simulates and optimises against it."""

    def __init__(self, organisation_id: str, state: Optional[DigitalTwinState] = None):
        self.organisation_id = organisation_id
        self._state = state if state is not None else build_digital_twin_state()

    @classmethod
    def from_context(cls, organisation_id: str, context: Any, label: Optional[str] = None):
        return cls(organisation_id, build_digital_twin_state(context, label=label))

    @property
    def state(self) -> DigitalTwinState:
        return self._state

    def update(self, context: Any) -> DigitalTwinState:
        """Rebuild from new context, keeping the label and bumping the version."""
        self._state = build_digital_twin_state(
            context, label=self._state.label, version=self._state.version + 1
        )
        logger.info("digital_twin_updated", organisation_id=self.organisation_id, version=self._state.version)
        return self._state

    def simulate(
        self, future_months: float, interventions: Sequence[Any] = ()
    ) -> SimulatedTwinState:
        horizon = int(clamp(as_number(future_months, 12.0), 1, 60))
        applied = [TwinIntervention.model_validate(i) for i in interventions]

        data = self._state.maturity.data_maturity_index
        ai = self._state.maturity.ai_maturity_score
        risk_score = self._state.risk.overall_risk_score
        for intervention in applied:
            duration = intervention.duration_months
            months = min(12.0 if duration is None else max(0.0, duration), horizon)
            d, a, r = intervention_effect(intervention)
            data = clamp(data + d * months / 12)
            ai = clamp(ai + a * months / 12)
            risk_score = clamp(risk_score + r * months / 12)

        factor = (data + ai) / 200
        revenue = float(self._state.financial.revenue) * (1 + 0.02 + factor * 0.06) ** (horizon / 12)
        margin = clamp(float(self._state.financial.profit_margin_pct) + factor * 4)

        state = build_digital_twin_state(
            {
                "maturity": {
                    "data_maturity_index": round(data, 2),
                    "data_maturity_stage": DataMaturityCalculator.stage_for_index(data),
                    "ai_maturity_score": round(ai, 2),
                    "ai_maturity_stage": AIMaturityCalculator.stage_for_score(ai),
                },
                "financial": {
                    "revenue": revenue,
                    "profit_margin_pct": margin,
                    "valuation": revenue * (2 + factor * 1.2),
                },
                "risk": {
                    "overall_risk_score": round(risk_score, 2),
                    "risk_level": twin_risk_level(risk_score),
                },
                "capabilities": self._state.capabilities,
                "roadmap": self._state.roadmap,
            },
            label="simulated",
            version=self._state.version,
            months_ahead=horizon,
        )

        logger.debug(
            "digital_twin_simulated",
            organisation_id=self.organisation_id,
            months_ahead=horizon,
            interventions=len(applied),
        )
        return SimulatedTwinState(state=state, months_ahead=horizon, interventions_applied=applied)

    def _plan_interventions(self, goal: TwinGoal, horizon: int) -> List[TwinIntervention]:
        first_year = min(12, horizon)
        maturity = self._state.maturity

        if goal.type is TwinGoalType.AI_MATURITY_STAGE:
            if ideal_score("ai", goal.target_value) - maturity.ai_maturity_score <= MIN_STAGE_GAP:
                return []
            return [
                _intervention("opt-ai-1", InterventionType.INVESTMENT, "AI/ML capability", 0.8,
                              first_year, "Invest in AI talent and platforms"),
                _intervention("opt-data-1", InterventionType.INVESTMENT, "Data infrastructure", 0.6,
                              first_year, "Improve data quality for AI"),
            ]
        if goal.type is TwinGoalType.DATA_MATURITY_STAGE:
            if ideal_score("data", goal.target_value) - maturity.data_maturity_index <= MIN_STAGE_GAP:
                return []
            return [
                _intervention("opt-gov-1", InterventionType.GOVERNANCE, "Data governance", 0.7,
                              first_year, "Implement data governance policy"),
                _intervention("opt-tech-1", InterventionType.TECHNOLOGY, "Data platform", 0.6,
                              first_year, "Deploy modern data stack"),
            ]
        if goal.type is TwinGoalType.PROFIT_INCREASE_PCT:
            return [
                _intervention("opt-ai-profit", InterventionType.INVESTMENT, "AI automation", 0.7,
                              horizon, "AI-driven efficiency to expand margin"),
                _intervention("opt-data-profit", InterventionType.INVESTMENT, "Data quality", 0.5,
                              horizon, "Better data for decisioning"),
            ]
        if goal.type is TwinGoalType.RISK_REDUCTION:
            return [
                _intervention("opt-gov-risk", InterventionType.GOVERNANCE, "Governance and compliance", 0.8,
                              first_year, "Strengthen governance to reduce risk"),
            ]
        return [
            _intervention("opt-ai-rev", InterventionType.INVESTMENT, "AI products", 0.75,
                          horizon, "AI-enabled revenue growth"),
        ]

    def optimize_path(self, goal: Any) -> OptimizedTransformationPlan:
        """
        Recommend a sequenced set of interventions for a goal.

        Stage goals only schedule work when the stage's entry score is more
        than five points above the current score. Actions run back to back;
        end months are capped at the horizon.
        """
        goal = TwinGoal.model_validate(goal)
        horizon = int(clamp(goal.horizon_months, 6, 48))
        interventions = self._plan_interventions(goal, horizon)

        actions = []
        start = 0
        for order, intervention in enumerate(interventions, start=1):
            end = start + int(intervention.duration_months)
            actions.append(OptimizedAction(order, intervention, start, min(end, horizon)))
            start = end

        simulated = self.simulate(horizon, interventions)
        risks = ["Delays or scope creep may extend timeline."]
        risks.append(
            "Lower-risk path may slow goal achievement."
            if goal.minimize_risk
            else "Aggressive path may increase short-term risk."
        )

        logger.info(
            "digital_twin_path_optimised",
            organisation_id=self.organisation_id,
            goal=goal.type.value,
            actions=len(actions),
            horizon_months=horizon,
        )
        return OptimizedTransformationPlan(
            goal=goal,
            actions=actions,
            projected_final_state=simulated.state,
            total_duration_months=horizon,
            trade_offs=[
                "Execution depends on organisational capacity and change management.",
                "Financial outlay required for recommended interventions.",
            ],
            risks=risks,
        )
