"""
Transformation Roadmap Generator
maturity_engine/scoring/roadmap.py

Turns capability gaps (or, without gaps, synthetic actions from maturity
deltas) into three ordered phases: Foundation, Build, Scale.

  action cost   = area base cost × (0.7 + 0.3 × severity / 100)
  action impact = summary total × severity / Σ severity     (summary given)
                  None, with a High/Medium/Low share label  (no summary)

Strategies (all stable sorts):
  highest_roi_first    impact per cost, descending
  lowest_cost_first    cost, ascending
  strategic_alignment  governance/data → infrastructure → ai, then ROI
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.models.enumerations import ActionArea, PrioritizationStrategy
from maturity_engine.models.roadmap import RoadmapGap, RoadmapInputs
from maturity_engine.scoring.utils import clamp_score, format_money_label, mean, to_decimal

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActionTemplate:
    description: str
    area: ActionArea
    cost: float


ACTION_TEMPLATES = (
    ActionTemplate("Implement data warehouse and single source of truth", ActionArea.DATA, 200_000),
    ActionTemplate("Establish data governance and quality controls", ActionArea.GOVERNANCE, 80_000),
    ActionTemplate("Integrate core systems and APIs", ActionArea.INFRASTRUCTURE, 150_000),
    ActionTemplate("Deploy predictive analytics (demand, churn)", ActionArea.AI, 120_000),
    ActionTemplate("Automate reporting and dashboards", ActionArea.DATA, 60_000),
    ActionTemplate("Pilot NLP or computer vision use case", ActionArea.AI, 180_000),
    ActionTemplate("Scale AI to production and decision automation", ActionArea.AI, 250_000),
    ActionTemplate("Data literacy and upskilling programme", ActionArea.GOVERNANCE, 40_000),
    ActionTemplate("Cybersecurity and access controls hardening", ActionArea.INFRASTRUCTURE, 90_000),
)

DIMENSION_AREAS: Dict[str, ActionArea] = {
    "data_governance": ActionArea.GOVERNANCE,
    "data_collection": ActionArea.DATA,
    "data_storage": ActionArea.DATA,
    "data_accessibility": ActionArea.DATA,
    "data_integration": ActionArea.INFRASTRUCTURE,
    "automation": ActionArea.AI,
    "ai_usage": ActionArea.AI,
    "deployment": ActionArea.AI,
}

# Fixed precedence for strategic alignment; foundations before AI
STRATEGIC_ORDER: Dict[ActionArea, int] = {
    ActionArea.GOVERNANCE: 0,
    ActionArea.DATA: 0,
    ActionArea.INFRASTRUCTURE: 1,
    ActionArea.OTHER: 1,
    ActionArea.AI: 2,
}

AREA_BASE_COST: Dict[ActionArea, float] = {
    area: mean([t.cost for t in ACTION_TEMPLATES if t.area is area])
    for area in (ActionArea.DATA, ActionArea.GOVERNANCE, ActionArea.INFRASTRUCTURE, ActionArea.AI)
}
AREA_BASE_COST[ActionArea.OTHER] = mean([t.cost for t in ACTION_TEMPLATES])

PHASES = (
    ("Foundation", "Establish data and governance foundations."),
    ("Build", "Integrate systems and deploy initial analytics."),
    ("Scale", "Scale AI and automation for maximum impact."),
)
PHASE_SHARE = 0.35


@dataclass(frozen=True)
class RoadmapAction:
    description: str
    area: ActionArea
    severity: Decimal
    estimated_cost: Decimal
    projected_impact_value: Optional[Decimal]
    projected_impact_label: str
    roi: Decimal                    # impact/cost, or severity/cost without a summary


@dataclass(frozen=True)
class RoadmapPhase:
    name: str
    description: str
    order: int
    actions: List[RoadmapAction]
    estimated_cost: Decimal
    projected_impact_value: Optional[Decimal]
    projected_impact_label: str


@dataclass(frozen=True)
class TransformationRoadmap:
    phases: List[RoadmapPhase]
    total_estimated_cost: Decimal
    total_projected_impact: Optional[Decimal]
    total_projected_impact_label: str
    prioritization: PrioritizationStrategy
    inputs_summary: Dict[str, Any] = field(default_factory=dict)


def area_for(gap: RoadmapGap) -> ActionArea:
    if gap.area is not None:
        return gap.area
    return DIMENSION_AREAS.get(gap.dimension or "", ActionArea.OTHER)


def share_label(share: float, count: int) -> str:
    """Qualitative impact relative to an equal share."""
    if count <= 0:
        return "Low"
    relative = share * count
    if relative >= 1.25:
        return "High"
    if relative >= 0.75:
        return "Medium"
    return "Low"


def action_cost(area: ActionArea, severity: float, base: Optional[float] = None) -> float:
    base_cost = AREA_BASE_COST[area] if base is None else base
    return base_cost * (0.7 + 0.3 * clamp_score(severity) / 100)


def prioritize_actions(
    actions: Sequence[RoadmapAction],
    strategy: PrioritizationStrategy,
) -> List[RoadmapAction]:
    """Return a new list ordered by ``strategy``; ties keep input order."""
    strategy = PrioritizationStrategy(strategy)
    if strategy is PrioritizationStrategy.HIGHEST_ROI_FIRST:
        return sorted(actions, key=lambda a: -a.roi)
    if strategy is PrioritizationStrategy.LOWEST_COST_FIRST:
        return sorted(actions, key=lambda a: a.estimated_cost)
    return sorted(actions, key=lambda a: (STRATEGIC_ORDER[a.area], -a.roi))


class RoadmapGenerator:
    """Builds phased roadmaps from gaps and an optional financial summary."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _label(self, value: Optional[float], share: float, count: int) -> str:
        if value is None:
            return f"{share_label(share, count)} relative impact"
        return format_money_label(value, self.settings.CURRENCY_SYMBOL)

    def _draft_actions(self, inputs: RoadmapInputs) -> List[Dict[str, Any]]:
        if inputs.capability_gaps:
            return [
                {
                    "description": g.description,
                    "area": area_for(g),
                    "severity": g.gap,
                    "base": None,
                }
                for g in inputs.capability_gaps
            ]

        data_delta = max(
            0.0,
            clamp_score(inputs.target_data_maturity) - clamp_score(inputs.current_data_maturity),
        )
        ai_delta = max(
            0.0,
            clamp_score(inputs.target_ai_maturity) - clamp_score(inputs.current_ai_maturity),
        )
        drafts = []
        for t in ACTION_TEMPLATES:
            severity = ai_delta if t.area is ActionArea.AI else data_delta
            if severity <= 0:
                continue
            drafts.append(
                {"description": t.description, "area": t.area, "severity": severity, "base": t.cost}
            )
        return drafts

    def generate(self, inputs: RoadmapInputs) -> TransformationRoadmap:
        drafts = self._draft_actions(inputs)
        count = len(drafts)
        total_severity = sum(d["severity"] for d in drafts)
        summary_total = (
            inputs.financial_impact.resolved_total if inputs.financial_impact is not None else None
        )

        actions = []
        for d in drafts:
            share = d["severity"] / total_severity if total_severity > 0 else 0.0
            cost = action_cost(d["area"], d["severity"], d["base"])
            impact = summary_total * share if summary_total is not None else None
            roi = (impact if impact is not None else d["severity"]) / cost if cost > 0 else 0.0
            actions.append(
                RoadmapAction(
                    description=d["description"],
                    area=d["area"],
                    severity=to_decimal(d["severity"]),
                    estimated_cost=to_decimal(cost),
                    projected_impact_value=to_decimal(impact) if impact is not None else None,
                    projected_impact_label=self._label(impact, share, count),
                    roi=to_decimal(roi, 6),
                )
            )

        ordered = prioritize_actions(actions, inputs.prioritization)
        phases = self._phases(ordered, total_severity, count)

        total_cost = sum((p.estimated_cost for p in phases), Decimal("0.00"))
        if summary_total is None:
            total_impact = None
            total_label = "Relative impact only; no financial impact summary supplied"
        else:
            total_impact = sum((p.projected_impact_value for p in phases), Decimal("0.00"))
            total_label = format_money_label(float(total_impact), self.settings.CURRENCY_SYMBOL)

        logger.info(
            "roadmap_generated",
            strategy=inputs.prioritization.value,
            actions=count,
            phases=len(phases),
            synthetic=not inputs.capability_gaps,
            total_cost=float(total_cost),
        )

        return TransformationRoadmap(
            phases=phases,
            total_estimated_cost=total_cost,
            total_projected_impact=total_impact,
            total_projected_impact_label=total_label,
            prioritization=inputs.prioritization,
            inputs_summary={
                "current_data_maturity": clamp_score(inputs.current_data_maturity),
                "current_ai_maturity": clamp_score(inputs.current_ai_maturity),
                "target_data_maturity": clamp_score(inputs.target_data_maturity),
                "target_ai_maturity": clamp_score(inputs.target_ai_maturity),
                "gap_source": "capability_gaps" if inputs.capability_gaps else "maturity_delta",
            },
        )

    def _phases(
        self,
        ordered: List[RoadmapAction],
        total_severity: float,
        count: int,
    ) -> List[RoadmapPhase]:
        n = len(ordered)
        first = math.ceil(n * PHASE_SHARE)
        second = math.ceil(n * PHASE_SHARE)
        bounds = [(0, first), (first, min(n, first + second)), (min(n, first + second), n)]

        phases = []
        for (name, description), (start, end) in zip(PHASES, bounds):
            chunk = ordered[start:end]
            if not chunk:
                continue
            cost = sum((a.estimated_cost for a in chunk), Decimal("0.00"))
            if any(a.projected_impact_value is None for a in chunk):
                impact = None
            else:
                impact = sum((a.projected_impact_value for a in chunk), Decimal("0.00"))
            share = (
                float(sum(a.severity for a in chunk)) / total_severity if total_severity > 0 else 0.0
            )
            phases.append(
                RoadmapPhase(
                    name=name,
                    description=description,
                    order=len(phases) + 1,
                    actions=chunk,
                    estimated_cost=cost,
                    projected_impact_value=impact,
                    projected_impact_label=self._label(
                        float(impact) if impact is not None else None,
                        share,
                        len(PHASES),
                    ),
                )
            )
        return phases
