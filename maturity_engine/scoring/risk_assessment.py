"""
Risk Assessment Calculator
maturity_engine/scoring/risk_assessment.py

Four category risks (0-100, higher = riskier) and a weighted overall score.

  AI misalignment = (100 − ai)·0.40 + ALIGN[goals]·0.35 + GOV[governance]·0.25
                    + 10 (no ethics framework)
  Infrastructure  = CLOUD[hosting] + COMPLEXITY[integration]·0.40
                    + (5 − cyber)·20·0.30 + BACKUP[recovery]·0.30
  Operational     = DATA_GOV[governance] + 25 (no DQ controls)
                    + (5 − skills)·15 + INCIDENT[response]·0.40 + (5 − docs)·8
  Strategic       = gap·0.30 + COMPLIANCE[reg]·0.35 + POSTURE[competitive]·0.35
                    + (100 − maturity)·0.20

  overall = Σ w_c·score_c / Σ w_c      (defaults 0.25 each)

Levels: LOW < 35 ≤ MEDIUM < 65 ≤ HIGH
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Mapping, Optional

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.core.exceptions import MissingInputException
from maturity_engine.models.enumerations import RiskLevel
from maturity_engine.models.risk import (
    AIMisalignmentInputs,
    InfrastructureInputs,
    OperationalInputs,
    RiskAssessmentInputs,
    StrategicInputs,
)
from maturity_engine.scoring.utils import as_number, clamp, clamp_score, to_decimal

logger = structlog.get_logger(__name__)

CATEGORIES = ("ai_misalignment", "infrastructure", "operational", "strategic")
ELEVATED_THRESHOLD = 60

CATEGORY_LABELS: Dict[str, str] = {
    "ai_misalignment": "AI misalignment",
    "infrastructure": "Infrastructure",
    "operational": "Operational",
    "strategic": "Strategic",
}

GOALS_ALIGNMENT = {"low": 80, "medium": 45, "high": 15}
AI_GOVERNANCE = {"ad_hoc": 70, "defined": 40, "governed": 15}
HOSTING = {"cloud": 20, "hybrid": 50, "on_premise": 75}
INTEGRATION_COMPLEXITY = {"low": 15, "medium": 45, "high": 80}
BACKUP_RECOVERY = {"none": 70, "basic": 40, "tested": 15}
DATA_GOVERNANCE = {"none": 75, "basic": 45, "mature": 15}
INCIDENT_RESPONSE = {"none": 70, "reactive": 40, "proactive": 15}
REGULATORY = {"at_risk": 80, "compliant": 40, "leading": 15}
POSTURE = {"behind": 70, "par": 40, "ahead": 20}


@dataclass(frozen=True)
class CategoryRisk:
    score: Decimal                   # whole number 0-100
    factors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RiskAssessmentResult:
    category_scores: Dict[str, Decimal]
    category_factors: Dict[str, List[str]]
    overall_risk_score: Decimal
    risk_level: RiskLevel
    summary: List[str]
    weights: Dict[str, float]


def risk_level_for(score: float) -> RiskLevel:
    if score < 35:
        return RiskLevel.LOW
    if score < 65:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def _normalise(value: Optional[str]) -> Optional[str]:
    return value.strip().lower() if isinstance(value, str) else None


def _lookup(table: Mapping[str, float], key: Optional[str], default: str) -> float:
    return table.get(key, table[default])


def _rating(value: Optional[float], default: float = 3.0) -> float:
    return clamp(as_number(value, default), 1.0, 5.0)


def _category(score: float, factors: List[str]) -> CategoryRisk:
    return CategoryRisk(score=to_decimal(clamp(score), 0), factors=factors)


def ai_misalignment_risk(inputs: AIMisalignmentInputs) -> CategoryRisk:
    ai_score = clamp_score(inputs.ai_maturity_score, 50.0)
    goals = _normalise(inputs.strategic_goals_alignment)
    governance = _normalise(inputs.ai_projects_governance)
    score = (100 - ai_score) * 0.40
    score += _lookup(GOALS_ALIGNMENT, goals, "medium") * 0.35
    score += _lookup(AI_GOVERNANCE, governance, "ad_hoc") * 0.25
    if not inputs.ai_ethics_framework:
        score += 10

    factors = []
    if ai_score < 40:
        factors.append("Low AI maturity")
    if goals == "low":
        factors.append("Goals misalignment")
    if governance == "ad_hoc":
        factors.append("Ad-hoc AI governance")
    return _category(score, factors)


def infrastructure_risk(inputs: InfrastructureInputs) -> CategoryRisk:
    hosting = _normalise(inputs.cloud_vs_on_prem)
    complexity = _normalise(inputs.integration_complexity)
    score = _lookup(HOSTING, hosting, "hybrid")
    score += _lookup(INTEGRATION_COMPLEXITY, complexity, "medium") * 0.40
    score += (5 - _rating(inputs.cybersecurity_rating)) * 20 * 0.30
    score += _lookup(BACKUP_RECOVERY, _normalise(inputs.backup_recovery), "basic") * 0.30

    factors = []
    if hosting == "on_premise":
        factors.append("On-premise infrastructure")
    if complexity == "high":
        factors.append("High integration complexity")
    if as_number(inputs.cybersecurity_rating, 5.0) <= 2:
        factors.append("Weak cybersecurity posture")
    return _category(score, factors)


def operational_risk(inputs: OperationalInputs) -> CategoryRisk:
    governance = _normalise(inputs.data_governance)
    score = _lookup(DATA_GOVERNANCE, governance, "basic")
    if not inputs.data_quality_controls:
        score += 25
    score += (5 - _rating(inputs.team_skills_rating)) * 15
    score += _lookup(INCIDENT_RESPONSE, _normalise(inputs.incident_response), "reactive") * 0.40
    score += (5 - _rating(inputs.documentation_rating)) * 8

    factors = []
    if governance == "none":
        factors.append("No data governance")
    if not inputs.data_quality_controls:
        factors.append("No data quality controls")
    if as_number(inputs.team_skills_rating, 5.0) <= 2:
        factors.append("Skills gap")
    return _category(score, factors)


def strategic_risk(inputs: StrategicInputs) -> CategoryRisk:
    regulatory = _normalise(inputs.regulatory_compliance)
    posture = _normalise(inputs.competitive_data_ai_posture)
    score = clamp_score(inputs.industry_benchmark_gap, 30.0) * 0.30
    score += _lookup(REGULATORY, regulatory, "compliant") * 0.35
    score += _lookup(POSTURE, posture, "par") * 0.35
    score += (100 - clamp_score(inputs.data_ai_maturity_combined, 50.0)) * 0.20

    factors = []
    if regulatory == "at_risk":
        factors.append("Regulatory at risk")
    if posture == "behind":
        factors.append("Behind on data/AI")
    return _category(score, factors)


def aggregate_risk_scores(
    category_scores: Mapping[str, float],
    weights: Optional[Mapping[str, float]] = None,
    default_weights: Optional[Mapping[str, float]] = None,
) -> Dict[str, object]:
    """
    Weighted overall risk from category scores.

    Overrides in ``weights`` replace the matching defaults; the result is
    normalized by the total weight so partial overrides stay on a 0-100
    scale. Missing categories count as 0.

    Returns:
        {"overall_risk_score": Decimal, "risk_level": RiskLevel, "weights": dict}
    """
    merged = dict(default_weights or get_settings().risk_category_weights)
    for key, value in (weights or {}).items():
        if key in merged:
            merged[key] = max(0.0, as_number(value, merged[key]))

    total_weight = sum(merged.values())
    if total_weight > 0:
        overall = sum(
            clamp_score(category_scores.get(c, 0.0)) * merged[c] for c in CATEGORIES
        ) / total_weight
    else:
        overall = 0.0

    score = to_decimal(clamp(overall), 0)
    return {
        "overall_risk_score": score,
        "risk_level": risk_level_for(float(score)),
        "weights": merged,
    }


class RiskAssessmentCalculator:
    """Scores the four risk categories and aggregates them."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def assess(
        self,
        inputs: Optional[RiskAssessmentInputs] = None,
        weights: Optional[Mapping[str, float]] = None,
    ) -> RiskAssessmentResult:
        inputs = inputs or RiskAssessmentInputs()
        categories = {
            "ai_misalignment": ai_misalignment_risk(inputs.ai_misalignment),
            "infrastructure": infrastructure_risk(inputs.infrastructure),
            "operational": operational_risk(inputs.operational),
            "strategic": strategic_risk(inputs.strategic),
        }
        category_scores = {c: r.score for c, r in categories.items()}
        aggregate = aggregate_risk_scores(
            {c: float(s) for c, s in category_scores.items()},
            weights,
            self.settings.risk_category_weights,
        )

        summary = [
            f"{CATEGORY_LABELS[c]} risk is elevated"
            for c in CATEGORIES
            if category_scores[c] >= ELEVATED_THRESHOLD
        ]
        if not summary:
            summary.append("No single category is critically elevated")

        logger.info(
            "risk_assessed",
            overall_risk_score=float(aggregate["overall_risk_score"]),
            risk_level=aggregate["risk_level"].value,
            **{f"{c}_score": float(s) for c, s in category_scores.items()},
        )

        return RiskAssessmentResult(
            category_scores=category_scores,
            category_factors={c: r.factors for c, r in categories.items()},
            overall_risk_score=aggregate["overall_risk_score"],
            risk_level=aggregate["risk_level"],
            summary=summary,
            weights=aggregate["weights"],
        )


class RiskScoringService:
    """Aggregates supplied category scores, or scores raw inputs first."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def calculate(
        self,
        category_scores: Optional[Mapping[str, float]] = None,
        inputs: Optional[RiskAssessmentInputs] = None,
        weights: Optional[Mapping[str, float]] = None,
    ) -> Dict[str, object]:
        if category_scores is not None:
            scores = {c: clamp_score(category_scores.get(c, 0.0)) for c in CATEGORIES}
        elif inputs is not None:
            result = RiskAssessmentCalculator(self.settings).assess(inputs)
            scores = {c: float(s) for c, s in result.category_scores.items()}
        else:
            raise MissingInputException("RiskScoringService: provide category_scores or inputs")

        aggregate = aggregate_risk_scores(scores, weights, self.settings.risk_category_weights)
        return {
            "overall_risk_score": aggregate["overall_risk_score"],
            "risk_level": aggregate["risk_level"],
            "category_scores": {c: to_decimal(s) for c, s in scores.items()},
        }
