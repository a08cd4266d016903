"""
Competitive Position Engine
maturity_engine/scoring/competitive_position.py

Org vs peer maturity comparison.

  risk      = clamp(1.2 × (max(0, avgD − d) + max(0, avgA − a)) / 2)
  advantage = 50
              + clamp(0.3 × ((d − avgD) + (a − avgA)), ±30)
              + clamp(20 × ((d/maxD − 0.5) + (a/maxA − 0.5)), ±20)

Being ahead of the peer average contributes zero risk, never negative.
With no peers: risk 0 (Low), advantage exactly 50.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import structlog

from maturity_engine.models.competitive import MaturityScores
from maturity_engine.models.enumerations import RiskLabel
from maturity_engine.scoring.utils import clamp, clamp_score, mean, to_decimal

logger = structlog.get_logger(__name__)

RISK_STRETCH = 1.2
NEUTRAL_ADVANTAGE = 50.0
MEAN_LEAD_WEIGHT = 0.3
MEAN_LEAD_BOUND = 30.0
LEADER_WEIGHT = 20.0
LEADER_BOUND = 20.0
INSIGHT_MARGIN = 5.0


@dataclass(frozen=True)
class CompetitiveRisk:
    level: RiskLabel
    score: Decimal


@dataclass(frozen=True)
class CompetitivePositionReport:
    data_maturity: Decimal
    ai_maturity: Decimal
    competitors: List[MaturityScores]
    competitive_risk_level: RiskLabel
    competitive_risk_score: Decimal
    competitive_advantage_score: Decimal
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    comparison: Dict[str, Any] = field(default_factory=dict)


def _peer_scores(competitors: Sequence[Any]) -> List[MaturityScores]:
    peers = []
    for c in competitors:
        peer = MaturityScores.model_validate(c, from_attributes=True)
        peers.append(
            peer.model_copy(
                update={
                    "data_maturity": clamp_score(peer.data_maturity),
                    "ai_maturity": clamp_score(peer.ai_maturity),
                }
            )
        )
    return peers


def calculate_competitive_risk(
    org_data: float, org_ai: float, avg_data: float, avg_ai: float
) -> CompetitiveRisk:
    """Risk from the positive gap to the peer average (0-100, higher = worse)."""
    gap = (max(0.0, avg_data - org_data) + max(0.0, avg_ai - org_ai)) / 2
    score = clamp(gap * RISK_STRETCH)
    if score >= 50:
        level = RiskLabel.HIGH
    elif score >= 25:
        level = RiskLabel.MEDIUM
    else:
        level = RiskLabel.LOW
    return CompetitiveRisk(level=level, score=to_decimal(score))


def calculate_competitive_advantage(
    org_data: float, org_ai: float, competitors: Sequence[MaturityScores]
) -> Decimal:
    """Advantage 0-100 around a neutral 50; exactly 50 without peers."""
    if not competitors:
        return to_decimal(NEUTRAL_ADVANTAGE)

    avg_data = mean([c.data_maturity for c in competitors])
    avg_ai = mean([c.ai_maturity for c in competitors])
    best_data = max(max(c.data_maturity for c in competitors), 1.0)
    best_ai = max(max(c.ai_maturity for c in competitors), 1.0)

    mean_lead = MEAN_LEAD_WEIGHT * ((org_data - avg_data) + (org_ai - avg_ai))
    leader_position = LEADER_WEIGHT * (
        (org_data / best_data - 0.5) + (org_ai / best_ai - 0.5)
    )

    advantage = (
        NEUTRAL_ADVANTAGE
        + clamp(mean_lead, -MEAN_LEAD_BOUND, MEAN_LEAD_BOUND)
        + clamp(leader_position, -LEADER_BOUND, LEADER_BOUND)
    )
    return to_decimal(clamp(advantage))


def build_insights(
    org_data: float,
    org_ai: float,
    avg_data: float,
    avg_ai: float,
    risk_level: RiskLabel,
    advantage: float,
) -> Dict[str, List[str]]:
    strengths: List[str] = []
    weaknesses: List[str] = []

    if org_data > avg_data + INSIGHT_MARGIN:
        strengths.append("Data maturity above competitor average.")
    elif org_data < avg_data - INSIGHT_MARGIN:
        weaknesses.append("Data maturity below competitor average.")

    if org_ai > avg_ai + INSIGHT_MARGIN:
        strengths.append("AI maturity above competitor average.")
    elif org_ai < avg_ai - INSIGHT_MARGIN:
        weaknesses.append("AI maturity below competitor average.")

    if advantage >= 65:
        strengths.append("Strong overall competitive advantage vs peers.")
    elif advantage < 40:
        weaknesses.append(
            "Limited competitive advantage; consider accelerating data and AI initiatives."
        )

    if risk_level is RiskLabel.HIGH:
        weaknesses.append("Competitive risk is high; competitors may be pulling ahead.")
    elif risk_level is RiskLabel.LOW:
        strengths.append("Competitive risk is low; position is relatively secure.")

    return {"strengths": strengths, "weaknesses": weaknesses}


class CompetitivePositionAnalyzer:
    """Compares one organisation against a peer set."""

    def analyze(
        self,
        org: Any,
        competitors: Optional[Sequence[Any]] = None,
    ) -> CompetitivePositionReport:
        """
        Args:
            org: MaturityScores, or any object/mapping with data_maturity and
                ai_maturity
            competitors: Peer scores in the same shape; empty means no
                comparison is available

        Returns:
            CompetitivePositionReport
        """
        scores = MaturityScores.model_validate(org, from_attributes=True)
        org_data = clamp_score(scores.data_maturity)
        org_ai = clamp_score(scores.ai_maturity)
        peers = _peer_scores(competitors or [])

        # No peers: compare against self so the gap is zero
        avg_data = mean([c.data_maturity for c in peers]) if peers else org_data
        avg_ai = mean([c.ai_maturity for c in peers]) if peers else org_ai

        risk = calculate_competitive_risk(org_data, org_ai, avg_data, avg_ai)
        advantage = calculate_competitive_advantage(org_data, org_ai, peers)

        insights = (
            build_insights(org_data, org_ai, avg_data, avg_ai, risk.level, float(advantage))
            if peers
            else {"strengths": [], "weaknesses": []}
        )

        logger.info(
            "competitive_position_analyzed",
            competitors=len(peers),
            risk_score=float(risk.score),
            risk_level=risk.level.value,
            advantage_score=float(advantage),
        )

        return CompetitivePositionReport(
            data_maturity=to_decimal(org_data),
            ai_maturity=to_decimal(org_ai),
            competitors=peers,
            competitive_risk_level=risk.level,
            competitive_risk_score=risk.score,
            competitive_advantage_score=advantage,
            strengths=insights["strengths"],
            weaknesses=insights["weaknesses"],
            comparison={
                "avg_competitor_data": to_decimal(avg_data),
                "avg_competitor_ai": to_decimal(avg_ai),
                "competitor_count": len(peers),
            },
        )
