"""
Capability Gap Engine
maturity_engine/scoring/capability_gaps.py

Compares current dimension scores with the ideal state for a target stage
and emits ranked capability gaps.

  ideal(dim, stage) = entry threshold of ``stage`` on that dimension's scale
                      (data: 0/15/35/55/75/90, AI: 0/10/25/40/55/70/85)
  required(cap)     = max(cap.min_score, ideal(dim, target_stage))
  gap               = required − current            (reported when > 0)

Capabilities whose min_stage exceeds the target stage are out of scope.

Priority thresholds (points, from Settings):
  gap ≥ 40 → high, gap ≥ 20 → medium, otherwise low
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.models.enumerations import PriorityLevel
from maturity_engine.models.gaps import GapTargets, MaturitySummary
from maturity_engine.scoring import ai_maturity, data_maturity
from maturity_engine.scoring.utils import clamp, to_decimal

logger = structlog.get_logger(__name__)


class GapDimension(str, Enum):
    """Tracked capability dimensions."""
    DATA_COLLECTION = "data_collection"
    DATA_STORAGE = "data_storage"
    DATA_INTEGRATION = "data_integration"
    DATA_GOVERNANCE = "data_governance"
    DATA_ACCESSIBILITY = "data_accessibility"
    AUTOMATION = "automation"
    AI_USAGE = "ai_usage"
    DEPLOYMENT = "deployment"


# dimension → (scale, source category)
DIMENSION_SOURCES: Dict[GapDimension, Tuple[str, str]] = {
    GapDimension.DATA_COLLECTION: ("data", "collection"),
    GapDimension.DATA_STORAGE: ("data", "storage"),
    GapDimension.DATA_INTEGRATION: ("data", "integration"),
    GapDimension.DATA_GOVERNANCE: ("data", "governance"),
    GapDimension.DATA_ACCESSIBILITY: ("data", "accessibility"),
    GapDimension.AUTOMATION: ("ai", "automation"),
    GapDimension.AI_USAGE: ("ai", "ai_usage"),
    GapDimension.DEPLOYMENT: ("ai", "deployment"),
}

THEMES: Dict[GapDimension, str] = {
    GapDimension.DATA_COLLECTION: "Data foundation",
    GapDimension.DATA_STORAGE: "Data foundation",
    GapDimension.DATA_INTEGRATION: "Data foundation",
    GapDimension.DATA_GOVERNANCE: "Governance & quality",
    GapDimension.DATA_ACCESSIBILITY: "Data access & analytics",
    GapDimension.AUTOMATION: "AI & automation",
    GapDimension.AI_USAGE: "AI & automation",
    GapDimension.DEPLOYMENT: "AI & deployment",
}

# Entry threshold per stage (index 0 → stage 1)
STAGE_ENTRY_SCORES: Dict[str, Tuple[float, ...]] = {
    "data": (0.0,) + tuple(float(b) for b in data_maturity.STAGE_UPPER_BOUNDS),
    "ai": (0.0,) + tuple(float(b) for b in ai_maturity.STAGE_UPPER_BOUNDS),
}


@dataclass(frozen=True)
class IdealCapability:
    description: str
    dimension: GapDimension
    min_stage: int
    min_score: float
    effort: str


IDEAL_CAPABILITIES: Tuple[IdealCapability, ...] = (
    IdealCapability("Data pipeline automation", GapDimension.DATA_INTEGRATION, 2, 50, "medium"),
    IdealCapability("Data governance framework", GapDimension.DATA_GOVERNANCE, 2, 40, "high"),
    IdealCapability("Model deployment infrastructure", GapDimension.DEPLOYMENT, 3, 45, "high"),
    IdealCapability("Single source of truth / data warehouse", GapDimension.DATA_STORAGE, 2, 45, "high"),
    IdealCapability("Automated data collection and ingestion", GapDimension.DATA_COLLECTION, 1, 50, "medium"),
    IdealCapability("Data quality controls and monitoring", GapDimension.DATA_GOVERNANCE, 1, 35, "medium"),
    IdealCapability("API and integration layer", GapDimension.DATA_INTEGRATION, 2, 40, "medium"),
    IdealCapability("Self-service analytics and reporting", GapDimension.DATA_ACCESSIBILITY, 1, 45, "low"),
    IdealCapability("Rule-based workflow automation", GapDimension.AUTOMATION, 1, 30, "low"),
    IdealCapability("Predictive analytics capability", GapDimension.AI_USAGE, 2, 40, "medium"),
    IdealCapability("Production ML model lifecycle", GapDimension.DEPLOYMENT, 4, 55, "high"),
    IdealCapability("Metadata management and data catalog", GapDimension.DATA_GOVERNANCE, 3, 55, "medium"),
    IdealCapability("Real-time or near-real-time data access", GapDimension.DATA_ACCESSIBILITY, 1, 50, "medium"),
    IdealCapability("Scalable cloud or hybrid storage", GapDimension.DATA_STORAGE, 1, 40, "high"),
    IdealCapability("NLP or advanced analytics use cases", GapDimension.AI_USAGE, 3, 50, "high"),
    IdealCapability("Cross-functional data access and RBAC", GapDimension.DATA_ACCESSIBILITY, 1, 45, "medium"),
    IdealCapability("Enterprise-wide automation and orchestration", GapDimension.AUTOMATION, 3, 50, "high"),
    IdealCapability("Decision automation (human-in-the-loop or assisted)", GapDimension.DEPLOYMENT, 4, 55, "high"),
)

_PRIORITY_RANK = {PriorityLevel.HIGH: 0, PriorityLevel.MEDIUM: 1, PriorityLevel.LOW: 2}


@dataclass(frozen=True)
class CapabilityGap:
    description: str
    dimension: GapDimension
    priority_level: PriorityLevel
    grouped_theme: str
    current_score: Decimal
    ideal_score: Decimal
    gap: Decimal            # ideal − current, > 0
    effort: str


@dataclass(frozen=True)
class DimensionScore:
    dimension: GapDimension
    current: Decimal
    ideal: Decimal
    gap: Decimal            # may be 0 when current ≥ ideal


@dataclass(frozen=True)
class CapabilityGapReport:
    gaps: List[CapabilityGap]
    dimension_scores: List[DimensionScore]
    themes: Dict[str, List[str]]        # theme → gap descriptions, in rank order
    target_data_stage: int
    target_ai_stage: int


def ideal_score(scale: str, target_stage: int) -> float:
    """Ideal dimension score for a target stage; non-decreasing in stage."""
    entries = STAGE_ENTRY_SCORES[scale]
    stage = max(1, min(len(entries), int(target_stage)))
    return entries[stage - 1]


class CapabilityGapEngine:
    """Stateless current-vs-ideal gap analysis."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def priority_for(self, gap: float) -> PriorityLevel:
        if gap >= self.settings.GAP_HIGH_THRESHOLD:
            return PriorityLevel.HIGH
        if gap >= self.settings.GAP_MEDIUM_THRESHOLD:
            return PriorityLevel.MEDIUM
        return PriorityLevel.LOW

    def analyze(
        self,
        data_summary: Any,
        ai_summary: Any,
        targets: Optional[GapTargets] = None,
    ) -> CapabilityGapReport:
        """
        Rank capability gaps for the given maturity summaries.

        Args:
            data_summary: DataMaturityResult, MaturitySummary or mapping with
                category_scores / maturity_stage; None treated as empty
            ai_summary: Same for AI maturity
            targets: Optional target stages (default: highest stage)

        Returns:
            CapabilityGapReport with gaps sorted high → low priority, then by
            gap size, then catalogue order
        """
        data = MaturitySummary.model_validate(data_summary or {}, from_attributes=True)
        ai = MaturitySummary.model_validate(ai_summary or {}, from_attributes=True)
        targets = targets or GapTargets()

        data_max = data_maturity.DataMaturityCalculator.MAX_STAGE
        ai_max = ai_maturity.AIMaturityCalculator.MAX_STAGE
        target_stage = {
            "data": max(1, min(data_max, targets.target_data_stage or data_max)),
            "ai": max(1, min(ai_max, targets.target_ai_stage or ai_max)),
        }
        summaries = {"data": data, "ai": ai}

        def current_for(dimension: GapDimension) -> float:
            scale, category = DIMENSION_SOURCES[dimension]
            return clamp(summaries[scale].category_scores.get(category, 0.0))

        dimension_scores = []
        for dimension, (scale, _) in DIMENSION_SOURCES.items():
            current = current_for(dimension)
            ideal = ideal_score(scale, target_stage[scale])
            dimension_scores.append(
                DimensionScore(
                    dimension=dimension,
                    current=to_decimal(current),
                    ideal=to_decimal(ideal),
                    gap=to_decimal(max(0.0, ideal - current)),
                )
            )

        ranked = []
        for order, cap in enumerate(IDEAL_CAPABILITIES):
            scale, _ = DIMENSION_SOURCES[cap.dimension]
            if cap.min_stage > target_stage[scale]:
                continue
            current = current_for(cap.dimension)
            required = max(cap.min_score, ideal_score(scale, target_stage[scale]))
            gap = required - current
            if gap <= 0:
                continue
            priority = self.priority_for(gap)
            ranked.append(
                (
                    (_PRIORITY_RANK[priority], -gap, order),
                    CapabilityGap(
                        description=cap.description,
                        dimension=cap.dimension,
                        priority_level=priority,
                        grouped_theme=THEMES[cap.dimension],
                        current_score=to_decimal(current),
                        ideal_score=to_decimal(required),
                        gap=to_decimal(gap),
                        effort=cap.effort,
                    ),
                )
            )
        gaps = [g for _, g in sorted(ranked, key=lambda item: item[0])]

        themes: Dict[str, List[str]] = {}
        for g in gaps:
            themes.setdefault(g.grouped_theme, []).append(g.description)

        logger.info(
            "capability_gaps_analyzed",
            gaps=len(gaps),
            high=sum(1 for g in gaps if g.priority_level is PriorityLevel.HIGH),
            target_data_stage=target_stage["data"],
            target_ai_stage=target_stage["ai"],
        )

        return CapabilityGapReport(
            gaps=gaps,
            dimension_scores=dimension_scores,
            themes=themes,
            target_data_stage=target_stage["data"],
            target_ai_stage=target_stage["ai"],
        )
