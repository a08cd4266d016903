"""
AI Maturity Calculator
maturity_engine/scoring/ai_maturity.py

Scores an AI audit across automation, AI usage and deployment and assigns
a 1-7 stage.

  maturity_score = 0.33 × automation + 0.34 × ai_usage + 0.33 × deployment

Stage bands (upper bound exclusive):
  Awareness <10, Experimenting <25, Developing <40, Scaling <55,
  Optimising <70, AI-led <85, AI-native ≥85
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Tuple

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.scoring.rubric import (
    CategoryScoreResult,
    ItemKind,
    SubItem,
    score_category,
    stage_for,
)
from maturity_engine.scoring.utils import to_decimal, weighted_mean

logger = structlog.get_logger(__name__)


AI_RUBRIC: Dict[str, Tuple[SubItem, ...]] = {
    "automation": (
        SubItem("automated_workflow_pct", 0.35, ItemKind.PERCENT),
        SubItem(
            "workflow_automation_level", 0.25, ItemKind.CHOICE,
            choices={"none": 0.0, "basic": 0.2, "moderate": 0.5,
                     "advanced": 0.8, "full": 1.0},
        ),
        SubItem("rule_based_automation", 0.15, ItemKind.FLAG),
        SubItem("process_automation_count", 0.15, ItemKind.COUNT, cap=20),
        SubItem("sophistication_rating", 0.10, ItemKind.RATING, default=3),
    ),
    "ai_usage": (
        SubItem("predictive_models", 0.175, ItemKind.ADOPTION,
                impact_key="predictive_models_impact"),
        SubItem("recommendation_systems", 0.175, ItemKind.ADOPTION,
                impact_key="recommendation_systems_impact"),
        SubItem("nlp", 0.175, ItemKind.ADOPTION, impact_key="nlp_impact"),
        SubItem("computer_vision", 0.175, ItemKind.ADOPTION,
                impact_key="computer_vision_impact"),
        SubItem("ai_breadth_rating", 0.15, ItemKind.RATING, default=3),
        SubItem("ai_integration_rating", 0.15, ItemKind.RATING, default=3),
    ),
    "deployment": (
        SubItem(
            "deployment_mode", 0.35, ItemKind.CHOICE,
            choices={"experimental": 0.2, "pilot": 0.4, "production": 0.7,
                     "enterprise_wide": 1.0},
        ),
        SubItem(
            "deployment_scope", 0.30, ItemKind.CHOICE,
            choices={"isolated": 0.2, "departmental": 0.4,
                     "cross_functional": 0.7, "enterprise_wide": 1.0},
        ),
        SubItem(
            "decision_automation", 0.20, ItemKind.CHOICE,
            choices={"human_only": 0.0, "human_in_loop": 0.35,
                     "assisted": 0.65, "fully_autonomous": 1.0},
        ),
        SubItem("production_workloads_count", 0.05, ItemKind.COUNT, cap=10),
        SubItem("scalability_rating", 0.05, ItemKind.RATING, default=3),
        SubItem("reliability_rating", 0.05, ItemKind.RATING, default=3),
    ),
}

STAGE_UPPER_BOUNDS: Tuple[float, ...] = (10, 25, 40, 55, 70, 85)

STAGE_LABELS: Dict[int, str] = {
    1: "Awareness",
    2: "Experimenting",
    3: "Developing",
    4: "Scaling",
    5: "Optimising",
    6: "AI-led",
    7: "AI-native",
}


@dataclass(frozen=True)
class AIMaturityResult:
    """Outcome of an AI maturity audit."""
    category_scores: Dict[str, Decimal]
    category_details: Dict[str, CategoryScoreResult]
    maturity_score: Decimal    # weighted composite 0-100
    maturity_stage: int        # 1-7
    stage_label: str


class AIMaturityCalculator:
    """Stateless AI maturity scorer."""

    MIN_STAGE = 1
    MAX_STAGE = len(STAGE_UPPER_BOUNDS) + 1

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def calculate(self, inputs: Optional[Mapping[str, Mapping[str, Any]]]) -> AIMaturityResult:
        inputs = inputs if isinstance(inputs, Mapping) else {}
        weights = self.settings.ai_category_weights

        details = {
            category: score_category(category, items, inputs.get(category))
            for category, items in AI_RUBRIC.items()
        }
        category_scores = {c: to_decimal(r.score) for c, r in details.items()}

        score = to_decimal(
            weighted_mean(
                [float(category_scores[c]) for c in AI_RUBRIC],
                [weights[c] for c in AI_RUBRIC],
            )
        )
        stage = self.stage_for_score(float(score))

        logger.info(
            "ai_maturity_calculated",
            maturity_score=float(score),
            maturity_stage=stage,
        )

        return AIMaturityResult(
            category_scores=category_scores,
            category_details=details,
            maturity_score=score,
            maturity_stage=stage,
            stage_label=STAGE_LABELS[stage],
        )

    @staticmethod
    def stage_for_score(score: float) -> int:
        return stage_for(score, STAGE_UPPER_BOUNDS)
