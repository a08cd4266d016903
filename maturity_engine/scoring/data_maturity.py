"""
Data Maturity Calculator
maturity_engine/scoring/data_maturity.py

Scores a data audit across five categories and assigns a 1-6 stage.

  maturity_index = Σ(w_c × category_score_c)        (weights from Settings)
  confidence     = answered sub-items / total sub-items

Stage bands over maturity_index (upper bound exclusive):

  1 Initial / Ad-hoc   [0, 15)
  2 Developing         [15, 35)
  3 Defined            [35, 55)
  4 Managed            [55, 75)
  5 Optimising         [75, 90)
  6 Data-driven        [90, 100]
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


FREQUENCY_CHOICES = {
    "real-time": 1.0, "daily": 0.9, "weekly": 0.6,
    "monthly": 0.4, "ad-hoc": 0.2, "none": 0.0,
}

DATA_RUBRIC: Dict[str, Tuple[SubItem, ...]] = {
    "collection": (
        SubItem("data_completeness_score", 0.35, ItemKind.PERCENT),
        SubItem("data_sources_identified", 0.20, ItemKind.COUNT, cap=10),
        SubItem("structured_data_pct", 0.15, ItemKind.PERCENT, default=50),
        SubItem("automated_collection", 0.15, ItemKind.FLAG),
        SubItem("collection_frequency", 0.15, ItemKind.CHOICE, choices=FREQUENCY_CHOICES),
    ),
    "storage": (
        SubItem(
            "storage_types", 0.30, ItemKind.BEST_CHOICE,
            choices={"lakehouse": 1.0, "warehouse": 1.0, "data_lake": 0.9,
                     "database": 0.6, "spreadsheets": 0.25},
        ),
        SubItem(
            "cloud_vs_on_prem", 0.20, ItemKind.CHOICE,
            choices={"cloud": 1.0, "hybrid": 0.7, "on-premise": 0.4},
        ),
        SubItem("real_time_processing", 0.15, ItemKind.FLAG),
        SubItem("batch_processing", 0.05, ItemKind.FLAG),
        SubItem("scalability_rating", 0.10, ItemKind.RATING, default=3),
        SubItem("security_rating", 0.10, ItemKind.RATING, default=3),
        SubItem("accessibility_rating", 0.10, ItemKind.RATING, default=3),
    ),
    "integration": (
        SubItem("integrated_systems_count", 0.30, ItemKind.COUNT, cap=20),
        SubItem("api_available", 0.20, ItemKind.FLAG),
        SubItem(
            "pipeline_maturity", 0.25, ItemKind.CHOICE,
            choices={"none": 0.0, "manual": 0.2, "semi-automated": 0.6,
                     "fully-automated": 1.0},
        ),
        SubItem("etl_elt_process", 0.10, ItemKind.FLAG),
        SubItem("data_quality_checks", 0.10, ItemKind.FLAG),
        SubItem("real_time_sync", 0.05, ItemKind.FLAG),
    ),
    "governance": (
        SubItem("data_ownership_defined", 0.20, ItemKind.FLAG),
        SubItem("data_quality_controls", 0.20, ItemKind.FLAG),
        SubItem(
            "metadata_management", 0.25, ItemKind.CHOICE,
            choices={"none": 0.0, "basic": 0.25, "standard": 0.6, "advanced": 1.0},
        ),
        SubItem("policies_documented", 0.20, ItemKind.FLAG),
        SubItem("compliance_framework", 0.10, ItemKind.PRESENT),
        SubItem("data_catalog", 0.05, ItemKind.FLAG),
    ),
    "accessibility": (
        SubItem("self_service_analytics", 0.20, ItemKind.FLAG),
        SubItem("real_time_data_access", 0.15, ItemKind.FLAG),
        SubItem("cross_functional_access", 0.15, ItemKind.FLAG),
        SubItem("role_based_access", 0.15, ItemKind.FLAG),
        SubItem("access_rating", 0.20, ItemKind.RATING, default=3),
        SubItem(
            "reporting_tools", 0.15, ItemKind.BEST_CHOICE,
            choices={"embedded": 1.0, "bi_tools": 0.9, "spreadsheets": 0.4, "none": 0.0},
        ),
    ),
}

STAGE_UPPER_BOUNDS: Tuple[float, ...] = (15, 35, 55, 75, 90)

STAGE_LABELS: Dict[int, str] = {
    1: "Initial / Ad-hoc",
    2: "Developing",
    3: "Defined",
    4: "Managed",
    5: "Optimising",
    6: "Data-driven",
}


@dataclass(frozen=True)
class DataMaturityResult:
    """Outcome of a data maturity audit."""
    category_scores: Dict[str, Decimal]     # category → 0-100 (2 dp)
    category_details: Dict[str, CategoryScoreResult]
    maturity_index: Decimal                 # weighted composite 0-100
    maturity_stage: int                     # 1-6
    stage_label: str
    confidence_score: Decimal               # 0-1 (2 dp)


class DataMaturityCalculator:
    """Stateless data maturity scorer."""

    MIN_STAGE = 1
    MAX_STAGE = len(STAGE_UPPER_BOUNDS) + 1

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def calculate(self, inputs: Optional[Mapping[str, Mapping[str, Any]]]) -> DataMaturityResult:
        """
        Score a data audit.

        Args:
            inputs: category → {sub-question key → raw answer}. Missing
                categories score 0; unknown keys are ignored.

        Returns:
            DataMaturityResult with stage derived from the rounded index
        """
        inputs = inputs if isinstance(inputs, Mapping) else {}
        weights = self.settings.data_category_weights

        details = {
            category: score_category(category, items, inputs.get(category))
            for category, items in DATA_RUBRIC.items()
        }
        category_scores = {c: to_decimal(r.score) for c, r in details.items()}

        index = to_decimal(
            weighted_mean(
                [float(category_scores[c]) for c in DATA_RUBRIC],
                [weights[c] for c in DATA_RUBRIC],
            )
        )
        stage = self.stage_for_index(float(index))

        answered = sum(r.answered for r in details.values())
        total = sum(r.total for r in details.values())
        confidence = to_decimal(answered / total if total else 0.0)

        logger.info(
            "data_maturity_calculated",
            maturity_index=float(index),
            maturity_stage=stage,
            confidence_score=float(confidence),
        )

        return DataMaturityResult(
            category_scores=category_scores,
            category_details=details,
            maturity_index=index,
            maturity_stage=stage,
            stage_label=STAGE_LABELS[stage],
            confidence_score=confidence,
        )

    @staticmethod
    def stage_for_index(index: float) -> int:
        return stage_for(index, STAGE_UPPER_BOUNDS)
