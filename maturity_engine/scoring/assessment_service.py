"""
Maturity Assessment Service
maturity_engine/scoring/assessment_service.py

Full pipeline: raw audit answers → scores, classification and benchmark view.

Class: MaturityAssessmentService
Method: assess(data_inputs, ai_inputs, industry) → Dict[str, Any]

Pipeline steps:
  1. DataMaturityCalculator → category scores, index, stage, confidence
  2. AIMaturityCalculator → category scores, score, stage
  3. ClassificationEngine → matrix position, risk, opportunity
  4. calculate_alignment_score → data/AI alignment
  5. compare_to_benchmarks → industry comparison
  6. Build result dict

The caller persists the result and attaches identifiers/timestamps.
"""

from typing import Any, Dict, Mapping, Optional

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.models.classification import RuleTable
from maturity_engine.scoring.ai_maturity import AIMaturityCalculator
from maturity_engine.scoring.alignment import calculate_alignment_score
from maturity_engine.scoring.classification import ClassificationEngine, load_rule_table
from maturity_engine.scoring.data_maturity import DataMaturityCalculator
from maturity_engine.scoring.industry_benchmark import compare_to_benchmarks, get_benchmark

logger = structlog.get_logger(__name__)


class MaturityAssessmentService:
    """Runs the scoring calculators in sequence for one organisation."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rules: Optional[RuleTable] = None,
    ):
        self.settings = settings or get_settings()
        self.data_calculator = DataMaturityCalculator(self.settings)
        self.ai_calculator = AIMaturityCalculator(self.settings)
        self.classifier = ClassificationEngine(
            rules if rules is not None else load_rule_table(self.settings.RULES_PATH)
        )

    # ------------------------------------------------------------------
    # Main pipeline
    # ------------------------------------------------------------------

    def assess(
        self,
        data_inputs: Optional[Mapping[str, Mapping[str, Any]]],
        ai_inputs: Optional[Mapping[str, Mapping[str, Any]]],
        industry: Optional[str] = None,
        strategic_objectives: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Score one organisation end to end.

        Args:
            data_inputs: Data audit answers (category → sub-answers)
            ai_inputs: AI audit answers (category → sub-answers)
            industry: Industry id or free-text name; unknown → default benchmark
            strategic_objectives: Optional data/AI strategy priorities

        Returns:
            Dict with data_maturity, ai_maturity, classification, alignment
            and benchmark sections.
        """
        # 1. Data maturity
        data_result = self.data_calculator.calculate(data_inputs)

        # 2. AI maturity
        ai_result = self.ai_calculator.calculate(ai_inputs)

        # 3. Classification on the maturity matrix
        classification = self.classifier.classify(
            data_result.maturity_index, ai_result.maturity_score
        )

        # 4. Alignment
        alignment = calculate_alignment_score(
            float(data_result.maturity_index),
            float(ai_result.maturity_score),
            strategic_objectives,
        )

        # 5. Industry benchmark comparison
        benchmark = get_benchmark(industry)
        comparison = compare_to_benchmarks(
            float(data_result.maturity_index),
            float(ai_result.maturity_score),
            benchmark,
        )

        logger.info(
            "maturity_assessment_completed",
            data_index=float(data_result.maturity_index),
            ai_score=float(ai_result.maturity_score),
            classification=classification.classification_string,
            benchmark_id=benchmark.id,
        )

        # 6. Build result
        return {
            "data_maturity": {
                "category_scores": data_result.category_scores,
                "maturity_index": data_result.maturity_index,
                "maturity_stage": data_result.maturity_stage,
                "stage_label": data_result.stage_label,
                "confidence_score": data_result.confidence_score,
            },
            "ai_maturity": {
                "category_scores": ai_result.category_scores,
                "maturity_score": ai_result.maturity_score,
                "maturity_stage": ai_result.maturity_stage,
                "stage_label": ai_result.stage_label,
            },
            "classification": {
                "classification_string": classification.classification_string,
                "matrix_x": classification.matrix_x,
                "matrix_y": classification.matrix_y,
                "risk_classification": classification.risk_classification.value,
                "opportunity_classification": classification.opportunity_classification,
                "details": classification.details,
            },
            "alignment": {
                "alignment_score": alignment.alignment_score,
                "assessment": alignment.assessment,
            },
            "benchmark": {
                "industry": comparison.industry,
                "benchmark_id": benchmark.id,
                "data": comparison.data,
                "ai": comparison.ai,
                "strengths": comparison.strengths,
                "weaknesses": comparison.weaknesses,
            },
        }
