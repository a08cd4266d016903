# tests/test_assessment_service.py
"""
End-to-end tests for the maturity assessment pipeline.
"""

from decimal import Decimal

from maturity_engine.models.classification import RuleTable
from maturity_engine.scoring.assessment_service import MaturityAssessmentService


class TestMaturityAssessmentService:

    def test_full_pipeline(self, settings, e2e_data_inputs, strong_ai_inputs):
        result = MaturityAssessmentService(settings).assess(
            e2e_data_inputs, strong_ai_inputs, industry="technology"
        )

        assert set(result) == {"data_maturity", "ai_maturity", "classification", "alignment", "benchmark"}

        assert result["data_maturity"]["maturity_index"] == Decimal("60.00")
        assert result["data_maturity"]["maturity_stage"] == 4
        assert result["data_maturity"]["confidence_score"] == Decimal("1.00")
        assert result["ai_maturity"]["maturity_score"] == Decimal("100.00")

        classification = result["classification"]
        assert classification["classification_string"] == "AI Accelerator"
        assert classification["risk_classification"] == "Medium"
        assert classification["details"]["rule_id"] == "mid-data-high-ai"

        assert result["alignment"]["alignment_score"] == Decimal("72.00")
        assert result["alignment"]["assessment"] == "Moderately aligned"

        benchmark = result["benchmark"]
        assert benchmark["industry"] == "Technology"
        assert benchmark["data"].comparison.value == "At average"
        assert benchmark["ai"].comparison.value == "Above average"

    def test_injected_rule_table(self, settings, e2e_data_inputs, strong_ai_inputs):
        service = MaturityAssessmentService(settings, rules=RuleTable(version="empty"))
        result = service.assess(e2e_data_inputs, strong_ai_inputs)
        assert result["classification"]["classification_string"] == "Intelligent Operator"
        assert result["classification"]["details"]["fallback"] is True

    def test_missing_answers(self, settings):
        result = MaturityAssessmentService(settings).assess(None, None)
        assert result["data_maturity"]["confidence_score"] == Decimal("0.00")
        assert result["benchmark"]["benchmark_id"] == "default"

    def test_strategic_objectives_passed_through(self, settings, e2e_data_inputs, strong_ai_inputs):
        service = MaturityAssessmentService(settings)
        base = service.assess(e2e_data_inputs, strong_ai_inputs)
        boosted = service.assess(
            e2e_data_inputs, strong_ai_inputs,
            strategic_objectives={"data_strategy_priority": "high", "ai_strategy_priority": "high"},
        )
        assert boosted["alignment"]["alignment_score"] > base["alignment"]["alignment_score"]
