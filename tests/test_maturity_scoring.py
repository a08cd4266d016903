# tests/test_maturity_scoring.py
"""
Tests for the category rubric and the data / AI maturity calculators.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from maturity_engine.config import Settings, get_settings
from maturity_engine.scoring.ai_maturity import AIMaturityCalculator
from maturity_engine.scoring.data_maturity import DATA_RUBRIC, DataMaturityCalculator
from maturity_engine.scoring.rubric import ItemKind, SubItem, score_category, score_item, stage_for


# ---------------------------------------------------------------------------
# Rubric
# ---------------------------------------------------------------------------

class TestRubric:
    """Sub-item normalisation"""

    def test_rubric_weights_sum_to_one(self):
        for category, items in DATA_RUBRIC.items():
            assert sum(i.weight for i in items) == pytest.approx(1.0), category

    def test_count_is_capped(self):
        item = SubItem("n", 1.0, ItemKind.COUNT, cap=10)
        assert score_item(item, 25, {}) == 100.0
        assert score_item(item, 5, {}) == 50.0

    def test_rating_is_clamped_to_scale(self):
        item = SubItem("r", 1.0, ItemKind.RATING)
        assert score_item(item, 9, {}) == 100.0
        assert score_item(item, -4, {}) == 20.0

    def test_flag_accepts_text(self):
        item = SubItem("f", 1.0, ItemKind.FLAG)
        assert score_item(item, "yes", {}) == 100.0
        assert score_item(item, "no", {}) == 0.0

    def test_unknown_choice_scores_zero(self):
        item = SubItem("c", 1.0, ItemKind.CHOICE, choices={"a": 1.0})
        assert score_item(item, "zzz", {}) == 0.0
        assert score_item(item, " A ", {}) == 100.0

    def test_best_choice_takes_maximum(self):
        item = SubItem("b", 1.0, ItemKind.BEST_CHOICE, choices={"x": 0.2, "y": 0.9})
        assert score_item(item, ["x", "y"], {}) == pytest.approx(90.0)

    def test_adoption_without_level_is_pilot(self):
        item = SubItem("nlp", 1.0, ItemKind.ADOPTION, impact_key="nlp_impact")
        assert score_item(item, True, {}) == pytest.approx(30.0)
        assert score_item(item, True, {"nlp_impact": "enterprise"}) == 100.0
        assert score_item(item, False, {"nlp_impact": "enterprise"}) == 0.0

    def test_missing_optional_item_uses_default_but_not_answered(self):
        items = (SubItem("rating", 1.0, ItemKind.RATING, default=3),)
        result = score_category("x", items, {})
        assert result.score == pytest.approx(60.0)
        assert result.answered == 0
        assert result.confidence == 0.0

    def test_non_mapping_answers_treated_as_empty(self):
        items = (SubItem("p", 1.0, ItemKind.PERCENT),)
        assert score_category("x", items, "garbage").score == 0.0

    def test_stage_for_bounds(self):
        bounds = (15, 35)
        assert stage_for(14.99, bounds) == 1
        assert stage_for(15, bounds) == 2
        assert stage_for(100, bounds) == 3


# ---------------------------------------------------------------------------
# Data maturity
# ---------------------------------------------------------------------------

class TestDataMaturity:

    def test_end_to_end_index_and_stage(self, settings, e2e_data_inputs):
        result = DataMaturityCalculator(settings).calculate(e2e_data_inputs)

        assert result.category_scores == {
            "collection": Decimal("80.00"),
            "storage": Decimal("60.00"),
            "integration": Decimal("40.00"),
            "governance": Decimal("50.00"),
            "accessibility": Decimal("70.00"),
        }
        assert result.maturity_index == Decimal("60.00")
        assert result.maturity_stage == 4
        assert result.stage_label == "Managed"

    def test_fully_answered_audit_has_full_confidence(self, settings, e2e_data_inputs):
        result = DataMaturityCalculator(settings).calculate(e2e_data_inputs)
        assert result.confidence_score == Decimal("1.00")

    def test_empty_audit(self, settings):
        result = DataMaturityCalculator(settings).calculate(None)
        assert result.confidence_score == Decimal("0.00")
        assert Decimal("0") <= result.maturity_index <= Decimal("100")
        assert result.maturity_stage >= DataMaturityCalculator.MIN_STAGE

    def test_out_of_range_answers_are_clamped(self, settings):
        inputs = {"collection": {"data_completeness_score": 250, "data_sources_identified": -4}}
        result = DataMaturityCalculator(settings).calculate(inputs)
        details = result.category_details["collection"].details
        assert details["data_completeness_score"] == 100.0
        assert details["data_sources_identified"] == 0.0

    @pytest.mark.parametrize("index, stage", [
        (0, 1), (14.99, 1), (15, 2), (34.99, 2), (35, 3),
        (55, 4), (74.99, 4), (75, 5), (89.99, 5), (90, 6), (100, 6),
    ])
    def test_stage_bands(self, index, stage):
        assert DataMaturityCalculator.stage_for_index(index) == stage

    def test_custom_weights(self, e2e_data_inputs):
        settings = Settings(
            _env_file=None,
            W_COLLECTION=1.0, W_STORAGE=0.0, W_INTEGRATION=0.0,
            W_GOVERNANCE=0.0, W_ACCESSIBILITY=0.0,
        )
        result = DataMaturityCalculator(settings).calculate(e2e_data_inputs)
        assert result.maturity_index == Decimal("80.00")
        assert result.maturity_stage == 5

    def test_deterministic(self, settings, e2e_data_inputs):
        calc = DataMaturityCalculator(settings)
        assert calc.calculate(e2e_data_inputs) == calc.calculate(e2e_data_inputs)


# ---------------------------------------------------------------------------
# AI maturity
# ---------------------------------------------------------------------------

class TestAIMaturity:

    def test_maximum_audit(self, settings, strong_ai_inputs):
        result = AIMaturityCalculator(settings).calculate(strong_ai_inputs)
        assert result.maturity_score == Decimal("100.00")
        assert result.maturity_stage == AIMaturityCalculator.MAX_STAGE == 7
        assert result.stage_label == "AI-native"

    def test_adoption_levels_change_usage_score(self, settings):
        pilot = {"ai_usage": {"nlp": True}}
        enterprise = {"ai_usage": {"nlp": True, "nlp_impact": "enterprise"}}
        calc = AIMaturityCalculator(settings)
        assert (
            calc.calculate(enterprise).category_scores["ai_usage"]
            > calc.calculate(pilot).category_scores["ai_usage"]
        )

    @pytest.mark.parametrize("score, stage", [
        (9.99, 1), (10, 2), (25, 3), (40, 4), (55, 5), (70, 6), (84.99, 6), (85, 7),
    ])
    def test_stage_bands(self, score, stage):
        assert AIMaturityCalculator.stage_for_score(score) == stage

    def test_empty_audit_scores_defaults_only(self, settings):
        result = AIMaturityCalculator(settings).calculate({})
        assert Decimal("0") <= result.maturity_score < Decimal("25")


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class TestSettings:

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, W_COLLECTION=0.9)

    def test_gap_thresholds_ordered(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, GAP_HIGH_THRESHOLD=10, GAP_MEDIUM_THRESHOLD=30)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
