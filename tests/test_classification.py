# tests/test_classification.py
"""
Tests for the first-match classification engine and rule table loading.
"""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from maturity_engine.core.exceptions import RuleTableException
from maturity_engine.models.classification import ClassificationRule, RuleTable
from maturity_engine.models.enumerations import RiskLabel
from maturity_engine.scoring.classification import (
    ClassificationEngine,
    classify,
    load_rule_table,
)


def _rule(**overrides):
    rule = {
        "id": "r1", "name": "R1",
        "data_index_min": 0, "data_index_max": 100,
        "ai_score_min": 0, "ai_score_max": 100,
        "classification_string": "Anything", "risk": "Low", "opportunity": "X",
    }
    rule.update(overrides)
    return rule


class TestDefaultTable:

    def test_packaged_table_loads(self):
        table = load_rule_table()
        assert table.version == "2024.1"
        assert len(table.rules) == 9

    def test_mid_data_high_ai(self):
        result = classify(60, 70)
        assert result.classification_string == "AI Accelerator"
        assert result.risk_classification is RiskLabel.MEDIUM
        assert result.opportunity_classification == "Data Infrastructure Upgrade"
        assert result.details == {"rule_id": "mid-data-high-ai", "config_version": "2024.1"}

    def test_matrix_coordinates_rounded(self):
        result = classify(60.004, 70.006)
        assert result.matrix_x == Decimal("60.00")
        assert result.matrix_y == Decimal("70.01")

    def test_rounding_happens_before_matching(self):
        # 34.995 rounds to 35.00, which falls in the middle data band
        result = classify(34.995, 10)
        assert result.details["rule_id"] == "mid-data-low-ai"

    def test_out_of_range_inputs_clamped(self):
        result = classify(150, -10)
        assert result.matrix_x == Decimal("100.00")
        assert result.matrix_y == Decimal("0.00")
        assert result.classification_string == "Data-Rich, AI-Light"

    def test_deterministic(self):
        engine = ClassificationEngine()
        assert engine.classify(42.5, 77.1) == engine.classify(42.5, 77.1)


class TestRuleOrdering:

    def test_first_matching_rule_wins(self, overlapping_rules):
        engine = ClassificationEngine(overlapping_rules)
        result = engine.classify(50, 50)
        assert result.classification_string == "First Match"
        assert result.details["rule_id"] == "first"

    def test_later_rule_used_outside_first(self, overlapping_rules):
        result = ClassificationEngine(overlapping_rules).classify(70, 70)
        assert result.classification_string == "Second Match"
        assert result.risk_classification is RiskLabel.HIGH

    def test_bounds_are_inclusive(self, overlapping_rules):
        result = ClassificationEngine(overlapping_rules).classify(60, 60)
        assert result.details["rule_id"] == "first"


class TestFallback:

    @pytest.mark.parametrize("data, ai, expected, risk", [
        (80, 80, "Intelligent Operator", RiskLabel.LOW),
        (50, 50, "Intelligent Operator", RiskLabel.LOW),
        (80, 20, "Data-Curious", RiskLabel.MEDIUM),
        (20, 80, "AI Experimenter", RiskLabel.HIGH),
        (49.99, 10, "Emerging Explorer", RiskLabel.MEDIUM),
    ])
    def test_quadrants(self, data, ai, expected, risk):
        engine = ClassificationEngine(RuleTable(version="empty"))
        result = engine.classify(data, ai)
        assert result.classification_string == expected
        assert result.risk_classification is risk
        assert result.details["fallback"] is True

    def test_gap_in_table_falls_back(self):
        table = RuleTable.model_validate(
            {"version": "partial", "rules": [_rule(data_index_max=10, ai_score_max=10)]}
        )
        result = ClassificationEngine(table).classify(90, 90)
        assert result.details == {"fallback": True, "config_version": "partial"}


class TestRuleTableValidation:

    def test_min_above_max_rejected(self):
        with pytest.raises(ValidationError):
            ClassificationRule.model_validate(_rule(data_index_min=60, data_index_max=40))

    def test_bounds_outside_scale_rejected(self):
        with pytest.raises(ValidationError):
            ClassificationRule.model_validate(_rule(ai_score_max=120))

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError):
            RuleTable.model_validate({"version": "v", "rules": [_rule(), _rule()]})

    def test_rules_are_immutable(self):
        table = load_rule_table()
        with pytest.raises(ValidationError):
            table.rules[0].risk = RiskLabel.HIGH


class TestLoadRuleTable:

    def test_missing_file(self, tmp_path):
        with pytest.raises(RuleTableException, match="not found"):
            load_rule_table(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RuleTableException):
            load_rule_table(path)

    def test_invalid_rule(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(
            json.dumps({"version": "bad", "rules": [_rule(risk="Catastrophic")]}),
            encoding="utf-8",
        )
        with pytest.raises(RuleTableException) as exc_info:
            load_rule_table(path)
        assert exc_info.value.source == str(path)

    def test_custom_table(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(
            json.dumps({"version": "custom-1", "rules": [_rule(classification_string="Everyone")]}),
            encoding="utf-8",
        )
        result = classify(12, 88, load_rule_table(str(path)))
        assert result.classification_string == "Everyone"
        assert result.details["config_version"] == "custom-1"
