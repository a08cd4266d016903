"""
Maturity Classification Engine
maturity_engine/scoring/classification.py

Places an organisation on the data × AI maturity matrix.

  1. Clamp both scores to [0, 100] and round to 2 dp
  2. Scan the rule table in order; the FIRST inclusive rectangle that
     contains (data_index, ai_score) wins
  3. No match → quadrant fallback split at 50 (>= 50 is "high")

Fallback quadrants:

  ┌──────────────┬──────────────────────┬────────┬──────────────────────┐
  │ data / ai    │ classification       │ risk   │ opportunity          │
  ├──────────────┼──────────────────────┼────────┼──────────────────────┤
  │ high / high  │ Intelligent Operator │ Low    │ Optimise & Innovate  │
  │ high / low   │ Data-Curious         │ Medium │ Pilot AI             │
  │ low  / high  │ AI Experimenter      │ High   │ Quick Wins on Data   │
  │ low  / low   │ Emerging Explorer    │ Medium │ Foundation First     │
  └──────────────┴──────────────────────┴────────┴──────────────────────┘
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import structlog
from pydantic import ValidationError

from maturity_engine.core.exceptions import RuleTableException
from maturity_engine.models.classification import ClassificationRule, RuleTable
from maturity_engine.models.enumerations import RiskLabel
from maturity_engine.scoring.utils import clamp_score, to_decimal

logger = structlog.get_logger(__name__)

_DEFAULT_RULES_PATH = Path(__file__).resolve().parent.parent / "data" / "classification_rules.json"

FALLBACK_SPLIT = 50.0

# (data_high, ai_high) → (classification, risk, opportunity)
FALLBACK_QUADRANTS: Dict[Tuple[bool, bool], Tuple[str, RiskLabel, str]] = {
    (True, True): ("Intelligent Operator", RiskLabel.LOW, "Optimise & Innovate"),
    (True, False): ("Data-Curious", RiskLabel.MEDIUM, "Pilot AI"),
    (False, True): ("AI Experimenter", RiskLabel.HIGH, "Quick Wins on Data"),
    (False, False): ("Emerging Explorer", RiskLabel.MEDIUM, "Foundation First"),
}


@dataclass(frozen=True)
class ClassificationResult:
    """Position on the maturity matrix."""
    classification_string: str
    matrix_x: Decimal                  # data maturity index (0-100)
    matrix_y: Decimal                  # AI maturity score (0-100)
    risk_classification: RiskLabel
    opportunity_classification: str
    details: Dict[str, Any] = field(default_factory=dict)


def load_rule_table(file_path: Optional[Union[str, Path]] = None) -> RuleTable:
    """
    Load and validate a classification rule table from a JSON file.

    If no path is provided, loads the packaged default table.
    """
    path = Path(file_path) if file_path is not None else _DEFAULT_RULES_PATH
    if not path.exists():
        raise RuleTableException(str(path), "Rule table not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        table = RuleTable.model_validate(raw)
    except (json.JSONDecodeError, ValidationError) as e:
        raise RuleTableException(str(path), f"Invalid rule table: {e}") from e

    logger.info("rule_table_loaded", path=str(path), version=table.version, rules=len(table.rules))
    return table


def fallback_classification(data_index: float, ai_score: float) -> Tuple[str, RiskLabel, str]:
    key = (data_index >= FALLBACK_SPLIT, ai_score >= FALLBACK_SPLIT)
    return FALLBACK_QUADRANTS[key]


class ClassificationEngine:
    """
    First-match rule engine over an immutable RuleTable.

    Usage:
        engine = ClassificationEngine(load_rule_table())
        result = engine.classify(60, 70)
    """

    def __init__(self, rules: Optional[RuleTable] = None):
        self.rules = rules if rules is not None else load_rule_table()

    def get_rules(self) -> Tuple[ClassificationRule, ...]:
        return self.rules.rules

    def match(self, data_index: float, ai_score: float) -> Optional[ClassificationRule]:
        for rule in self.rules.rules:
            if rule.contains(data_index, ai_score):
                return rule
        return None

    def classify(self, data_index: Any, ai_score: Any) -> ClassificationResult:
        """
        Classify a (data index, AI score) pair.

        Args:
            data_index: Data maturity index; clamped to [0, 100]
            ai_score: AI maturity score; clamped to [0, 100]

        Returns:
            ClassificationResult; ``details`` carries rule_id and
            config_version for a rule match, or fallback=True
        """
        x = to_decimal(clamp_score(data_index))
        y = to_decimal(clamp_score(ai_score))

        rule = self.match(float(x), float(y))
        if rule is not None:
            return ClassificationResult(
                classification_string=rule.classification_string,
                matrix_x=x,
                matrix_y=y,
                risk_classification=rule.risk,
                opportunity_classification=rule.opportunity,
                details={"rule_id": rule.id, "config_version": self.rules.version},
            )

        classification, risk, opportunity = fallback_classification(float(x), float(y))
        return ClassificationResult(
            classification_string=classification,
            matrix_x=x,
            matrix_y=y,
            risk_classification=risk,
            opportunity_classification=opportunity,
            details={"fallback": True, "config_version": self.rules.version},
        )


def classify(
    data_index: Any,
    ai_score: Any,
    rules: Optional[RuleTable] = None,
) -> ClassificationResult:
    """Convenience wrapper around ClassificationEngine.classify."""
    return ClassificationEngine(rules).classify(data_index, ai_score)
