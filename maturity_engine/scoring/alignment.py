"""
Data/AI alignment score.

  balance = 1 − |data − ai| / 100
  level   = (data + ai) / 200
  score   = 40 × balance + 60 × level, × mean(priority factors), clamped
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from maturity_engine.scoring.utils import clamp, clamp_score, to_decimal

PRIORITY_FACTORS = {"low": 0.9, "medium": 1.0, "high": 1.1}


@dataclass(frozen=True)
class AlignmentScore:
    alignment_score: Decimal
    assessment: str


def assessment_for(score: float) -> str:
    if score >= 75:
        return "Well-aligned"
    if score >= 55:
        return "Moderately aligned"
    if score < 35:
        return "Misaligned"
    return "Needs improvement"


def _priority(value: Any) -> float:
    key = getattr(value, "value", value)
    if isinstance(key, str):
        return PRIORITY_FACTORS.get(key.strip().lower(), 1.0)
    return 1.0


def calculate_alignment_score(
    data_maturity_index: float,
    ai_maturity_score: float,
    strategic_objectives: Optional[Mapping[str, Any]] = None,
) -> AlignmentScore:
    """
    How well data and AI capability move together.

    ``strategic_objectives`` may carry data_strategy_priority and
    ai_strategy_priority (low / medium / high).
    """
    data = clamp_score(data_maturity_index)
    ai = clamp_score(ai_maturity_score)
    balance = 1 - abs(data - ai) / 100
    level = (data + ai) / 200
    score = balance * 40 + level * 60

    if strategic_objectives:
        score *= (
            _priority(strategic_objectives.get("data_strategy_priority"))
            + _priority(strategic_objectives.get("ai_strategy_priority"))
        ) / 2

    score = clamp(score)
    return AlignmentScore(alignment_score=to_decimal(score), assessment=assessment_for(score))
