"""
Category Rubric Scorer
maturity_engine/scoring/rubric.py

Turns raw audit sub-answers into a 0-100 category score.

A category is a tuple of SubItem definitions whose weights sum to 1.
Each sub-item normalizes one raw answer to [0, 100]:

  percent      clamp(value, 0, 100)
  count        min(value, cap) / cap × 100
  rating       clamp(value, 1, 5) / 5 × 100
  flag         truthy → 100, else 0
  choice       choices[value] × 100 (unknown → 0)
  best_choice  max(choices[v] for v in values) × 100
  present      non-empty text → 100
  adoption     flag gated by an impact level; flag with no level → "pilot"

Category score = Σ(weight_i × item_score_i), clamped to [0, 100].

Missing sub-items score 0 unless the item declares a default, in which
case the default is scored and the item counts as "not answered" for
confidence purposes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from maturity_engine.scoring.utils import as_number, clamp


class ItemKind(str, Enum):
    """Normalization applied to a raw sub-answer."""
    PERCENT = "percent"
    COUNT = "count"
    RATING = "rating"
    FLAG = "flag"
    CHOICE = "choice"
    BEST_CHOICE = "best_choice"
    PRESENT = "present"
    ADOPTION = "adoption"


ADOPTION_IMPACT: Dict[str, float] = {
    "none": 0.0,
    "pilot": 0.3,
    "departmental": 0.6,
    "enterprise": 1.0,
}


@dataclass(frozen=True)
class SubItem:
    """One weighted sub-question within a category."""
    key: str
    weight: float
    kind: ItemKind
    choices: Mapping[str, float] = field(default_factory=dict)
    cap: float = 1.0                 # count kind only
    impact_key: Optional[str] = None  # adoption kind only
    default: Any = None              # None → required (missing scores 0)

    @property
    def optional(self) -> bool:
        return self.default is not None


@dataclass(frozen=True)
class CategoryScoreResult:
    """Score for a single audit category."""
    category: str
    score: float                     # 0-100, unrounded
    answered: int                    # sub-items explicitly answered
    total: int                       # sub-items in the rubric
    details: Dict[str, float]        # sub-item key → normalized 0-100

    @property
    def confidence(self) -> float:
        return self.answered / self.total if self.total else 0.0


def _choice_value(choices: Mapping[str, float], raw: Any) -> float:
    if not isinstance(raw, str):
        return 0.0
    return choices.get(raw.strip().lower(), 0.0)


def _is_truthy(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "yes", "y", "1")
    number = as_number(raw)
    return bool(number) if number is not None else False


def score_item(item: SubItem, raw: Any, answers: Mapping[str, Any]) -> float:
    """Normalize a single raw answer to [0, 100]."""
    if item.kind is ItemKind.PERCENT:
        return clamp(as_number(raw, 0.0))
    if item.kind is ItemKind.COUNT:
        count = max(0.0, as_number(raw, 0.0))
        return min(count, item.cap) / item.cap * 100
    if item.kind is ItemKind.RATING:
        return clamp(as_number(raw, 1.0), 1.0, 5.0) / 5 * 100
    if item.kind is ItemKind.FLAG:
        return 100.0 if _is_truthy(raw) else 0.0
    if item.kind is ItemKind.CHOICE:
        return _choice_value(item.choices, raw) * 100
    if item.kind is ItemKind.BEST_CHOICE:
        values = raw if isinstance(raw, (list, tuple, set)) else [raw]
        return max((_choice_value(item.choices, v) for v in values), default=0.0) * 100
    if item.kind is ItemKind.PRESENT:
        return 100.0 if isinstance(raw, str) and raw.strip() else 0.0
    if item.kind is ItemKind.ADOPTION:
        if not _is_truthy(raw):
            return 0.0
        level = answers.get(item.impact_key) if item.impact_key else None
        if not isinstance(level, str) or level.strip().lower() not in ADOPTION_IMPACT:
            level = "pilot"
        return ADOPTION_IMPACT[level.strip().lower()] * 100
    raise ValueError(f"Unknown item kind: {item.kind}")


def score_category(
    category: str,
    items: Tuple[SubItem, ...],
    answers: Optional[Mapping[str, Any]],
) -> CategoryScoreResult:
    """
    Score one category from its raw sub-answers.

    Args:
        category: Category name (used for reporting only)
        items: Rubric sub-items, weights summing to 1
        answers: Raw sub-answers; None or non-mapping is treated as empty

    Returns:
        CategoryScoreResult with score clamped to [0, 100]
    """
    if not isinstance(answers, Mapping):
        answers = {}

    details: Dict[str, float] = {}
    answered = 0
    total = 0.0
    for item in items:
        raw = answers.get(item.key)
        if raw is None:
            if item.optional:
                item_score = score_item(item, item.default, answers)
            else:
                item_score = 0.0
        else:
            answered += 1
            item_score = score_item(item, raw, answers)
        details[item.key] = item_score
        total += item.weight * item_score

    return CategoryScoreResult(
        category=category,
        score=clamp(total),
        answered=answered,
        total=len(items),
        details=details,
    )


def stage_for(score: float, upper_bounds: Tuple[float, ...]) -> int:
    """
    Map a composite score to a 1-based stage.

    ``upper_bounds`` are exclusive upper limits of stages 1..n-1; anything
    at or above the last bound is the final stage.
    """
    for stage, bound in enumerate(upper_bounds, start=1):
        if score < bound:
            return stage
    return len(upper_bounds) + 1
