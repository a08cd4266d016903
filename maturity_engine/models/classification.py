"""
Classification Rule Table Models
maturity_engine/models/classification.py

Versioned, immutable rule table for the maturity matrix. Rules are
evaluated in list order; the first rectangle containing the point wins.
"""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from maturity_engine.models.enumerations import RiskLabel


class ClassificationRule(BaseModel):
    """Inclusive rectangle on the (data index, AI score) matrix."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    data_index_min: float = Field(..., ge=0, le=100)
    data_index_max: float = Field(..., ge=0, le=100)
    ai_score_min: float = Field(..., ge=0, le=100)
    ai_score_max: float = Field(..., ge=0, le=100)
    classification_string: str = Field(..., min_length=1)
    risk: RiskLabel
    opportunity: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_ranges(self) -> "ClassificationRule":
        if self.data_index_min > self.data_index_max:
            raise ValueError(
                f"Rule {self.id}: data_index_min ({self.data_index_min}) "
                f"> data_index_max ({self.data_index_max})"
            )
        if self.ai_score_min > self.ai_score_max:
            raise ValueError(
                f"Rule {self.id}: ai_score_min ({self.ai_score_min}) "
                f"> ai_score_max ({self.ai_score_max})"
            )
        return self

    def contains(self, data_index: float, ai_score: float) -> bool:
        return (
            self.data_index_min <= data_index <= self.data_index_max
            and self.ai_score_min <= ai_score <= self.ai_score_max
        )


class RuleTable(BaseModel):
    """Ordered rule list plus its config version."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(..., min_length=1)
    rules: Tuple[ClassificationRule, ...] = Field(default_factory=tuple)

    @field_validator("rules", mode="before")
    @classmethod
    def coerce_rules(cls, v):
        return tuple(v) if isinstance(v, list) else v

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "RuleTable":
        seen: List[str] = []
        for rule in self.rules:
            if rule.id in seen:
                raise ValueError(f"Duplicate rule id: {rule.id}")
            seen.append(rule.id)
        return self
