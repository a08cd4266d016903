from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MaturityScores(BaseModel):
    """A data/AI maturity pair for an organisation or a peer."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    data_maturity: float = Field(default=0.0, description="0-100, clamped")
    ai_maturity: float = Field(default=0.0, description="0-100, clamped")
