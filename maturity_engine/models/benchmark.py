"""
Industry Benchmark Model
maturity_engine/models/benchmark.py
"""

from pydantic import BaseModel, ConfigDict, Field


class IndustryBenchmark(BaseModel):
    """Industry baseline supplied by the caller or taken from the defaults."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="default")
    name: str = Field(default="Default")
    revenue_multiplier: float = Field(default=1.0, ge=0, description="Scales baseline revenue uplift")
    margin_multiplier: float = Field(default=1.0, ge=0, description="Scales margin expansion")
    cost_multiplier: float = Field(default=1.0, ge=0, description="Scales cost reduction")
    valuation_multiplier: float = Field(default=1.0, ge=0, description="Scales valuation uplift")
    data_average: float = Field(default=45.0, ge=0, le=100)
    ai_average: float = Field(default=40.0, ge=0, le=100)
