"""Engine configuration with weight-vector validation."""
from typing import Dict, Optional
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tunable weights, unit costs and thresholds for the scoring engine."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    APP_NAME: str = "Maturity Decision Engine"
    APP_VERSION: str = "1.0.0"

    # Classification rule table (None -> packaged default)
    RULES_PATH: Optional[str] = None

    # Data maturity category weights
    W_COLLECTION: float = Field(default=0.20, ge=0.0, le=1.0)
    W_STORAGE: float = Field(default=0.20, ge=0.0, le=1.0)
    W_INTEGRATION: float = Field(default=0.20, ge=0.0, le=1.0)
    W_GOVERNANCE: float = Field(default=0.20, ge=0.0, le=1.0)
    W_ACCESSIBILITY: float = Field(default=0.20, ge=0.0, le=1.0)

    # AI maturity category weights
    W_AUTOMATION: float = Field(default=0.33, ge=0.0, le=1.0)
    W_AI_USAGE: float = Field(default=0.34, ge=0.0, le=1.0)
    W_DEPLOYMENT: float = Field(default=0.33, ge=0.0, le=1.0)

    # Risk category weights
    W_RISK_AI_MISALIGNMENT: float = Field(default=0.25, ge=0.0, le=1.0)
    W_RISK_INFRASTRUCTURE: float = Field(default=0.25, ge=0.0, le=1.0)
    W_RISK_OPERATIONAL: float = Field(default=0.25, ge=0.0, le=1.0)
    W_RISK_STRATEGIC: float = Field(default=0.25, ge=0.0, le=1.0)

    # Investment unit costs (currency per maturity point)
    DATA_INVESTMENT_PER_POINT: float = Field(default=15000.0, gt=0)
    AI_INVESTMENT_PER_POINT: float = Field(default=22000.0, gt=0)

    # Investment simulation efficiency (currency per point before diminishing returns)
    DATA_EFFICIENCY: float = Field(default=18000.0, gt=0)
    AI_EFFICIENCY: float = Field(default=25000.0, gt=0)

    # Strategic simulator
    SIMULATION_SMOOTHING: float = Field(default=0.5, gt=0.0, le=1.0)

    # Capability gap priority thresholds (points)
    GAP_HIGH_THRESHOLD: float = Field(default=40.0, ge=0, le=100)
    GAP_MEDIUM_THRESHOLD: float = Field(default=20.0, ge=0, le=100)

    # Cost base per head when operational cost is not supplied
    COST_PER_HEAD: float = Field(default=80000.0, gt=0)

    CURRENCY_SYMBOL: str = "£"

    @model_validator(mode="after")
    def validate_weight_vectors(self):
        """Validate every weight vector sums to 1.0."""
        for name, weights in (
            ("Data category", self.data_category_weights),
            ("AI category", self.ai_category_weights),
            ("Risk category", self.risk_category_weights),
        ):
            total = sum(weights.values())
            if abs(total - 1.0) > 0.001:
                raise ValueError(f"{name} weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def validate_gap_thresholds(self):
        if self.GAP_MEDIUM_THRESHOLD > self.GAP_HIGH_THRESHOLD:
            raise ValueError("GAP_MEDIUM_THRESHOLD must not exceed GAP_HIGH_THRESHOLD")
        return self

    @property
    def data_category_weights(self) -> Dict[str, float]:
        return {
            "collection": self.W_COLLECTION,
            "storage": self.W_STORAGE,
            "integration": self.W_INTEGRATION,
            "governance": self.W_GOVERNANCE,
            "accessibility": self.W_ACCESSIBILITY,
        }

    @property
    def ai_category_weights(self) -> Dict[str, float]:
        return {
            "automation": self.W_AUTOMATION,
            "ai_usage": self.W_AI_USAGE,
            "deployment": self.W_DEPLOYMENT,
        }

    @property
    def risk_category_weights(self) -> Dict[str, float]:
        return {
            "ai_misalignment": self.W_RISK_AI_MISALIGNMENT,
            "infrastructure": self.W_RISK_INFRASTRUCTURE,
            "operational": self.W_RISK_OPERATIONAL,
            "strategic": self.W_RISK_STRATEGIC,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
