from enum import Enum


class RiskLabel(str, Enum):
    """Qualitative risk used by classification and competitive position."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RiskLevel(str, Enum):
    """Overall risk assessment band."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class PriorityLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PrioritizationStrategy(str, Enum):
    HIGHEST_ROI_FIRST = "highest_roi_first"
    LOWEST_COST_FIRST = "lowest_cost_first"
    STRATEGIC_ALIGNMENT = "strategic_alignment"


class ActionArea(str, Enum):
    DATA = "data"
    GOVERNANCE = "governance"
    INFRASTRUCTURE = "infrastructure"
    AI = "ai"
    OTHER = "other"


class TargetArea(str, Enum):
    DATA = "data"
    AI = "ai"
    BOTH = "both"


class InvestmentLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AdoptionPace(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class MarketConditions(str, Enum):
    STABLE = "stable"
    VOLATILE = "volatile"
    GROWTH = "growth"


class CompetitiveAction(str, Enum):
    STATUS_QUO = "status_quo"
    INVESTS_HEAVILY = "invests_heavily"


class ProjectComplexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BenchmarkComparison(str, Enum):
    ABOVE = "Above average"
    AT = "At average"
    BELOW = "Below average"


class InterventionType(str, Enum):
    INVESTMENT = "investment"
    GOVERNANCE = "governance"
    TECHNOLOGY = "technology"
    CAPABILITY = "capability"
    PROCESS = "process"


class TwinGoalType(str, Enum):
    AI_MATURITY_STAGE = "ai_maturity_stage"
    DATA_MATURITY_STAGE = "data_maturity_stage"
    PROFIT_INCREASE_PCT = "profit_increase_pct"
    RISK_REDUCTION = "risk_reduction"
    REVENUE_INCREASE_PCT = "revenue_increase_pct"
