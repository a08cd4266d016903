"""
Risk Model — probability of failure and expected loss
maturity_engine/scoring/risk_model.py

Probability of failure (logistic combination of odds adjustments):

  z = logit(BASE[complexity])
      + ln(experience_factor)        experience_factor = 1 − (years/30)·0.4
      + ln(stability_factor)         stability_factor  = 0.7 + (5 − stability)·0.15
      + 2.0·(historical − 0.2)
      + 1.5·(scope − 0.3)
  p = 1 / (1 + e^−z),  clamped to [0.01, 0.99]

  spread = 0.05 + (1 − experience_factor)·0.08 + scope·0.07
  band   = [p − spread, p + spread] ∩ [0, 1]
  tier   = low (p < 0.25), high (p ≥ 0.5), medium otherwise

Expected loss:

  impact       = direct + indirect + 0.5·reputational
  pre          = p · impact
  benefit      = min(1.2·mitigation, 0.6·pre)
  post         = max(0, pre − benefit)
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

import structlog

from maturity_engine.core.exceptions import MaturityEngineException, MissingInputException
from maturity_engine.models.enumerations import ProjectComplexity
from maturity_engine.models.risk import LossInputs, ProjectRiskInputs, RiskModelInputs
from maturity_engine.scoring.utils import as_number, clamp, to_decimal

logger = structlog.get_logger(__name__)

BASE_PROBABILITY = {
    ProjectComplexity.LOW: 0.08,
    ProjectComplexity.MEDIUM: 0.22,
    ProjectComplexity.HIGH: 0.45,
}
DEFAULT_EXPERIENCE_YEARS = 5.0
DEFAULT_STABILITY = 3.0
DEFAULT_HISTORICAL_FAILURE = 0.2
DEFAULT_SCOPE_UNCERTAINTY = 0.3
HISTORICAL_WEIGHT = 2.0
SCOPE_WEIGHT = 1.5
MIN_PROBABILITY = 0.01
MAX_PROBABILITY = 0.99

REPUTATIONAL_WEIGHT = 0.5
MITIGATION_EFFICIENCY = 1.2
MAX_MITIGATION_SHARE = 0.6


@dataclass(frozen=True)
class FailureProbability:
    probability: Decimal             # 3 dp
    confidence_low: Decimal
    confidence_high: Decimal
    tier: str                        # low | medium | high
    factors: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ExpectedLoss:
    total_impact: Decimal
    pre_mitigation_loss: Decimal
    mitigation_benefit: Decimal
    post_mitigation_loss: Decimal
    sensitivity: dict = field(default_factory=dict)


@dataclass(frozen=True)
class RiskModelReport:
    probability: FailureProbability
    loss: ExpectedLoss
    errors: List[str] = field(default_factory=list)


def _logit(p: float) -> float:
    return math.log(p / (1 - p))


def _sigmoid(z: float) -> float:
    return 1 / (1 + math.exp(-z))


def tier_for(probability: float) -> str:
    if probability < 0.25:
        return "low"
    if probability >= 0.5:
        return "high"
    return "medium"


def estimate_failure_probability(inputs: Optional[ProjectRiskInputs] = None) -> FailureProbability:
    """Probability that an initiative fails, with a confidence band."""
    inputs = inputs or ProjectRiskInputs()
    years = clamp(as_number(inputs.team_experience_years, DEFAULT_EXPERIENCE_YEARS), 0.0, 30.0)
    stability = clamp(as_number(inputs.infrastructure_stability, DEFAULT_STABILITY), 1.0, 5.0)
    historical = clamp(as_number(inputs.historical_failure_rate, DEFAULT_HISTORICAL_FAILURE), 0.0, 1.0)
    scope = clamp(as_number(inputs.scope_uncertainty, DEFAULT_SCOPE_UNCERTAINTY), 0.0, 1.0)

    experience_factor = 1 - (years / 30) * 0.4
    stability_factor = 0.7 + (5 - stability) * 0.15

    z = (
        _logit(BASE_PROBABILITY[inputs.complexity])
        + math.log(experience_factor)
        + math.log(stability_factor)
        + HISTORICAL_WEIGHT * (historical - DEFAULT_HISTORICAL_FAILURE)
        + SCOPE_WEIGHT * (scope - DEFAULT_SCOPE_UNCERTAINTY)
    )
    p = clamp(_sigmoid(z), MIN_PROBABILITY, MAX_PROBABILITY)
    spread = 0.05 + (1 - experience_factor) * 0.08 + scope * 0.07

    return FailureProbability(
        probability=to_decimal(p, 3),
        confidence_low=to_decimal(clamp(p - spread, 0.0, 1.0), 3),
        confidence_high=to_decimal(clamp(p + spread, 0.0, 1.0), 3),
        tier=tier_for(p),
        factors={
            "complexity": inputs.complexity.value,
            "experience_factor": to_decimal(experience_factor, 3),
            "stability_factor": to_decimal(stability_factor, 3),
            "historical_failure_rate": to_decimal(historical, 3),
            "scope_uncertainty": to_decimal(scope, 3),
        },
    )


def estimate_expected_loss(probability: float, losses: LossInputs) -> ExpectedLoss:
    """
    Expected financial loss before and after mitigation.

    Raises:
        MissingInputException: when no cost exposure is supplied
    """
    p = clamp(as_number(probability, 0.0), 0.0, 1.0)
    direct = max(0.0, as_number(losses.direct_cost, 0.0))
    indirect = max(0.0, as_number(losses.indirect_cost, 0.0))
    reputational = max(0.0, as_number(losses.reputational_cost, 0.0))
    mitigation = max(0.0, as_number(losses.mitigation_spend, 0.0))

    impact = direct + indirect + reputational * REPUTATIONAL_WEIGHT
    if impact <= 0:
        raise MissingInputException("at least one of direct, indirect or reputational cost is required")

    pre = p * impact
    benefit = min(mitigation * MITIGATION_EFFICIENCY, pre * MAX_MITIGATION_SHARE)
    post = max(0.0, pre - benefit)

    return ExpectedLoss(
        total_impact=to_decimal(impact),
        pre_mitigation_loss=to_decimal(pre),
        mitigation_benefit=to_decimal(benefit),
        post_mitigation_loss=to_decimal(post),
        sensitivity={
            # loss change per +0.1 probability, per +1 currency of direct cost
            "delta_probability": to_decimal(impact * 0.1),
            "delta_direct_cost": to_decimal(p, 3),
        },
    )


class RiskModelOrchestrator:
    """Probability then loss; failures become diagnostics, not exceptions."""

    FALLBACK_PROBABILITY = FailureProbability(
        probability=Decimal("0.500"),
        confidence_low=Decimal("0.300"),
        confidence_high=Decimal("0.700"),
        tier="medium",
    )

    def run(self, inputs: Optional[RiskModelInputs] = None) -> RiskModelReport:
        inputs = inputs or RiskModelInputs()
        errors: List[str] = []

        try:
            probability = estimate_failure_probability(inputs.project)
        except (MaturityEngineException, ValueError, ArithmeticError) as e:
            errors.append(f"FailureProbability: {e}")
            logger.warning("failure_probability_failed", error=str(e))
            probability = self.FALLBACK_PROBABILITY

        try:
            loss = estimate_expected_loss(float(probability.probability), inputs.losses)
        except (MaturityEngineException, ValueError, ArithmeticError) as e:
            errors.append(f"ExpectedLoss: {e}")
            logger.warning("expected_loss_failed", error=str(e))
            zero = Decimal("0.00")
            loss = ExpectedLoss(zero, zero, zero, zero)

        logger.info(
            "risk_model_completed",
            probability=float(probability.probability),
            tier=probability.tier,
            post_mitigation_loss=float(loss.post_mitigation_loss),
            errors=len(errors),
        )
        return RiskModelReport(probability=probability, loss=loss, errors=errors)
