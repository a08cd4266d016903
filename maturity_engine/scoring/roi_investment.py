"""
ROI & Investment Calculator
maturity_engine/scoring/roi_investment.py

  required_investment = Σ (target − current) × cost_per_point
                        data: DATA_INVESTMENT_PER_POINT (default 15,000)
                        AI:   AI_INVESTMENT_PER_POINT   (default 22,000)
  roi_multiplier      = benefits / investment
  roi_pct             = (roi_multiplier − 1) × 100
  payback_years       = investment / annual_benefits

ROI and payback are None (undefined, not zero) when their denominator is
≤ 0. A target below current maturity is rejected with
InvalidTargetException.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.core.exceptions import InvalidTargetException
from maturity_engine.models.roi import ROIInvestmentInputs
from maturity_engine.scoring.utils import as_number, clamp_score, to_decimal

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RequiredInvestment:
    required_data_investment: Decimal
    required_ai_investment: Decimal
    total_investment: Decimal
    data_gap: Decimal
    ai_gap: Decimal


@dataclass(frozen=True)
class ExpectedROI:
    roi_pct: Optional[Decimal]
    roi_multiplier: Optional[Decimal]


@dataclass(frozen=True)
class PaybackPeriod:
    payback_period_years: Optional[Decimal]
    payback_period_months: Optional[Decimal]


@dataclass(frozen=True)
class ROIInvestmentResult:
    required_data_investment: Decimal
    required_ai_investment: Decimal
    total_investment: Decimal
    expected_roi_pct: Optional[Decimal]
    expected_roi_multiplier: Optional[Decimal]
    payback_period_years: Optional[Decimal]
    payback_period_months: Optional[Decimal]
    details: Dict[str, Any] = field(default_factory=dict)


def _validated_gap(dimension: str, current: Any, target: Any) -> float:
    current_score = clamp_score(current)
    target_score = clamp_score(target)
    if target_score < current_score:
        raise InvalidTargetException(dimension, current_score, target_score)
    return target_score - current_score


def calculate_required_investment(
    current_data: Any,
    target_data: Any,
    current_ai: Any,
    target_ai: Any,
    settings: Optional[Settings] = None,
) -> RequiredInvestment:
    """
    Investment needed to close the maturity gap.

    Examples:
        >>> calculate_required_investment(40, 60, 50, 50).required_data_investment
        Decimal('300000.00')
    """
    settings = settings or get_settings()
    data_gap = _validated_gap("data", current_data, target_data)
    ai_gap = _validated_gap("ai", current_ai, target_ai)

    data_investment = data_gap * settings.DATA_INVESTMENT_PER_POINT
    ai_investment = ai_gap * settings.AI_INVESTMENT_PER_POINT

    return RequiredInvestment(
        required_data_investment=to_decimal(data_investment),
        required_ai_investment=to_decimal(ai_investment),
        total_investment=to_decimal(data_investment + ai_investment),
        data_gap=to_decimal(data_gap),
        ai_gap=to_decimal(ai_gap),
    )


def calculate_expected_roi(benefits: Any, investment: Any) -> ExpectedROI:
    """ROI percentage and multiplier; both None when investment ≤ 0."""
    invested = as_number(investment, 0.0)
    if invested <= 0:
        return ExpectedROI(roi_pct=None, roi_multiplier=None)
    multiplier = as_number(benefits, 0.0) / invested
    return ExpectedROI(
        roi_pct=to_decimal((multiplier - 1) * 100),
        roi_multiplier=to_decimal(multiplier),
    )


def calculate_payback_period(investment: Any, annual_benefits: Any) -> PaybackPeriod:
    """Payback in years and months; both None when either input is ≤ 0."""
    invested = as_number(investment, 0.0)
    annual = as_number(annual_benefits, 0.0)
    if invested <= 0 or annual <= 0:
        return PaybackPeriod(payback_period_years=None, payback_period_months=None)
    years = invested / annual
    return PaybackPeriod(
        payback_period_years=to_decimal(years),
        payback_period_months=to_decimal(years * 12),
    )


class ROIInvestmentCalculator:
    """Required investment, ROI and payback for a maturity target."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def calculate(self, inputs: ROIInvestmentInputs) -> ROIInvestmentResult:
        investment = calculate_required_investment(
            inputs.current_data_maturity,
            inputs.target_data_maturity,
            inputs.current_ai_maturity,
            inputs.target_ai_maturity,
            self.settings,
        )
        benefits = as_number(inputs.estimated_financial_benefits, 0.0)
        annual = as_number(inputs.annual_benefits, benefits)

        roi = calculate_expected_roi(benefits, investment.total_investment)
        payback = calculate_payback_period(investment.total_investment, annual)

        logger.info(
            "roi_investment_calculated",
            total_investment=float(investment.total_investment),
            roi_pct=float(roi.roi_pct) if roi.roi_pct is not None else None,
            payback_years=(
                float(payback.payback_period_years)
                if payback.payback_period_years is not None else None
            ),
        )

        return ROIInvestmentResult(
            required_data_investment=investment.required_data_investment,
            required_ai_investment=investment.required_ai_investment,
            total_investment=investment.total_investment,
            expected_roi_pct=roi.roi_pct,
            expected_roi_multiplier=roi.roi_multiplier,
            payback_period_years=payback.payback_period_years,
            payback_period_months=payback.payback_period_months,
            details={
                "data_gap": investment.data_gap,
                "ai_gap": investment.ai_gap,
                "data_cost_per_point": self.settings.DATA_INVESTMENT_PER_POINT,
                "ai_cost_per_point": self.settings.AI_INVESTMENT_PER_POINT,
            },
        )

    def scenario(
        self,
        inputs: ROIInvestmentInputs,
        target_data: float,
        target_ai: float,
    ) -> ROIInvestmentResult:
        """Re-run with alternative targets, keeping current maturity and benefits."""
        return self.calculate(
            inputs.model_copy(
                update={"target_data_maturity": target_data, "target_ai_maturity": target_ai}
            )
        )
