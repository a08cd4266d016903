"""
Financial Impact Calculator
maturity_engine/scoring/financial_impact.py

Projects the annual financial upside of closing the data/AI maturity gap.

  g               = ((100 − data) + (100 − ai)) / 200          ∈ [0, 1]
  revenue_upside  = revenue × (0.02 + 0.10·g) × revenue_multiplier
  margin_pp       = min(10, (0.5 + 3·g) × margin_multiplier)
  margin_value    = revenue × (clamp(margin + margin_pp, 0, 100) − margin) / 100
  cost_reduction  = cost_base × (0.03 + 0.12·g) × cost_multiplier

cost_base is operational_cost when supplied, else headcount × COST_PER_HEAD,
else 0. Every monetary output is ≥ 0.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.models.benchmark import IndustryBenchmark
from maturity_engine.models.financial import FinancialImpactInputs
from maturity_engine.scoring.industry_benchmark import get_benchmark
from maturity_engine.scoring.utils import as_number, clamp, clamp_score, to_decimal

logger = structlog.get_logger(__name__)

BASE_REVENUE_UPLIFT = 0.02
GAP_REVENUE_UPLIFT = 0.10
BASE_MARGIN_PP = 0.5
GAP_MARGIN_PP = 3.0
MAX_MARGIN_PP = 10.0
BASE_COST_REDUCTION = 0.03
GAP_COST_REDUCTION = 0.12


@dataclass(frozen=True)
class FinancialImpactResult:
    revenue_upside: Decimal
    profit_margin_expansion_pct: Decimal      # percentage points
    profit_margin_expansion_value: Decimal    # currency
    cost_reduction: Decimal
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_impact(self) -> Decimal:
        return self.revenue_upside + self.profit_margin_expansion_value + self.cost_reduction


def maturity_gap(data_maturity: Any, ai_maturity: Any) -> float:
    """Average distance from full maturity, as a fraction in [0, 1]."""
    return ((100 - clamp_score(data_maturity)) + (100 - clamp_score(ai_maturity))) / 200


def resolve_cost_base(
    operational_cost: Optional[float],
    headcount: Optional[float],
    cost_per_head: float,
) -> Tuple[float, str]:
    """Return (cost_base, source) where source is operational_cost, headcount or none."""
    op_cost = as_number(operational_cost)
    if op_cost is not None and op_cost > 0:
        return op_cost, "operational_cost"
    heads = as_number(headcount)
    if heads is not None and heads > 0:
        return heads * cost_per_head, "headcount"
    return 0.0, "none"


class FinancialImpactCalculator:
    """Revenue, margin and cost impact of maturity improvement."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def calculate(
        self,
        inputs: FinancialImpactInputs,
        benchmark: Optional[IndustryBenchmark] = None,
    ) -> FinancialImpactResult:
        """
        Calculate financial impact.

        Args:
            inputs: Revenue, margin, cost base and maturity scores
            benchmark: Industry multipliers; resolved from inputs.industry
                when omitted

        Returns:
            FinancialImpactResult (currency values rounded to 2 dp)
        """
        benchmark = benchmark or get_benchmark(inputs.industry)
        revenue = max(0.0, as_number(inputs.revenue, 0.0))
        margin = clamp(as_number(inputs.profit_margin_pct, 0.0), -100.0, 100.0)
        gap = maturity_gap(inputs.data_maturity, inputs.ai_maturity)

        upside_pct = (BASE_REVENUE_UPLIFT + gap * GAP_REVENUE_UPLIFT) * benchmark.revenue_multiplier
        revenue_upside = revenue * upside_pct

        margin_pp = min(MAX_MARGIN_PP, (BASE_MARGIN_PP + gap * GAP_MARGIN_PP) * benchmark.margin_multiplier)
        new_margin = clamp(margin + margin_pp, 0.0, 100.0)
        margin_value = max(0.0, revenue * (new_margin - margin) / 100)

        cost_base, cost_source = resolve_cost_base(
            inputs.operational_cost, inputs.headcount, self.settings.COST_PER_HEAD
        )
        cost_reduction = cost_base * (BASE_COST_REDUCTION + gap * GAP_COST_REDUCTION) * benchmark.cost_multiplier

        result = FinancialImpactResult(
            revenue_upside=to_decimal(revenue_upside),
            profit_margin_expansion_pct=to_decimal(margin_pp),
            profit_margin_expansion_value=to_decimal(margin_value),
            cost_reduction=to_decimal(max(0.0, cost_reduction)),
            details={
                "maturity_gap": to_decimal(gap, 4),
                "revenue_upside_pct": to_decimal(upside_pct * 100),
                "cost_base": to_decimal(cost_base),
                "cost_base_source": cost_source,
                "benchmark_id": benchmark.id,
            },
        )

        logger.info(
            "financial_impact_calculated",
            revenue_upside=float(result.revenue_upside),
            margin_pp=float(result.profit_margin_expansion_pct),
            cost_reduction=float(result.cost_reduction),
            benchmark=benchmark.id,
        )
        return result

    def sensitivity_revenue_upside(
        self,
        inputs: FinancialImpactInputs,
        delta_data: float,
        delta_ai: float,
        benchmark: Optional[IndustryBenchmark] = None,
    ) -> Decimal:
        """Change in revenue upside when maturity scores shift by the given deltas."""
        base = self.calculate(inputs, benchmark)
        shifted_inputs = inputs.model_copy(
            update={
                "data_maturity": clamp_score(inputs.data_maturity) + delta_data,
                "ai_maturity": clamp_score(inputs.ai_maturity) + delta_ai,
            }
        )
        shifted = self.calculate(shifted_inputs, benchmark)
        return shifted.revenue_upside - base.revenue_upside
