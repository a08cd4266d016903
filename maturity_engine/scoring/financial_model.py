"""
Financial Model Orchestrator
maturity_engine/scoring/financial_model.py

Composes three sub-models and reports partial results with diagnostics.

Pipeline steps:
  1. RevenueImpactModel  → revenue increase
       growth model  (0 < growth < 50):
         rate = growth × (0.5 + 0.5·(data + ai)/200) / 100
       otherwise maturity-gap upside (see financial_impact.py)
  2. CostImpactModel     → total savings split by area shares
       automation ∝ 0.35 + 0.20·g
       process    ∝ 0.30 + 0.15·g
       resource   ∝ 0.25 + 0.15·g
       the three shares are scaled down to sum to at most 0.95;
       other = total − automation − process − resource  (≥ 5% of total)
     requires operational_cost or headcount
  3. ProfitImpactModel   → net = revenue increase + savings,
       tax-adjusted = net × (1 − tax/100)
  4. Summary + errors[]

A failing step is recorded as "<Model>: <message>" and replaced by a zeroed
record so the remaining steps still run.
"""

from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal
from typing import Dict, List, Optional, Tuple

import structlog

from maturity_engine.config import Settings, get_settings
from maturity_engine.core.exceptions import MaturityEngineException, MissingInputException
from maturity_engine.models.benchmark import IndustryBenchmark
from maturity_engine.models.financial import FinancialModelInputs
from maturity_engine.scoring.financial_impact import (
    BASE_COST_REDUCTION,
    BASE_REVENUE_UPLIFT,
    GAP_COST_REDUCTION,
    GAP_REVENUE_UPLIFT,
    maturity_gap,
    resolve_cost_base,
)
from maturity_engine.scoring.industry_benchmark import get_benchmark
from maturity_engine.scoring.utils import as_number, clamp, clamp_score, to_decimal

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")
MAX_GROWTH_RATE_PCT = 50.0
MAX_ALLOCATED_SHARE = 0.95
CENT = Decimal("0.01")


@dataclass(frozen=True)
class RevenueImpact:
    current_revenue: Decimal
    projected_revenue: Decimal
    revenue_increase: Decimal
    effective_rate_pct: Decimal
    model: str                      # "growth_rate" | "maturity_gap" | "unavailable"


@dataclass(frozen=True)
class CostImpact:
    cost_base: Decimal
    total_savings: Decimal
    automation_savings: Decimal
    process_savings: Decimal
    resource_savings: Decimal
    other_savings: Decimal
    savings_pct: Decimal            # of cost_base


@dataclass(frozen=True)
class ProfitImpact:
    current_profit: Decimal
    net_profit_increase: Decimal
    tax_adjusted_profit_increase: Decimal
    impact_pct: Optional[Decimal]   # None when current profit ≤ 0


@dataclass(frozen=True)
class FinancialModelReport:
    revenue: RevenueImpact
    cost: CostImpact
    profit: ProfitImpact
    summary: Dict[str, Decimal]
    errors: List[str] = field(default_factory=list)


def area_shares(gap: float) -> Tuple[float, float, float]:
    """Automation, process and resource shares of total savings; sum ≤ 0.95."""
    shares = (0.35 + gap * 0.20, 0.30 + gap * 0.15, 0.25 + gap * 0.15)
    scale = min(1.0, MAX_ALLOCATED_SHARE / sum(shares))
    return tuple(s * scale for s in shares)


class RevenueImpactModel:

    def calculate(self, inputs: FinancialModelInputs, benchmark: IndustryBenchmark) -> RevenueImpact:
        revenue = as_number(inputs.revenue)
        if revenue is None or revenue < 0:
            raise ValueError("revenue must be a non-negative number")

        data = clamp_score(inputs.data_maturity)
        ai = clamp_score(inputs.ai_maturity)
        growth = as_number(inputs.growth_rate_pct)

        if growth is not None and 0 < growth < MAX_GROWTH_RATE_PCT:
            rate = growth * (0.5 + (data + ai) / 200 * 0.5) / 100
            model = "growth_rate"
        else:
            gap = maturity_gap(data, ai)
            rate = (BASE_REVENUE_UPLIFT + gap * GAP_REVENUE_UPLIFT) * benchmark.revenue_multiplier
            model = "maturity_gap"

        increase = revenue * rate
        return RevenueImpact(
            current_revenue=to_decimal(revenue),
            projected_revenue=to_decimal(revenue + increase),
            revenue_increase=to_decimal(increase),
            effective_rate_pct=to_decimal(rate * 100),
            model=model,
        )


class CostImpactModel:

    def __init__(self, cost_per_head: float):
        self.cost_per_head = cost_per_head

    def calculate(self, inputs: FinancialModelInputs, benchmark: IndustryBenchmark) -> CostImpact:
        cost_base, source = resolve_cost_base(
            inputs.operational_cost, inputs.headcount, self.cost_per_head
        )
        if source == "none":
            raise MissingInputException("operational_cost or headcount is required")

        gap = maturity_gap(inputs.data_maturity, inputs.ai_maturity)
        total = cost_base * (BASE_COST_REDUCTION + gap * GAP_COST_REDUCTION) * benchmark.cost_multiplier
        total_savings = to_decimal(total)

        shares = area_shares(gap)
        automation, process, resource = (
            (total_savings * Decimal(str(share))).quantize(CENT, rounding=ROUND_DOWN)
            for share in shares
        )
        other = total_savings - automation - process - resource

        return CostImpact(
            cost_base=to_decimal(cost_base),
            total_savings=total_savings,
            automation_savings=automation,
            process_savings=process,
            resource_savings=resource,
            other_savings=other,
            savings_pct=to_decimal(total / cost_base * 100),
        )


class ProfitImpactModel:

    def calculate(
        self,
        inputs: FinancialModelInputs,
        revenue_increase: Decimal,
        cost_savings: Decimal,
    ) -> ProfitImpact:
        revenue = max(0.0, as_number(inputs.revenue, 0.0))
        margin = clamp(as_number(inputs.profit_margin_pct, 0.0), -100.0, 100.0)
        tax_rate = clamp(as_number(inputs.tax_rate_pct, 0.0))

        current_profit = revenue * margin / 100
        net = float(revenue_increase) + float(cost_savings)
        tax_adjusted = net * (1 - tax_rate / 100)
        impact_pct = to_decimal(net / current_profit * 100) if current_profit > 0 else None

        return ProfitImpact(
            current_profit=to_decimal(current_profit),
            net_profit_increase=to_decimal(net),
            tax_adjusted_profit_increase=to_decimal(tax_adjusted),
            impact_pct=impact_pct,
        )


class FinancialModelOrchestrator:
    """Runs revenue, cost and profit models; never fails the whole request."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.revenue_model = RevenueImpactModel()
        self.cost_model = CostImpactModel(self.settings.COST_PER_HEAD)
        self.profit_model = ProfitImpactModel()

    def run(
        self,
        inputs: FinancialModelInputs,
        benchmark: Optional[IndustryBenchmark] = None,
    ) -> FinancialModelReport:
        benchmark = benchmark or get_benchmark(inputs.industry)
        errors: List[str] = []

        # 1. Revenue
        try:
            revenue = self.revenue_model.calculate(inputs, benchmark)
        except (MaturityEngineException, ValueError, ArithmeticError) as e:
            errors.append(f"RevenueImpact: {e}")
            logger.warning("revenue_model_failed", error=str(e))
            revenue = RevenueImpact(ZERO, ZERO, ZERO, ZERO, "unavailable")

        # 2. Cost
        try:
            cost = self.cost_model.calculate(inputs, benchmark)
        except (MaturityEngineException, ValueError, ArithmeticError) as e:
            errors.append(f"CostImpact: {e}")
            logger.warning("cost_model_failed", error=str(e))
            cost = CostImpact(ZERO, ZERO, ZERO, ZERO, ZERO, ZERO, ZERO)

        # 3. Profit
        try:
            profit = self.profit_model.calculate(inputs, revenue.revenue_increase, cost.total_savings)
        except (MaturityEngineException, ValueError, ArithmeticError) as e:
            errors.append(f"ProfitImpact: {e}")
            logger.warning("profit_model_failed", error=str(e))
            profit = ProfitImpact(ZERO, ZERO, ZERO, None)

        # 4. Summary
        summary = {
            "total_revenue_upside": revenue.revenue_increase,
            "total_cost_savings": cost.total_savings,
            "net_profit_increase": profit.net_profit_increase,
            "tax_adjusted_profit_increase": profit.tax_adjusted_profit_increase,
        }

        logger.info(
            "financial_model_completed",
            revenue_model=revenue.model,
            net_profit_increase=float(profit.net_profit_increase),
            errors=len(errors),
        )

        return FinancialModelReport(
            revenue=revenue,
            cost=cost,
            profit=profit,
            summary=summary,
            errors=errors,
        )
