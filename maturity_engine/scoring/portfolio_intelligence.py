"""
Portfolio Intelligence
maturity_engine/scoring/portfolio_intelligence.py

Portfolio-level metrics over the latest outputs of every company:

  - averages (data, AI, risk) over the companies that report the metric
  - totals for revenue upside, profit expansion, cost reduction and
    valuation upside; financial impact is the sum of the first three
  - top performers by valuation upside (% first, then amount)
  - bottom performers by average maturity; a company with no maturity
    reading is left out
  - top performers by positive revenue upside
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, List, Optional

import structlog

from maturity_engine.models.portfolio import CompanySnapshot
from maturity_engine.scoring.utils import mean, to_decimal

logger = structlog.get_logger(__name__)

DEFAULT_TOP_N = 5


@dataclass(frozen=True)
class PortfolioPerformance:
    company_count: int
    avg_data_maturity: Decimal
    avg_ai_maturity: Decimal
    total_revenue_upside: Decimal
    total_profit_expansion: Decimal
    total_cost_reduction: Decimal
    total_financial_impact: Decimal
    avg_risk_score: Decimal
    total_valuation_upside: Decimal
    top_by_valuation_upside: List[CompanySnapshot]
    bottom_by_maturity: List[CompanySnapshot]
    top_by_revenue_upside: List[CompanySnapshot]
    industry_filter: Optional[str] = None
    industries: List[str] = field(default_factory=list)


def average_maturity(company: CompanySnapshot) -> Optional[float]:
    """Mean of data and AI maturity; a single reading stands alone; none (or both 0) is None."""
    data = company.data_maturity_index
    ai = company.ai_maturity_score
    if not data and not ai:
        return None
    if data is not None and ai is not None:
        return (data + ai) / 2
    return data or ai


def portfolio_industries(companies: Iterable[CompanySnapshot]) -> List[str]:
    return sorted({c.industry.strip() for c in companies if c.industry and c.industry.strip()})


def _total(companies: List[CompanySnapshot], attr: str) -> float:
    return sum(getattr(c, attr) or 0.0 for c in companies)


def _average(companies: List[CompanySnapshot], attr: str) -> float:
    return mean([getattr(c, attr) for c in companies if getattr(c, attr) is not None])


def analyze_portfolio_performance(
    companies: Iterable[Any], top_n: int = DEFAULT_TOP_N, industry: Optional[str] = None
) -> PortfolioPerformance:
    """
    Compute portfolio metrics and rank performers.

    ``industry`` restricts the analysis to one industry (case-insensitive);
    ``industries`` in the result always lists the whole portfolio's.
    """
    everyone = [CompanySnapshot.model_validate(c) for c in companies]
    wanted = industry.strip().lower() if industry and industry.strip() else None
    portfolio = [
        c for c in everyone
        if wanted is None or (c.industry or "").strip().lower() == wanted
    ]
    top_n = max(1, int(top_n))

    revenue = _total(portfolio, "revenue_upside")
    profit = _total(portfolio, "profit_margin_expansion_value")
    cost = _total(portfolio, "cost_reduction")

    with_valuation = [c for c in portfolio if c.valuation_upside is not None or c.valuation_upside_pct is not None]
    top_valuation = sorted(
        with_valuation,
        key=lambda c: (-(c.valuation_upside_pct or 0.0), -(c.valuation_upside or 0.0)),
    )[:top_n]

    rated = [c for c in portfolio if average_maturity(c) is not None]
    bottom_maturity = sorted(rated, key=average_maturity)[:top_n]

    top_revenue = sorted(
        (c for c in portfolio if (c.revenue_upside or 0.0) > 0),
        key=lambda c: c.revenue_upside,
        reverse=True,
    )[:top_n]

    logger.info(
        "portfolio_analysed",
        companies=len(portfolio),
        industry_filter=industry,
        top_n=top_n,
    )
    return PortfolioPerformance(
        company_count=len(portfolio),
        avg_data_maturity=to_decimal(_average(portfolio, "data_maturity_index")),
        avg_ai_maturity=to_decimal(_average(portfolio, "ai_maturity_score")),
        total_revenue_upside=to_decimal(revenue),
        total_profit_expansion=to_decimal(profit),
        total_cost_reduction=to_decimal(cost),
        total_financial_impact=to_decimal(revenue + profit + cost),
        avg_risk_score=to_decimal(_average(portfolio, "overall_risk_score")),
        total_valuation_upside=to_decimal(_total(portfolio, "valuation_upside")),
        top_by_valuation_upside=top_valuation,
        bottom_by_maturity=bottom_maturity,
        top_by_revenue_upside=top_revenue,
        industry_filter=industry,
        industries=portfolio_industries(everyone),
    )
