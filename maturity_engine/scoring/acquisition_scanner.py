"""
Acquisition Opportunity Scanner
maturity_engine/scoring/acquisition_scanner.py

Finds companies whose current valuation sits below the value implied by
their data/AI maturity, then ranks them as acquisition targets.

  undervaluation = clamp(upside_pct × 2, 0, 100)

  attractiveness = 0.35 × undervaluation
                 + 0.25 × growth      (revenue upside vs 50M, capped at 100)
                 + 0.20 × risk        (100 − risk score; score defaults to 50)
                 + 0.20 × cost        (100 − 10 × investment / valuation; 100 without spend)

Potential valuation is the company's own figure when positive, otherwise
the maturity-adjusted valuation.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

import structlog

from maturity_engine.models.benchmark import IndustryBenchmark
from maturity_engine.models.portfolio import AcquisitionFilters, CompanySnapshot
from maturity_engine.scoring.utils import clamp, clamp_score, to_decimal
from maturity_engine.scoring.valuation import ValuationAdjustmentCalculator

logger = structlog.get_logger(__name__)

GROWTH_REFERENCE_REVENUE = 50_000_000.0
DEFAULT_RISK_SCORE = 50.0
ATTRACTIVENESS_WEIGHTS = {
    "undervaluation": 0.35,
    "growth": 0.25,
    "risk": 0.20,
    "cost": 0.20,
}


@dataclass(frozen=True)
class UndervaluedCompany:
    organisation_id: str
    name: str
    industry: Optional[str]
    current_valuation: Decimal
    potential_valuation: Decimal
    valuation_upside: Decimal
    valuation_upside_pct: Decimal
    data_maturity_index: Decimal
    ai_maturity_score: Decimal
    undervaluation_score: Decimal       # 0-100, higher = more room vs implied value
    rationale: Optional[str] = None


@dataclass(frozen=True)
class AcquisitionTarget:
    organisation_id: str
    name: str
    industry: Optional[str]
    undervaluation_score: Decimal
    acquisition_attractiveness_score: Decimal
    current_valuation: Decimal
    potential_valuation: Decimal
    valuation_upside_pct: Decimal
    data_maturity_index: Decimal
    ai_maturity_score: Decimal
    revenue_upside: Optional[Decimal]
    risk_level: Optional[str]
    rationale: str


def _snapshots(companies: Iterable[Any]) -> List[CompanySnapshot]:
    return [CompanySnapshot.model_validate(c) for c in companies]


def _within(value: float, low: Optional[float], high: Optional[float]) -> bool:
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def apply_acquisition_filters(candidates: Iterable[Any], filters: Any = None) -> List[CompanySnapshot]:
    """Keep candidates inside every bound; industry matches ignore case and padding."""
    f = AcquisitionFilters.model_validate(filters or {})
    industry = f.industry.strip().lower() if f.industry and f.industry.strip() else None

    kept = []
    for c in _snapshots(candidates):
        if not _within(c.current_valuation or 0.0, f.min_valuation, f.max_valuation):
            continue
        if not _within(c.data_maturity_index or 0.0, f.min_data_maturity, f.max_data_maturity):
            continue
        if not _within(c.ai_maturity_score or 0.0, f.min_ai_maturity, f.max_ai_maturity):
            continue
        if industry is not None and (c.industry or "").strip().lower() != industry:
            continue
        kept.append(c)
    return kept


def identify_undervalued_companies(
    candidates: Iterable[Any], benchmarks: Optional[Mapping[str, IndustryBenchmark]] = None
) -> List[UndervaluedCompany]:
    """
    Score every candidate with a positive valuation, most undervalued first.

    ``benchmarks`` maps industry names (case-insensitive) to the benchmark
    whose valuation multiplier the implied valuation uses; other industries
    are valued with the neutral multiplier.
    """
    calculator = ValuationAdjustmentCalculator()
    by_industry = {k.strip().lower(): v for k, v in (benchmarks or {}).items()}
    results = []

    for c in _snapshots(candidates):
        current = c.current_valuation or 0.0
        if current <= 0:
            continue
        data = clamp_score(c.data_maturity_index)
        ai = clamp_score(c.ai_maturity_score)

        if c.potential_valuation is not None and c.potential_valuation > 0:
            potential = c.potential_valuation
        else:
            benchmark = by_industry.get((c.industry or "").strip().lower())
            potential = float(calculator.calculate(current, data, ai, benchmark).potential_valuation)

        upside = potential - current
        upside_pct = upside / current * 100
        results.append(
            UndervaluedCompany(
                organisation_id=c.organisation_id,
                name=c.name,
                industry=c.industry,
                current_valuation=to_decimal(current),
                potential_valuation=to_decimal(potential),
                valuation_upside=to_decimal(upside),
                valuation_upside_pct=to_decimal(upside_pct),
                data_maturity_index=to_decimal(data),
                ai_maturity_score=to_decimal(ai),
                undervaluation_score=to_decimal(clamp(upside_pct * 2)),
                rationale=f"Potential upside {upside_pct:.1f}% vs current valuation" if upside_pct > 0 else None,
            )
        )

    results.sort(key=lambda u: u.undervaluation_score, reverse=True)
    logger.info("undervalued_companies_identified", candidates=len(results))
    return results


def score_acquisition_targets(
    undervalued: Iterable[UndervaluedCompany], candidates: Any = ()
) -> List[AcquisitionTarget]:
    """
    Rank undervalued companies by acquisition attractiveness.

    ``candidates`` supplies growth, risk and investment figures, either as a
    mapping keyed by organisation id or as an iterable of snapshots.
    Companies without a candidate entry score with neutral defaults.
    """
    if isinstance(candidates, Mapping):
        by_org = {k: CompanySnapshot.model_validate(v) for k, v in candidates.items()}
    else:
        by_org = {c.organisation_id: c for c in _snapshots(candidates)}

    w = ATTRACTIVENESS_WEIGHTS
    targets = []
    for u in undervalued:
        c = by_org.get(u.organisation_id)
        revenue_upside = c.revenue_upside if c is not None else None
        risk_score = c.overall_risk_score if c is not None and c.overall_risk_score is not None else DEFAULT_RISK_SCORE
        investment = (c.total_investment or 0.0) if c is not None else 0.0
        current = float(u.current_valuation) or 1.0

        undervaluation = clamp(float(u.undervaluation_score))
        growth = min(100.0, (revenue_upside or 0.0) / GROWTH_REFERENCE_REVENUE * 100)
        risk = max(0.0, 100 - risk_score)
        cost = 100.0 if investment <= 0 else max(0.0, 100 - investment / current * 10)

        score = clamp(
            w["undervaluation"] * undervaluation
            + w["growth"] * growth
            + w["risk"] * risk
            + w["cost"] * cost
        )
        targets.append(
            AcquisitionTarget(
                organisation_id=u.organisation_id,
                name=u.name,
                industry=u.industry,
                undervaluation_score=u.undervaluation_score,
                acquisition_attractiveness_score=to_decimal(score),
                current_valuation=u.current_valuation,
                potential_valuation=u.potential_valuation,
                valuation_upside_pct=u.valuation_upside_pct,
                data_maturity_index=u.data_maturity_index,
                ai_maturity_score=u.ai_maturity_score,
                revenue_upside=None if revenue_upside is None else to_decimal(revenue_upside),
                risk_level=c.risk_level if c is not None else None,
                rationale=(
                    f"Undervaluation {undervaluation:.0f}; growth potential {growth:.0f}; "
                    f"risk adj {risk:.0f}."
                ),
            )
        )

    targets.sort(key=lambda t: t.acquisition_attractiveness_score, reverse=True)
    logger.info("acquisition_targets_scored", targets=len(targets))
    return targets


def scan_acquisition_targets(
    candidates: Iterable[Any],
    filters: Any = None,
    benchmarks: Optional[Mapping[str, IndustryBenchmark]] = None,
) -> List[AcquisitionTarget]:
    """Filter, identify and rank in one pass."""
    kept = apply_acquisition_filters(candidates, filters)
    undervalued = identify_undervalued_companies(kept, benchmarks)
    return score_acquisition_targets(undervalued, kept)
