"""
Industry Benchmarks
maturity_engine/scoring/industry_benchmark.py

Built-in benchmark records and peer comparison against an industry average.

  pct_diff   = (score − average) / average × 100
  comparison = Above average if diff > 3, Below average if diff < −3,
               otherwise At average
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

import structlog

from maturity_engine.models.benchmark import IndustryBenchmark
from maturity_engine.models.enumerations import BenchmarkComparison
from maturity_engine.scoring.utils import clamp_score, to_decimal

logger = structlog.get_logger(__name__)

TOLERANCE = 3.0

DEFAULT_BENCHMARKS: Dict[str, IndustryBenchmark] = {
    "default": IndustryBenchmark(),
    "technology": IndustryBenchmark(
        id="technology", name="Technology",
        revenue_multiplier=1.25, margin_multiplier=1.2, cost_multiplier=1.15,
        data_average=58, ai_average=62,
    ),
    "finance": IndustryBenchmark(
        id="finance", name="Financial Services",
        revenue_multiplier=1.15, margin_multiplier=1.1, cost_multiplier=1.2,
        data_average=52, ai_average=48,
    ),
    "healthcare": IndustryBenchmark(
        id="healthcare", name="Healthcare",
        revenue_multiplier=1.1, margin_multiplier=1.15, cost_multiplier=1.1,
        data_average=44, ai_average=42,
    ),
    "retail": IndustryBenchmark(
        id="retail", name="Retail",
        revenue_multiplier=1.2, margin_multiplier=1.1, cost_multiplier=1.25,
        data_average=48, ai_average=45,
    ),
    "manufacturing": IndustryBenchmark(
        id="manufacturing", name="Manufacturing",
        revenue_multiplier=1.05, margin_multiplier=1.2, cost_multiplier=1.3,
        data_average=42, ai_average=38,
    ),
}


def normalise_industry(name: Optional[str]) -> str:
    """Map a free-text industry name to a DEFAULT_BENCHMARKS key."""
    if not name or not isinstance(name, str):
        return "default"
    key = name.strip().lower()
    if key in DEFAULT_BENCHMARKS:
        return key
    if "financ" in key or "bank" in key:
        return "finance"
    if "tech" in key or "software" in key:
        return "technology"
    if "health" in key:
        return "healthcare"
    if "retail" in key:
        return "retail"
    if "manufactur" in key:
        return "manufacturing"
    return "default"


def get_benchmark(industry: Optional[str] = None) -> IndustryBenchmark:
    """Resolve a benchmark by id or industry name, falling back to default."""
    return DEFAULT_BENCHMARKS[normalise_industry(industry)]


@dataclass(frozen=True)
class ComparisonMetric:
    organisation_score: Decimal
    industry_average: Decimal
    comparison: BenchmarkComparison
    pct_diff: Decimal


@dataclass(frozen=True)
class BenchmarkReport:
    industry: str
    data: ComparisonMetric
    ai: ComparisonMetric
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)


def _compare(score: float, average: float) -> ComparisonMetric:
    diff = score - average
    if average != 0:
        pct_diff = diff / average * 100
    else:
        pct_diff = 100.0 if diff > 0 else -100.0 if diff < 0 else 0.0

    comparison = BenchmarkComparison.AT
    if diff > TOLERANCE:
        comparison = BenchmarkComparison.ABOVE
    elif diff < -TOLERANCE:
        comparison = BenchmarkComparison.BELOW

    return ComparisonMetric(
        organisation_score=to_decimal(score),
        industry_average=to_decimal(average),
        comparison=comparison,
        pct_diff=to_decimal(pct_diff),
    )


def compare_to_benchmarks(
    data_score: float,
    ai_score: float,
    benchmark: Optional[IndustryBenchmark] = None,
) -> BenchmarkReport:
    """
    Compare organisation maturity with an industry benchmark.

    Args:
        data_score: Data maturity index (clamped to [0, 100])
        ai_score: AI maturity score (clamped to [0, 100])
        benchmark: Benchmark record; defaults to DEFAULT_BENCHMARKS["default"]

    Returns:
        BenchmarkReport with per-axis comparison and insight text
    """
    benchmark = benchmark or DEFAULT_BENCHMARKS["default"]
    data = _compare(clamp_score(data_score), benchmark.data_average)
    ai = _compare(clamp_score(ai_score), benchmark.ai_average)

    strengths: List[str] = []
    weaknesses: List[str] = []
    for label, metric in (("Data", data), ("AI", ai)):
        if metric.comparison is BenchmarkComparison.ABOVE:
            strengths.append(
                f"{label} maturity is above industry average (+{metric.pct_diff:.1f}%)."
            )
        elif metric.comparison is BenchmarkComparison.BELOW:
            weaknesses.append(
                f"{label} maturity is below industry average ({metric.pct_diff:.1f}%)."
            )

    logger.info(
        "benchmark_compared",
        industry=benchmark.id,
        data_comparison=data.comparison.value,
        ai_comparison=ai.comparison.value,
    )

    return BenchmarkReport(
        industry=benchmark.name,
        data=data,
        ai=ai,
        strengths=strengths,
        weaknesses=weaknesses,
    )
