"""
Distribution Statistics
maturity_engine/scoring/distribution.py

Summary statistics over a cohort of maturity scores (portfolio, industry
or a single organisation's history).

  std_dev   population (÷ n)
  q1, q3    R-7 percentiles: index = p·(n−1), linear interpolation
  outliers  x < q1 − 1.5·IQR or x > q3 + 1.5·IQR
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from maturity_engine.scoring.utils import (
    as_number,
    mean,
    percentile,
    population_std_dev,
    to_decimal,
)

logger = logging.getLogger(__name__)

IQR_FENCE = 1.5


@dataclass(frozen=True)
class DistributionStats:
    """Descriptive statistics for one sample."""
    mean: Decimal
    median: Decimal
    std_dev: Decimal
    q1: Decimal
    q3: Decimal
    min: Decimal
    max: Decimal
    count: int
    outliers: Optional[List[Decimal]] = None   # None when no outliers


@dataclass(frozen=True)
class DistributionAnalysis:
    data_maturity: DistributionStats
    ai_maturity: DistributionStats


def _clean(scores: Optional[Iterable[Any]]) -> List[float]:
    if scores is None:
        return []
    values = (as_number(s) for s in scores)
    return [v for v in values if v is not None]


def analyze_distribution(scores: Optional[Iterable[Any]]) -> DistributionStats:
    """
    Compute distribution statistics.

    Non-numeric entries are dropped. An empty sample returns all-zero
    stats with count 0 rather than raising.

    Examples:
        >>> analyze_distribution([]).count
        0
        >>> analyze_distribution([50]).median
        Decimal('50.00')
    """
    values = sorted(_clean(scores))
    zero = to_decimal(0)
    if not values:
        return DistributionStats(
            mean=zero, median=zero, std_dev=zero, q1=zero, q3=zero,
            min=zero, max=zero, count=0, outliers=None,
        )

    q1 = percentile(values, 0.25)
    q3 = percentile(values, 0.75)
    iqr = q3 - q1
    lower_fence = q1 - IQR_FENCE * iqr
    upper_fence = q3 + IQR_FENCE * iqr
    outliers = [to_decimal(v) for v in values if v < lower_fence or v > upper_fence]

    stats = DistributionStats(
        mean=to_decimal(mean(values)),
        median=to_decimal(percentile(values, 0.5)),
        std_dev=to_decimal(population_std_dev(values)),
        q1=to_decimal(q1),
        q3=to_decimal(q3),
        min=to_decimal(values[0]),
        max=to_decimal(values[-1]),
        count=len(values),
        outliers=outliers or None,
    )

    logger.info(
        "distribution_analyzed",
        extra={"count": stats.count, "mean": float(stats.mean), "outliers": len(outliers)},
    )
    return stats


def run_distribution_analysis(
    data_scores: Optional[Iterable[Any]],
    ai_scores: Optional[Iterable[Any]],
) -> DistributionAnalysis:
    """Analyze data and AI maturity cohorts with identical semantics."""
    return DistributionAnalysis(
        data_maturity=analyze_distribution(data_scores),
        ai_maturity=analyze_distribution(ai_scores),
    )
