"""
Valuation Adjustment
maturity_engine/scoring/valuation.py

Maturity-adjusted valuation:

  premium   = ((data + ai) / 2 − 50) / 50
  uplift    = clamp(premium × 0.4 × valuation_multiplier, −0.2, 0.4)
  potential = current × (1 + uplift)

Maturity of 50 is neutral; the benchmark's valuation multiplier scales the
effect.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence

from maturity_engine.models.benchmark import IndustryBenchmark
from maturity_engine.scoring.utils import as_number, clamp, clamp_score, to_decimal

logger = logging.getLogger(__name__)

NEUTRAL_MATURITY = 50.0
UPLIFT_SENSITIVITY = 0.4
MIN_UPLIFT = -0.2
MAX_UPLIFT = 0.4
DEFAULT_STEPS = (20, 40, 60, 80, 100)

MODEL_EXPLANATION = (
    "Maturity-adjusted valuation: potential = current × (1 + uplift). Uplift is "
    "driven by average data/AI maturity vs 50; the industry multiplier scales "
    "the effect."
)


@dataclass(frozen=True)
class ValuationAdjustment:
    current_valuation: Decimal
    potential_valuation: Decimal
    valuation_upside: Decimal
    valuation_upside_pct: Decimal
    data_maturity_index: Decimal
    ai_maturity_score: Decimal
    model_explanation: str = MODEL_EXPLANATION


@dataclass(frozen=True)
class SensitivityPoint:
    data_maturity: Decimal
    ai_maturity: Decimal
    potential_valuation: Decimal
    valuation_upside: Decimal
    valuation_upside_pct: Decimal


def uplift_fraction(data: float, ai: float, multiplier: float = 1.0) -> float:
    """
    Examples:
        >>> uplift_fraction(50, 50)
        0.0
        >>> uplift_fraction(100, 100)
        0.4
    """
    premium = ((data + ai) / 2 - NEUTRAL_MATURITY) / NEUTRAL_MATURITY
    return clamp(premium * UPLIFT_SENSITIVITY * multiplier, MIN_UPLIFT, MAX_UPLIFT)


class ValuationAdjustmentCalculator:
    """Potential valuation from data/AI maturity."""

    def calculate(
        self,
        current_valuation: float,
        data_maturity: float,
        ai_maturity: float,
        benchmark: Optional[IndustryBenchmark] = None,
    ) -> ValuationAdjustment:
        current = max(0.0, as_number(current_valuation, 0.0))
        data = clamp_score(data_maturity)
        ai = clamp_score(ai_maturity)
        multiplier = benchmark.valuation_multiplier if benchmark is not None else 1.0

        uplift = uplift_fraction(data, ai, multiplier)
        potential = current * (1 + uplift)
        upside = potential - current
        upside_pct = upside / current * 100 if current > 0 else 0.0

        logger.debug(
            "Valuation adjusted",
            extra={
                "current_valuation": current,
                "uplift": round(uplift, 4),
                "benchmark_id": benchmark.id if benchmark is not None else "default",
            },
        )

        return ValuationAdjustment(
            current_valuation=to_decimal(current),
            potential_valuation=to_decimal(potential),
            valuation_upside=to_decimal(upside),
            valuation_upside_pct=to_decimal(upside_pct),
            data_maturity_index=to_decimal(data),
            ai_maturity_score=to_decimal(ai),
        )

    def sensitivity_grid(
        self,
        current_valuation: float,
        data_steps: Optional[Sequence[float]] = None,
        ai_steps: Optional[Sequence[float]] = None,
        benchmark: Optional[IndustryBenchmark] = None,
    ) -> List[SensitivityPoint]:
        """Potential valuation for every (data, ai) step pair, data-major order."""
        points = []
        for data in data_steps or DEFAULT_STEPS:
            for ai in ai_steps or DEFAULT_STEPS:
                result = self.calculate(current_valuation, data, ai, benchmark)
                points.append(
                    SensitivityPoint(
                        data_maturity=result.data_maturity_index,
                        ai_maturity=result.ai_maturity_score,
                        potential_valuation=result.potential_valuation,
                        valuation_upside=result.valuation_upside,
                        valuation_upside_pct=result.valuation_upside_pct,
                    )
                )
        logger.info("Valuation sensitivity grid computed", extra={"points": len(points)})
        return points
