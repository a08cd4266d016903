"""
Numeric Utilities
maturity_engine/scoring/utils.py

Clamping, half-up rounding to Decimal, weighted means and order statistics
shared by every calculator.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Optional, Sequence


def to_decimal(value: float, places: int = 2) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def clamp(value: float, min_val: float = 0.0, max_val: float = 100.0) -> float:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def as_number(value: Any, default: Optional[float] = None) -> Optional[float]:
    """
    Coerce a raw answer to float.

    Booleans, numeric strings and numbers are accepted. Anything else
    (including NaN) yields ``default``.
    """
    if value is None or isinstance(value, (list, dict, tuple, set)):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def clamp_score(value: Any, default: float = 0.0) -> float:
    """Coerce to float and clamp to [0, 100]."""
    return clamp(as_number(value, default))


def weighted_mean(values: Sequence[float], weights: Sequence[float]) -> float:
    """
    Calculate weighted mean.

    Formula: Σ(value_i × weight_i) / Σ(weight_i)
    Returns 0.0 if all weights are zero.
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")

    total_weight = sum(weights)
    if total_weight == 0:
        return 0.0

    return sum(v * w for v, w in zip(values, weights)) / total_weight


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def population_std_dev(values: Sequence[float]) -> float:
    """
    Population standard deviation (divide by n).

    Formula: sqrt(Σ(x_i - mean)² / n)
    """
    if not values:
        return 0.0
    mu = mean(values)
    return math.sqrt(sum((v - mu) ** 2 for v in values) / len(values))


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Percentile with linear interpolation between order statistics (R-7).

    index = p × (n − 1); the result interpolates between floor(index) and
    ceil(index). ``sorted_values`` must already be ascending.
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    if n == 1:
        return float(sorted_values[0])
    index = clamp(p, 0.0, 1.0) * (n - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    if lower == upper:
        return float(sorted_values[lower])
    fraction = index - lower
    return sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * fraction


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    return sum(values, Decimal("0"))


def format_money_label(value: float, symbol: str = "£") -> str:
    """Format an impact value as ``+£1.2M`` or ``+£350K``."""
    if value >= 1_000_000:
        return f"+{symbol}{value / 1_000_000:.1f}M"
    return f"+{symbol}{value / 1_000:.0f}K"



def format_currency(value: float, symbol: str = "£") -> str:
    """
    Compact currency for dashboards.

    Examples:
        >>> format_currency(2_500_000)
        '£2.50M'
        >>> format_currency(-1_200)
        '-£1.20K'
    """
    sign = "-" if value < 0 else ""
    amount = abs(value)
    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if amount >= threshold:
            return f"{sign}{symbol}{amount / threshold:.2f}{suffix}"
    return f"{sign}{symbol}{to_decimal(amount, 0)}"
