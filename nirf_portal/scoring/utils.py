"""
Decimal Utilities
nirf_portal/scoring/utils.py

Precision-safe decimal math shared by every calculator. The recurring
pattern is ratio -> normalize() -> point weight, optionally minus a
normalized penalty, then clamp() to the sub-score range.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Union

Number = Union[int, float, Decimal]

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal exactly as written (no binary float noise)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def finite_or_zero(value: Number) -> Decimal:
    """to_decimal(), with NaN and infinities read as 0."""
    value = to_decimal(value)
    return value if value.is_finite() else ZERO


def safe_divide(numerator: Number, denominator: Number) -> Decimal:
    """numerator / denominator, or 0 when the denominator is 0."""
    denominator = to_decimal(denominator)
    if denominator == 0:
        return ZERO
    return to_decimal(numerator) / denominator


def normalize(value: Number, reference: Number) -> Decimal:
    """
    Saturating normalization.

    Formula: min(1, value / reference)
    Returns Decimal("0") for a zero reference. No lower bound is applied;
    callers clamp the weighted result instead.
    """
    return min(ONE, safe_divide(value, reference))


def clamp(
    value: Decimal,
    min_val: Decimal = ZERO,
    max_val: Decimal = HUNDRED,
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def quantize(value: Number, places: int = 2) -> Decimal:
    """
    Round half-up to a fixed number of decimal places for output.

    The context precision is widened for very large magnitudes so that
    quantize never raises InvalidOperation on an oversized ratio.
    """
    value = to_decimal(value)
    exponent = Decimal(10) ** -places
    with localcontext() as ctx:
        ctx.prec = max(28, value.adjusted() + places + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def weighted_sum(values: Iterable[Decimal], weights: Iterable[Decimal]) -> Decimal:
    """
    Σ(value_i × weight_i), without dividing by the weight total.

    Raises ValueError when the two sequences differ in length.
    """
    values = list(values)
    weights = list(weights)
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")
    return sum((v * w for v, w in zip(values, weights)), ZERO)
