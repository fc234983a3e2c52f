"""
scoring/final_calculator.py

Computes the final ranking score from the five category totals.

Formula:
    Final = 0.30 × TLR + 0.30 × RP + 0.20 × GO + 0.10 × OI + 0.10 × PR

The weights sum to exactly 1.0. Totals are trusted to already lie in
[0, 100]; nothing is re-normalized. Rounding to 0.01 happens once, after
the weighted sum.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Mapping, Union

from nirf_portal.core.exceptions import UnknownCategoryError
from nirf_portal.models.enumerations import Category
from nirf_portal.scoring.constants import CATEGORY_WEIGHTS
from nirf_portal.scoring.utils import Number, ZERO, finite_or_zero, quantize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalScoreResult:
    """Output of FinalScoreCalculator.calculate()."""
    final_score: Decimal                   # quantized to 0.01
    contributions: Dict[Category, Decimal]  # weight × total, quantized to 0.0001
    weights: Dict[Category, Decimal]


def resolve_category(key: Union[Category, str]) -> Category:
    """Category for an enum member or its string key."""
    try:
        return Category(key)
    except ValueError:
        raise UnknownCategoryError(str(key)) from None


class FinalScoreCalculator:
    """Weighted aggregation of category totals."""

    def calculate(self, totals: Mapping[Union[Category, str], Number]) -> FinalScoreResult:
        """
        Calculate the final score.

        Args:
            totals: Category (or its string key) → category total in [0, 100].
                    Missing and non-finite totals count as 0.

        Returns:
            FinalScoreResult with final_score and per-category contributions.

        Raises:
            UnknownCategoryError: a key is not one of the five categories.

        Examples:
            >>> calc = FinalScoreCalculator()
            >>> calc.calculate({"tlr": 80, "research": 70, "graduation": 60,
            ...                 "outreach": 50, "perception": 40}).final_score
            Decimal('66.00')
        """
        values: Dict[Category, Decimal] = {category: ZERO for category in Category}
        for key, total in totals.items():
            values[resolve_category(key)] = finite_or_zero(total)

        contributions = {
            category: CATEGORY_WEIGHTS[category] * values[category]
            for category in Category
        }
        final_score = quantize(sum(contributions.values(), ZERO))

        logger.info(
            "final_score_calculated",
            extra={
                "totals": {k.value: float(v) for k, v in values.items()},
                "final_score": float(final_score),
            },
        )

        return FinalScoreResult(
            final_score=final_score,
            contributions={k: quantize(v, 4) for k, v in contributions.items()},
            weights=dict(CATEGORY_WEIGHTS),
        )
