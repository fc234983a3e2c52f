"""
scoring/overrides.py

Reviewer edits applied to a computed FinalResult before it is persisted.

An administrator may overwrite individual sub-scores, or replace a detailed
category's sub-scores wholesale. In both cases the category total is
recomputed as the sum of the sub-scores present (missing ones count as 0)
and the final score is re-aggregated, so the total = Σ sub-scores invariant
survives manual edits. Inputs are never mutated.
"""

import logging
import math
from dataclasses import replace
from decimal import Decimal
from typing import Any, Dict, Mapping, Union

from nirf_portal.core.exceptions import CategoryOverrideError, UnknownSubScoreError
from nirf_portal.models.enumerations import DETAILED_CATEGORIES, Category
from nirf_portal.scoring.constants import CATEGORY_MAX, SUB_SCORE_MAXIMA
from nirf_portal.scoring.final_calculator import FinalScoreCalculator, resolve_category
from nirf_portal.scoring.results import CategoryResult, FinalResult, SubScore
from nirf_portal.scoring.utils import ZERO, clamp, quantize, to_decimal

logger = logging.getLogger(__name__)

CategoryKey = Union[Category, str]


def _score_value(value: Any) -> Decimal:
    """Numeric override value as Decimal; anything else counts as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return ZERO
    if isinstance(value, float) and not math.isfinite(value):
        return ZERO
    if isinstance(value, Decimal) and not value.is_finite():
        return ZERO
    return to_decimal(value)


def recompute_total(sub_scores: Mapping[str, Any]) -> Decimal:
    """
    Sum of whichever sub-scores are present.

    None, non-numeric and missing entries count as 0; a "total" key is
    ignored so an edited form can be passed back as-is.
    """
    total = sum(
        (_score_value(value) for name, value in sub_scores.items() if name != "total"),
        ZERO,
    )
    return quantize(total)


def _detailed(category: CategoryKey) -> Category:
    category = resolve_category(category)
    if category not in DETAILED_CATEGORIES:
        raise CategoryOverrideError(
            category.value, "has no sub-scores; use override_category_score()"
        )
    return category


def _check_names(category: Category, names) -> None:
    maxima = SUB_SCORE_MAXIMA[category]
    for name in names:
        if name not in maxima:
            raise UnknownSubScoreError(category.value, name)


def _overridden(existing: SubScore, value: Any) -> SubScore:
    capped = clamp(_score_value(value), ZERO, existing.max_score)
    return replace(existing, value=quantize(capped), overridden=True)


def _rebuild(final: FinalResult, category: Category, new_value: Any) -> FinalResult:
    updated = replace(final, **{category.value: new_value})
    totals = updated.category_totals()
    final_score = FinalScoreCalculator().calculate(totals).final_score
    logger.info(
        "override_applied",
        extra={
            "category": category.value,
            "category_total": float(totals[category]),
            "previous_final_score": float(final.final_score),
            "final_score": float(final_score),
        },
    )
    return replace(updated, final_score=final_score)


def _with_sub_scores(result: CategoryResult, sub_scores: Dict[str, SubScore]) -> CategoryResult:
    total = recompute_total({name: s.value for name, s in sub_scores.items()})
    return result.replace_sub_scores(sub_scores, total)


def override_sub_scores(
    final: FinalResult,
    category: CategoryKey,
    updates: Mapping[str, Any],
) -> FinalResult:
    """
    Overwrite selected sub-scores of a detailed category.

    Each new value is clamped to [0, max] of its sub-score and flagged as
    overridden; sub-scores not named keep their computed value.

    Raises:
        UnknownCategoryError: category is not a ranking category.
        CategoryOverrideError: category has no sub-scores.
        UnknownSubScoreError: an update names a sub-score the category lacks.
    """
    category = _detailed(category)
    _check_names(category, updates)

    current: CategoryResult = getattr(final, category.value)
    sub_scores = {
        name: _overridden(sub, updates[name]) if name in updates else sub
        for name, sub in current.sub_scores.items()
    }
    return _rebuild(final, category, _with_sub_scores(current, sub_scores))


def override_category_total(
    final: FinalResult,
    category: CategoryKey,
    sub_scores: Mapping[str, Any],
) -> FinalResult:
    """
    Replace a detailed category's total from a full set of edited sub-scores.

    The new total is the sum of the supplied sub-scores; any sub-score left
    out is set to 0. A "total" entry in the mapping is ignored.
    """
    category = _detailed(category)
    edited = {name: value for name, value in sub_scores.items() if name != "total"}
    _check_names(category, edited)

    current: CategoryResult = getattr(final, category.value)
    new_subs = {
        name: _overridden(sub, edited.get(name, 0))
        for name, sub in current.sub_scores.items()
    }
    return _rebuild(final, category, _with_sub_scores(current, new_subs))


def override_category_score(
    final: FinalResult,
    category: CategoryKey,
    value: Any,
) -> FinalResult:
    """Overwrite the score of a simple category, clamped to [0, 100]."""
    category = resolve_category(category)
    if category in DETAILED_CATEGORIES:
        raise CategoryOverrideError(
            category.value, "total is derived from sub-scores; use override_category_total()"
        )
    score = quantize(clamp(_score_value(value), ZERO, CATEGORY_MAX))
    return _rebuild(final, category, score)
