"""
scoring/outcome_calculators.py

Graduation Outcomes, Outreach & Inclusivity and Perception.

These three categories are single-pass weighted sums of rate/percentage
inputs, bounded to [0, 100], with no sub-scores or breakdown:

    GO = 0.3 × graduation + 0.4 × employment + 0.2 × higher_studies
         + 10 × median_salary / 10,00,000
    OI = 0.25 × (diversity + women + economically_backward + socially_backward)
    PR = 0.4 × academic_peer + 0.4 × employer + 0.2 × publication_impact
"""

from decimal import Decimal
from typing import Mapping

from nirf_portal.models.metrics import (
    GraduationMetrics,
    OutreachMetrics,
    PerceptionMetrics,
    RawMetrics,
)
from nirf_portal.scoring import constants as c
from nirf_portal.scoring.utils import ZERO, clamp, safe_divide, to_decimal, weighted_sum


def _linear_score(metrics: RawMetrics, weights: Mapping[str, Decimal]) -> Decimal:
    values = [to_decimal(getattr(metrics, name)) for name in weights]
    return weighted_sum(values, weights.values())


def graduation_score(metrics: GraduationMetrics) -> Decimal:
    """Full-precision graduation outcome score in [0, 100]."""
    salary_points = c.MEDIAN_SALARY_WEIGHT * safe_divide(
        to_decimal(metrics.median_salary), c.MEDIAN_SALARY_REFERENCE
    )
    raw = _linear_score(metrics, c.GRADUATION_WEIGHTS) + salary_points
    return clamp(raw, ZERO, c.CATEGORY_MAX)


def outreach_score(metrics: OutreachMetrics) -> Decimal:
    """Full-precision outreach & inclusivity score in [0, 100]."""
    return clamp(_linear_score(metrics, c.OUTREACH_WEIGHTS), ZERO, c.CATEGORY_MAX)


def perception_score(metrics: PerceptionMetrics) -> Decimal:
    """Full-precision perception score in [0, 100]."""
    return clamp(_linear_score(metrics, c.PERCEPTION_WEIGHTS), ZERO, c.CATEGORY_MAX)
