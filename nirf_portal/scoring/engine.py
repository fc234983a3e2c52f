"""
scoring/engine.py

Full pipeline: raw institution metrics → FinalResult.

Pipeline steps:
  1. TLRCalculator      → TLR sub-scores + faculty baseline
  2. ResearchCalculator → research sub-scores (uses the baseline)
  3. Outcome scores     → graduation, outreach, perception
  4. FinalScoreCalculator on the full-precision totals

The engine holds no state between calls; one instance can score any number
of institutions, concurrently if the caller wishes.
"""

from typing import Any, Iterable, List, Mapping, Union

import structlog

from nirf_portal.models.enumerations import Category
from nirf_portal.models.metrics import InstitutionMetrics
from nirf_portal.scoring.final_calculator import FinalScoreCalculator
from nirf_portal.scoring.outcome_calculators import (
    graduation_score,
    outreach_score,
    perception_score,
)
from nirf_portal.scoring.research_calculator import ResearchCalculator
from nirf_portal.scoring.results import FinalResult
from nirf_portal.scoring.tlr_calculator import TLRCalculator
from nirf_portal.scoring.utils import quantize

logger = structlog.get_logger(__name__)

MetricsInput = Union[InstitutionMetrics, Mapping[str, Any]]


class ScoringEngine:
    """Score one institution snapshot end to end."""

    def __init__(self, log_breakdowns: bool = False):
        self.tlr_calculator = TLRCalculator()
        self.research_calculator = ResearchCalculator()
        self.final_calculator = FinalScoreCalculator()
        self.log_breakdowns = log_breakdowns

    def score(self, metrics: MetricsInput) -> FinalResult:
        """
        Run the full scoring pipeline.

        Args:
            metrics: InstitutionMetrics, or a mapping with the same shape
                     (validated; missing or non-numeric values read as 0).

        Returns:
            FinalResult with both detailed categories, the three simple
            category scores, the final score and the baseline.
        """
        if not isinstance(metrics, InstitutionMetrics):
            metrics = InstitutionMetrics.model_validate(metrics)

        # 1. TLR (and the baseline the research category depends on)
        tlr = self.tlr_calculator.calculate(metrics.tlr)

        # 2. Research against the TLR baseline
        research = self.research_calculator.calculate(metrics.research, tlr.baseline)

        # 3. Simple categories
        graduation = graduation_score(metrics.graduation)
        outreach = outreach_score(metrics.outreach)
        perception = perception_score(metrics.perception)

        # 4. Weighted aggregation on full-precision totals
        final = self.final_calculator.calculate({
            Category.TLR: tlr.raw_total,
            Category.RESEARCH: research.raw_total,
            Category.GRADUATION: graduation,
            Category.OUTREACH: outreach,
            Category.PERCEPTION: perception,
        })

        result = FinalResult(
            tlr=tlr.category,
            research=research.category,
            graduation=quantize(graduation),
            outreach=quantize(outreach),
            perception=quantize(perception),
            final_score=final.final_score,
            baseline=quantize(tlr.baseline, 4),
        )

        event = {
            "tlr": float(result.tlr.total),
            "research": float(result.research.total),
            "graduation": float(result.graduation),
            "outreach": float(result.outreach),
            "perception": float(result.perception),
            "final_score": float(result.final_score),
        }
        if self.log_breakdowns:
            event["breakdown"] = result.to_dict()
        logger.info("institution_scored", **event)

        return result

    def score_many(self, records: Iterable[MetricsInput]) -> List[FinalResult]:
        """Score each snapshot independently, preserving input order."""
        return [self.score(record) for record in records]


def calculate_final_score(metrics: MetricsInput) -> FinalResult:
    """Score one institution with a default engine."""
    return ScoringEngine().score(metrics)
