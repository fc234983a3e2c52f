"""
scoring/research_calculator.py

Calculates the Research & Professional Practice (RP) category from
publication, citation, patent and funding counts. Productivity ratios are
taken against the faculty baseline computed by TLRCalculator, passed in
explicitly.

Formula:
    RP = PU + QP + IPR + FPPP                                       (max 100)

    PU   = max(0, 35 × f(P / B, 1) − 5 × f(P_ret, 10))              (max 35)
    QP   = max(0, 20 × f(CC / B, 100) + 20 × f(TOP25 / P, 0.25)
                  − 5 × f(CC_ret, 100))                             (max 40)
    IPR  = 10 × f(PG, 10) + 5 × f(PP, 20)                           (max 15)
    FPPP = 7.5 × f(RF, 5 lakh) + 2.5 × f(CF, 1 lakh)                (max 10)

Where:
    - f(x, ref) = min(1, x / ref)  (saturating normalization)
    - B = baseline faculty count
"""

from dataclasses import dataclass
from decimal import Decimal

import structlog

from nirf_portal.models.enumerations import Category
from nirf_portal.models.metrics import ResearchMetrics
from nirf_portal.scoring import constants as c
from nirf_portal.scoring.results import CategoryResult, SubScore
from nirf_portal.scoring.utils import (
    Number,
    ZERO,
    clamp,
    finite_or_zero,
    normalize,
    quantize,
    safe_divide,
    to_decimal,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PublicationsBreakdown:
    publications_per_faculty: Decimal   # P / B, quantized to 0.0001
    f_publications: Decimal             # [0, 1], quantized to 0.0001
    retraction_penalty: Decimal         # points deducted, quantized to 0.01


@dataclass(frozen=True)
class QualityBreakdown:
    citations_per_faculty: Decimal  # CC / B, quantized to 0.0001
    f_citations: Decimal            # [0, 1], quantized to 0.0001
    top25_share: Decimal            # TOP25 / P, quantized to 0.0001
    f_top25: Decimal                # [0, 1], quantized to 0.0001
    retraction_penalty: Decimal     # points deducted, quantized to 0.01


@dataclass(frozen=True)
class IPRBreakdown:
    f_granted: Decimal      # [0, 1], quantized to 0.0001
    f_published: Decimal    # [0, 1], quantized to 0.0001


@dataclass(frozen=True)
class FootprintBreakdown:
    f_research_funding: Decimal  # [0, 1], quantized to 0.0001
    f_consultancy: Decimal       # [0, 1], quantized to 0.0001


@dataclass(frozen=True)
class ResearchResult:
    """Output of ResearchCalculator.calculate()."""
    category: CategoryResult
    raw_total: Decimal        # full precision, fed to the final aggregator
    baseline_used: Decimal


class ResearchCalculator:
    """Calculate the four research sub-scores against a faculty baseline."""

    def calculate(self, metrics: ResearchMetrics, baseline: Number) -> ResearchResult:
        """
        Calculate the research category.

        Args:
            metrics: Raw research inputs.
            baseline: Faculty baseline from TLRCalculator.calculate_baseline().
                      A zero or non-finite baseline zeroes every per-faculty ratio.

        Returns:
            ResearchResult with the rounded CategoryResult and full-precision total.

        Examples:
            >>> metrics = ResearchMetrics(patents_granted=10, patents_published=20)
            >>> ResearchCalculator().calculate(metrics, 0).category["ipr"].value
            Decimal('15.00')
        """
        baseline_d = finite_or_zero(baseline)

        pu, pu_breakdown = self._publications(metrics, baseline_d)
        qp, qp_breakdown = self._quality(metrics, baseline_d)
        ipr, ipr_breakdown = self._ipr(metrics)
        fppp, fppp_breakdown = self._footprint(metrics)

        raw_total = pu + qp + ipr + fppp

        result = CategoryResult(
            category=Category.RESEARCH,
            sub_scores={
                "pu": SubScore("pu", quantize(pu), c.PU_MAX, pu_breakdown),
                "qp": SubScore("qp", quantize(qp), c.QP_MAX, qp_breakdown),
                "ipr": SubScore("ipr", quantize(ipr), c.IPR_MAX, ipr_breakdown),
                "fppp": SubScore("fppp", quantize(fppp), c.FPPP_MAX, fppp_breakdown),
            },
            total=quantize(raw_total),
        )

        logger.info(
            "research_calculated",
            baseline=float(quantize(baseline_d, 4)),
            pu=float(result["pu"].value),
            qp=float(result["qp"].value),
            ipr=float(result["ipr"].value),
            fppp=float(result["fppp"].value),
            total=float(result.total),
        )

        return ResearchResult(category=result, raw_total=raw_total, baseline_used=baseline_d)

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def _publications(self, metrics: ResearchMetrics, baseline: Decimal):
        per_faculty = safe_divide(to_decimal(metrics.total_weighted_publications), baseline)
        f_publications = normalize(per_faculty, c.PUBLICATIONS_PER_FACULTY_REFERENCE)

        penalty = c.PU_RETRACTION_PENALTY * normalize(
            to_decimal(metrics.retracted_publications), c.RETRACTED_PUBLICATIONS_REFERENCE
        )

        score = clamp(c.PU_MAX * f_publications - penalty, ZERO, c.PU_MAX)

        return score, PublicationsBreakdown(
            publications_per_faculty=quantize(per_faculty, 4),
            f_publications=quantize(f_publications, 4),
            retraction_penalty=quantize(penalty, 2),
        )

    def _quality(self, metrics: ResearchMetrics, baseline: Decimal):
        citations_per_faculty = safe_divide(to_decimal(metrics.total_citation_count), baseline)
        f_citations = normalize(citations_per_faculty, c.CITATIONS_PER_FACULTY_REFERENCE)

        top25_share = safe_divide(
            to_decimal(metrics.top25_percentile_publications),
            to_decimal(metrics.total_weighted_publications),
        )
        f_top25 = normalize(top25_share, c.TOP25_SHARE_REFERENCE)

        penalty = c.QP_RETRACTION_PENALTY * normalize(
            to_decimal(metrics.retracted_citations), c.RETRACTED_CITATIONS_REFERENCE
        )

        raw = c.QP_CITATION_WEIGHT * f_citations + c.QP_TOP25_WEIGHT * f_top25 - penalty
        score = clamp(raw, ZERO, c.QP_MAX)

        return score, QualityBreakdown(
            citations_per_faculty=quantize(citations_per_faculty, 4),
            f_citations=quantize(f_citations, 4),
            top25_share=quantize(top25_share, 4),
            f_top25=quantize(f_top25, 4),
            retraction_penalty=quantize(penalty, 2),
        )

    def _ipr(self, metrics: ResearchMetrics):
        f_granted = normalize(to_decimal(metrics.patents_granted), c.PATENTS_GRANTED_REFERENCE)
        f_published = normalize(to_decimal(metrics.patents_published), c.PATENTS_PUBLISHED_REFERENCE)

        raw = c.IPR_GRANTED_WEIGHT * f_granted + c.IPR_PUBLISHED_WEIGHT * f_published
        score = clamp(raw, ZERO, c.IPR_MAX)

        return score, IPRBreakdown(
            f_granted=quantize(f_granted, 4),
            f_published=quantize(f_published, 4),
        )

    def _footprint(self, metrics: ResearchMetrics):
        f_research = normalize(
            to_decimal(metrics.average_research_funding_per_faculty),
            c.RESEARCH_FUNDING_PER_FACULTY_REFERENCE,
        )
        f_consultancy = normalize(
            to_decimal(metrics.average_consultancy_per_faculty),
            c.CONSULTANCY_PER_FACULTY_REFERENCE,
        )

        raw = c.FPPP_RESEARCH_WEIGHT * f_research + c.FPPP_CONSULTANCY_WEIGHT * f_consultancy
        score = clamp(raw, ZERO, c.FPPP_MAX)

        return score, FootprintBreakdown(
            f_research_funding=quantize(f_research, 4),
            f_consultancy=quantize(f_consultancy, 4),
        )
