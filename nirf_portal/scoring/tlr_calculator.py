"""
scoring/tlr_calculator.py

Calculates the Teaching, Learning & Resources (TLR) category from raw
faculty, student and expenditure counts.

Formula:
    TLR = SS + FSR + FQE + FRU                              (max 100)

    SS  = 15 × f(NT, NE) + 5 × f(NP)                        (max 20)
          f(NT, NE) = min(min(NE / NT, 1.2), 1)
          f(NP)     = min(1, NP / 100)

    FSR = min(30, 30 × 15 × F / N),  N = NT + NP            (max 30)
          FSR = 0 when N = 0, F = 0 or F / N < 1/50

    FQE = min(20, FQ + FE)                                  (max 20)
          FRA = 100 × PhD / max(required, actual)
          FQ  = 10 if FRA ≥ 95 else 10 × FRA / 95
          FE  = 3 min(3F1, 1) + 3 min(3F2, 1) + 4 min(3F3, 1)

    FRU = 7.5 × f(BC) + 22.5 × f(BO)                        (max 30)
          BC, BO = 3-year capital / operational spend per student

Also derives the cross-category baseline used by the research calculator:
    baseline = max(N / 15, F)
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

import structlog

from nirf_portal.models.enumerations import Category
from nirf_portal.models.metrics import TLRMetrics
from nirf_portal.scoring import constants as c
from nirf_portal.scoring.results import CategoryResult, SubScore
from nirf_portal.scoring.utils import (
    ONE,
    ZERO,
    clamp,
    normalize,
    quantize,
    safe_divide,
    to_decimal,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StudentStrengthBreakdown:
    enrollment_ratio: Decimal   # NE / NT, quantized to 0.0001
    f_nt_ne: Decimal            # [0, 1], quantized to 0.001
    f_np: Decimal               # [0, 1], quantized to 0.001


@dataclass(frozen=True)
class FacultyStudentRatioBreakdown:
    faculty_student_ratio: Decimal  # F / N, quantized to 0.0001
    total_students: Decimal         # N = NT + NP
    is_valid_ratio: bool            # False when FSR was forced to zero


@dataclass(frozen=True)
class FacultyQualityBreakdown:
    fra: Decimal    # PhD percentage, quantized to 0.01
    fq: Decimal     # qualification term, quantized to 0.01
    fe: Decimal     # experience term, quantized to 0.01
    f1: Decimal     # share with 0-8 years, quantized to 0.001
    f2: Decimal     # share with 8-15 years, quantized to 0.001
    f3: Decimal     # share with 15+ years, quantized to 0.001


@dataclass(frozen=True)
class FinancialUtilizationBreakdown:
    capital_per_student: Decimal      # quantized to 0.01
    operational_per_student: Decimal  # quantized to 0.01
    f_capital: Decimal                # [0, 1], quantized to 0.0001
    f_operational: Decimal            # [0, 1], quantized to 0.0001


@dataclass(frozen=True)
class TLRResult:
    """Output of TLRCalculator.calculate()."""
    category: CategoryResult
    baseline: Decimal     # full precision, fed to ResearchCalculator
    raw_total: Decimal    # full precision, fed to the final aggregator


class TLRCalculator:
    """Calculate the four TLR sub-scores and the faculty baseline."""

    def calculate(self, metrics: TLRMetrics) -> TLRResult:
        """
        Calculate the TLR category.

        Args:
            metrics: Raw TLR inputs. Zero or negative values are accepted and
                     flow through the same cap/clamp pipeline.

        Returns:
            TLRResult with the rounded CategoryResult, the full-precision
            total and the baseline for the research category.

        Examples:
            >>> metrics = TLRMetrics(
            ...     total_sanctioned_intake=140,
            ...     doctoral_students=10,
            ...     full_time_regular_faculty=10,
            ... )
            >>> TLRCalculator().calculate(metrics).category["fsr"].value
            Decimal('30.00')
        """
        nt = to_decimal(metrics.total_sanctioned_intake)
        ne = to_decimal(metrics.total_enrolled_students)
        np_ = to_decimal(metrics.doctoral_students)
        faculty = to_decimal(metrics.full_time_regular_faculty)

        ss, ss_breakdown = self._student_strength(nt, ne, np_)
        fsr, fsr_breakdown = self._faculty_student_ratio(faculty, nt, np_)
        fqe, fqe_breakdown = self._faculty_quality(metrics)
        fru, fru_breakdown = self._financial_utilization(metrics)

        raw_total = ss + fsr + fqe + fru
        baseline = self.calculate_baseline(metrics)

        result = CategoryResult(
            category=Category.TLR,
            sub_scores={
                "ss": SubScore("ss", quantize(ss), c.SS_MAX, ss_breakdown),
                "fsr": SubScore("fsr", quantize(fsr), c.FSR_MAX, fsr_breakdown),
                "fqe": SubScore("fqe", quantize(fqe), c.FQE_MAX, fqe_breakdown),
                "fru": SubScore("fru", quantize(fru), c.FRU_MAX, fru_breakdown),
            },
            total=quantize(raw_total),
        )

        logger.info(
            "tlr_calculated",
            ss=float(result["ss"].value),
            fsr=float(result["fsr"].value),
            fqe=float(result["fqe"].value),
            fru=float(result["fru"].value),
            total=float(result.total),
            baseline=float(quantize(baseline, 4)),
        )

        return TLRResult(category=result, baseline=baseline, raw_total=raw_total)

    def calculate_baseline(self, metrics: TLRMetrics) -> Decimal:
        """
        Faculty denominator for research productivity ratios.

        Formula:
            baseline = max((NT + NP) / 15, F)
        """
        headcount = to_decimal(metrics.total_sanctioned_intake) + to_decimal(metrics.doctoral_students)
        required = headcount / c.BASELINE_STUDENTS_PER_FACULTY
        return max(required, to_decimal(metrics.full_time_regular_faculty))

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def _student_strength(self, nt: Decimal, ne: Decimal, np_: Decimal):
        enrollment_ratio = safe_divide(ne, nt)
        f_nt_ne = min(min(enrollment_ratio, c.ENROLLMENT_TOLERANCE), ONE)
        f_np = normalize(np_, c.DOCTORAL_STUDENTS_REFERENCE)

        raw = f_nt_ne * c.SS_ENROLLMENT_WEIGHT + f_np * c.SS_DOCTORAL_WEIGHT
        score = clamp(raw, ZERO, c.SS_MAX)

        return score, StudentStrengthBreakdown(
            enrollment_ratio=quantize(enrollment_ratio, 4),
            f_nt_ne=quantize(f_nt_ne, 3),
            f_np=quantize(f_np, 3),
        )

    def _faculty_student_ratio(self, faculty: Decimal, nt: Decimal, np_: Decimal):
        total_students = nt + np_

        if total_students == 0 or faculty == 0:
            return ZERO, FacultyStudentRatioBreakdown(
                faculty_student_ratio=ZERO,
                total_students=total_students,
                is_valid_ratio=False,
            )

        ratio = faculty / total_students
        if ratio < c.FSR_MIN_RATIO:
            return ZERO, FacultyStudentRatioBreakdown(
                faculty_student_ratio=quantize(ratio, 4),
                total_students=total_students,
                is_valid_ratio=False,
            )

        # 1:15 gives 30 × 15 × (1/15) = 30
        raw = c.FSR_MAX * c.FSR_OPTIMAL_STUDENTS_PER_FACULTY * ratio
        score = clamp(raw, ZERO, c.FSR_MAX)

        return score, FacultyStudentRatioBreakdown(
            faculty_student_ratio=quantize(ratio, 4),
            total_students=total_students,
            is_valid_ratio=True,
        )

    def _faculty_quality(self, metrics: TLRMetrics):
        higher_count = max(
            to_decimal(metrics.total_faculty_required),
            to_decimal(metrics.total_faculty),
        )
        fra = safe_divide(to_decimal(metrics.faculty_with_phd) * 100, higher_count)

        if fra >= c.PHD_FULL_MARKS_PERCENT:
            fq = c.FQ_MAX
        else:
            fq = c.FQ_MAX * fra / c.PHD_FULL_MARKS_PERCENT

        bands = [
            to_decimal(metrics.faculty_experience_0_to_8),
            to_decimal(metrics.faculty_experience_8_to_15),
            to_decimal(metrics.faculty_experience_above_15),
        ]
        fractions = self._fractions(bands)
        fe = sum(
            (
                weight * min(c.EXPERIENCE_BAND_MULTIPLIER * fraction, ONE)
                for weight, fraction in zip(c.EXPERIENCE_BAND_WEIGHTS, fractions)
            ),
            ZERO,
        )

        score = clamp(fq + fe, ZERO, c.FQE_MAX)

        f1, f2, f3 = fractions
        return score, FacultyQualityBreakdown(
            fra=quantize(fra, 2),
            fq=quantize(fq, 2),
            fe=quantize(fe, 2),
            f1=quantize(f1, 3),
            f2=quantize(f2, 3),
            f3=quantize(f3, 3),
        )

    def _financial_utilization(self, metrics: TLRMetrics):
        capital_per_student = self._per_student(metrics.capital_expenditure, metrics.students)
        operational_per_student = self._per_student(metrics.operational_expenditure, metrics.students)

        f_capital = normalize(capital_per_student, c.CAPITAL_SPEND_PER_STUDENT_REFERENCE)
        f_operational = normalize(operational_per_student, c.OPERATIONAL_SPEND_PER_STUDENT_REFERENCE)

        raw = c.FRU_CAPITAL_WEIGHT * f_capital + c.FRU_OPERATIONAL_WEIGHT * f_operational
        score = clamp(raw, ZERO, c.FRU_MAX)

        return score, FinancialUtilizationBreakdown(
            capital_per_student=quantize(capital_per_student, 2),
            operational_per_student=quantize(operational_per_student, 2),
            f_capital=quantize(f_capital, 4),
            f_operational=quantize(f_operational, 4),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _fractions(counts: Sequence[Decimal]):
        total = sum(counts, ZERO)
        return [safe_divide(count, total) for count in counts]

    @staticmethod
    def _per_student(expenditure: Sequence[float], students: Sequence[float]) -> Decimal:
        """Average spend per student over the window: Σ spend / Σ students."""
        total_spend = sum((to_decimal(v) for v in expenditure), ZERO)
        total_students = sum((to_decimal(v) for v in students), ZERO)
        return safe_divide(total_spend, total_students)
