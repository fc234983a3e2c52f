# tests/test_tlr_calculator.py

"""
TLR Calculator Tests - SS, FSR, FQE, FRU and the faculty baseline
"""

from decimal import Decimal

import pytest

from nirf_portal.models.enumerations import Category
from nirf_portal.models.metrics import TLRMetrics
from nirf_portal.scoring.tlr_calculator import TLRCalculator


@pytest.fixture
def calculator():
    return TLRCalculator()


@pytest.fixture
def sample_tlr(sample_tlr_data):
    return TLRMetrics(**sample_tlr_data)


def _fsr(calculator, faculty, students, doctoral=0):
    metrics = TLRMetrics(
        total_sanctioned_intake=students,
        doctoral_students=doctoral,
        full_time_regular_faculty=faculty,
    )
    return calculator.calculate(metrics).category["fsr"]


class TestSampleInstitution:

    def test_sub_scores(self, calculator, sample_tlr):
        result = calculator.calculate(sample_tlr).category
        assert result.category == Category.TLR
        assert result["ss"].value == Decimal("17.50")
        assert result["fsr"].value == Decimal("27.00")
        assert result["fqe"].value == Decimal("16.89")
        assert result["fru"].value == Decimal("20.25")

    def test_total_from_full_precision(self, calculator, sample_tlr):
        result = calculator.calculate(sample_tlr)
        assert result.category.total == Decimal("81.64")
        # 17.5 + 27 + (10 × 75/95 + 9) + 20.25
        assert abs(result.raw_total - Decimal("81.6447368421")) < Decimal("0.0000001")

    def test_baseline(self, calculator, sample_tlr):
        # max(1050 / 15, 63) = 70
        assert calculator.calculate(sample_tlr).baseline == Decimal("70")

    def test_sub_score_maxima(self, calculator, sample_tlr):
        subs = calculator.calculate(sample_tlr).category.sub_scores
        assert {k: s.max_score for k, s in subs.items()} == {
            "ss": Decimal("20"),
            "fsr": Decimal("30"),
            "fqe": Decimal("20"),
            "fru": Decimal("30"),
        }

    def test_nothing_overridden(self, calculator, sample_tlr):
        subs = calculator.calculate(sample_tlr).category.sub_scores
        assert not any(s.overridden for s in subs.values())


class TestStudentStrength:

    def test_enrollment_above_intake_capped(self, calculator):
        metrics = TLRMetrics(total_sanctioned_intake=100, total_enrolled_students=150)
        ss = calculator.calculate(metrics).category["ss"]
        assert ss.breakdown.enrollment_ratio == Decimal("1.5000")
        assert ss.breakdown.f_nt_ne == Decimal("1.000")
        assert ss.value == Decimal("15.00")

    def test_doctoral_saturates(self, calculator):
        metrics = TLRMetrics(
            total_sanctioned_intake=100,
            total_enrolled_students=100,
            doctoral_students=500,
        )
        assert calculator.calculate(metrics).category["ss"].value == Decimal("20.00")

    def test_zero_intake(self, calculator):
        metrics = TLRMetrics(total_enrolled_students=200)
        ss = calculator.calculate(metrics).category["ss"]
        assert ss.breakdown.enrollment_ratio == Decimal("0")
        assert ss.value == Decimal("0.00")


class TestFacultyStudentRatio:

    def test_one_to_fifteen_is_full_marks(self, calculator):
        fsr = _fsr(calculator, faculty=10, students=140, doctoral=10)
        assert fsr.value == Decimal("30.00")
        assert fsr.breakdown.is_valid_ratio is True

    def test_better_than_one_to_fifteen_capped(self, calculator):
        assert _fsr(calculator, faculty=50, students=150).value == Decimal("30.00")

    @pytest.mark.parametrize("faculty,expected", [
        (3, "9.00"),
        (4, "12.00"),
        (5, "15.00"),
        (6, "18.00"),
        (7, "21.00"),
        (8, "24.00"),
        (9, "27.00"),
        (10, "30.00"),
    ])
    def test_linear_between_thresholds(self, calculator, faculty, expected):
        assert _fsr(calculator, faculty=faculty, students=150).value == Decimal(expected)

    def test_exactly_one_to_fifty_is_valid(self, calculator):
        fsr = _fsr(calculator, faculty=3, students=150)
        assert fsr.breakdown.is_valid_ratio is True
        assert fsr.value == Decimal("9.00")

    def test_worse_than_one_to_fifty_is_zero(self, calculator):
        fsr = _fsr(calculator, faculty=2, students=150)
        assert fsr.value == Decimal("0.00")
        assert fsr.breakdown.is_valid_ratio is False
        assert fsr.breakdown.faculty_student_ratio == Decimal("0.0133")

    def test_no_faculty(self, calculator):
        fsr = _fsr(calculator, faculty=0, students=150)
        assert fsr.value == Decimal("0.00")
        assert fsr.breakdown.is_valid_ratio is False

    def test_no_students(self, calculator):
        fsr = _fsr(calculator, faculty=10, students=0)
        assert fsr.value == Decimal("0.00")
        assert fsr.breakdown.total_students == Decimal("0")


class TestFacultyQuality:

    def test_phd_at_threshold_gets_full_fq(self, calculator):
        metrics = TLRMetrics(total_faculty=100, total_faculty_required=100, faculty_with_phd=95)
        fqe = calculator.calculate(metrics).category["fqe"]
        assert fqe.breakdown.fq == Decimal("10.00")

    def test_fra_uses_larger_headcount(self, calculator):
        metrics = TLRMetrics(total_faculty=50, total_faculty_required=100, faculty_with_phd=50)
        assert calculator.calculate(metrics).category["fqe"].breakdown.fra == Decimal("50.00")

    def test_balanced_experience_full_marks(self, calculator):
        metrics = TLRMetrics(
            total_faculty=90,
            faculty_with_phd=90,
            faculty_experience_0_to_8=30,
            faculty_experience_8_to_15=30,
            faculty_experience_above_15=30,
        )
        fqe = calculator.calculate(metrics).category["fqe"]
        assert fqe.breakdown.fe == Decimal("10.00")
        assert fqe.value == Decimal("20.00")

    def test_single_band_experience(self, calculator):
        metrics = TLRMetrics(faculty_experience_above_15=10)
        fqe = calculator.calculate(metrics).category["fqe"]
        assert fqe.breakdown.f3 == Decimal("1.000")
        assert fqe.breakdown.fe == Decimal("4.00")

    def test_no_faculty_is_zero(self, calculator):
        fqe = calculator.calculate(TLRMetrics()).category["fqe"]
        assert fqe.value == Decimal("0.00")


class TestFinancialUtilization:

    def test_three_year_average(self, calculator):
        metrics = TLRMetrics(
            capital_expenditure_year1=10_000_000,
            capital_expenditure_year2=20_000_000,
            capital_expenditure_year3=30_000_000,
            students_year1=200,
            students_year2=200,
            students_year3=200,
        )
        fru = calculator.calculate(metrics).category["fru"]
        assert fru.breakdown.capital_per_student == Decimal("100000.00")
        assert fru.breakdown.f_capital == Decimal("1.0000")
        assert fru.value == Decimal("7.50")

    def test_spend_saturates(self, calculator):
        metrics = TLRMetrics(
            capital_expenditure_year1=1e12,
            operational_expenditure_year1=1e12,
            students_year1=1,
        )
        assert calculator.calculate(metrics).category["fru"].value == Decimal("30.00")

    def test_no_students_is_zero(self, calculator):
        metrics = TLRMetrics(capital_expenditure_year1=1_000_000)
        assert calculator.calculate(metrics).category["fru"].value == Decimal("0.00")


class TestBaseline:

    def test_headcount_dominates(self, calculator):
        metrics = TLRMetrics(total_sanctioned_intake=300, full_time_regular_faculty=10)
        assert calculator.calculate_baseline(metrics) == Decimal("20")

    def test_faculty_dominates(self, calculator):
        metrics = TLRMetrics(total_sanctioned_intake=300, full_time_regular_faculty=40)
        assert calculator.calculate_baseline(metrics) == Decimal("40")

    def test_zero(self, calculator):
        assert calculator.calculate_baseline(TLRMetrics()) == Decimal("0")


class TestDegenerateInputs:

    def test_all_zero(self, calculator):
        result = calculator.calculate(TLRMetrics())
        assert result.category.total == Decimal("0.00")
        assert all(s.value == Decimal("0.00") for s in result.category.sub_scores.values())

    def test_negative_inputs_floor_at_zero(self, calculator):
        metrics = TLRMetrics(
            total_sanctioned_intake=-100,
            total_enrolled_students=50,
            doctoral_students=-10,
            full_time_regular_faculty=5,
            faculty_with_phd=-3,
            total_faculty=10,
            capital_expenditure_year1=-1_000_000,
            students_year1=10,
        )
        result = calculator.calculate(metrics).category
        for sub in result.sub_scores.values():
            assert Decimal("0") <= sub.value <= sub.max_score
