# tests/test_research_calculator.py

"""
Research Calculator Tests - PU, QP, IPR, FPPP against an explicit baseline
"""

from decimal import Decimal

import pytest

from nirf_portal.models.enumerations import Category
from nirf_portal.models.metrics import ResearchMetrics
from nirf_portal.scoring.research_calculator import ResearchCalculator


@pytest.fixture
def calculator():
    return ResearchCalculator()


@pytest.fixture
def sample_research(sample_research_data):
    return ResearchMetrics(**sample_research_data)


class TestSampleInstitution:

    def test_sub_scores(self, calculator, sample_research):
        result = calculator.calculate(sample_research, 70).category
        assert result.category == Category.RESEARCH
        assert result["pu"].value == Decimal("34.00")
        assert result["qp"].value == Decimal("25.00")
        assert result["ipr"].value == Decimal("7.50")
        assert result["fppp"].value == Decimal("5.00")
        assert result.total == Decimal("71.50")

    def test_breakdowns(self, calculator, sample_research):
        result = calculator.calculate(sample_research, 70).category
        pu = result["pu"].breakdown
        assert pu.publications_per_faculty == Decimal("2.0000")
        assert pu.f_publications == Decimal("1.0000")
        assert pu.retraction_penalty == Decimal("1.00")

        qp = result["qp"].breakdown
        assert qp.citations_per_faculty == Decimal("50.0000")
        assert qp.top25_share == Decimal("0.2000")
        assert qp.f_top25 == Decimal("0.8000")

    def test_baseline_recorded(self, calculator, sample_research):
        assert calculator.calculate(sample_research, 70).baseline_used == Decimal("70")


class TestBaselineDependence:

    def test_smaller_baseline_scores_higher(self, calculator):
        metrics = ResearchMetrics(total_weighted_publications=50, total_citation_count=2000)
        small = calculator.calculate(metrics, 50).category
        large = calculator.calculate(metrics, 100).category
        assert small["pu"].value > large["pu"].value
        assert small["qp"].value > large["qp"].value

    def test_zero_baseline_zeroes_ratios(self, calculator):
        metrics = ResearchMetrics(
            total_weighted_publications=100,
            total_citation_count=5000,
            top25_percentile_publications=25,
        )
        result = calculator.calculate(metrics, 0).category
        assert result["pu"].value == Decimal("0.00")
        assert result["qp"].breakdown.f_citations == Decimal("0.0000")
        # top-25 share is relative to P, not the baseline
        assert result["qp"].value == Decimal("20.00")

    @pytest.mark.parametrize("baseline", [float("nan"), float("inf"), Decimal("-Infinity")])
    def test_non_finite_baseline_reads_as_zero(self, calculator, sample_research, baseline):
        result = calculator.calculate(sample_research, baseline)
        assert result.baseline_used == Decimal("0")
        assert result.category["pu"].breakdown.publications_per_faculty == Decimal("0.0000")
        assert result.category["ipr"].value == Decimal("7.50")

    def test_baseline_independent_sub_scores(self, calculator, sample_research):
        a = calculator.calculate(sample_research, 10).category
        b = calculator.calculate(sample_research, 1000).category
        assert a["ipr"].value == b["ipr"].value
        assert a["fppp"].value == b["fppp"].value


class TestPenalties:

    def test_retraction_penalty_floors_at_zero(self, calculator):
        metrics = ResearchMetrics(
            total_weighted_publications=1,
            retracted_publications=10_000,
            retracted_citations=10_000,
        )
        result = calculator.calculate(metrics, 100).category
        assert result["pu"].value == Decimal("0.00")
        assert result["qp"].value == Decimal("0.00")

    def test_penalty_saturates(self, calculator):
        few = ResearchMetrics(total_weighted_publications=100, retracted_publications=10)
        many = ResearchMetrics(total_weighted_publications=100, retracted_publications=10_000)
        assert (
            calculator.calculate(few, 100).category["pu"].value
            == calculator.calculate(many, 100).category["pu"].value
            == Decimal("30.00")
        )


class TestCaps:

    def test_saturated_inputs_hit_maxima(self, calculator):
        metrics = ResearchMetrics(
            total_weighted_publications=1_000,
            total_citation_count=1_000_000,
            top25_percentile_publications=1_000,
            patents_granted=500,
            patents_published=500,
            average_research_funding_per_faculty=10_000_000,
            average_consultancy_per_faculty=10_000_000,
        )
        result = calculator.calculate(metrics, 10).category
        assert result["pu"].value == Decimal("35.00")
        assert result["qp"].value == Decimal("40.00")
        assert result["ipr"].value == Decimal("15.00")
        assert result["fppp"].value == Decimal("10.00")
        assert result.total == Decimal("100.00")

    def test_patents(self, calculator):
        metrics = ResearchMetrics(patents_granted=10, patents_published=20)
        assert calculator.calculate(metrics, 0).category["ipr"].value == Decimal("15.00")

    def test_all_zero(self, calculator):
        result = calculator.calculate(ResearchMetrics(), 0)
        assert result.category.total == Decimal("0.00")
        assert result.raw_total == Decimal("0")
