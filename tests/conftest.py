# tests/conftest.py

"""
Pytest Fixtures - Shared test configurations and data for the scoring engine and API

SAMPLE INSTITUTION (hand-computed reference values):
- TLR:        SS 17.50, FSR 27.00, FQE 16.89, FRU 20.25  -> total 81.64, baseline 70
- Research:   PU 34.00, QP 25.00, IPR 7.50, FPPP 5.00     -> total 71.50
- Graduation 67.00, Outreach 35.00, Perception 62.00
- Final:      0.3*81.6447 + 0.3*71.5 + 0.2*67 + 0.1*35 + 0.1*62 = 69.04
"""

import pytest
from fastapi.testclient import TestClient

from nirf_portal.main import app
from nirf_portal.models.metrics import InstitutionMetrics
from nirf_portal.scoring.engine import ScoringEngine


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# RAW METRICS FIXTURES
# =============================================================================

@pytest.fixture
def sample_tlr_data():
    """TLR inputs: N = 1050, F = 63 (1:16.7), 3-year spend 30k / 80k per student."""
    return {
        "total_sanctioned_intake": 1000,
        "total_enrolled_students": 1100,
        "doctoral_students": 50,
        "full_time_regular_faculty": 63,
        "total_faculty": 80,
        "total_faculty_required": 75,
        "faculty_with_phd": 60,
        "faculty_experience_0_to_8": 30,
        "faculty_experience_8_to_15": 30,
        "faculty_experience_above_15": 20,
        "capital_expenditure_year1": 30_000_000,
        "capital_expenditure_year2": 30_000_000,
        "capital_expenditure_year3": 30_000_000,
        "operational_expenditure_year1": 80_000_000,
        "operational_expenditure_year2": 80_000_000,
        "operational_expenditure_year3": 80_000_000,
        "students_year1": 1000,
        "students_year2": 1000,
        "students_year3": 1000,
    }


@pytest.fixture
def sample_research_data():
    """Research inputs scored against a baseline of 70 faculty."""
    return {
        "total_weighted_publications": 140,
        "retracted_publications": 2,
        "total_citation_count": 3500,
        "top25_percentile_publications": 28,
        "retracted_citations": 20,
        "patents_granted": 5,
        "patents_published": 10,
        "average_research_funding_per_faculty": 250_000,
        "average_consultancy_per_faculty": 50_000,
    }


@pytest.fixture
def sample_metrics_data(sample_tlr_data, sample_research_data):
    """Complete raw-metrics payload for one institution."""
    return {
        "tlr": sample_tlr_data,
        "research": sample_research_data,
        "graduation": {
            "graduation_rate": 90,
            "employment_rate": 80,
            "higher_studies_rate": 10,
            "median_salary": 600_000,
        },
        "outreach": {
            "diversity_index": 40,
            "women_enrollment": 50,
            "economically_backward": 20,
            "socially_backward": 30,
        },
        "perception": {
            "academic_peer_score": 70,
            "employer_score": 60,
            "publication_impact": 50,
        },
    }


@pytest.fixture
def sample_metrics(sample_metrics_data):
    return InstitutionMetrics.model_validate(sample_metrics_data)


@pytest.fixture
def zero_metrics():
    return InstitutionMetrics()


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def engine():
    return ScoringEngine()


@pytest.fixture
def sample_result(engine, sample_metrics):
    return engine.score(sample_metrics)
