"""
Dependencies - NIRF Submission Portal
nirf_portal/core/dependencies.py

FastAPI dependency injection for the scoring engine.
"""

from functools import lru_cache

from nirf_portal.config import get_settings
from nirf_portal.scoring.engine import ScoringEngine
from nirf_portal.scoring.final_calculator import FinalScoreCalculator


@lru_cache()
def get_scoring_engine() -> ScoringEngine:
    """Get cached ScoringEngine instance."""
    return ScoringEngine(log_breakdowns=get_settings().LOG_SCORE_BREAKDOWNS)


@lru_cache()
def get_final_calculator() -> FinalScoreCalculator:
    """Get cached FinalScoreCalculator instance."""
    return FinalScoreCalculator()
