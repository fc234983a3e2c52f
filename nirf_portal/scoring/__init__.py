"""
scoring/ - NIRF Scoring Engine

Modules:
    utils.py                - Decimal utilities and saturating normalization
    constants.py            - Point weights, caps and reference constants
    results.py              - SubScore / CategoryResult / FinalResult records
    tlr_calculator.py       - Teaching, Learning & Resources (+ faculty baseline)
    research_calculator.py  - Research & Professional Practice
    outcome_calculators.py  - Graduation, Outreach, Perception
    final_calculator.py     - Weighted final score
    engine.py               - Full pipeline: raw metrics -> FinalResult
    overrides.py            - Reviewer edits with total recomputation
"""

from nirf_portal.scoring.engine import ScoringEngine, calculate_final_score

__all__ = ["ScoringEngine", "calculate_final_score"]
