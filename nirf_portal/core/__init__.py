"""
Core Package - NIRF Submission Portal
nirf_portal/core/__init__.py

Core infrastructure: exceptions.
Import FastAPI dependencies from nirf_portal.core.dependencies directly.
"""

from nirf_portal.core.exceptions import (
    CategoryOverrideError,
    ScoringException,
    UnknownCategoryError,
    UnknownSubScoreError,
)

__all__ = [
    "CategoryOverrideError",
    "ScoringException",
    "UnknownCategoryError",
    "UnknownSubScoreError",
]
