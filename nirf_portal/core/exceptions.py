"""
Custom Exceptions - NIRF Submission Portal
nirf_portal/core/exceptions.py

The scoring engine itself is total and raises nothing for numeric input.
These exceptions cover lookups and reviewer overrides around it.
"""


class ScoringException(Exception):
    """Base exception for scoring lookups and overrides."""

    pass


class UnknownCategoryError(ScoringException):
    """Category key is not one of the five ranking categories."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown category '{category}'")


class UnknownSubScoreError(ScoringException):
    """Sub-score name does not exist in the given category."""

    def __init__(self, category: str, name: str):
        self.category = category
        self.name = name
        super().__init__(f"Category '{category}' has no sub-score '{name}'")


class CategoryOverrideError(ScoringException):
    """Override does not apply to the category's kind of result."""

    def __init__(self, category: str, message: str):
        self.category = category
        self.message = message
        super().__init__(f"{category}: {message}")
