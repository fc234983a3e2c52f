#nirf_portal/models/metrics.py
"""
Raw institutional metrics, one record per ranking category.

Values arrive from the data-entry forms. Anything the form layer could not
parse (blank box, text, NaN) is read as 0; the scoring engine never rejects a
number, it only caps what it derives from it. The `hint_min` / `hint_max`
metadata is what the forms show next to each box and is not enforced here.
"""
import math
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nirf_portal.models.enumerations import Category


_PERCENT = {"hint_min": 0, "hint_max": 100}
_COUNT = {"hint_min": 0}


def _count(description: str) -> Any:
    return Field(default=0.0, description=description, json_schema_extra=_COUNT)


def _percent(description: str) -> Any:
    return Field(default=0.0, description=description, json_schema_extra=_PERCENT)


class RawMetrics(BaseModel):
    """Base for all per-category raw metric records."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numeric(cls, v: Any) -> float:
        """Absent, non-numeric and non-finite values are read as 0."""
        if v is None or isinstance(v, bool):
            return float(bool(v))
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return 0.0
        try:
            value = float(v)
        except (TypeError, ValueError, OverflowError):
            return 0.0
        return value if math.isfinite(value) else 0.0

    def has_data(self) -> bool:
        """True once any field of the record holds a positive value."""
        return any(value > 0 for value in self.model_dump().values())

    @classmethod
    def field_hints(cls) -> Dict[str, Dict[str, Any]]:
        """Form metadata per field: description plus min/max input hints."""
        hints: Dict[str, Dict[str, Any]] = {}
        for name, field in cls.model_fields.items():
            extra = field.json_schema_extra or {}
            hints[name] = {
                "description": field.description,
                "min": extra.get("hint_min"),
                "max": extra.get("hint_max"),
            }
        return hints


class TLRMetrics(RawMetrics):
    """Teaching, Learning & Resources inputs."""

    # Student Strength
    total_sanctioned_intake: float = _count(
        "Total sanctioned approved intake across all UG and PG programs (NT)"
    )
    total_enrolled_students: float = _count(
        "Total students enrolled across all UG and PG programs (NE)"
    )
    doctoral_students: float = _count(
        "Students enrolled in the doctoral program till the previous academic year (NP)"
    )

    # Faculty-Student Ratio
    full_time_regular_faculty: float = _count(
        "Full-time regular faculty who taught in both semesters of the previous year (F)"
    )

    # Faculty Quality & Experience
    total_faculty: float = _count("Actual number of faculty members")
    total_faculty_required: float = _count(
        "Total faculty positions required by the institution"
    )
    faculty_with_phd: float = _count("Faculty with a Ph.D. or equivalent qualification")
    faculty_experience_0_to_8: float = _count("Faculty with up to 8 years of experience")
    faculty_experience_8_to_15: float = _count("Faculty with 8 to 15 years of experience")
    faculty_experience_above_15: float = _count("Faculty with more than 15 years of experience")

    # Financial Resources Utilization (most recent year first)
    capital_expenditure_year1: float = _count(
        "Capital expenditure, most recent year, excluding new building construction"
    )
    capital_expenditure_year2: float = _count("Capital expenditure, second year")
    capital_expenditure_year3: float = _count("Capital expenditure, third year")
    operational_expenditure_year1: float = _count(
        "Operational expenditure, most recent year, excluding hostel maintenance"
    )
    operational_expenditure_year2: float = _count("Operational expenditure, second year")
    operational_expenditure_year3: float = _count("Operational expenditure, third year")
    students_year1: float = _count("Students in the discipline, most recent year")
    students_year2: float = _count("Students in the discipline, second year")
    students_year3: float = _count("Students in the discipline, third year")

    @property
    def capital_expenditure(self) -> tuple:
        return (
            self.capital_expenditure_year1,
            self.capital_expenditure_year2,
            self.capital_expenditure_year3,
        )

    @property
    def operational_expenditure(self) -> tuple:
        return (
            self.operational_expenditure_year1,
            self.operational_expenditure_year2,
            self.operational_expenditure_year3,
        )

    @property
    def students(self) -> tuple:
        return (self.students_year1, self.students_year2, self.students_year3)


class ResearchMetrics(RawMetrics):
    """Research & Professional Practice inputs."""

    total_weighted_publications: float = _count(
        "Weighted publications from third-party sources such as Scopus or Web of Science (P)"
    )
    retracted_publications: float = _count("Publications retracted from journals")
    total_citation_count: float = _count("Total citations of the publications (CC)")
    top25_percentile_publications: float = _count(
        "Publications in the top 25th percentile by citations"
    )
    retracted_citations: float = _count("Citations attributed to retracted publications")
    patents_granted: float = _count("Patents granted")
    patents_published: float = _count("Patent applications published")
    average_research_funding_per_faculty: float = _count(
        "Average sponsored research funding per faculty member (rupees)"
    )
    average_consultancy_per_faculty: float = _count(
        "Average consultancy earnings per faculty member (rupees)"
    )


class GraduationMetrics(RawMetrics):
    """Graduation Outcomes inputs."""

    graduation_rate: float = _percent("Students graduating in the stipulated time (%)")
    employment_rate: float = _percent("Graduates placed in employment (%)")
    higher_studies_rate: float = _percent("Graduates selected for higher studies (%)")
    median_salary: float = _count("Median salary of graduates (rupees per year)")


class OutreachMetrics(RawMetrics):
    """Outreach & Inclusivity inputs."""

    diversity_index: float = _percent("Students from other states and countries (%)")
    women_enrollment: float = _percent("Women students and faculty (%)")
    economically_backward: float = _percent(
        "Economically disadvantaged students with full fee reimbursement (%)"
    )
    socially_backward: float = _percent("Students from socially challenged groups (%)")


class PerceptionMetrics(RawMetrics):
    """Perception survey inputs."""

    academic_peer_score: float = _percent("Academic peer survey score (0-100)")
    employer_score: float = _percent("Employer survey score (0-100)")
    publication_impact: float = _percent("Public perception / publication impact score (0-100)")


class InstitutionMetrics(BaseModel):
    """Full raw-metrics snapshot for one institution."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tlr: TLRMetrics = Field(default_factory=TLRMetrics)
    research: ResearchMetrics = Field(default_factory=ResearchMetrics)
    graduation: GraduationMetrics = Field(default_factory=GraduationMetrics)
    outreach: OutreachMetrics = Field(default_factory=OutreachMetrics)
    perception: PerceptionMetrics = Field(default_factory=PerceptionMetrics)

    @field_validator("*", mode="before")
    @classmethod
    def missing_section_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    def section(self, category: Category) -> RawMetrics:
        return getattr(self, Category(category).value)

    def completion_status(self) -> Dict[Category, bool]:
        """Which categories have had any data entered."""
        return {category: self.section(category).has_data() for category in Category}

