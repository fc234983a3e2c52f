"""
scoring/constants.py

Every point weight, cap and normalization reference used by the scoring
engine. Several references (per-student spend, citations per faculty,
patent counts, funding per faculty) are placeholders until the ranking
body publishes the authoritative values; swap them here, the calculators
only read the names.
"""

from decimal import Decimal
from typing import Dict

from nirf_portal.models.enumerations import Category

# ---------------------------------------------------------------------------
# Category 1: Teaching, Learning & Resources (TLR), 100 marks
# ---------------------------------------------------------------------------

# Student Strength (SS), 20 marks
SS_MAX = Decimal("20")
SS_ENROLLMENT_WEIGHT = Decimal("15")
SS_DOCTORAL_WEIGHT = Decimal("5")
ENROLLMENT_TOLERANCE = Decimal("1.2")            # over-enrollment tolerated up to 120%
DOCTORAL_STUDENTS_REFERENCE = Decimal("100")     # 100+ doctoral students -> full f(NP)

# Faculty-Student Ratio (FSR), 30 marks
FSR_MAX = Decimal("30")
FSR_MIN_RATIO = Decimal("1") / Decimal("50")     # below 1:50 the FSR is zero
FSR_OPTIMAL_STUDENTS_PER_FACULTY = Decimal("15") # 1:15 earns full marks

# Faculty Quality & Experience (FQE), 20 marks
FQE_MAX = Decimal("20")
FQ_MAX = Decimal("10")
PHD_FULL_MARKS_PERCENT = Decimal("95")
EXPERIENCE_BAND_MULTIPLIER = Decimal("3")
EXPERIENCE_BAND_WEIGHTS = (Decimal("3"), Decimal("3"), Decimal("4"))  # 0-8, 8-15, 15+ years

# Financial Resources Utilization (FRU), 30 marks
FRU_MAX = Decimal("30")
FRU_CAPITAL_WEIGHT = Decimal("7.5")
FRU_OPERATIONAL_WEIGHT = Decimal("22.5")
CAPITAL_SPEND_PER_STUDENT_REFERENCE = Decimal("100000")      # 1 lakh, placeholder
OPERATIONAL_SPEND_PER_STUDENT_REFERENCE = Decimal("100000")  # 1 lakh, placeholder

# Cross-category baseline (FRQ-equivalent faculty count)
BASELINE_STUDENTS_PER_FACULTY = Decimal("15")

# ---------------------------------------------------------------------------
# Category 2: Research & Professional Practice (RP), 100 marks
# ---------------------------------------------------------------------------

# Publications (PU), 35 marks
PU_MAX = Decimal("35")
PUBLICATIONS_PER_FACULTY_REFERENCE = Decimal("1")
PU_RETRACTION_PENALTY = Decimal("5")
RETRACTED_PUBLICATIONS_REFERENCE = Decimal("10")

# Quality of Publications (QP), 40 marks
QP_MAX = Decimal("40")
QP_CITATION_WEIGHT = Decimal("20")
CITATIONS_PER_FACULTY_REFERENCE = Decimal("100")  # placeholder
QP_TOP25_WEIGHT = Decimal("20")
TOP25_SHARE_REFERENCE = Decimal("0.25")
QP_RETRACTION_PENALTY = Decimal("5")
RETRACTED_CITATIONS_REFERENCE = Decimal("100")

# IPR and Patents (IPR), 15 marks
IPR_MAX = Decimal("15")
IPR_GRANTED_WEIGHT = Decimal("10")
PATENTS_GRANTED_REFERENCE = Decimal("10")         # placeholder
IPR_PUBLISHED_WEIGHT = Decimal("5")
PATENTS_PUBLISHED_REFERENCE = Decimal("20")       # placeholder

# Footprint of Projects and Professional Practice (FPPP), 10 marks
FPPP_MAX = Decimal("10")
FPPP_RESEARCH_WEIGHT = Decimal("7.5")
RESEARCH_FUNDING_PER_FACULTY_REFERENCE = Decimal("500000")   # 5 lakh, placeholder
FPPP_CONSULTANCY_WEIGHT = Decimal("2.5")
CONSULTANCY_PER_FACULTY_REFERENCE = Decimal("100000")        # 1 lakh, placeholder

# ---------------------------------------------------------------------------
# Categories 3-5: single-pass weighted sums, capped at 100
# ---------------------------------------------------------------------------

GRADUATION_WEIGHTS: Dict[str, Decimal] = {
    "graduation_rate": Decimal("0.3"),
    "employment_rate": Decimal("0.4"),
    "higher_studies_rate": Decimal("0.2"),
}
MEDIAN_SALARY_REFERENCE = Decimal("1000000")      # 10 lakh per year -> 10 points
MEDIAN_SALARY_WEIGHT = Decimal("10")

OUTREACH_WEIGHTS: Dict[str, Decimal] = {
    "diversity_index": Decimal("0.25"),
    "women_enrollment": Decimal("0.25"),
    "economically_backward": Decimal("0.25"),
    "socially_backward": Decimal("0.25"),
}

PERCEPTION_WEIGHTS: Dict[str, Decimal] = {
    "academic_peer_score": Decimal("0.4"),
    "employer_score": Decimal("0.4"),
    "publication_impact": Decimal("0.2"),
}

CATEGORY_MAX = Decimal("100")

# ---------------------------------------------------------------------------
# Final score weights (sum = 1.0)
# ---------------------------------------------------------------------------

CATEGORY_WEIGHTS: Dict[Category, Decimal] = {
    Category.TLR: Decimal("0.30"),
    Category.RESEARCH: Decimal("0.30"),
    Category.GRADUATION: Decimal("0.20"),
    Category.OUTREACH: Decimal("0.10"),
    Category.PERCEPTION: Decimal("0.10"),
}

# Sub-score maxima of the detailed categories, in display order
SUB_SCORE_MAXIMA: Dict[Category, Dict[str, Decimal]] = {
    Category.TLR: {
        "ss": SS_MAX,
        "fsr": FSR_MAX,
        "fqe": FQE_MAX,
        "fru": FRU_MAX,
    },
    Category.RESEARCH: {
        "pu": PU_MAX,
        "qp": QP_MAX,
        "ipr": IPR_MAX,
        "fppp": FPPP_MAX,
    },
}
