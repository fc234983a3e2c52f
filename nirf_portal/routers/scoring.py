"""
Scoring API Router
nirf_portal/routers/scoring.py

Called by the data-entry forms on every update and by the review screens.

Endpoints:
  POST /api/v1/scoring/calculate       - Full institution metrics → all scores
  POST /api/v1/scoring/tlr             - TLR metrics → TLR sub-scores + baseline
  POST /api/v1/scoring/research        - Research metrics + baseline → research sub-scores
  POST /api/v1/scoring/final           - Category totals → final score
  POST /api/v1/scoring/recompute-total - Edited sub-scores → category total
  GET  /api/v1/scoring/weights         - Category weights and sub-score maxima
  GET  /api/v1/scoring/fields          - Input field descriptions and range hints

Register in main.py:
    from nirf_portal.routers.scoring import router as scoring_router
    app.include_router(scoring_router)
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from nirf_portal.core.dependencies import get_final_calculator, get_scoring_engine
from nirf_portal.core.exceptions import (
    CategoryOverrideError,
    ScoringException,
    UnknownCategoryError,
    UnknownSubScoreError,
)
from nirf_portal.models.enumerations import Category
from nirf_portal.models.metrics import (
    GraduationMetrics,
    InstitutionMetrics,
    OutreachMetrics,
    PerceptionMetrics,
    ResearchMetrics,
    TLRMetrics,
)
from nirf_portal.scoring.constants import CATEGORY_WEIGHTS, SUB_SCORE_MAXIMA
from nirf_portal.scoring.engine import ScoringEngine
from nirf_portal.scoring.final_calculator import FinalScoreCalculator
from nirf_portal.scoring.overrides import recompute_total
from nirf_portal.scoring.utils import quantize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/scoring", tags=["Scoring"])


# =====================================================================
# Request / Response Models
# =====================================================================

class ResearchScoringRequest(BaseModel):
    """Research metrics plus the faculty baseline from the TLR category."""
    metrics: ResearchMetrics = Field(default_factory=ResearchMetrics)
    baseline: float = Field(default=0.0, description="FRQ-equivalent faculty count")

    @field_validator("baseline")
    @classmethod
    def finite_baseline(cls, v: float) -> float:
        return v if math.isfinite(v) else 0.0


class FinalScoreRequest(BaseModel):
    """Category key → category total in [0, 100]; missing or non-finite totals count as 0."""
    totals: Dict[str, float]

    @field_validator("totals")
    @classmethod
    def finite_totals(cls, v: Dict[str, float]) -> Dict[str, float]:
        return {k: total if math.isfinite(total) else 0.0 for k, total in v.items()}


class FinalScoreResponse(BaseModel):
    final_score: float
    contributions: Dict[str, float]
    weights: Dict[str, float]


class RecomputeTotalRequest(BaseModel):
    """Edited sub-scores; null or missing entries count as 0."""
    sub_scores: Dict[str, Optional[float]]


class RecomputeTotalResponse(BaseModel):
    total: float


# =====================================================================
# Error handling
# =====================================================================

_ERROR_STATUS = {
    UnknownCategoryError: (status.HTTP_404_NOT_FOUND, "UNKNOWN_CATEGORY"),
    UnknownSubScoreError: (status.HTTP_404_NOT_FOUND, "UNKNOWN_SUB_SCORE"),
    CategoryOverrideError: (status.HTTP_400_BAD_REQUEST, "INVALID_OVERRIDE"),
}


async def scoring_exception_handler(request: Request, exc: ScoringException):
    status_code, error_code = _ERROR_STATUS.get(
        type(exc), (status.HTTP_400_BAD_REQUEST, "SCORING_ERROR")
    )
    logger.warning(f"{error_code} on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": str(exc),
            "details": {k: v for k, v in vars(exc).items() if isinstance(v, str)},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


# =====================================================================
# Endpoints
# =====================================================================

@router.post("/calculate", summary="Score a full institution snapshot")
async def calculate_scores(
    metrics: InstitutionMetrics,
    engine: ScoringEngine = Depends(get_scoring_engine),
) -> Dict[str, Any]:
    result = engine.score(metrics)
    body = result.to_dict()
    body["completion"] = {k.value: v for k, v in metrics.completion_status().items()}
    return body


@router.post("/tlr", summary="Score Teaching, Learning & Resources")
async def calculate_tlr(
    metrics: TLRMetrics,
    engine: ScoringEngine = Depends(get_scoring_engine),
) -> Dict[str, Any]:
    tlr = engine.tlr_calculator.calculate(metrics)
    return {
        "category": tlr.category.to_dict(),
        "baseline": float(quantize(tlr.baseline, 4)),
    }


@router.post("/research", summary="Score Research & Professional Practice")
async def calculate_research(
    request: ResearchScoringRequest,
    engine: ScoringEngine = Depends(get_scoring_engine),
) -> Dict[str, Any]:
    research = engine.research_calculator.calculate(request.metrics, request.baseline)
    return {"category": research.category.to_dict()}


@router.post("/final", response_model=FinalScoreResponse, summary="Aggregate category totals")
async def calculate_final(
    request: FinalScoreRequest,
    calculator: FinalScoreCalculator = Depends(get_final_calculator),
) -> FinalScoreResponse:
    result = calculator.calculate(request.totals)
    return FinalScoreResponse(
        final_score=float(result.final_score),
        contributions={k.value: float(v) for k, v in result.contributions.items()},
        weights={k.value: float(v) for k, v in result.weights.items()},
    )


@router.post(
    "/recompute-total",
    response_model=RecomputeTotalResponse,
    summary="Recompute a category total from edited sub-scores",
)
async def recompute_category_total(request: RecomputeTotalRequest) -> RecomputeTotalResponse:
    return RecomputeTotalResponse(total=float(recompute_total(request.sub_scores)))


@router.get("/weights", summary="Category weights and sub-score maxima")
async def get_weights() -> Dict[str, Any]:
    weights = {k.value: float(v) for k, v in CATEGORY_WEIGHTS.items()}
    return {
        "weights": weights,
        "total": float(sum(CATEGORY_WEIGHTS.values())),
        "sub_score_maxima": {
            category.value: {name: float(m) for name, m in maxima.items()}
            for category, maxima in SUB_SCORE_MAXIMA.items()
        },
    }


_SECTION_MODELS = {
    Category.TLR: TLRMetrics,
    Category.RESEARCH: ResearchMetrics,
    Category.GRADUATION: GraduationMetrics,
    Category.OUTREACH: OutreachMetrics,
    Category.PERCEPTION: PerceptionMetrics,
}


@router.get("/fields", summary="Input field descriptions and range hints")
async def get_field_hints() -> Dict[str, Any]:
    return {category.value: model.field_hints() for category, model in _SECTION_MODELS.items()}
