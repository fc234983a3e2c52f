"""
Request Validation Errors - NIRF Submission Portal
nirf_portal/routers/errors.py

Raw metric values are coerced to numbers rather than rejected, so request
validation only fails on malformed JSON or on the shape of the request
(wrong container types, non-numeric totals or sub-scores).
"""

from datetime import datetime, timezone

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


FIELD_MESSAGES = {
    "totals": {
        "dict_type": "Category totals must be an object of category -> number",
        "float_parsing": "Category totals must be numbers",
    },
    "sub_scores": {
        "missing": "Sub-scores are required",
        "dict_type": "Sub-scores must be an object of name -> number",
        "float_parsing": "Sub-scores must be numbers or null",
    },
    "baseline": {
        "float_type": "Baseline must be a number",
        "float_parsing": "Baseline must be a valid number",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "model_type": "Field '{field}' must be an object",
    "model_attributes_type": "Field '{field}' must be an object",
    "dict_type": "Field '{field}' must be an object",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "json_invalid": "Malformed JSON request body",
}


def get_validation_message(field: str, error_type: str) -> str:
    root = field.split(".")[0]
    if root in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[root]:
            if key in error_type:
                return FIELD_MESSAGES[root][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error_code": "INVALID_REQUEST",
                "message": "Malformed JSON request body",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    field = ".".join(str(l) for l in loc if l != "body")
    message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": message,
            "details": {"field": field, "type": error_type} if field else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
