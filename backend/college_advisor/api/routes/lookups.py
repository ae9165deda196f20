"""
Lookup Routes

JSON endpoints over the reference tables: SAT percentiles around a
score, and admissions bands for recommended colleges.
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from college_advisor.api.dependencies import AdvisorServiceDep, LookupServiceDep
from college_advisor.infrastructure.db.repositories.sat_score_repository import (
    MAX_SAT_SCORE,
    MIN_SAT_SCORE,
)
from college_advisor.infrastructure.exceptions import AdvisorError


logger = logging.getLogger(__name__)

router = APIRouter()

COLLEGE_POSITIONS = ("first", "second", "third")


def _parse_score(raw: Any) -> Optional[float]:
    """Numeric SAT score from a form value, or None when not a valid score."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        score = float(raw)
    except ValueError:
        return None
    if not MIN_SAT_SCORE <= score <= MAX_SAT_SCORE:
        return None
    return int(score) if score.is_integer() else score


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/sat-data")
async def sat_data(request: Request, lookups: LookupServiceDep):
    """SAT percentile rows for a score and the scores 100 above and below."""
    try:
        form = await request.form()
        total_score = _parse_score(form.get("satScore"))
        if total_score is None:
            return _error(400, "Invalid SAT score")

        result = await lookups.get_sat_data(total_score)
    except AdvisorError as e:
        logger.error(f"Error processing form data: {e.message}", exc_info=e)
        return _error(500, "Server error occurred")
    except Exception as e:
        logger.error(f"Unexpected error processing form data: {e}", exc_info=e)
        return _error(500, "Server error occurred")

    return {"satData": result.model_dump(mode="json")}


@router.post("/college-data")
async def college_data(
    request: Request,
    advisor: AdvisorServiceDep,
    lookups: LookupServiceDep,
):
    """
    Admissions SAT bands for the recommended colleges.

    Body {first, second, third} returns all three keyed by position,
    with a placeholder row for any college that is missing or fails.
    Body {collegeName} returns the single row, or null.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error(400, "Invalid JSON body")

    if not isinstance(body, dict):
        return _error(400, "Missing college name")

    names = [body.get(position) for position in COLLEGE_POSITIONS]
    single_name = body.get("collegeName")

    try:
        if any(names) or not single_name:
            if not all(isinstance(name, str) and name.strip() for name in names):
                return _error(400, "Missing college name")
            recommendations = await advisor.enrich_colleges(names)
            return {"collegeData": recommendations.model_dump(mode="json")}

        if not isinstance(single_name, str):
            return _error(400, "Missing college name")
        row = await lookups.get_college_admissions(single_name)
    except AdvisorError as e:
        logger.error(f"Error processing request: {e.message}", exc_info=e)
        return _error(500, "Server error occurred")
    except Exception as e:
        logger.error(f"Unexpected error processing request: {e}", exc_info=e)
        return _error(500, "Server error occurred")

    return {"collegeData": row.model_dump(mode="json") if row is not None else None}
