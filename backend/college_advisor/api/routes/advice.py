"""
Advice Routes

Profile submission (the form's page action) and the JSON sat-advice
endpoint. Both build a prompt from the form and call the counselor model.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from college_advisor.api.dependencies import AdvisorServiceDep, SettingsDep
from college_advisor.domain.models import StudentProfile
from college_advisor.infrastructure.exceptions import AdvisorError, ValidationError


logger = logging.getLogger(__name__)

router = APIRouter()


def _action_response(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    """Page-action envelope: the status is repeated inside the payload."""
    return JSONResponse(
        status_code=status_code,
        content={"status": status_code, "body": body},
    )


@router.post("/")
async def submit_profile(
    request: Request,
    advisor: AdvisorServiceDep,
    settings: SettingsDep,
):
    """
    Handle the profile form submission.

    Required fields: state, satScore, gpa, financial-aid-importance.
    Optional fields: major, school-size, proximity-importance.
    satData and collegeData are included when the matching enrichment
    step is enabled in settings.
    """
    try:
        profile = StudentProfile.from_form(await request.form())
    except ValidationError as e:
        logger.info(f"Rejected profile submission: {e.message}")
        return _action_response(400, {"message": e.message})

    try:
        result = await advisor.advise(
            profile,
            include_sat_data=settings.enrich_sat_data,
            include_colleges=settings.enrich_colleges,
        )
    except AdvisorError as e:
        logger.error(f"Profile submission failed: {e.message}", exc_info=e)
        return _action_response(
            500, {"message": "An error occurred while getting college advice"}
        )
    except Exception as e:
        logger.error(f"Unexpected error in profile submission: {e}", exc_info=e)
        return _action_response(
            500, {"message": "An error occurred while getting college advice"}
        )

    logger.debug(f"API Response: {result.api_response}")

    body: Dict[str, Any] = {
        "message": "Form submitted successfully",
        "apiResponse": result.api_response.model_dump(mode="json"),
    }
    if result.sat_data is not None:
        body["satData"] = result.sat_data.model_dump(mode="json")
    if result.college_data is not None:
        body["collegeData"] = result.college_data.model_dump(mode="json")

    return _action_response(200, body)


@router.post("/sat-advice")
async def sat_advice(request: Request, advisor: AdvisorServiceDep):
    """Return the counselor's completion for a submitted profile."""
    try:
        profile = StudentProfile.from_form(await request.form())
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message})

    try:
        result = await advisor.advise(profile)
    except AdvisorError as e:
        logger.error(f"Error calling OpenAI: {e.message}", exc_info=e)
        return JSONResponse(status_code=500, content={"error": "Error calling OpenAI"})
    except Exception as e:
        logger.error(f"Unexpected error calling OpenAI: {e}", exc_info=e)
        return JSONResponse(status_code=500, content={"error": "Error calling OpenAI"})

    return {"openAiResponse": result.api_response.model_dump(mode="json")}
