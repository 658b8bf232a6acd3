"""
JobDeck - AI proxy endpoints.

Forward a fixed prompt built from the caller's input to the language model
and return its decoded JSON reply. Both endpoints answer OPTIONS preflight
requests; any other method than POST/OPTIONS gets a 405 envelope from the
application's HTTP error handler.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ValidationError as PydanticValidationError
from typing import Type, TypeVar
import logging

from ..errors import UpstreamError, ValidationError
from ..rate_limit import limiter, RATE_LIMIT_AI
from ..schemas import ErrorResponse, GenerateApplicationRequest, ParseJobDescriptionRequest
from ..services.ai_service import AIService, AIServiceError, get_ai_service

router = APIRouter()
logger = logging.getLogger("jobdeck.ai")

ModelT = TypeVar("ModelT", bound=BaseModel)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or malformed request field"},
    500: {"model": ErrorResponse, "description": "Model call failed or returned invalid JSON"},
}


async def _read_json_body(request: Request) -> dict:
    """Return the request body as a dict; anything else counts as empty."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _validate(model: Type[ModelT], body: dict) -> ModelT:
    try:
        return model.model_validate(body)
    except PydanticValidationError as e:
        raise ValidationError("Invalid request body", details=str(e))


@router.post("/parse-job-description", responses=ERROR_RESPONSES)
@limiter.limit(RATE_LIMIT_AI)
async def parse_job_description(
    request: Request,
    ai: AIService = Depends(get_ai_service)
):
    """
    Extract structured fields from a job posting.

    Body: {"jobDescription": "<posting text>"}
    """
    body = await _read_json_body(request)
    if not body.get("jobDescription"):
        raise ValidationError(
            "Job description is required",
            details="Request body must include a non-empty 'jobDescription' field"
        )
    payload = _validate(ParseJobDescriptionRequest, body)

    try:
        parsed = await ai.parse_job_description(payload.job_description)
    except AIServiceError as e:
        logger.error(f"Error parsing job description: {e}")
        raise UpstreamError("Failed to parse job description", details=str(e))

    return JSONResponse(status_code=200, content=parsed)


@router.options("/parse-job-description", include_in_schema=False)
async def parse_job_description_preflight():
    return Response(status_code=200)


@router.post("/generate-application", responses=ERROR_RESPONSES)
@limiter.limit(RATE_LIMIT_AI)
async def generate_application(
    request: Request,
    ai: AIService = Depends(get_ai_service)
):
    """
    Generate a tailored resume and cover letter.

    Body: {"masterResume": {...}, "jobDescription": {...}}
    """
    body = await _read_json_body(request)
    if not body.get("masterResume") or not body.get("jobDescription"):
        raise ValidationError(
            "Both masterResume and jobDescription are required",
            details="Request body must include non-empty 'masterResume' and 'jobDescription' fields"
        )
    payload = _validate(GenerateApplicationRequest, body)

    try:
        generated = await ai.generate_application(payload.master_resume, payload.job_description)
    except AIServiceError as e:
        logger.error(f"Error generating application: {e}")
        raise UpstreamError("Failed to generate application", details=str(e))

    return JSONResponse(status_code=200, content=generated)


@router.options("/generate-application", include_in_schema=False)
async def generate_application_preflight():
    return Response(status_code=200)
