import logging

from fastapi import APIRouter, Header, HTTPException, Request, status

from resume_tailor.core.errors import ExtractionError, ModelError, ServiceError, ValidationError
from resume_tailor.core.rate_limit import rate_limit
from resume_tailor.core.security import check_api_key
from resume_tailor.schemas.requests import (
    AnalyzeJobRequest,
    EnhanceBulletRequest,
    JobKeywordsRequest,
    ProfessionalSummaryRequest,
    ResumeJobRequest,
    TailorResumeRequest,
)
from resume_tailor.services import tailoring_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _status_for(exc: ServiceError) -> int:
    cause = exc.cause
    if isinstance(cause, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(cause, ExtractionError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(cause, ModelError):
        if cause.kind == "rate_limit":
            return status.HTTP_429_TOO_MANY_REQUESTS
        if cause.kind == "auth":
            return status.HTTP_502_BAD_GATEWAY
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _raise_service_http_error(exc: ServiceError) -> None:
    status_code = _status_for(exc)
    logger.info("ai_request_failed status=%s cause=%s", status_code, type(exc.cause).__name__)
    raise HTTPException(status_code=status_code, detail=str(exc)) from exc


@router.post("/ai/analyze-job")
@rate_limit()
async def analyze_job(
    request: Request,
    payload: AnalyzeJobRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        analysis = await tailoring_service.analyze_job_description(payload.job_description)
    except ServiceError as exc:
        _raise_service_http_error(exc)
    return analysis.to_wire()


@router.post("/ai/tailor-resume")
@rate_limit()
async def tailor_resume(
    request: Request,
    payload: TailorResumeRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        result = await tailoring_service.tailor_resume(payload.resume, payload.job_description, payload.settings)
    except ServiceError as exc:
        _raise_service_http_error(exc)
    return result.to_wire()


@router.post("/ai/ats-score")
@rate_limit()
async def ats_score(
    request: Request,
    payload: ResumeJobRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        result = await tailoring_service.generate_ats_score(payload.resume, payload.job_description)
    except ServiceError as exc:
        _raise_service_http_error(exc)
    return result.to_wire()


@router.post("/ai/enhance-bullet")
@rate_limit()
async def enhance_bullet(
    request: Request,
    payload: EnhanceBulletRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        result = await tailoring_service.enhance_bullet_point(
            payload.bullet,
            payload.job_description,
            payload.role_context,
            payload.intensity,
        )
    except ServiceError as exc:
        _raise_service_http_error(exc)
    return result.to_wire()


@router.post("/ai/professional-summary")
@rate_limit()
async def professional_summary(
    request: Request,
    payload: ProfessionalSummaryRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        result = await tailoring_service.generate_professional_summary(payload.resume, payload.job_description)
    except ServiceError as exc:
        _raise_service_http_error(exc)
    return result.to_wire()


@router.post("/ai/job-keywords")
@rate_limit()
async def job_keywords(
    request: Request,
    payload: JobKeywordsRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        keywords = await tailoring_service.extract_job_keywords(payload.job_description)
    except ServiceError as exc:
        _raise_service_http_error(exc)
    return [keyword.to_wire() for keyword in keywords]


@router.post("/ai/job-match")
@rate_limit()
async def job_match(
    request: Request,
    payload: ResumeJobRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    try:
        result = await tailoring_service.analyze_job_match(payload.resume, payload.job_description)
    except ServiceError as exc:
        _raise_service_http_error(exc)
    return result.to_wire()
