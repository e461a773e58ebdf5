from __future__ import annotations

import logging
import time
from typing import Any, Callable, Literal, TypeVar

from resume_tailor.ai.capabilities import Capability, get_capability
from resume_tailor.ai.extract import extract_payload
from resume_tailor.ai.factory import get_completion_client
from resume_tailor.ai.gateway import invoke
from resume_tailor.ai.prompts import compose_prompt
from resume_tailor.ai.types import CompletionClient
from resume_tailor.core.errors import ServiceError, ValidationError
from resume_tailor.features import resume_to_text, total_years_experience
from resume_tailor.normalize import (
    keywords_from_analysis,
    normalize_ats_score,
    normalize_bullet_enhancement,
    normalize_job_analysis,
    normalize_job_match,
    normalize_keyword_extraction,
    normalize_professional_summary,
    normalize_tailoring,
)
from resume_tailor.schemas.domain import (
    ATSScoreResult,
    BulletEnhancement,
    JobAnalysis,
    JobDescription,
    JobMatchAnalysis,
    KeywordInsight,
    ProfessionalSummaryResult,
    Resume,
    RoleContext,
    TailoringResult,
    TailoringSettings,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Stage = Literal["PROMPTED", "INVOKED", "EXTRACTED", "NORMALIZED", "RETURNED", "FAILED"]


async def _run_pipeline(
    capability: Capability,
    *,
    failure_message: str,
    client: CompletionClient | None,
    prompt_inputs: Callable[[], dict[str, Any]],
    normalize: Callable[[Any], T],
) -> T:
    """Compose, invoke, extract and normalize for one capability.

    Nothing is shared between calls and the only suspension point is the
    completion call. Any failure yields a ServiceError and no partial result.
    """
    stage: Stage = "PROMPTED"
    started = time.perf_counter()
    try:
        prompt = compose_prompt(capability, **prompt_inputs())
        message = await invoke(client or get_completion_client(), capability, prompt)
        stage = "INVOKED"
        payload = extract_payload(message, get_capability(capability).schema_name)
        stage = "EXTRACTED"
        result = normalize(payload)
        stage = "NORMALIZED"
    except ServiceError:
        raise
    except Exception as exc:  # noqa: BLE001 - wrapped with the original cause
        logger.warning(
            "tailoring_pipeline_failed capability=%s stage=%s error=%s: %s",
            capability,
            stage,
            type(exc).__name__,
            exc,
        )
        raise ServiceError(failure_message, cause=exc) from exc

    stage = "RETURNED"
    logger.info(
        "tailoring_pipeline_done capability=%s stage=%s latency_ms=%s",
        capability,
        stage,
        int((time.perf_counter() - started) * 1000),
    )
    return result


def _required(name: str, value: T | None) -> T:
    if value is None:
        raise ValidationError(f"missing required input: {name}")
    return value


def _as_job_description(job: JobDescription | str) -> JobDescription:
    if isinstance(job, JobDescription):
        return job
    return JobDescription(content=job or "")


async def analyze_job_description(
    job: JobDescription | str,
    *,
    client: CompletionClient | None = None,
) -> JobAnalysis:
    job_description = _as_job_description(job)
    return await _run_pipeline(
        "job_analysis",
        failure_message="Failed to analyze job description",
        client=client,
        prompt_inputs=lambda: {"job_description": job_description.content},
        normalize=lambda payload: normalize_job_analysis(payload, job_description_id=job_description.id),
    )


async def tailor_resume(
    resume: Resume,
    job_description: JobDescription,
    settings: TailoringSettings | None = None,
    *,
    client: CompletionClient | None = None,
) -> TailoringResult:
    return await _run_pipeline(
        "resume_tailoring",
        failure_message="Failed to tailor resume",
        client=client,
        prompt_inputs=lambda: {
            "resume": resume,
            "job_description": job_description,
            "settings": settings or TailoringSettings(),
        },
        normalize=lambda payload: normalize_tailoring(payload, resume),
    )


async def generate_ats_score(
    resume: Resume,
    job_description: JobDescription,
    *,
    client: CompletionClient | None = None,
) -> ATSScoreResult:
    return await _run_pipeline(
        "ats_score",
        failure_message="Failed to generate ATS score",
        client=client,
        prompt_inputs=lambda: {
            "resume_text": resume_to_text(_required("resume", resume)),
            "job_description": _required("job_description", job_description).content,
        },
        normalize=normalize_ats_score,
    )


async def enhance_bullet_point(
    bullet: str,
    job_description: JobDescription,
    role_context: RoleContext,
    intensity: int = 50,
    *,
    client: CompletionClient | None = None,
) -> BulletEnhancement:
    return await _run_pipeline(
        "bullet_enhancement",
        failure_message="Failed to enhance bullet point",
        client=client,
        prompt_inputs=lambda: {
            "bullet": bullet,
            "job_description": _required("job_description", job_description).content,
            "role_title": _required("role_context", role_context).role_title,
            "other_bullets": role_context.other_bullets,
            "intensity": max(0, min(100, intensity)),
        },
        normalize=normalize_bullet_enhancement,
    )


async def generate_professional_summary(
    resume: Resume,
    job_description: JobDescription | None = None,
    *,
    client: CompletionClient | None = None,
) -> ProfessionalSummaryResult:
    return await _run_pipeline(
        "professional_summary",
        failure_message="Failed to generate professional summary",
        client=client,
        prompt_inputs=lambda: {
            "resume_text": resume_to_text(_required("resume", resume)),
            "current_summary": resume.professional_summary.content,
            "years_experience": total_years_experience(resume.work_experiences),
            "job_description": job_description.content if job_description else "",
        },
        normalize=normalize_professional_summary,
    )


async def extract_job_keywords(
    job_description: JobDescription,
    *,
    client: CompletionClient | None = None,
) -> list[KeywordInsight]:
    if job_description is not None and job_description.analysis is not None and job_description.analysis.keywords:
        logger.debug("job_keywords_from_analysis job_description_id=%s", job_description.id)
        return keywords_from_analysis(job_description.analysis)

    return await _run_pipeline(
        "keyword_extraction",
        failure_message="Failed to extract job keywords",
        client=client,
        prompt_inputs=lambda: {"text": _required("job_description", job_description).content, "type": "job"},
        normalize=normalize_keyword_extraction,
    )


async def analyze_job_match(
    resume: Resume,
    job_description: JobDescription,
    *,
    client: CompletionClient | None = None,
) -> JobMatchAnalysis:
    return await _run_pipeline(
        "job_match",
        failure_message="Failed to analyze job match",
        client=client,
        prompt_inputs=lambda: {
            "resume_text": resume_to_text(_required("resume", resume)),
            "job_description": _required("job_description", job_description).content,
        },
        normalize=normalize_job_match,
    )


__all__ = [
    "ServiceError",
    "ValidationError",
    "analyze_job_description",
    "analyze_job_match",
    "enhance_bullet_point",
    "extract_job_keywords",
    "generate_ats_score",
    "generate_professional_summary",
    "tailor_resume",
]
