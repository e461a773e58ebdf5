from __future__ import annotations

from pydantic import Field

from resume_tailor.schemas.domain import (
    DomainModel,
    JobDescription,
    Resume,
    RoleContext,
    TailoringSettings,
)


class AnalyzeJobRequest(DomainModel):
    job_description: JobDescription


class TailorResumeRequest(DomainModel):
    resume: Resume
    job_description: JobDescription
    settings: TailoringSettings = Field(default_factory=TailoringSettings)


class ResumeJobRequest(DomainModel):
    resume: Resume
    job_description: JobDescription


class EnhanceBulletRequest(DomainModel):
    bullet: str
    job_description: JobDescription
    role_context: RoleContext
    intensity: int = Field(default=50, ge=0, le=100)


class ProfessionalSummaryRequest(DomainModel):
    resume: Resume
    job_description: JobDescription | None = None


class JobKeywordsRequest(DomainModel):
    job_description: JobDescription
