from __future__ import annotations

import uuid
from typing import Literal

from pydantic import Field

from .base import DomainModel

RequirementType = Literal["hard_skill", "soft_skill", "experience", "education", "certification"]
RequirementImportance = Literal["must_have", "nice_to_have", "preferred"]


class JobRequirement(DomainModel):
    id: str
    type: RequirementType
    content: str
    importance: RequirementImportance = "nice_to_have"


class JobKeyword(DomainModel):
    id: str
    text: str
    frequency: int = Field(default=1, ge=1)
    context: str = ""


class JobAnalysis(DomainModel):
    id: str
    job_description_id: str | None = None
    requirements: list[JobRequirement] = Field(default_factory=list)
    keywords: list[JobKeyword] = Field(default_factory=list)
    experience_level: str = "mid"
    company_culture: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    created_at: str
    salary_range: str | None = None
    industry: str | None = None
    department: str | None = None
    employment_type: str | None = None
    remote_work: str | None = None


class JobDescription(DomainModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str | None = None
    title: str = ""
    company: str = ""
    location: str | None = None
    job_type: str | None = None
    salary: str | None = None
    url: str | None = None
    content: str
    analysis: JobAnalysis | None = None
