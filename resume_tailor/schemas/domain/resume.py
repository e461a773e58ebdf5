from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict, Field

from .base import DomainModel


class ResumeSection(DomainModel):
    # Unknown fields survive a round trip untouched.
    model_config = ConfigDict(extra="allow")


class PersonalInfo(ResumeSection):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linked_in: str | None = None
    website: str | None = None
    github: str | None = None


class ProfessionalSummary(ResumeSection):
    content: str = ""


class WorkExperience(ResumeSection):
    id: str = ""
    company: str = ""
    position: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str | None = None
    current: bool = False
    highlights: list[str] = Field(default_factory=list)
    description: str | None = None


class Education(ResumeSection):
    id: str = ""
    institution: str = ""
    degree: str = ""
    field: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str | None = None
    current: bool = False
    gpa: str | None = None
    highlights: list[str] = Field(default_factory=list)


class Skill(ResumeSection):
    id: str = ""
    name: str
    level: Literal["beginner", "intermediate", "advanced", "expert"] | None = None
    category: str | None = None


class Project(ResumeSection):
    id: str = ""
    name: str = ""
    description: str = ""
    url: str | None = None
    highlights: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)


class Certification(ResumeSection):
    id: str = ""
    name: str = ""
    issuer: str = ""
    date: str = ""
    expires: str | None = None
    url: str | None = None


class SocialLink(ResumeSection):
    id: str = ""
    platform: str = ""
    url: str = ""


class CustomSectionEntry(ResumeSection):
    id: str = ""
    title: str | None = None
    subtitle: str | None = None
    date: str | None = None
    description: str | None = None
    bullets: list[str] = Field(default_factory=list)


class CustomSection(ResumeSection):
    id: str = ""
    title: str = ""
    entries: list[CustomSectionEntry] = Field(default_factory=list)
    order: int | None = None


class Resume(ResumeSection):
    id: str
    user_id: str
    title: str = ""
    target_job_title: str = ""
    template_id: str = ""
    created_at: str = ""
    updated_at: str = ""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    professional_summary: ProfessionalSummary = Field(default_factory=ProfessionalSummary)
    work_experiences: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    social_links: list[SocialLink] = Field(default_factory=list)
    custom_sections: list[CustomSection] = Field(default_factory=list)


class TailoringSettings(DomainModel):
    intensity: int = Field(default=50, ge=0, le=100)
    preserve_voice: bool = True
    focus_keywords: bool = True


class RoleContext(DomainModel):
    role_title: str
    other_bullets: list[str] = Field(default_factory=list)
