from __future__ import annotations

from datetime import datetime
from typing import Any

from resume_tailor.schemas.domain import JobAnalysis, JobKeyword, JobRequirement

from .utils import as_dict, as_list, as_number, as_text, as_text_list, new_id, now_iso, pick_choice, require_mapping

_IMPORTANCE = {"must_have", "nice_to_have", "preferred"}
_OPTIONAL_TEXT_FIELDS = (
    ("salaryRange", "salary_range"),
    ("industry", "industry"),
    ("department", "department"),
    ("employmentType", "employment_type"),
    ("remoteWork", "remote_work"),
)


def _requirement(kind: str, content: str, item: dict[str, Any]) -> JobRequirement:
    return JobRequirement(
        id=new_id(),
        type=kind,
        content=content,
        importance=pick_choice(item.get("importance"), _IMPORTANCE, "nice_to_have"),
    )


def _education_content(item: dict[str, Any]) -> str:
    degree = as_text(item.get("type"))
    field = as_text(item.get("field"))
    if degree and field:
        return f"{degree} in {field}"
    return degree or field


def _requirements(payload: dict[str, Any]) -> list[JobRequirement]:
    requirements: list[JobRequirement] = []

    for key, kind in (("hardSkills", "hard_skill"), ("softSkills", "soft_skill")):
        for raw in as_list(payload.get(key)):
            item = as_dict(raw) if not isinstance(raw, str) else {"skill": raw}
            content = as_text(item.get("skill"))
            if content:
                requirements.append(_requirement(kind, content, item))

    qualifications = as_dict(payload.get("qualifications"))
    extractors = (
        ("experience", "experience", lambda item: as_text(item.get("description"))),
        ("education", "education", _education_content),
        ("certifications", "certification", lambda item: as_text(item.get("name"))),
    )
    for key, kind, content_of in extractors:
        for raw in as_list(qualifications.get(key)):
            item = as_dict(raw)
            content = content_of(item)
            if content:
                requirements.append(_requirement(kind, content, item))

    return requirements


def _keywords(payload: dict[str, Any]) -> list[JobKeyword]:
    keywords: list[JobKeyword] = []
    for raw in as_list(payload.get("keywords")):
        item = as_dict(raw) if not isinstance(raw, str) else {"text": raw}
        text = as_text(item.get("text"))
        if not text:
            continue
        frequency = as_number(item.get("frequency"))
        keywords.append(
            JobKeyword(
                id=new_id(),
                text=text,
                frequency=int(frequency) if frequency is not None and frequency >= 1 else 1,
                context=as_text(item.get("context")),
            )
        )
    return keywords


def _company_culture(payload: dict[str, Any]) -> list[str]:
    traits: list[str] = []
    for raw in as_list(payload.get("companyCulture")):
        trait = as_text(raw) if isinstance(raw, str) else as_text(as_dict(raw).get("trait"))
        if trait:
            traits.append(trait)
    return traits


def _experience_level(payload: dict[str, Any]) -> str:
    raw = payload.get("experienceLevel")
    level = as_text(raw) if isinstance(raw, str) else as_text(as_dict(raw).get("level"))
    return level or "mid"


def normalize_job_analysis(
    payload: Any,
    *,
    job_description_id: str | None = None,
    now: datetime | None = None,
) -> JobAnalysis:
    """Flatten a job analysis payload into typed records.

    Every record gets a fresh id; ids the model may have produced are ignored.
    """
    data = require_mapping(payload, "invalid job analysis response structure")

    optional = {
        attribute: as_text(data.get(key)) or None
        for key, attribute in _OPTIONAL_TEXT_FIELDS
    }

    return JobAnalysis(
        id=new_id(),
        job_description_id=job_description_id,
        requirements=_requirements(data),
        keywords=_keywords(data),
        experience_level=_experience_level(data),
        company_culture=_company_culture(data),
        responsibilities=as_text_list(data.get("responsibilities")),
        created_at=now_iso(now),
        **optional,
    )
