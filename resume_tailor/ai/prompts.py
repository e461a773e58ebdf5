from __future__ import annotations

import json
import re
from typing import Any, Callable, Mapping

from resume_tailor.ai.capabilities import Capability
from resume_tailor.core.errors import ValidationError
from resume_tailor.schemas.domain import JobDescription, Resume, TailoringSettings

JOB_ANALYSIS_TEMPLATE = """
You are an expert resume consultant and job market analyst.

Analyze the job description below and extract the information a candidate needs to tailor a resume.

<job_description>
{{JOB_DESCRIPTION}}
</job_description>

Respond with a JSON object using this structure:

```json
{
  "hardSkills": [{"skill": "name", "importance": "must_have|nice_to_have|preferred", "context": "where it appears"}],
  "softSkills": [{"skill": "name", "importance": "must_have|nice_to_have|preferred", "context": "where it appears"}],
  "qualifications": {
    "experience": [{"description": "experience requirement", "importance": "must_have|nice_to_have|preferred"}],
    "education": [{"type": "degree type", "field": "field of study", "importance": "must_have|nice_to_have|preferred"}],
    "certifications": [{"name": "certification", "importance": "must_have|nice_to_have|preferred"}]
  },
  "keywords": [{"text": "keyword", "frequency": 1, "context": "where it appears"}],
  "companyCulture": [{"trait": "value or trait"}],
  "experienceLevel": {"level": "entry|junior|mid|senior|executive"},
  "responsibilities": ["responsibility"],
  "salaryRange": "if stated",
  "industry": "if identifiable",
  "department": "if identifiable",
  "employmentType": "full-time|part-time|contract",
  "remoteWork": "remote|hybrid|on-site"
}
```

Use "must_have" for clearly required elements, "nice_to_have" for stated preferences and "preferred" for implied ones.
Ensure the JSON is valid.
"""

RESUME_TAILORING_TEMPLATE = """
You are an expert resume tailoring consultant.

Tailor the resume below to the job description while keeping every fact accurate.
Never invent employers, dates, degrees or metrics.

<resume>
{{RESUME}}
</resume>

<job_description>
{{JOB_DESCRIPTION}}
</job_description>
{{JOB_ANALYSIS}}
<tailoring_settings>
- Tailoring intensity: {{INTENSITY_LEVEL}} ({{INTENSITY}}/100)
- Preserve original voice and style: {{PRESERVE_VOICE}}
- Focus on keyword matching: {{FOCUS_KEYWORDS}}
</tailoring_settings>

<tailoring_guidelines>
{{INTENSITY_GUIDELINES}}
{{VOICE_GUIDELINES}}
{{KEYWORD_GUIDELINES}}
</tailoring_guidelines>

Return a JSON object with two keys:
- "tailoredResume": the complete tailored resume, same structure as the input
- "tailoringNotes": {"summary": "...", "keywordMatches": [{"keyword": "...", "source": "original|added", "section": "...", "importance": "high|medium|low"}], "majorChanges": [{"section": "...", "description": "..."}], "improvementSuggestions": [{"suggestion": "...", "reasoning": "..."}]}
"""

ATS_SCORE_TEMPLATE = """
You are an Applicant Tracking System specialist.

Evaluate how well the resume below would perform in an ATS screening for the job description.

<resume>
{{RESUME}}
</resume>

<job_description>
{{JOB_DESCRIPTION}}
</job_description>

Respond with a JSON object:

```json
{
  "atsScore": 0,
  "formatAnalysis": {"issues": ["formatting problem"]},
  "keywordAnalysis": {"missingKeywords": ["keyword"], "keywordSuggestions": "how to add them"},
  "qualificationAnalysis": {"missingQualifications": ["qualification"]},
  "sectionFeedback": {"summary": "feedback", "experience": "feedback", "skills": "feedback"},
  "improvementPriorities": [{"issue": "problem", "solution": "fix", "impact": "high|medium|low"}],
  "overallAssessment": "short assessment"
}
```

The atsScore is an integer from 0 to 100.
"""

BULLET_ENHANCEMENT_TEMPLATE = """
You are an expert resume writer.

Rewrite one resume bullet point for the role of {{ROLE_TITLE}} so it better matches the job description.
Keep it truthful, start with a strong action verb and quantify impact where the original supports it.
Tailoring intensity: {{INTENSITY}}/100.

<job_description>
{{JOB_DESCRIPTION}}
</job_description>

<bullet>
{{RESUME_BULLET}}
</bullet>

<other_bullets_for_context>
{{OTHER_BULLETS}}
</other_bullets_for_context>

Respond with a JSON object: {"enhancedBullet": "...", "explanation": "...", "keywordsIncorporated": ["..."]}
"""

PROFESSIONAL_SUMMARY_TEMPLATE = """
You are an expert resume writer.

Write three professional summary options for the candidate below.
The candidate has about {{YEARS_EXPERIENCE}} years of professional experience.

<resume>
{{RESUME}}
</resume>

<current_summary>
{{CURRENT_SUMMARY}}
</current_summary>

<target_job_description>
{{JOB_DESCRIPTION}}
</target_job_description>

Respond with a JSON object:
{"summaries": [{"text": "...", "focus": "...", "wordCount": 0, "keywords": ["..."]}], "recommendedOption": 0, "recommendationReason": "..."}
"""

SKILL_EXTRACTION_TEMPLATE = """
You are a skills taxonomy expert.

Extract the skills and keywords from the following {{TYPE}} text that a resume should mention.

<text>
{{TEXT}}
</text>

Respond with a JSON object:
{"extractedSkills": [{"skill": "...", "confidence": "High|Medium|Low", "context": "where it appears"}]}
"""

JOB_MATCH_TEMPLATE = """
You are a senior technical recruiter.

Assess how well the resume matches the job description.

<resume>
{{RESUME}}
</resume>

<job_description>
{{JOB_DESCRIPTION}}
</job_description>

Respond with a JSON object:

```json
{
  "overallMatch": {"score": 0, "assessment": "...", "recommendation": "..."},
  "dimensionScores": {"skills": 0, "experience": 0, "education": 0},
  "keyStrengths": [{"strength": "...", "evidence": "...", "relevance": "..."}],
  "keyGaps": [{"gap": "...", "importance": "...", "mitigation": "..."}],
  "keywordAnalysis": {
    "presentKeywords": [{"keyword": "...", "context": "...", "importance": "..."}],
    "missingKeywords": [{"keyword": "...", "context": "...", "importance": "..."}]
  },
  "tailoringRecommendations": ["..."]
}
```

Scores are integers from 0 to 100.
"""

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z_]+)\}\}")

_INTENSITY_GUIDELINES = {
    "low": (
        "## Intensity (low)\n"
        "- Make subtle wording adjustments and reorder information\n"
        "- Mostly adjust the professional summary and skills sections\n"
        "- Retain most of the original content and structure"
    ),
    "medium": (
        "## Intensity (medium)\n"
        "- Rephrase bullet points to emphasize relevant experience\n"
        "- Align terminology with the job description\n"
        "- Reorder content to put the most relevant experience first"
    ),
    "high": (
        "## Intensity (high)\n"
        "- Substantially rework bullet points and section content\n"
        "- Reframe experiences to address job requirements directly\n"
        "- Incorporate keywords aggressively and reorganize for relevance"
    ),
}


def intensity_level(intensity: int) -> str:
    if intensity < 33:
        return "low"
    if intensity < 66:
        return "medium"
    return "high"


def _voice_guidelines(preserve_voice: bool) -> str:
    if preserve_voice:
        return (
            "## Voice (preserve)\n"
            "- Keep the candidate's writing style, tone and distinctive phrases"
        )
    return (
        "## Voice (optimize)\n"
        "- Prefer industry-standard phrasing over the original voice"
    )


def _keyword_guidelines(focus_keywords: bool) -> str:
    if focus_keywords:
        return (
            "## Keywords (focus)\n"
            "- Use exact terms from the job description where they are accurate"
        )
    return (
        "## Keywords (natural)\n"
        "- Aim for conceptual alignment and readability over keyword density"
    )


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _require(inputs: Mapping[str, Any], *names: str) -> None:
    missing = [name for name in names if _is_blank(inputs.get(name))]
    if missing:
        raise ValidationError(f"missing required prompt input: {', '.join(missing)}")


def render(template: str, values: Mapping[str, Any]) -> str:
    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        value = values[key]
        return "" if value is None else str(value)

    return _PLACEHOLDER_RE.sub(_substitute, template).strip()


def _job_analysis(inputs: Mapping[str, Any]) -> str:
    _require(inputs, "job_description")
    return render(JOB_ANALYSIS_TEMPLATE, {"JOB_DESCRIPTION": inputs["job_description"]})


def _resume_tailoring(inputs: Mapping[str, Any]) -> str:
    _require(inputs, "resume", "job_description")
    resume: Resume = inputs["resume"]
    job: JobDescription = inputs["job_description"]
    if _is_blank(job.content):
        raise ValidationError("missing required prompt input: job_description.content")
    settings: TailoringSettings = inputs.get("settings") or TailoringSettings()

    analysis_block = ""
    if job.analysis is not None:
        analysis_json = json.dumps(job.analysis.to_wire(), indent=2, ensure_ascii=False)
        analysis_block = f"\n<job_analysis>\n{analysis_json}\n</job_analysis>\n"

    level = intensity_level(settings.intensity)
    return render(
        RESUME_TAILORING_TEMPLATE,
        {
            "RESUME": json.dumps(resume.to_wire(), indent=2, ensure_ascii=False),
            "JOB_DESCRIPTION": job.content,
            "JOB_ANALYSIS": analysis_block,
            "INTENSITY_LEVEL": level,
            "INTENSITY": settings.intensity,
            "PRESERVE_VOICE": "Yes" if settings.preserve_voice else "No",
            "FOCUS_KEYWORDS": "Yes" if settings.focus_keywords else "No",
            "INTENSITY_GUIDELINES": _INTENSITY_GUIDELINES[level],
            "VOICE_GUIDELINES": _voice_guidelines(settings.preserve_voice),
            "KEYWORD_GUIDELINES": _keyword_guidelines(settings.focus_keywords),
        },
    )


def _ats_score(inputs: Mapping[str, Any]) -> str:
    _require(inputs, "resume_text", "job_description")
    return render(
        ATS_SCORE_TEMPLATE,
        {"RESUME": inputs["resume_text"], "JOB_DESCRIPTION": inputs["job_description"]},
    )


def _bullet_enhancement(inputs: Mapping[str, Any]) -> str:
    _require(inputs, "bullet", "job_description", "role_title")
    other_bullets = inputs.get("other_bullets") or []
    return render(
        BULLET_ENHANCEMENT_TEMPLATE,
        {
            "RESUME_BULLET": inputs["bullet"],
            "JOB_DESCRIPTION": inputs["job_description"],
            "ROLE_TITLE": inputs["role_title"],
            "OTHER_BULLETS": "\n".join(other_bullets),
            "INTENSITY": inputs.get("intensity", 50),
        },
    )


def _professional_summary(inputs: Mapping[str, Any]) -> str:
    _require(inputs, "resume_text")
    return render(
        PROFESSIONAL_SUMMARY_TEMPLATE,
        {
            "RESUME": inputs["resume_text"],
            "CURRENT_SUMMARY": inputs.get("current_summary") or "",
            "YEARS_EXPERIENCE": inputs.get("years_experience", 0),
            "JOB_DESCRIPTION": inputs.get("job_description") or "",
        },
    )


def _keyword_extraction(inputs: Mapping[str, Any]) -> str:
    _require(inputs, "text")
    return render(SKILL_EXTRACTION_TEMPLATE, {"TEXT": inputs["text"], "TYPE": inputs.get("type") or "job"})


def _job_match(inputs: Mapping[str, Any]) -> str:
    _require(inputs, "resume_text", "job_description")
    return render(
        JOB_MATCH_TEMPLATE,
        {"RESUME": inputs["resume_text"], "JOB_DESCRIPTION": inputs["job_description"]},
    )


_COMPOSERS: dict[Capability, Callable[[Mapping[str, Any]], str]] = {
    "job_analysis": _job_analysis,
    "resume_tailoring": _resume_tailoring,
    "ats_score": _ats_score,
    "bullet_enhancement": _bullet_enhancement,
    "professional_summary": _professional_summary,
    "keyword_extraction": _keyword_extraction,
    "job_match": _job_match,
}


def compose_prompt(capability: Capability, **inputs: Any) -> str:
    """Build the prompt for a capability, failing fast on missing inputs."""
    composer = _COMPOSERS.get(capability)
    if composer is None:
        raise ValueError(f"Unknown capability '{capability}'")
    return composer(inputs)
