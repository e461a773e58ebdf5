from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from resume_tailor.ai.types import ToolSchema

Capability = Literal[
    "job_analysis",
    "resume_tailoring",
    "ats_score",
    "bullet_enhancement",
    "professional_summary",
    "keyword_extraction",
    "job_match",
]

_IMPORTANCE_ENUM = ["must_have", "nice_to_have", "preferred"]


@dataclass(frozen=True)
class CapabilitySpec:
    capability: Capability
    tool: ToolSchema
    temperature: float
    max_tokens: int

    @property
    def schema_name(self) -> str:
        return self.tool.name


def _string_list(description: str | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "array", "items": {"type": "string"}}
    if description:
        schema["description"] = description
    return schema


def _object_list(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    item: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        item["required"] = required
    return {"type": "array", "items": item}


def _skill_list() -> dict[str, Any]:
    return _object_list(
        {
            "skill": {"type": "string"},
            "importance": {"type": "string", "enum": _IMPORTANCE_ENUM},
            "context": {"type": "string"},
        },
        required=["skill"],
    )


_JOB_ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "hardSkills": _skill_list(),
        "softSkills": _skill_list(),
        "qualifications": {
            "type": "object",
            "properties": {
                "experience": _object_list(
                    {
                        "description": {"type": "string"},
                        "importance": {"type": "string", "enum": _IMPORTANCE_ENUM},
                    }
                ),
                "education": _object_list(
                    {
                        "type": {"type": "string"},
                        "field": {"type": "string"},
                        "importance": {"type": "string", "enum": _IMPORTANCE_ENUM},
                    }
                ),
                "certifications": _object_list(
                    {
                        "name": {"type": "string"},
                        "importance": {"type": "string", "enum": _IMPORTANCE_ENUM},
                    }
                ),
            },
        },
        "keywords": _object_list(
            {
                "text": {"type": "string"},
                "frequency": {"type": "number"},
                "context": {"type": "string"},
            },
            required=["text"],
        ),
        "companyCulture": _object_list({"trait": {"type": "string"}}),
        "experienceLevel": {"type": "object", "properties": {"level": {"type": "string"}}},
        "responsibilities": _string_list(),
        "salaryRange": {"type": "string"},
        "industry": {"type": "string"},
        "department": {"type": "string"},
        "employmentType": {"type": "string"},
        "remoteWork": {"type": "string"},
    },
}

_TAILORING_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "tailoredResume": {"type": "object", "description": "The complete tailored resume"},
        "tailoringNotes": {
            "type": "object",
            "properties": {
                "summary": {"type": "string"},
                "keywordMatches": _object_list(
                    {
                        "keyword": {"type": "string"},
                        "source": {"type": "string", "enum": ["original", "added"]},
                        "section": {"type": "string"},
                        "importance": {"type": "string", "enum": ["high", "medium", "low"]},
                    }
                ),
                "majorChanges": _object_list(
                    {
                        "section": {"type": "string"},
                        "description": {"type": "string"},
                    }
                ),
                "improvementSuggestions": _object_list(
                    {
                        "suggestion": {"type": "string"},
                        "reasoning": {"type": "string"},
                    }
                ),
            },
        },
    },
    "required": ["tailoredResume", "tailoringNotes"],
}

_ATS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "atsScore": {"type": "number"},
        "formatAnalysis": {"type": "object", "properties": {"issues": _string_list()}},
        "keywordAnalysis": {
            "type": "object",
            "properties": {
                "missingKeywords": _string_list(),
                "keywordSuggestions": {"type": "string"},
            },
        },
        "qualificationAnalysis": {
            "type": "object",
            "properties": {"missingQualifications": _string_list()},
        },
        "sectionFeedback": {"type": "object"},
        "improvementPriorities": _object_list(
            {
                "issue": {"type": "string"},
                "solution": {"type": "string"},
                "impact": {"type": "string"},
            }
        ),
        "overallAssessment": {"type": "string"},
    },
    "required": ["atsScore"],
}

_BULLET_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "enhancedBullet": {"type": "string"},
        "explanation": {"type": "string"},
        "keywordsIncorporated": _string_list(),
    },
    "required": ["enhancedBullet"],
}

_SUMMARY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "summaries": _object_list(
            {
                "text": {"type": "string"},
                "focus": {"type": "string"},
                "wordCount": {"type": "number"},
                "keywords": _string_list(),
            },
            required=["text"],
        ),
        "recommendedOption": {"type": "number"},
        "recommendationReason": {"type": "string"},
    },
    "required": ["summaries"],
}

_KEYWORD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "extractedSkills": _object_list(
            {
                "skill": {"type": "string"},
                "confidence": {"type": "string", "enum": ["High", "Medium", "Low"]},
                "context": {"type": "string"},
            }
        ),
    },
    "required": ["extractedSkills"],
}

_KEYWORD_ITEM = {
    "keyword": {"type": "string"},
    "context": {"type": "string"},
    "importance": {"type": "string"},
}

_JOB_MATCH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "overallMatch": {
            "type": "object",
            "properties": {
                "score": {"type": "number"},
                "assessment": {"type": "string"},
                "recommendation": {"type": "string"},
            },
            "required": ["score"],
        },
        "dimensionScores": {"type": "object"},
        "keyStrengths": _object_list(
            {
                "strength": {"type": "string"},
                "evidence": {"type": "string"},
                "relevance": {"type": "string"},
            }
        ),
        "keyGaps": _object_list(
            {
                "gap": {"type": "string"},
                "importance": {"type": "string"},
                "mitigation": {"type": "string"},
            }
        ),
        "keywordAnalysis": {
            "type": "object",
            "properties": {
                "presentKeywords": _object_list(_KEYWORD_ITEM),
                "missingKeywords": _object_list(_KEYWORD_ITEM),
            },
        },
        "tailoringRecommendations": _string_list(),
    },
    "required": ["overallMatch"],
}


CAPABILITIES: dict[Capability, CapabilitySpec] = {
    "job_analysis": CapabilitySpec(
        capability="job_analysis",
        tool=ToolSchema("job_analysis", "Tool for structured job description analysis", _JOB_ANALYSIS_SCHEMA),
        temperature=0.3,
        max_tokens=2048,
    ),
    "resume_tailoring": CapabilitySpec(
        capability="resume_tailoring",
        tool=ToolSchema("resume_tailoring", "Tool for tailoring resumes to match job descriptions", _TAILORING_SCHEMA),
        temperature=0.2,
        max_tokens=4096,
    ),
    "ats_score": CapabilitySpec(
        capability="ats_score",
        tool=ToolSchema("ats_score_analysis", "Tool for analyzing resume ATS compatibility", _ATS_SCHEMA),
        temperature=0.2,
        max_tokens=2048,
    ),
    "bullet_enhancement": CapabilitySpec(
        capability="bullet_enhancement",
        tool=ToolSchema("bullet_enhancement", "Tool for enhancing resume bullet points", _BULLET_SCHEMA),
        temperature=0.3,
        max_tokens=1024,
    ),
    "professional_summary": CapabilitySpec(
        capability="professional_summary",
        tool=ToolSchema("professional_summary", "Tool for generating professional resume summaries", _SUMMARY_SCHEMA),
        temperature=0.5,
        max_tokens=1536,
    ),
    "keyword_extraction": CapabilitySpec(
        capability="keyword_extraction",
        tool=ToolSchema("skill_extraction", "Tool for extracting skills and keywords from text", _KEYWORD_SCHEMA),
        temperature=0.1,
        max_tokens=1536,
    ),
    "job_match": CapabilitySpec(
        capability="job_match",
        tool=ToolSchema(
            "job_match_analysis",
            "Tool for analyzing how well a resume matches a job description",
            _JOB_MATCH_SCHEMA,
        ),
        temperature=0.2,
        max_tokens=2048,
    ),
}


def get_capability(capability: Capability) -> CapabilitySpec:
    try:
        return CAPABILITIES[capability]
    except KeyError as exc:
        raise ValueError(f"Unknown capability '{capability}'") from exc
