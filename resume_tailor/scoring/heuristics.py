from __future__ import annotations

import math
from typing import Any

from resume_tailor.core.config.heuristics import get_heuristic_value
from resume_tailor.schemas.domain import FeedbackItem, Severity

ELLIPSIS = "…"


def _int_setting(path: str, default: int) -> int:
    value = get_heuristic_value(path, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def clamp_score(value: float) -> int:
    low = _int_setting("score_bounds.min", 0)
    high = _int_setting("score_bounds.max", 100)
    if not math.isfinite(value):
        return low if math.isnan(value) or value < 0 else high
    # Half rounds up: 69.5 scores as 70.
    return max(low, min(high, math.floor(value + 0.5)))


def tailoring_score(keyword_match_count: int, improvement_suggestion_count: int) -> int:
    base = _int_setting("tailoring.base_score", 60)
    per_match = _int_setting("tailoring.per_keyword_match", 2)
    per_suggestion = _int_setting("tailoring.per_improvement_suggestion", 3)
    return clamp_score(base + per_match * keyword_match_count - per_suggestion * improvement_suggestion_count)


def keyword_coverage_severity(keyword_match_count: int) -> Severity:
    if keyword_match_count > _int_setting("tailoring.keyword_severity.low_above", 10):
        return "low"
    if keyword_match_count > _int_setting("tailoring.keyword_severity.medium_above", 5):
        return "medium"
    return "high"


def normalize_severity(value: Any) -> Severity:
    """Map a free-text impact string onto a severity by substring match."""
    lowered = str(value or "").strip().lower()
    if lowered in {"low", "medium", "high"}:
        return lowered  # type: ignore[return-value]
    if "high" in lowered:
        return "high"
    if "low" in lowered:
        return "low"
    return "medium"


def truncated_list(items: list[str], limit: int) -> str:
    shown = ", ".join(items[:limit])
    if len(items) > limit:
        return f"{shown}{ELLIPSIS}"
    return shown


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def build_ats_feedback(payload: dict[str, Any], raw_score: float) -> list[FeedbackItem]:
    """Fold the optional parts of an ATS payload into one ordered feedback list.

    ``raw_score`` is the model score before rounding and clamping.

    Order: format issues, missing keywords, missing qualifications, per-section
    feedback, prioritized improvements, then an overall fallback entry only
    when nothing else produced feedback.
    """
    feedback: list[FeedbackItem] = []

    high_format_count = _int_setting("feedback.format_high_count", 2)
    for index, issue in enumerate(_strings(_mapping(payload.get("formatAnalysis")).get("issues"))):
        feedback.append(
            FeedbackItem(
                category="Format",
                message=issue,
                severity="high" if index < high_format_count else "medium",
            )
        )

    keyword_analysis = _mapping(payload.get("keywordAnalysis"))
    missing_keywords = _strings(keyword_analysis.get("missingKeywords"))
    if missing_keywords:
        limit = _int_setting("feedback.missing_keywords_limit", 5)
        feedback.append(
            FeedbackItem(
                category="Keywords",
                message=f"Missing important keywords: {truncated_list(missing_keywords, limit)}",
                severity="high",
            )
        )
        suggestions = keyword_analysis.get("keywordSuggestions")
        if isinstance(suggestions, str) and suggestions.strip():
            feedback.append(FeedbackItem(category="Keywords", message=suggestions.strip(), severity="medium"))

    missing_qualifications = _strings(_mapping(payload.get("qualificationAnalysis")).get("missingQualifications"))
    if missing_qualifications:
        limit = _int_setting("feedback.missing_qualifications_limit", 3)
        feedback.append(
            FeedbackItem(
                category="Qualifications",
                message=f"Missing qualifications: {truncated_list(missing_qualifications, limit)}",
                severity="high",
            )
        )

    for section, message in _mapping(payload.get("sectionFeedback")).items():
        if not isinstance(message, str) or not message.strip():
            continue
        name = str(section)
        feedback.append(
            FeedbackItem(
                category=f"Section: {name[:1].upper()}{name[1:]}",
                message=message.strip(),
                severity="medium",
            )
        )

    priorities = payload.get("improvementPriorities")
    for priority in priorities if isinstance(priorities, list) else []:
        if not isinstance(priority, dict):
            continue
        issue = str(priority.get("issue") or "").strip()
        solution = str(priority.get("solution") or "").strip()
        if not issue or not solution:
            continue
        feedback.append(
            FeedbackItem(
                category="Priority Improvement",
                message=f"{issue}: {solution}",
                severity=normalize_severity(priority.get("impact") or "medium"),
            )
        )

    overall = payload.get("overallAssessment")
    if not feedback and isinstance(overall, str) and overall.strip():
        threshold = _int_setting("feedback.overall_high_below", 70)
        feedback.append(
            FeedbackItem(
                category="Overall",
                message=overall.strip(),
                severity="high" if raw_score < threshold else "medium",
            )
        )

    return feedback


def build_tailoring_feedback(keyword_match_count: int, suggestions: list[dict[str, Any]]) -> list[FeedbackItem]:
    feedback = [
        FeedbackItem(
            category="Keyword Optimization",
            message=f"Resume includes {keyword_match_count} keywords matching the job description.",
            severity=keyword_coverage_severity(keyword_match_count),
        )
    ]
    for suggestion in suggestions:
        feedback.append(
            FeedbackItem(
                category="Content Improvement",
                message=str(suggestion.get("suggestion") or "").strip() or "Improve resume content",
                severity="high" if suggestion.get("reasoning") else "medium",
            )
        )
    return feedback
