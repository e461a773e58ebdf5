from __future__ import annotations

from typing import Any

from resume_tailor.core.errors import ValidationError
from resume_tailor.schemas.domain import (
    BulletEnhancement,
    JobAnalysis,
    JobMatchAnalysis,
    KeyGap,
    KeyStrength,
    KeywordInsight,
    MatchKeyword,
    MatchKeywordAnalysis,
    OverallMatch,
    ProfessionalSummaryResult,
    SummaryOption,
)
from resume_tailor.scoring.heuristics import clamp_score

from .utils import as_dict, as_list, as_number, as_text, as_text_list, require_mapping

DEFAULT_BULLET_EXPLANATION = "Bullet point enhanced to better match job requirements."
DEFAULT_RECOMMENDATION_REASON = "This option best highlights your experience and skills."


def keywords_from_analysis(analysis: JobAnalysis) -> list[KeywordInsight]:
    """Derive keyword importance from the frequencies of an existing analysis."""
    insights: list[KeywordInsight] = []
    for keyword in analysis.keywords:
        if keyword.frequency > 2:
            importance = "high"
        elif keyword.frequency > 1:
            importance = "medium"
        else:
            importance = "low"
        insights.append(KeywordInsight(keyword=keyword.text, importance=importance, context=keyword.context))
    return insights


def normalize_keyword_extraction(payload: Any) -> list[KeywordInsight]:
    data = require_mapping(payload, "invalid keyword extraction response structure")
    skills = data.get("extractedSkills")
    if not isinstance(skills, list):
        raise ValidationError("invalid keyword extraction response: extractedSkills must be a list")

    insights: list[KeywordInsight] = []
    for raw in skills:
        item = as_dict(raw)
        keyword = as_text(item.get("skill"))
        confidence = as_text(item.get("confidence")).lower()
        if not keyword or confidence == "low":
            continue
        insights.append(
            KeywordInsight(
                keyword=keyword,
                importance="high" if confidence == "high" else "medium",
                context=as_text(item.get("context")),
            )
        )
    return insights


def normalize_bullet_enhancement(payload: Any) -> BulletEnhancement:
    data = require_mapping(payload, "invalid bullet point enhancement response structure")
    enhanced = as_text(data.get("enhancedBullet"))
    if not enhanced:
        raise ValidationError("invalid bullet point enhancement response: enhancedBullet is required")

    return BulletEnhancement(
        enhanced_bullet=enhanced,
        explanation=as_text(data.get("explanation")) or DEFAULT_BULLET_EXPLANATION,
        keywords_incorporated=as_text_list(data.get("keywordsIncorporated")),
    )


def _summary_option(raw: Any) -> SummaryOption | None:
    item = as_dict(raw) if not isinstance(raw, str) else {"text": raw}
    text = as_text(item.get("text"))
    if not text:
        return None
    word_count = as_number(item.get("wordCount"))
    return SummaryOption(
        text=text,
        focus=as_text(item.get("focus")),
        word_count=int(word_count) if word_count is not None and word_count >= 0 else len(text.split()),
        keywords=as_text_list(item.get("keywords")),
    )


def normalize_professional_summary(payload: Any) -> ProfessionalSummaryResult:
    data = require_mapping(payload, "invalid professional summary response structure")
    summaries = [option for option in map(_summary_option, as_list(data.get("summaries"))) if option is not None]
    if not summaries:
        raise ValidationError("invalid professional summary response: summaries must be a non-empty list")

    recommended = as_number(data.get("recommendedOption"))
    index = int(recommended) if recommended is not None else 0
    index = max(0, min(len(summaries) - 1, index))

    return ProfessionalSummaryResult(
        summaries=summaries,
        recommended_option=index,
        recommendation_reason=as_text(data.get("recommendationReason")) or DEFAULT_RECOMMENDATION_REASON,
    )


def _match_keywords(value: Any) -> list[MatchKeyword]:
    keywords: list[MatchKeyword] = []
    for raw in as_list(value):
        item = as_dict(raw) if not isinstance(raw, str) else {"keyword": raw}
        keyword = as_text(item.get("keyword"))
        if keyword:
            keywords.append(
                MatchKeyword(
                    keyword=keyword,
                    context=as_text(item.get("context")),
                    importance=as_text(item.get("importance")),
                )
            )
    return keywords


def _strengths(value: Any) -> list[KeyStrength]:
    strengths: list[KeyStrength] = []
    for raw in as_list(value):
        item = as_dict(raw) if not isinstance(raw, str) else {"strength": raw}
        strength = as_text(item.get("strength"))
        if strength:
            strengths.append(
                KeyStrength(
                    strength=strength,
                    evidence=as_text(item.get("evidence")),
                    relevance=as_text(item.get("relevance")),
                )
            )
    return strengths


def _gaps(value: Any) -> list[KeyGap]:
    gaps: list[KeyGap] = []
    for raw in as_list(value):
        item = as_dict(raw) if not isinstance(raw, str) else {"gap": raw}
        gap = as_text(item.get("gap"))
        if gap:
            gaps.append(
                KeyGap(
                    gap=gap,
                    importance=as_text(item.get("importance")),
                    mitigation=as_text(item.get("mitigation")),
                )
            )
    return gaps


def normalize_job_match(payload: Any) -> JobMatchAnalysis:
    data = require_mapping(payload, "invalid job match analysis response structure")
    overall = data.get("overallMatch")
    if not isinstance(overall, dict):
        raise ValidationError("invalid job match analysis response: overallMatch is required")
    score = as_number(overall.get("score"))
    if score is None:
        raise ValidationError("invalid job match analysis response: overallMatch.score must be numeric")

    dimension_scores: dict[str, float] = {}
    for name, value in as_dict(data.get("dimensionScores")).items():
        number = as_number(value)
        if number is not None:
            dimension_scores[str(name)] = number

    keyword_analysis = as_dict(data.get("keywordAnalysis"))
    return JobMatchAnalysis(
        overall_match=OverallMatch(
            score=clamp_score(score),
            assessment=as_text(overall.get("assessment")),
            recommendation=as_text(overall.get("recommendation")),
        ),
        dimension_scores=dimension_scores,
        key_strengths=_strengths(data.get("keyStrengths")),
        key_gaps=_gaps(data.get("keyGaps")),
        keyword_analysis=MatchKeywordAnalysis(
            present_keywords=_match_keywords(keyword_analysis.get("presentKeywords")),
            missing_keywords=_match_keywords(keyword_analysis.get("missingKeywords")),
        ),
        tailoring_recommendations=as_text_list(data.get("tailoringRecommendations")),
    )
