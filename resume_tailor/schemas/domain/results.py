from __future__ import annotations

from pydantic import Field

from .base import DomainModel, Importance, Severity
from .resume import Resume


class FeedbackItem(DomainModel):
    category: str
    message: str
    severity: Severity


class ATSScoreResult(DomainModel):
    score: int = Field(ge=0, le=100)
    feedback: list[FeedbackItem] = Field(default_factory=list)


class KeywordMatch(DomainModel):
    keyword: str
    found: bool
    importance: Importance = "medium"


class MajorChange(DomainModel):
    section: str = ""
    description: str


class TailoringResult(DomainModel):
    tailored_resume: Resume
    ats_score: ATSScoreResult
    keyword_matches: list[KeywordMatch] = Field(default_factory=list)
    changes: list[MajorChange] = Field(default_factory=list)
    summary: str = ""


class BulletEnhancement(DomainModel):
    enhanced_bullet: str
    explanation: str
    keywords_incorporated: list[str] = Field(default_factory=list)


class SummaryOption(DomainModel):
    text: str
    focus: str = ""
    word_count: int = Field(default=0, ge=0)
    keywords: list[str] = Field(default_factory=list)


class ProfessionalSummaryResult(DomainModel):
    summaries: list[SummaryOption] = Field(min_length=1)
    recommended_option: int = Field(default=0, ge=0)
    recommendation_reason: str


class KeywordInsight(DomainModel):
    keyword: str
    importance: Importance
    context: str = ""


class OverallMatch(DomainModel):
    score: int = Field(ge=0, le=100)
    assessment: str = ""
    recommendation: str = ""


class KeyStrength(DomainModel):
    strength: str
    evidence: str = ""
    relevance: str = ""


class KeyGap(DomainModel):
    gap: str
    importance: str = ""
    mitigation: str = ""


class MatchKeyword(DomainModel):
    keyword: str
    context: str = ""
    importance: str = ""


class MatchKeywordAnalysis(DomainModel):
    present_keywords: list[MatchKeyword] = Field(default_factory=list)
    missing_keywords: list[MatchKeyword] = Field(default_factory=list)


class JobMatchAnalysis(DomainModel):
    overall_match: OverallMatch
    dimension_scores: dict[str, float] = Field(default_factory=dict)
    key_strengths: list[KeyStrength] = Field(default_factory=list)
    key_gaps: list[KeyGap] = Field(default_factory=list)
    keyword_analysis: MatchKeywordAnalysis = Field(default_factory=MatchKeywordAnalysis)
    tailoring_recommendations: list[str] = Field(default_factory=list)
