from .base import DomainModel, Importance, Severity
from .job import JobAnalysis, JobDescription, JobKeyword, JobRequirement
from .resume import (
    Certification,
    CustomSection,
    CustomSectionEntry,
    Education,
    PersonalInfo,
    ProfessionalSummary,
    Project,
    Resume,
    RoleContext,
    Skill,
    SocialLink,
    TailoringSettings,
    WorkExperience,
)
from .results import (
    ATSScoreResult,
    BulletEnhancement,
    FeedbackItem,
    JobMatchAnalysis,
    KeyGap,
    KeyStrength,
    KeywordInsight,
    KeywordMatch,
    MajorChange,
    MatchKeyword,
    MatchKeywordAnalysis,
    OverallMatch,
    ProfessionalSummaryResult,
    SummaryOption,
    TailoringResult,
)

__all__ = [
    "DomainModel",
    "Importance",
    "Severity",
    "JobAnalysis",
    "JobDescription",
    "JobKeyword",
    "JobRequirement",
    "Certification",
    "CustomSection",
    "CustomSectionEntry",
    "Education",
    "PersonalInfo",
    "ProfessionalSummary",
    "Project",
    "Resume",
    "RoleContext",
    "Skill",
    "SocialLink",
    "TailoringSettings",
    "WorkExperience",
    "ATSScoreResult",
    "BulletEnhancement",
    "FeedbackItem",
    "JobMatchAnalysis",
    "KeyGap",
    "KeyStrength",
    "KeywordInsight",
    "KeywordMatch",
    "MajorChange",
    "MatchKeyword",
    "MatchKeywordAnalysis",
    "OverallMatch",
    "ProfessionalSummaryResult",
    "SummaryOption",
    "TailoringResult",
]
