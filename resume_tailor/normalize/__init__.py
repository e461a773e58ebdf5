from .normalize_ats import normalize_ats_score
from .normalize_content import (
    keywords_from_analysis,
    normalize_bullet_enhancement,
    normalize_job_match,
    normalize_keyword_extraction,
    normalize_professional_summary,
)
from .normalize_jd import normalize_job_analysis
from .normalize_tailoring import normalize_tailoring, restore_identity

__all__ = [
    "keywords_from_analysis",
    "normalize_ats_score",
    "normalize_bullet_enhancement",
    "normalize_job_analysis",
    "normalize_job_match",
    "normalize_keyword_extraction",
    "normalize_professional_summary",
    "normalize_tailoring",
    "restore_identity",
]
