from .heuristics import (
    build_ats_feedback,
    build_tailoring_feedback,
    clamp_score,
    keyword_coverage_severity,
    normalize_severity,
    tailoring_score,
    truncated_list,
)

__all__ = [
    "build_ats_feedback",
    "build_tailoring_feedback",
    "clamp_score",
    "keyword_coverage_severity",
    "normalize_severity",
    "tailoring_score",
    "truncated_list",
]
