from __future__ import annotations

from typing import Any

from resume_tailor.core.errors import ValidationError
from resume_tailor.schemas.domain import ATSScoreResult
from resume_tailor.scoring.heuristics import build_ats_feedback, clamp_score

from .utils import as_number, require_mapping


def normalize_ats_score(payload: Any) -> ATSScoreResult:
    data = require_mapping(payload, "invalid ATS score response structure")
    raw_score = as_number(data.get("atsScore"))
    if raw_score is None:
        raise ValidationError("invalid ATS score response: atsScore must be numeric")

    return ATSScoreResult(score=clamp_score(raw_score), feedback=build_ats_feedback(data, raw_score))
