from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from resume_tailor.core.errors import ValidationError
from resume_tailor.schemas.domain import (
    ATSScoreResult,
    KeywordMatch,
    MajorChange,
    Resume,
    TailoringResult,
)
from resume_tailor.scoring.heuristics import build_tailoring_feedback, tailoring_score

from .utils import as_dict, as_list, as_text, now_iso, pick_choice, require_mapping

_IDENTITY_FIELDS = ("id", "userId", "createdAt")
_IMPORTANCE = {"high", "medium", "low"}


def _drop_nulls(value: Any) -> Any:
    """Strip null values at every depth so schema defaults apply."""
    if isinstance(value, dict):
        return {key: _drop_nulls(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_drop_nulls(item) for item in value if item is not None]
    return value


def restore_identity(tailored: dict[str, Any], original: Resume, *, now: datetime | None = None) -> Resume:
    """Rebuild the tailored resume on top of the original.

    Sections the model left out (or nulled) keep their original content, and
    identity fields always come from the original; only updatedAt moves.
    """
    wire_original = original.to_wire()
    merged = dict(wire_original)
    for key, value in _drop_nulls(tailored).items():
        if key in _IDENTITY_FIELDS or key in {"user_id", "created_at"}:
            continue
        merged[key] = value

    for key in _IDENTITY_FIELDS:
        merged[key] = wire_original[key]
    merged["updatedAt"] = now_iso(now)
    merged.pop("updated_at", None)

    try:
        return Resume.model_validate(merged)
    except PydanticValidationError as exc:
        raise ValidationError(f"invalid tailored resume structure: {exc.error_count()} invalid field(s)") from exc


def _keyword_matches(notes: dict[str, Any]) -> list[KeywordMatch]:
    matches: list[KeywordMatch] = []
    for raw in as_list(notes.get("keywordMatches")):
        item = as_dict(raw)
        keyword = as_text(item.get("keyword"))
        if not keyword:
            continue
        matches.append(
            KeywordMatch(
                keyword=keyword,
                found=as_text(item.get("source")).lower() == "original",
                importance=pick_choice(item.get("importance"), _IMPORTANCE, "medium"),
            )
        )
    return matches


def _suggestions(notes: dict[str, Any]) -> list[dict[str, Any]]:
    suggestions: list[dict[str, Any]] = []
    for raw in as_list(notes.get("improvementSuggestions")):
        if isinstance(raw, str) and raw.strip():
            suggestions.append({"suggestion": raw.strip()})
        elif isinstance(raw, dict):
            suggestions.append(raw)
    return suggestions


def _changes(notes: dict[str, Any]) -> list[MajorChange]:
    changes: list[MajorChange] = []
    for raw in as_list(notes.get("majorChanges")):
        item = as_dict(raw)
        description = as_text(item.get("description"))
        if description:
            changes.append(MajorChange(section=as_text(item.get("section")), description=description))
    return changes


def normalize_tailoring(payload: Any, original: Resume, *, now: datetime | None = None) -> TailoringResult:
    data = require_mapping(payload, "invalid tailoring response structure")
    tailored = data.get("tailoredResume")
    notes = data.get("tailoringNotes")
    if not isinstance(tailored, dict) or not isinstance(notes, dict):
        raise ValidationError("invalid tailoring response structure")

    tailored_resume = restore_identity(tailored, original, now=now)
    keyword_matches = _keyword_matches(notes)
    suggestions = _suggestions(notes)

    return TailoringResult(
        tailored_resume=tailored_resume,
        ats_score=ATSScoreResult(
            score=tailoring_score(len(keyword_matches), len(suggestions)),
            feedback=build_tailoring_feedback(len(keyword_matches), suggestions),
        ),
        keyword_matches=keyword_matches,
        changes=_changes(notes),
        summary=as_text(notes.get("summary")),
    )
