from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone
from typing import Any

from resume_tailor.core.errors import ValidationError


def new_id() -> str:
    return str(uuid.uuid4())


def now_iso(now: datetime | None = None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def as_text(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def as_number(value: Any) -> float | None:
    """Return a finite number for ints, floats and numeric strings; bools are not numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def as_text_list(value: Any) -> list[str]:
    return [text for text in (as_text(item) for item in as_list(value)) if text]


def require_mapping(payload: Any, message: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError(message)
    return payload


def pick_choice(value: Any, choices: set[str], default: str) -> str:
    lowered = as_text(value).lower()
    return lowered if lowered in choices else default
