from __future__ import annotations

from datetime import date, datetime

from resume_tailor.schemas.domain import WorkExperience

_DAYS_PER_YEAR = 365.25


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    raw = value.strip()
    if len(raw) == 7:
        # YYYY-MM
        raw = f"{raw}-01"
    elif len(raw) == 4 and raw.isdigit():
        raw = f"{raw}-01-01"
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def total_years_experience(experiences: list[WorkExperience], *, today: date | None = None) -> float:
    """Sum work experience durations, rounded to the nearest half year.

    Entries with unparseable dates are skipped; current roles run until today.
    """
    if not experiences:
        return 0.0

    today = today or date.today()
    total_days = 0
    for exp in experiences:
        start = _parse_date(exp.start_date)
        end = today if exp.current else _parse_date(exp.end_date)
        if start is None or end is None or end < start:
            continue
        total_days += (end - start).days

    years = total_days / _DAYS_PER_YEAR
    return round(years * 2) / 2
