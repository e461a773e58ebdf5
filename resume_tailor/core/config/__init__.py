from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    ai_provider: str
    ai_model: str | None
    anthropic_api_key: str | None
    openai_api_key: str | None
    openai_base_url: str | None
    ai_timeout_s: float
    ai_max_retries: int
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None


settings = Settings(
    ai_provider=(_get_env("AI_PROVIDER", "claude") or "claude").strip().lower(),
    ai_model=_get_env("AI_MODEL"),
    anthropic_api_key=_get_env("ANTHROPIC_API_KEY"),
    openai_api_key=_get_env("OPENAI_API_KEY"),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 60.0),
    ai_max_retries=_get_env_int("AI_MAX_RETRIES", 3),
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
)

if settings.ai_provider not in {"claude", "openai"}:
    raise RuntimeError("AI_PROVIDER must be either 'claude' or 'openai'.")

__all__ = ["Settings", "settings"]
