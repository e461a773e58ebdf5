from dataclasses import dataclass

from resume_tailor.core.config import settings

DEFAULT_MODELS = {
    "claude": "claude-3-7-sonnet-20250219",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    timeout_s: float
    max_retries: int


def load_ai_config() -> AIConfig:
    provider = settings.ai_provider
    model = (settings.ai_model or DEFAULT_MODELS.get(provider, "")).strip()
    return AIConfig(
        provider=provider,
        model=model,
        timeout_s=settings.ai_timeout_s,
        max_retries=settings.ai_max_retries,
    )
