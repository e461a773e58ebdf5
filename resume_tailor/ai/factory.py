from functools import lru_cache

from resume_tailor.ai.config import load_ai_config
from resume_tailor.ai.types import CompletionClient

from resume_tailor.ai.providers.openai_provider import OpenAIProvider
from resume_tailor.ai.providers.claude_provider import ClaudeProvider


@lru_cache(maxsize=1)
def get_completion_client() -> CompletionClient:
    cfg = load_ai_config()

    if cfg.provider == "claude":
        return ClaudeProvider(model=cfg.model, timeout_s=cfg.timeout_s, max_retries=cfg.max_retries)

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model, timeout_s=cfg.timeout_s, max_retries=cfg.max_retries)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
