from __future__ import annotations

import logging
from typing import Any

import anthropic

from resume_tailor.ai.types import CompletionOptions, ContentBlock, Message, TextBlock, ToolInvocationBlock
from resume_tailor.core.config import settings
from resume_tailor.core.errors import ModelError, model_error_kind

logger = logging.getLogger(__name__)


def _to_blocks(content: list[Any]) -> Message:
    blocks: list[ContentBlock] = []
    for block in content:
        block_type = getattr(block, "type", None)
        if block_type == "text":
            blocks.append(TextBlock(text=block.text or ""))
        elif block_type == "tool_use":
            blocks.append(ToolInvocationBlock(name=block.name, input=block.input))
    return tuple(blocks)


def _classify(exc: Exception) -> ModelError:
    if isinstance(exc, anthropic.APIConnectionError):
        # APITimeoutError is a subclass of APIConnectionError
        return ModelError(f"Anthropic connection error: {exc}", kind="transient")
    if isinstance(exc, anthropic.APIStatusError):
        return ModelError(
            f"Anthropic API error ({exc.status_code}): {exc.message}",
            kind=model_error_kind(exc.status_code),
            status_code=exc.status_code,
        )
    return ModelError(f"Anthropic client error: {exc}", kind="unknown")


class ClaudeProvider:
    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        timeout_s: float = 60.0,
        max_retries: int = 3,
    ):
        self._model = model
        key = (api_key or settings.anthropic_api_key or "").strip()
        if not key:
            raise ModelError("ANTHROPIC_API_KEY is missing", kind="auth")

        self._client = anthropic.AsyncAnthropic(
            api_key=key,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    async def complete(self, prompt: str, options: CompletionOptions) -> Message:
        create_kwargs: dict[str, Any] = {
            "model": options.model or self._model,
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if options.tools:
            create_kwargs["tools"] = [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "input_schema": tool.input_schema,
                }
                for tool in options.tools
            ]

        try:
            response = await self._client.messages.create(**create_kwargs)
        except anthropic.AnthropicError as exc:
            error = _classify(exc)
            logger.warning("claude_completion_failed model=%s kind=%s: %s", create_kwargs["model"], error.kind, exc)
            raise error from exc

        return _to_blocks(list(response.content or []))
