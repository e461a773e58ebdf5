from __future__ import annotations

import json
import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from resume_tailor.ai.types import CompletionOptions, ContentBlock, Message, TextBlock, ToolInvocationBlock
from resume_tailor.core.config import settings
from resume_tailor.core.errors import ModelError, model_error_kind

logger = logging.getLogger(__name__)


def _to_blocks(message: Any) -> Message:
    blocks: list[ContentBlock] = []
    content = getattr(message, "content", None)
    if content:
        blocks.append(TextBlock(text=str(content)))

    for call in getattr(message, "tool_calls", None) or []:
        function = getattr(call, "function", None)
        if function is None:
            continue
        arguments = function.arguments or ""
        try:
            parsed = json.loads(arguments) if arguments else {}
        except json.JSONDecodeError:
            # Keep the raw arguments so the text fallbacks can still find the payload.
            blocks.append(TextBlock(text=arguments))
            continue
        blocks.append(ToolInvocationBlock(name=function.name, input=parsed))
    return tuple(blocks)


def _classify(exc: Exception) -> ModelError:
    if isinstance(exc, openai.APIConnectionError):
        return ModelError(f"OpenAI connection error: {exc}", kind="transient")
    if isinstance(exc, openai.APIStatusError):
        return ModelError(
            f"OpenAI API error ({exc.status_code}): {exc.message}",
            kind=model_error_kind(exc.status_code),
            status_code=exc.status_code,
        )
    return ModelError(f"OpenAI client error: {exc}", kind="unknown")


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_s: float = 60.0,
        max_retries: int = 3,
    ):
        self._model = model
        key = (api_key or settings.openai_api_key or "").strip()
        if not key:
            raise ModelError("OPENAI_API_KEY is missing", kind="auth")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or settings.openai_base_url or None),
            timeout=timeout_s,
            max_retries=max_retries,
        )

    async def complete(self, prompt: str, options: CompletionOptions) -> Message:
        create_kwargs: dict[str, Any] = {
            "model": options.model or self._model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
        }
        if options.tools:
            create_kwargs["tools"] = [
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description,
                        "parameters": tool.input_schema,
                    },
                }
                for tool in options.tools
            ]

        try:
            response = await self._client.chat.completions.create(**create_kwargs)
        except openai.OpenAIError as exc:
            error = _classify(exc)
            logger.warning("openai_completion_failed model=%s kind=%s: %s", create_kwargs["model"], error.kind, exc)
            raise error from exc

        if not response.choices:
            return ()
        return _to_blocks(response.choices[0].message)
