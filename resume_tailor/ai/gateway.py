from __future__ import annotations

import logging
import time

from resume_tailor.ai.capabilities import Capability, get_capability
from resume_tailor.ai.types import CompletionClient, CompletionOptions, Message
from resume_tailor.core.errors import ModelError

logger = logging.getLogger(__name__)


async def invoke(client: CompletionClient, capability: Capability, prompt: str) -> Message:
    """Issue exactly one completion call with the capability's fixed parameters.

    Retries are left to the client. Anything the client raises that is not
    already a ModelError is classified as ``unknown``.
    """
    spec = get_capability(capability)
    options = CompletionOptions(
        temperature=spec.temperature,
        max_tokens=spec.max_tokens,
        tools=(spec.tool,),
    )

    started = time.perf_counter()
    try:
        message = await client.complete(prompt, options)
    except ModelError:
        raise
    except Exception as exc:  # noqa: BLE001 - classified and re-raised
        raise ModelError(f"Completion call failed: {exc}", kind="unknown") from exc

    logger.info(
        "model_invoked capability=%s blocks=%s latency_ms=%s",
        capability,
        len(message),
        int((time.perf_counter() - started) * 1000),
    )
    return tuple(message)
