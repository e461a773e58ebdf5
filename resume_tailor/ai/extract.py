from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Sequence

from resume_tailor.ai.types import ContentBlock, ToolInvocationBlock, text_of
from resume_tailor.core.errors import ExtractionError

logger = logging.getLogger(__name__)

ExtractedPayload = Any

_FENCE_RE = re.compile(r"```(?:json|JSON)?[ \t]*\r?\n?(.*?)```", re.DOTALL)
_CLOSERS = {"{": "}", "[": "]"}

_MISSING = object()


def _from_tool_invocation(message: Sequence[ContentBlock], schema_name: str) -> Any:
    for block in message:
        if isinstance(block, ToolInvocationBlock) and block.name == schema_name and block.input is not None:
            return block.input
    return _MISSING


def _from_fenced_block(text: str) -> Any:
    for match in _FENCE_RE.finditer(text):
        interior = match.group(1).strip()
        if not interior:
            continue
        try:
            return json.loads(interior)
        except json.JSONDecodeError:
            continue
    return _MISSING


def _balanced_span_end(text: str, start: int) -> int | None:
    """Return the index just past the bracket closing ``text[start]``, string aware."""
    stack = [_CLOSERS[text[start]]]
    in_string = False
    escaped = False
    for index in range(start + 1, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in "}]":
            if char != stack[-1]:
                return None
            stack.pop()
            if not stack:
                return index + 1
    return None


def _from_embedded_json(text: str) -> Any:
    """First top-level bracket span that parses; nested spans are never candidates."""
    start = 0
    while start < len(text):
        if text[start] not in _CLOSERS:
            start += 1
            continue
        end = _balanced_span_end(text, start)
        if end is None:
            # An unclosed or mismatched span ends the scan; its interior is not top level.
            return _MISSING
        try:
            return json.loads(text[start:end])
        except json.JSONDecodeError:
            start = end
    return _MISSING


def _from_raw_text(text: str) -> Any:
    stripped = text.strip()
    if not stripped:
        return _MISSING
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        return _MISSING


_TEXT_STRATEGIES: tuple[tuple[str, Callable[[str], Any]], ...] = (
    ("fenced_block", _from_fenced_block),
    ("embedded_json", _from_embedded_json),
    ("raw_text", _from_raw_text),
)


def extract_payload(message: Sequence[ContentBlock], schema_name: str) -> ExtractedPayload:
    """Turn a raw model message into a generic payload.

    Strategies run in a fixed order and the first success wins: a matching
    tool invocation, a fenced code block, the first balanced JSON span in the
    text, then the whole text parsed as JSON.
    """
    payload = _from_tool_invocation(message, schema_name)
    if payload is not _MISSING:
        logger.debug("payload_extracted schema=%s strategy=tool_invocation", schema_name)
        return payload

    text = text_of(message)
    for strategy_name, strategy in _TEXT_STRATEGIES:
        payload = strategy(text)
        if payload is not _MISSING:
            logger.debug("payload_extracted schema=%s strategy=%s", schema_name, strategy_name)
            return payload

    logger.warning("payload_extraction_failed schema=%s text_len=%s", schema_name, len(text))
    raise ExtractionError("could not extract structured data")
