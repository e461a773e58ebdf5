from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol, Sequence, Union


@dataclass(frozen=True)
class TextBlock:
    text: str
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class ToolInvocationBlock:
    name: str
    input: Any
    kind: Literal["tool_invocation"] = "tool_invocation"


ContentBlock = Union[TextBlock, ToolInvocationBlock]
Message = tuple[ContentBlock, ...]


@dataclass(frozen=True)
class ToolSchema:
    name: str
    description: str
    input_schema: dict[str, Any]


@dataclass(frozen=True)
class CompletionOptions:
    model: str | None = None
    temperature: float = 0.2
    max_tokens: int = 1024
    tools: tuple[ToolSchema, ...] = field(default_factory=tuple)


class CompletionClient(Protocol):
    async def complete(self, prompt: str, options: CompletionOptions) -> Message: ...


def text_of(message: Sequence[ContentBlock]) -> str:
    return "".join(block.text for block in message if isinstance(block, TextBlock))
