"""Conversation message types."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel, Field

from chatdispatch.kernel.tool import ToolCallRequest

Role = Literal["system", "user", "assistant", "tool"]


class Message(BaseModel):
    """One entry of a conversation."""

    role: Role
    content: str
    name: str | None = None


class Conversation:
    """Ordered message sequence forming the model's context for one request.

    Messages are only ever appended; the order is never changed.
    """

    def __init__(self, messages: list[Message] | None = None) -> None:
        self._messages: list[Message] = list(messages or [])

    def append(self, message: Message) -> Conversation:
        self._messages.append(message)
        return self

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"Conversation({self._messages!r})"


class CompletionResult(BaseModel):
    """What the model returned for one completion round."""

    content: str | None = None
    tool_calls: list[ToolCallRequest] = Field(default_factory=list)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)
