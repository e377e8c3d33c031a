"""Port protocols for chatdispatch - pure abstractions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from chatdispatch.kernel.message import CompletionResult, Message
from chatdispatch.kernel.tool import ToolDefinition


class ChatModelPort(Protocol):
    """Chat completion transport.

    Implementations raise ``TransportError`` on network failure or a
    non-success upstream status.
    """

    async def complete_chat(
        self,
        messages: Sequence[Message],
        tools: Sequence[ToolDefinition] | None = None,
    ) -> CompletionResult: ...
