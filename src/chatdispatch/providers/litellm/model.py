"""LiteLLM-backed chat completion transport."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import litellm

from chatdispatch.errors import TransportError
from chatdispatch.kernel.message import CompletionResult, Message
from chatdispatch.kernel.tool import ToolDefinition

from .formatter import LiteLLMFormatter

logger = logging.getLogger(__name__)


class LiteLLMChatModel:
    """LiteLLM-based ChatModelPort implementation."""

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        formatter: LiteLLMFormatter | None = None,
    ):
        """Initialize LiteLLMChatModel.

        Args:
            model_name: LiteLLM model identifier, e.g. "openai/gpt-4o-mini".
            api_key: Provider key; when None LiteLLM falls back to its own lookup.
            formatter: Message formatter (default LiteLLMFormatter).
        """
        self.model_name = model_name
        self._api_key = api_key
        self._formatter = formatter or LiteLLMFormatter()

    async def complete_chat(
        self,
        messages: Sequence[Message],
        tools: Sequence[ToolDefinition] | None = None,
    ) -> CompletionResult:
        """Run one completion round.

        Raises:
            TransportError: the provider was unreachable or returned an error.
        """
        request: dict[str, Any] = {
            "model": self.model_name,
            "messages": await self._formatter.format(list(messages)),
        }
        if tools:
            request["tools"] = self._formatter.format_tools(tools)
        if self._api_key:
            request["api_key"] = self._api_key

        logger.debug("Completion request: %d messages, %d tools", len(messages), len(tools or []))
        try:
            response = await litellm.acompletion(**request)
        except Exception as exc:
            raise TransportError(f"Error in chat completion API: {exc}") from exc
        return self._formatter.parse(response)
