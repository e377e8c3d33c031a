"""LiteLLM-specific formatter implementation."""

from collections.abc import Sequence
from typing import Any

from chatdispatch.errors import TransportError
from chatdispatch.kernel.message import CompletionResult, Message
from chatdispatch.kernel.tool import ToolCallRequest, ToolDefinition
from chatdispatch.providers.base import FormatterBase


class LiteLLMFormatter(FormatterBase):
    """LiteLLM formatter for chat scenarios.

    LiteLLM speaks the OpenAI-compatible chat format. Tool-role messages are
    sent as ``function`` messages carrying the tool name: the conversation
    never holds the assistant's tool-call turn, so there is no tool call id
    to answer.
    """

    async def format(
        self,
        messages: list[Message],
    ) -> list[dict[str, Any]]:
        """Format messages into LiteLLM API format."""
        self.assert_list_of_messages(messages)

        formatted_messages: list[dict[str, Any]] = []
        for msg in messages:
            if msg.role == "tool":
                formatted_messages.append({
                    "role": "function",
                    "name": msg.name or "",
                    "content": msg.content,
                })
                continue

            msg_litellm: dict[str, Any] = {
                "role": msg.role,
                "content": msg.content,
            }
            if msg.name:
                msg_litellm["name"] = msg.name
            formatted_messages.append(msg_litellm)

        return formatted_messages

    def format_tools(self, tools: Sequence[ToolDefinition]) -> list[dict[str, Any]]:
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.json_schema(),
                },
            }
            for tool in tools
        ]

    def parse(self, response: Any) -> CompletionResult:
        """Read the first choice of a LiteLLM ``ModelResponse``."""
        choices = getattr(response, "choices", None)
        if not choices:
            raise TransportError("Chat completion returned no choices")
        message = choices[0].message

        tool_calls: list[ToolCallRequest] = []
        for call in getattr(message, "tool_calls", None) or []:
            function = call.function
            tool_calls.append(
                ToolCallRequest(
                    id=getattr(call, "id", None) or "",
                    name=function.name,
                    raw_arguments=function.arguments or "{}",
                )
            )

        return CompletionResult(content=message.content, tool_calls=tool_calls)
