"""Base classes for provider formatters."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from chatdispatch.kernel.message import CompletionResult, Message
from chatdispatch.kernel.tool import ToolDefinition


class FormatterBase(ABC):
    """Base class for all message formatters."""

    @abstractmethod
    async def format(self, messages: list[Message]) -> list[dict[str, Any]]:
        """Format messages into provider-specific API format.

        Args:
            messages (List[Message]):
                The list of message objects to format.

        Returns:
            List[Dict[str, Any]]:
                The formatted messages as a list of dictionaries.
        """
        pass

    @abstractmethod
    def format_tools(self, tools: Sequence[ToolDefinition]) -> list[dict[str, Any]]:
        """Format tool definitions into the provider's tool catalog format."""
        pass

    @abstractmethod
    def parse(self, response: Any) -> CompletionResult:
        """Parse a provider response into a CompletionResult."""
        pass

    def assert_list_of_messages(self, messages: list[Message]) -> None:
        """Assert that the input is a list of Message objects.

        Raises:
            TypeError:
                If the input is not a list of Message objects.
        """
        if not isinstance(messages, list):
            raise TypeError(f"Expected list of Message objects, got {type(messages)}")

        for msg in messages:
            if not isinstance(msg, Message):
                raise TypeError(f"Expected Message object, got {type(msg)}")
