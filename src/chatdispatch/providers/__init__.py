"""Provider-specific implementations for chatdispatch."""

from .base import FormatterBase
from .litellm import LiteLLMChatModel, LiteLLMFormatter

__all__ = [
    "FormatterBase",
    "LiteLLMChatModel",
    "LiteLLMFormatter",
]
