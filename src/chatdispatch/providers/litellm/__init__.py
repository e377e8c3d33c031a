"""LiteLLM provider module."""

from .formatter import LiteLLMFormatter
from .model import LiteLLMChatModel

__all__ = [
    "LiteLLMChatModel",
    "LiteLLMFormatter",
]
