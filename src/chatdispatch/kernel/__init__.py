"""Kernel layer - pure abstractions for chatdispatch."""

from chatdispatch.kernel.agent import Agent
from chatdispatch.kernel.env import Env
from chatdispatch.kernel.message import CompletionResult, Conversation, Message
from chatdispatch.kernel.ports import ChatModelPort
from chatdispatch.kernel.result import Control, Result
from chatdispatch.kernel.tool import (
    ToolCallRequest,
    ToolDefinition,
    ToolOutcome,
    ToolParameter,
)
from chatdispatch.kernel.trace import Evidence, Trace

__all__ = [
    "Agent",
    "Control",
    "Result",
    "Evidence",
    "Trace",
    # Conversation
    "Message",
    "Conversation",
    "CompletionResult",
    # Tools
    "ToolCallRequest",
    "ToolOutcome",
    "ToolDefinition",
    "ToolParameter",
    # Env & Ports
    "Env",
    "ChatModelPort",
]
