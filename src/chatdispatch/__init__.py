from .agents import DispatchAgent, DispatchConfig, DispatchResult
from .conversation import append_tool_result, seed
from .errors import (
    ArgumentParseError,
    DataNotFoundError,
    DispatchError,
    ExternalServiceError,
    ToolError,
    TransportError,
    UnknownToolError,
)
from .kernel import CompletionResult, Conversation, Message, ToolCallRequest, ToolDefinition, ToolOutcome
from .runtime import RegisteredTool, ToolRegistry

__all__ = [
    # Dispatch
    "DispatchAgent",
    "DispatchConfig",
    "DispatchResult",
    # Conversation
    "Message",
    "Conversation",
    "CompletionResult",
    "seed",
    "append_tool_result",
    # Tools
    "ToolCallRequest",
    "ToolDefinition",
    "ToolOutcome",
    "ToolRegistry",
    "RegisteredTool",
    # Errors
    "DispatchError",
    "TransportError",
    "ArgumentParseError",
    "UnknownToolError",
    "ToolError",
    "ExternalServiceError",
    "DataNotFoundError",
]
