"""Tool-call dispatch agent module."""

from .agent import DispatchAgent
from .policy import DispatchConfig, DispatchPolicy, ToolExecution
from .result import DispatchResult
from .state import DispatchState

__all__ = [
    "DispatchAgent",
    "DispatchConfig",
    "DispatchPolicy",
    "DispatchResult",
    "DispatchState",
    "ToolExecution",
]
