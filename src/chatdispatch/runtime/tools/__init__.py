"""Runtime tools module."""

from .registry import RegisteredTool, ToolHandler, ToolRegistry

__all__ = [
    "RegisteredTool",
    "ToolHandler",
    "ToolRegistry",
]
