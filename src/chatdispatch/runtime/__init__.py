"""Runtime layer - concrete implementations backing the kernel ports."""

from chatdispatch.runtime.tools import RegisteredTool, ToolRegistry

__all__ = ["RegisteredTool", "ToolRegistry"]
