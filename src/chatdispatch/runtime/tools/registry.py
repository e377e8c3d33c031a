"""Tool registry implementation."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from chatdispatch.errors import (
    ArgumentParseError,
    ToolError,
    UnknownToolError,
    describe_validation_error,
)
from chatdispatch.kernel.tool import ToolCallRequest, ToolDefinition, ToolOutcome

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any], Awaitable[ToolOutcome]]
Summarizer = Callable[[Any, ToolOutcome], str]


@dataclass(frozen=True)
class RegisteredTool:
    """Everything the dispatcher needs to know about one tool.

    Attributes:
        definition: Name, description and argument schema shown to the model.
        arguments: Pydantic model the raw arguments are validated into.
        handler: Async callable receiving the validated arguments.
        summarize: Renders a successful outcome as text for the model.
    """

    definition: ToolDefinition
    arguments: type[BaseModel]
    handler: ToolHandler
    summarize: Summarizer

    @property
    def name(self) -> str:
        return self.definition.name


class ToolRegistry:
    """Closed name -> tool table. Read-only once the process has started."""

    def __init__(self, tools: list[RegisteredTool] | None = None) -> None:
        self._tools: dict[str, RegisteredTool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: RegisteredTool) -> None:
        """Register a tool; names must be unique."""
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def list_tools(self) -> list[ToolDefinition]:
        """Return the catalog in registration order."""
        return [tool.definition for tool in self._tools.values()]

    def get(self, name: str) -> RegisteredTool:
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool

    def parse_arguments(self, call: ToolCallRequest) -> BaseModel:
        """Turn the model's serialized arguments into the tool's typed arguments.

        Raises:
            ArgumentParseError: arguments are not a JSON object, miss a required
                field, carry an unknown field or have the wrong type.
            UnknownToolError: no tool is registered under ``call.name``.
        """
        try:
            raw = json.loads(call.raw_arguments or "{}")
        except json.JSONDecodeError as exc:
            raise ArgumentParseError(
                f"Malformed arguments for tool {call.name}: {exc.msg}"
            ) from exc
        if not isinstance(raw, dict):
            raise ArgumentParseError(
                f"Arguments for tool {call.name} must be an object, got {type(raw).__name__}"
            )

        tool = self.get(call.name)
        missing = tool.definition.missing_parameters(raw)
        if missing:
            raise ArgumentParseError(
                f"Missing required arguments for tool {call.name}: {', '.join(missing)}"
            )
        try:
            return tool.arguments.model_validate(raw)
        except ValidationError as exc:
            raise ArgumentParseError(
                f"Invalid arguments for tool {call.name}: {describe_validation_error(exc)}"
            ) from exc

    async def invoke(self, name: str, arguments: BaseModel) -> ToolOutcome:
        """Execute a tool; handler-level errors become a failed outcome."""
        tool = self.get(name)
        try:
            return await tool.handler(arguments)
        except ToolError as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            return ToolOutcome.failure(str(exc))

    def summarize(self, name: str, arguments: BaseModel, outcome: ToolOutcome) -> str:
        """Render a successful outcome of ``name`` for the model."""
        return self.get(name).summarize(arguments, outcome)
