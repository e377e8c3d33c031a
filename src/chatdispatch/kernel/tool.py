"""Core tool types for the kernel - pure data definitions."""

from __future__ import annotations

from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field

ParameterType = Literal["string", "number", "integer", "boolean"]


class ToolCallRequest(BaseModel):
    """Tool call requested by the model; arguments are still serialized."""

    id: str = ""
    name: str
    raw_arguments: str = "{}"


class ToolOutcome(BaseModel):
    """Result of running a tool handler."""

    ok: bool
    payload: Any = None
    error: str | None = None

    @classmethod
    def success(cls, payload: Any) -> Self:
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, error: str) -> Self:
        return cls(ok=False, error=error)


class ToolParameter(BaseModel):
    """Tool parameter definition."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ParameterType
    description: str
    required: bool
    enum: tuple[str, ...] | None = None


class ToolDefinition(BaseModel):
    """Tool definition advertised to the model."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, ToolParameter] = Field(default_factory=dict)

    def missing_parameters(self, params: dict[str, Any]) -> list[str]:
        return [
            name
            for name, param in self.parameters.items()
            if param.required and name not in params
        ]

    def json_schema(self) -> dict[str, Any]:
        """Render the parameters as a JSON-schema object."""
        properties: dict[str, Any] = {}
        for name, param in self.parameters.items():
            prop: dict[str, Any] = {"type": param.type, "description": param.description}
            if param.enum:
                prop["enum"] = list(param.enum)
            properties[name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [name for name, param in self.parameters.items() if param.required],
        }
