"""Error taxonomy for dispatching tool calls."""

from __future__ import annotations

from pydantic import ValidationError


class DispatchError(Exception):
    """Base class for every error raised by chatdispatch."""


class TransportError(DispatchError):
    """The chat completion API was unreachable or answered with an error."""


class ArgumentParseError(DispatchError):
    """Tool call arguments were not well-formed for the requested tool."""


class UnknownToolError(DispatchError):
    """The model requested a tool name that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool requested: {name}")
        self.name = name


class ToolError(DispatchError):
    """Raised by a tool handler; reported back to the model, never fatal."""


class ExternalServiceError(ToolError):
    """The tool's upstream service was unreachable or returned a non-success status."""


class DataNotFoundError(ToolError):
    """The upstream answered, but it does not know the requested entity."""


def describe_validation_error(exc: ValidationError) -> str:
    """One-line summary of a pydantic ValidationError, one clause per field."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" if err["loc"] else err["msg"]
        for err in exc.errors()
    )
