"""Core kernel abstractions - pure and dependency-free."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

S = TypeVar("S")
V = TypeVar("V")


@dataclass(frozen=True)
class Control:
    """
    Control flow directives for a dispatch pipeline.

    Kinds:
    - continue: Proceed to the next step with the provided value
    - halt: Stop execution early and return the provided value
      - Use case: the model answered directly, nothing left to dispatch
    - error: Stop execution with an error; ``reason`` carries the exception or message
    """

    kind: Literal["continue", "halt", "error"]
    reason: Any | None = None

    @staticmethod
    def Continue() -> Control:
        return Control(kind="continue")

    @staticmethod
    def Halt() -> Control:
        return Control(kind="halt")

    @staticmethod
    def Error(reason: Any) -> Control:
        return Control(kind="error", reason=reason)


@dataclass(frozen=True)
class Result(Generic[S, V]):
    """
    A container for state evolution with traceability.

    Attributes:
        state: The next domain state
        value: Output of this step
        control: Local execution directive
    """

    state: S
    value: V | None = None
    control: Control = Control.Continue()

    def _require_value(self) -> V:
        if self.value is None:
            raise ValueError("Result has no value.")
        return self.value
