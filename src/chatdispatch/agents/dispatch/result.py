"""DispatchAgent result types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chatdispatch.kernel.trace import Trace


@dataclass(frozen=True)
class DispatchResult:
    """Return type for DispatchAgent - hides kernel Result.

    Attributes:
        ok: Whether an answer was produced.
        response: The final answer (set when ``ok``).
        error: What went wrong (set when not ``ok``).
        trace: Trace object for debugging (None if tracing is disabled).
    """

    ok: bool
    response: str | None = None
    error: str | None = None
    trace: Trace | None = None

    @classmethod
    def success(cls, response: str, trace: Trace | None = None) -> DispatchResult:
        return cls(ok=True, response=response, trace=trace)

    @classmethod
    def failure(cls, error: str, trace: Trace | None = None) -> DispatchResult:
        return cls(ok=False, error=error, trace=trace)

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "response": self.response}
        return {"ok": False, "error": self.error}
