"""Runtime trace infrastructure - separate from domain state.

Trace captures execution events (step boundaries, completion rounds, tool
calls) for debugging a single dispatch. It never participates in the
conversation sent to the model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded execution event."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None


class Trace:
    """Runtime trace context for capturing execution events.

    Uses stack-based nesting via push/pop for hierarchical parent-child relationships.
    One Trace belongs to one request; it is not shared across concurrent dispatches.
    """

    def __init__(self) -> None:
        self._events: list[Evidence] = []
        self._next_id: int = 0
        self._stack: list[int] = []

    def push(self, event_id: int) -> None:
        """Push an event onto the stack for nested tracing."""
        self._stack.append(event_id)

    def pop(self) -> int | None:
        """Pop the current stack frame."""
        if self._stack:
            return self._stack.pop()
        return None

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int:
        """Record an evidence event.

        Args:
            action: What happened (e.g., "step_begin", "tool_call")
            info: Additional context
            parent_id: Explicit parent event ID for tree relationships
            duration_ms: Execution duration

        Returns:
            Event ID for linking child events
        """
        if parent_id is not None:
            effective_parent = parent_id
        elif self._stack:
            effective_parent = self._stack[-1]
        else:
            effective_parent = None

        event_id = self._next_id
        self._next_id += 1

        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=effective_parent,
                info=info or {},
                duration_ms=duration_ms,
            )
        )

        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded events."""
        return list(self._events)

    def find_all(self, action: str) -> list[Evidence]:
        """Get all recorded events with the given action."""
        return [ev for ev in self._events if ev.action == action]

    def __len__(self) -> int:
        return len(self._events)
