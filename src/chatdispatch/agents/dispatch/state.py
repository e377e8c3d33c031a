"""Dispatch state threaded through the pipeline steps."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Self

from chatdispatch.kernel.message import Conversation


@dataclass(frozen=True)
class DispatchState:
    """Per-request state. The conversation belongs to exactly one request.

    The selected call and its outcome travel as step values, not state.
    """

    conversation: Conversation = field(default_factory=Conversation)

    def with_conversation(self, conversation: Conversation) -> Self:
        return replace(self, conversation=conversation)
