"""Environment for a dispatch run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chatdispatch.kernel.ports import ChatModelPort
from chatdispatch.kernel.trace import Trace

if TYPE_CHECKING:
    from chatdispatch.runtime.tools import ToolRegistry


@dataclass
class Env:
    """Environment aggregation - combines the completion transport and the tool registry."""

    model: ChatModelPort
    tools: ToolRegistry
    trace: Trace | None = None
