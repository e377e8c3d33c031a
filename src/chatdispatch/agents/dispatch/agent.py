"""DispatchAgent - facade over the dispatch pipeline."""

from __future__ import annotations

import logging
from typing import Any

from chatdispatch.errors import DispatchError
from chatdispatch.kernel.env import Env
from chatdispatch.kernel.ports import ChatModelPort
from chatdispatch.kernel.trace import Trace
from chatdispatch.runtime.tools import ToolRegistry

from .policy import DispatchConfig, DispatchPolicy
from .result import DispatchResult
from .state import DispatchState

logger = logging.getLogger(__name__)


def describe_error(reason: Any) -> str:
    """Render a ``Control.Error`` reason as a user-facing message."""
    if isinstance(reason, DispatchError):
        return str(reason)
    if isinstance(reason, Exception):
        return f"Unexpected error: {reason}"
    return str(reason)


class DispatchAgent:
    """Answers a prompt, dispatching at most one tool call on the way.

    Example:
        agent = DispatchAgent(LiteLLMChatModel("openai/gpt-4o-mini"), registry)
        result = await agent.run("What's the weather in Lima?")
        print(result.response if result.ok else result.error)
    """

    def __init__(
        self,
        model: ChatModelPort,
        tools: ToolRegistry,
        *,
        config: DispatchConfig | None = None,
        trace: bool = True,
    ):
        """Initialize DispatchAgent.

        Args:
            model: Chat completion transport.
            tools: Registry of tools the model may request.
            config: Policy configuration (system preamble).
            trace: Enable trace for debugging (default True).
        """
        self._model = model
        self._tools = tools
        self._policy = DispatchPolicy(config)
        self._trace_enabled = trace

    def _build_env(self) -> Env:
        trace = Trace() if self._trace_enabled else None
        return Env(model=self._model, tools=self._tools, trace=trace)

    async def run(self, prompt: str) -> DispatchResult:
        """Run one dispatch for an already validated prompt.

        Never raises: failures come back as ``DispatchResult(ok=False)``.
        """
        env = self._build_env()
        pipeline = self._policy.build(prompt)
        result = await pipeline.run(DispatchState(), env)

        if result.control.kind == "error":
            error = describe_error(result.control.reason)
            logger.error("Dispatch failed: %s", error)
            return DispatchResult.failure(error, trace=env.trace)

        return DispatchResult.success(result.value or "", trace=env.trace)
