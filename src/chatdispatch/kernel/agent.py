"""Agent monad - core orchestration primitive."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from chatdispatch.kernel.env import Env
from chatdispatch.kernel.result import Control, Result

S = TypeVar("S")
V = TypeVar("V")
R = TypeVar("R")


Step = Callable[[S, V, Env], Awaitable[Result[S, R]]]


@dataclass(frozen=True)
class Agent(Generic[S, V]):
    """Agent monad - a chain of async steps threading state through an Env.

    Each step receives the previous step's value. A step that halts or errors
    short-circuits the remaining chain; its value and control are preserved.
    """

    _run: Callable[[S, Env], Awaitable[Result[S, V]]]

    async def run(self, state: S, env: Env) -> Result[S, V]:
        """Run the agent and return a Result.

        Args:
            state: Initial state for agent execution
            env: Environment with model and tools

        Returns:
            Result of agent execution

        Note: This method does NOT implement retry semantics.
        """
        trace = env.trace if env else None
        step_id: int | None = None

        try:
            if trace is not None:
                step_id = trace.record("step_begin")
                trace.push(step_id)

            start_time = time.perf_counter()
            try:
                result = await self._run(state, env)
            except Exception as exc:
                if trace is not None:
                    trace.record(
                        "step_error",
                        info={"error": str(exc)},
                        parent_id=step_id,
                    )
                raise
            duration_ms = (time.perf_counter() - start_time) * 1000

            if trace is not None:
                trace.record(
                    "step_end",
                    info={"control": result.control.kind},
                    parent_id=step_id,
                    duration_ms=duration_ms,
                )

            return result
        finally:
            if trace is not None and step_id is not None:
                trace.pop()

    def _create(self, run_func: Callable[[S, Env], Awaitable[Result[S, R]]]) -> Agent[S, R]:
        """Create a new agent instance."""
        return Agent(_run=run_func)

    def then(self, func: Step[S, V, R]) -> Agent[S, R]:
        """Chain a step function to the agent.

        Args:
            func: Async function that takes state, value, and env, returns Result

        Returns:
            New agent with the chained step

        Exceptions raised by ``func`` are captured as ``Control.Error(exc)``.
        """
        async def new_run(state: S, env: Env) -> Result[S, R]:
            current_flow = await self.run(state, env)
            if current_flow.control.kind != "continue":
                # Preserve value when propagating halt or error
                return Result(
                    state=current_flow.state,
                    value=current_flow.value,
                    control=current_flow.control,
                )  # type: ignore[return-value]
            try:
                value = current_flow._require_value()
                return await func(current_flow.state, value, env)
            except Exception as exc:
                return Result(
                    state=current_flow.state,
                    control=Control.Error(exc),
                )  # type: ignore[return-value]

        return self._create(new_run)

    @staticmethod
    def start(value: V) -> Agent[S, V]:
        """Create an Agent that starts with a value.

        The returned Agent passes through incoming state unchanged.
        """
        async def run_func(state: S, _: Env) -> Result[S, V]:
            return Result(state=state, value=value, control=Control.Continue())

        return Agent(_run=run_func)
