"""Tool-call dispatch policy.

One request runs through at most two completion rounds::

    seed -> first_completion -> decide -> act -> observe -> followup_completion

``decide`` halts the pipeline when the model answers directly. Any step that
raises ends the pipeline with ``Control.Error``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from chatdispatch import conversation as builder
from chatdispatch.conversation import DEFAULT_SYSTEM_PROMPT
from chatdispatch.kernel.agent import Agent
from chatdispatch.kernel.env import Env
from chatdispatch.kernel.message import CompletionResult, Conversation
from chatdispatch.kernel.result import Control, Result
from chatdispatch.kernel.tool import ToolCallRequest, ToolOutcome

from .state import DispatchState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchConfig:
    """Configuration for the dispatch policy."""

    system_prompt: str = DEFAULT_SYSTEM_PROMPT


@dataclass(frozen=True)
class ToolExecution:
    """A dispatched tool call together with its typed arguments and outcome."""

    call: ToolCallRequest
    arguments: BaseModel
    outcome: ToolOutcome


def _record(env: Env, action: str, **info: Any) -> None:
    if env.trace is not None:
        env.trace.record(action, info=info)


class DispatchPolicy:
    """Builds the two-round completion pipeline, independent of provider."""

    def __init__(self, config: DispatchConfig | None = None):
        self.config = config or DispatchConfig()

    async def seed(self, state: DispatchState, prompt: str, env: Env) -> Result[DispatchState, Conversation]:
        conversation = builder.seed(prompt, self.config.system_prompt)
        return Result(state.with_conversation(conversation), value=conversation)

    async def first_completion(
        self, state: DispatchState, conversation: Conversation, env: Env
    ) -> Result[DispatchState, CompletionResult]:
        """Completion round 1, with the full tool catalog attached."""
        tools = env.tools.list_tools()
        completion = await env.model.complete_chat(conversation.messages, tools)
        _record(env, "completion", round=1, tool_calls=len(completion.tool_calls))
        return Result(state, value=completion)

    async def decide(
        self, state: DispatchState, completion: CompletionResult, env: Env
    ) -> Result[DispatchState, ToolCallRequest | str]:
        """Answer directly, or select the first requested tool call."""
        if not completion.has_tool_calls:
            logger.debug("Model answered without requesting a tool")
            return Result(state, value=completion.content or "", control=Control.Halt())

        call = completion.tool_calls[0]
        if len(completion.tool_calls) > 1:
            # Only the first call of a round is honored.
            logger.debug(
                "Ignoring %d additional tool call(s): %s",
                len(completion.tool_calls) - 1,
                [extra.name for extra in completion.tool_calls[1:]],
            )
        return Result(state, value=call)

    async def act(
        self, state: DispatchState, call: ToolCallRequest, env: Env
    ) -> Result[DispatchState, ToolExecution]:
        """Parse the arguments and run the selected tool exactly once."""
        arguments = env.tools.parse_arguments(call)
        _record(env, "tool_call", name=call.name, args=arguments.model_dump())
        logger.info("Dispatching tool %s", call.name)
        outcome = await env.tools.invoke(call.name, arguments)
        _record(env, "tool_result", name=call.name, ok=outcome.ok, error=outcome.error)
        execution = ToolExecution(call=call, arguments=arguments, outcome=outcome)
        return Result(state, value=execution)

    async def observe(
        self, state: DispatchState, execution: ToolExecution, env: Env
    ) -> Result[DispatchState, Conversation]:
        """Fold the outcome, failed or not, back into the conversation."""
        name = execution.call.name
        if execution.outcome.ok:
            summary = env.tools.summarize(name, execution.arguments, execution.outcome)
        else:
            summary = builder.failure_note(name, execution.outcome)
        conversation = builder.append_tool_result(state.conversation, name, summary)
        return Result(state.with_conversation(conversation), value=conversation)

    async def followup_completion(
        self, state: DispatchState, conversation: Conversation, env: Env
    ) -> Result[DispatchState, str]:
        """Completion round 2 without a catalog; any tool request in it is ignored."""
        completion = await env.model.complete_chat(conversation.messages)
        _record(env, "completion", round=2, tool_calls=len(completion.tool_calls))
        if completion.has_tool_calls:
            logger.debug("Ignoring tool calls requested in the follow-up round")
        return Result(state, value=completion.content or "")

    def build(self, prompt: str) -> Agent[DispatchState, str]:
        """Build the pipeline for one prompt."""
        return (
            Agent.start(prompt)
            .then(self.seed)
            .then(self.first_completion)
            .then(self.decide)
            .then(self.act)
            .then(self.observe)
            .then(self.followup_completion)
        )
