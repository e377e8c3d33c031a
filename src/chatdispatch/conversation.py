"""Conversation builder.

Builds the message sequence sent to the model: a system preamble, the user's
prompt and, after a tool round, one tool-role note synthesized from the
tool's outcome. Raw tool payloads never reach the model directly.
"""

from __future__ import annotations

from chatdispatch.kernel.message import Conversation, Message
from chatdispatch.kernel.tool import ToolOutcome

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."


def seed(prompt: str, system_prompt: str = DEFAULT_SYSTEM_PROMPT) -> Conversation:
    """Start a conversation: ``[system preamble, user prompt]``."""
    return Conversation(
        [
            Message(role="system", content=system_prompt),
            Message(role="user", content=prompt),
        ]
    )


def append_tool_result(conversation: Conversation, tool_name: str, summary: str) -> Conversation:
    """Append the synthesized result of ``tool_name`` as a tool-role message."""
    return conversation.append(Message(role="tool", name=tool_name, content=summary))


def failure_note(tool_name: str, outcome: ToolOutcome) -> str:
    """Explain a failed tool call so the follow-up answer can degrade gracefully."""
    reason = outcome.error or "unknown error"
    return (
        f"The tool {tool_name} could not provide the requested data: {reason}. "
        "Apologize to the user and answer as well as possible without this data."
    )
