"""Completed tool-call history extracted from a conversation transcript."""

import json
import time

from model_router.models.messages import Message, ToolCallPart, ToolResultPart
from model_router.models.routing import CompletedToolCall

FIRST_REQUEST = "None - This is the first request"
NO_TOOLS_CALLED = "None - No tools have been called yet"


def _pending_key(part: ToolCallPart, position: int) -> str:
    if part.tool_call_id:
        return part.tool_call_id
    # Position keeps two id-less calls made within one clock tick apart
    return f"{part.tool_name}-{time.time_ns()}-{position}"


def extract_tool_call_history(
    messages: list[Message] | None, max_calls: int = 10
) -> list[CompletedToolCall]:
    """Return the most recent completed tool calls, oldest first.

    Assistant tool calls are held as pending until a tool result matches them,
    first by call id and otherwise by tool name. A name match takes the oldest
    pending call with that name, which is ambiguous when several same-named
    calls are in flight. Calls that never see a result are dropped.

    Args:
        messages: The conversation transcript
        max_calls: How many completed calls to keep

    Returns:
        Completed calls in the order they were made
    """
    if not messages or max_calls <= 0:
        return []

    pending: dict[str, tuple[int, CompletedToolCall]] = {}
    completed: list[tuple[int, CompletedToolCall]] = []
    position = 0

    for message in messages:
        if isinstance(message.content, str):
            continue

        if message.role == "assistant":
            for part in message.content:
                if isinstance(part, ToolCallPart):
                    key = _pending_key(part, position)
                    pending[key] = (
                        position,
                        CompletedToolCall(tool_name=part.tool_name, args=part.args),
                    )
                    position += 1

        elif message.role == "tool":
            for part in message.content:
                if not isinstance(part, ToolResultPart):
                    continue
                if part.tool_call_id and part.tool_call_id in pending:
                    completed.append(pending.pop(part.tool_call_id))
                elif part.tool_name:
                    match = next(
                        (
                            key
                            for key, (_, call) in pending.items()
                            if call.tool_name == part.tool_name
                        ),
                        None,
                    )
                    if match is not None:
                        completed.append(pending.pop(match))

    completed.sort(key=lambda entry: entry[0])
    return [call for _, call in completed[-max_calls:]]


def _args_preview(args: object, limit: int) -> str:
    preview = json.dumps(args, separators=(",", ":"), default=str)
    if len(preview) > limit:
        return preview[:limit] + "..."
    return preview


def format_tool_call_history(
    messages: list[Message] | None,
    max_calls: int = 10,
    preview_length: int = 100,
) -> str:
    """Render completed tool calls as a numbered list for the routing prompt.

    An absent or empty transcript renders FIRST_REQUEST; a transcript with no
    completed calls yet (e.g. just the user message) renders NO_TOOLS_CALLED.
    """
    if not messages:
        return FIRST_REQUEST

    calls = extract_tool_call_history(messages, max_calls)
    if not calls:
        return NO_TOOLS_CALLED

    return "\n".join(
        f"{idx}. {call.tool_name}({_args_preview(call.args, preview_length)})"
        for idx, call in enumerate(calls, start=1)
    )
