"""Chat model wrapper using raw OpenAI client."""

import json
from typing import Any, AsyncIterator

from openai import AsyncOpenAI

from model_router.clients import AgentType, get_model_name, get_openai_client
from model_router.models.messages import (
    FilePart,
    Message,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)
from model_router.models.options import CallOptions
from model_router.models.results import (
    FinishPart,
    FinishReason,
    GenerateResult,
    StreamPart,
    TextDeltaPart,
    ToolCallDeltaPart,
    Usage,
)

FINISH_REASONS: dict[str | None, FinishReason] = {
    "stop": "stop",
    "length": "length",
    "tool_calls": "tool-calls",
    "function_call": "tool-calls",
    "content_filter": "content-filter",
    None: "unknown",
}

AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}


def _map_finish_reason(reason: str | None) -> FinishReason:
    return FINISH_REASONS.get(reason, "other")


def _serialize(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def _base64_payload(part: FilePart) -> str:
    if part.data.startswith(("http://", "https://")):
        raise ValueError(
            f"{part.media_type} parts must carry inline base64 data, not a URL"
        )
    if part.data.startswith("data:"):
        return part.data.split(",", 1)[1]
    return part.data


def _file_to_content(part: FilePart) -> dict[str, Any]:
    """Map a file part onto the matching chat.completions content part.

    Raises:
        ValueError: If the media type has no chat.completions equivalent
    """
    media_type = part.media_type.lower()

    if media_type.startswith("image/"):
        url = part.data
        if not url.startswith(("http://", "https://", "data:")):
            url = f"data:{part.media_type};base64,{part.data}"
        return {"type": "image_url", "image_url": {"url": url}}

    if media_type == "application/pdf":
        file: dict[str, Any] = {
            "file_data": f"data:application/pdf;base64,{_base64_payload(part)}"
        }
        if part.filename:
            file["filename"] = part.filename
        return {"type": "file", "file": file}

    if media_type in AUDIO_FORMATS:
        return {
            "type": "input_audio",
            "input_audio": {
                "data": _base64_payload(part),
                "format": AUDIO_FORMATS[media_type],
            },
        }

    raise ValueError(f"Unsupported file media type for chat messages: {part.media_type}")


def to_openai_messages(messages: list[Message]) -> list[dict[str, Any]]:
    """Convert conversation messages into the chat.completions wire format.

    Tool calls without an id get one that is unique across the transcript,
    and each tool result is sent with the id of the call it answers, matched
    by id first and then by tool name (oldest pending call).
    """
    converted: list[dict[str, Any]] = []
    pending: dict[str, str] = {}
    generated = 0

    for message in messages:
        if message.role == "system":
            converted.append({"role": "system", "content": message.text()})

        elif message.role == "user":
            parts = message.parts()
            if all(isinstance(p, TextPart) for p in parts):
                converted.append({"role": "user", "content": message.text()})
            else:
                content = []
                for part in parts:
                    if isinstance(part, TextPart):
                        content.append({"type": "text", "text": part.text})
                    elif isinstance(part, FilePart):
                        content.append(_file_to_content(part))
                converted.append({"role": "user", "content": content})

        elif message.role == "assistant":
            tool_calls = []
            for part in message.parts():
                if not isinstance(part, ToolCallPart):
                    continue
                call_id = part.tool_call_id
                if not call_id:
                    call_id = f"generated-call-{generated}"
                    generated += 1
                pending[call_id] = part.tool_name
                tool_calls.append(
                    {
                        "id": call_id,
                        "type": "function",
                        "function": {
                            "name": part.tool_name,
                            "arguments": _serialize(part.args if part.args is not None else {}),
                        },
                    }
                )
            entry: dict[str, Any] = {
                "role": "assistant",
                "content": message.text() or None,
            }
            if tool_calls:
                entry["tool_calls"] = tool_calls
            converted.append(entry)

        elif message.role == "tool":
            for part in message.parts():
                if not isinstance(part, ToolResultPart):
                    continue
                call_id = part.tool_call_id
                if call_id and call_id in pending:
                    del pending[call_id]
                elif part.tool_name:
                    match = next(
                        (key for key, name in pending.items() if name == part.tool_name),
                        None,
                    )
                    if match is not None:
                        del pending[match]
                        call_id = match
                converted.append(
                    {
                        "role": "tool",
                        "tool_call_id": call_id or "",
                        "content": _serialize(part.result),
                    }
                )
    return converted


def _to_openai_tool_choice(tool_choice: Any) -> Any:
    if isinstance(tool_choice, dict):
        if tool_choice.get("type") == "tool":
            name = tool_choice.get("toolName") or tool_choice.get("tool_name")
            return {"type": "function", "function": {"name": name}}
        return tool_choice.get("type")
    return tool_choice


def _parse_arguments(arguments: str | None) -> Any:
    if not arguments:
        return {}
    try:
        return json.loads(arguments)
    except json.JSONDecodeError:
        return arguments


class OpenAIChatModel:
    """LanguageModel backed by an OpenAI-compatible chat.completions endpoint.

    Any gateway that speaks the OpenAI API (vLLM, OpenRouter, LiteLLM proxy)
    works through ``base_url``.
    """

    provider = "openai"

    def __init__(
        self,
        model_name: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        agent_type: AgentType | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """Initialize the chat model.

        Args:
            model_name: Name of the chat model (overrides agent settings)
            api_key: API key (default: from settings)
            base_url: Base URL for the API (default: from settings)
            agent_type: Agent settings to resolve name and endpoint from
            client: Pre-built client, mostly for tests
        """
        self.model_id = get_model_name(model_name=model_name, agent_type=agent_type)
        self._client = client or get_openai_client(
            api_key=api_key, base_url=base_url, agent_type=agent_type
        )

    def __repr__(self) -> str:
        return f"OpenAIChatModel(model_id={self.model_id!r})"

    def _build_request(self, options: CallOptions) -> dict[str, Any]:
        transcript = options.transcript()
        if transcript is None:
            transcript = [Message(role="user", content=options.prompt or "")]

        request: dict[str, Any] = {
            "model": self.model_id,
            "messages": to_openai_messages(transcript),
        }
        if options.temperature is not None:
            request["temperature"] = options.temperature
        if options.max_output_tokens is not None:
            request["max_tokens"] = options.max_output_tokens
        if options.top_p is not None:
            request["top_p"] = options.top_p
        if options.stop_sequences:
            request["stop"] = options.stop_sequences
        if options.seed is not None:
            request["seed"] = options.seed

        if options.tools:
            request["tools"] = [
                {
                    "type": "function",
                    "function": {
                        "name": name,
                        "description": tool.description or "",
                        "parameters": tool.parameters,
                    },
                }
                for name, tool in options.tools.items()
            ]
            if options.tool_choice is not None:
                request["tool_choice"] = _to_openai_tool_choice(options.tool_choice)

        fmt = options.response_format
        if fmt is not None and fmt.type == "json":
            if fmt.schema_ is None:
                request["response_format"] = {"type": "json_object"}
            else:
                json_schema: dict[str, Any] = {
                    "name": fmt.name or "response",
                    "schema": fmt.schema_,
                    "strict": False,
                }
                if fmt.description:
                    json_schema["description"] = fmt.description
                request["response_format"] = {
                    "type": "json_schema",
                    "json_schema": json_schema,
                }
        return request

    async def generate(self, options: CallOptions) -> GenerateResult:
        """Generate a single completion.

        Args:
            options: The call options

        Returns:
            GenerateResult with text and tool-call parts
        """
        response = await self._client.chat.completions.create(
            **self._build_request(options)
        )

        choice = response.choices[0]
        content: list[TextPart | ToolCallPart] = []
        if choice.message.content:
            content.append(TextPart(text=choice.message.content))
        for tool_call in choice.message.tool_calls or []:
            content.append(
                ToolCallPart(
                    tool_call_id=tool_call.id,
                    tool_name=tool_call.function.name,
                    args=_parse_arguments(tool_call.function.arguments),
                )
            )

        usage = Usage()
        if response.usage is not None:
            usage = Usage(
                input_tokens=response.usage.prompt_tokens,
                output_tokens=response.usage.completion_tokens,
            )

        return GenerateResult(
            content=content,
            finish_reason=_map_finish_reason(choice.finish_reason),
            usage=usage,
            model_id=response.model or self.model_id,
            raw=response,
        )

    async def stream(self, options: CallOptions) -> AsyncIterator[StreamPart]:
        """Open a streaming completion and return its part iterator."""
        response = await self._client.chat.completions.create(
            **self._build_request(options),
            stream=True,
            stream_options={"include_usage": True},
        )
        return self._iter_stream(response)

    async def _iter_stream(self, response: Any) -> AsyncIterator[StreamPart]:
        finish_reason: FinishReason = "unknown"
        usage = Usage()

        async for chunk in response:
            if chunk.usage is not None:
                usage = Usage(
                    input_tokens=chunk.usage.prompt_tokens,
                    output_tokens=chunk.usage.completion_tokens,
                )
            if not chunk.choices:
                continue

            choice = chunk.choices[0]
            delta = choice.delta
            if delta.content:
                yield TextDeltaPart(delta=delta.content)
            for tool_call in delta.tool_calls or []:
                function = tool_call.function
                yield ToolCallDeltaPart(
                    index=tool_call.index,
                    tool_call_id=tool_call.id,
                    tool_name=function.name if function else None,
                    args_delta=(function.arguments or "") if function else "",
                )
            if choice.finish_reason is not None:
                finish_reason = _map_finish_reason(choice.finish_reason)

        yield FinishPart(finish_reason=finish_reason, usage=usage)
