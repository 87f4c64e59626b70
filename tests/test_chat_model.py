"""Tests for the OpenAI-backed chat model, with the client mocked out."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from model_router.chat_model import OpenAIChatModel, to_openai_messages
from model_router.models.messages import (
    FilePart,
    Message,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)
from model_router.models.options import CallOptions, ResponseFormat
from model_router.models.results import FinishPart, TextDeltaPart, ToolCallDeltaPart


# ---------------------------------------------------------------------------
# Helpers for building mock OpenAI responses
# ---------------------------------------------------------------------------

def _make_response(content=None, tool_calls=None, finish_reason="stop"):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message, finish_reason=finish_reason)],
        usage=SimpleNamespace(prompt_tokens=100, completion_tokens=20),
        model="gpt-test",
    )


def _make_tool_call(name, arguments, call_id="call_123"):
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=json.dumps(arguments)),
    )


def _chunk(content=None, tool_calls=None, finish_reason=None, usage=None, choices=True):
    delta = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(delta=delta, finish_reason=finish_reason)] if choices else [],
        usage=usage,
    )


async def _chunks(*items):
    for item in items:
        yield item


@pytest.fixture
def client():
    mock = MagicMock()
    mock.chat.completions.create = AsyncMock()
    return mock


@pytest.fixture
def model(client):
    return OpenAIChatModel(model_name="gpt-test", client=client)


# ---------------------------------------------------------------------------
# Test Classes
# ---------------------------------------------------------------------------

class TestMessageConversion:
    def test_roles_and_tool_round_trip(self):
        messages = [
            Message.model_validate(m)
            for m in [
                {"role": "system", "content": "Be brief."},
                {"role": "user", "content": [{"type": "text", "text": "Weather?"}]},
                {
                    "role": "assistant",
                    "content": [
                        {"type": "text", "text": "Checking."},
                        {"type": "tool-call", "toolCallId": "c1", "toolName": "getWeather", "input": {"city": "Rome"}},
                    ],
                },
                {
                    "role": "tool",
                    "content": [{"type": "tool-result", "toolCallId": "c1", "toolName": "getWeather", "output": {"temp": 21}}],
                },
            ]
        ]

        converted = to_openai_messages(messages)

        assert converted[0] == {"role": "system", "content": "Be brief."}
        assert converted[1] == {"role": "user", "content": "Weather?"}
        assert converted[2]["content"] == "Checking."
        assert converted[2]["tool_calls"] == [
            {
                "id": "c1",
                "type": "function",
                "function": {"name": "getWeather", "arguments": '{"city": "Rome"}'},
            }
        ]
        assert converted[3] == {"role": "tool", "tool_call_id": "c1", "content": '{"temp": 21}'}

    def test_user_images_become_content_parts(self):
        message = Message.model_validate(
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "What is this?"},
                    {"type": "file", "data": "aGVsbG8=", "mediaType": "image/png"},
                ],
            }
        )
        converted = to_openai_messages([message])
        assert converted[0]["content"][1] == {
            "type": "image_url",
            "image_url": {"url": "data:image/png;base64,aGVsbG8="},
        }

    def test_id_less_calls_pair_with_their_results(self):
        messages = [
            Message(
                role="assistant",
                content=[
                    TextPart(text="Looking it up."),
                    ToolCallPart(tool_name="getWeather", args={"city": "Oslo"}),
                ],
            ),
            Message(role="tool", content=[ToolResultPart(tool_name="getWeather", result="rain")]),
            Message(role="assistant", content=[ToolCallPart(tool_name="getStock")]),
            Message(role="tool", content=[ToolResultPart(tool_name="getStock", result=10)]),
        ]

        converted = to_openai_messages(messages)

        first_id = converted[0]["tool_calls"][0]["id"]
        second_id = converted[2]["tool_calls"][0]["id"]
        assert first_id and second_id
        assert first_id != second_id
        assert converted[1]["tool_call_id"] == first_id
        assert converted[3]["tool_call_id"] == second_id

    def test_result_without_id_matches_oldest_same_named_call(self):
        messages = [
            Message(
                role="assistant",
                content=[
                    ToolCallPart(tool_call_id="a", tool_name="search"),
                    ToolCallPart(tool_call_id="b", tool_name="search"),
                ],
            ),
            Message(
                role="tool",
                content=[
                    ToolResultPart(tool_name="search", result="first"),
                    ToolResultPart(tool_call_id="b", tool_name="search", result="second"),
                ],
            ),
        ]

        converted = to_openai_messages(messages)

        assert [m["tool_call_id"] for m in converted[1:]] == ["a", "b"]


class TestFileParts:
    def _user_file(self, data, media_type, filename=None):
        return Message(
            role="user",
            content=[
                TextPart(text="Look at this"),
                FilePart(data=data, media_type=media_type, filename=filename),
            ],
        )

    def test_image_becomes_image_url(self):
        converted = to_openai_messages([self._user_file("https://x.test/cat.png", "image/png")])
        assert converted[0]["content"][1] == {
            "type": "image_url",
            "image_url": {"url": "https://x.test/cat.png"},
        }

    def test_pdf_becomes_file_part(self):
        converted = to_openai_messages(
            [self._user_file("JVBERi0=", "application/pdf", filename="q3.pdf")]
        )
        assert converted[0]["content"][1] == {
            "type": "file",
            "file": {
                "file_data": "data:application/pdf;base64,JVBERi0=",
                "filename": "q3.pdf",
            },
        }

    @pytest.mark.parametrize(
        "media_type,data,expected_format",
        [
            ("audio/wav", "UklGRg==", "wav"),
            ("audio/mpeg", "data:audio/mpeg;base64,SUQz", "mp3"),
        ],
    )
    def test_audio_becomes_input_audio(self, media_type, data, expected_format):
        converted = to_openai_messages([self._user_file(data, media_type)])
        part = converted[0]["content"][1]
        assert part["type"] == "input_audio"
        assert part["input_audio"]["format"] == expected_format
        assert not part["input_audio"]["data"].startswith("data:")

    def test_audio_url_rejected(self):
        with pytest.raises(ValueError, match="inline base64"):
            to_openai_messages([self._user_file("https://x.test/a.wav", "audio/wav")])

    def test_unsupported_media_type_rejected(self):
        with pytest.raises(ValueError, match="application/zip"):
            to_openai_messages([self._user_file("UEsDBA==", "application/zip")])


class TestGenerate:
    @pytest.mark.asyncio
    async def test_text_response(self, model, client):
        client.chat.completions.create.return_value = _make_response("Hello!")

        result = await model.generate(CallOptions(prompt="Hi", temperature=0.3))

        assert result.text == "Hello!"
        assert result.finish_reason == "stop"
        assert result.usage.input_tokens == 100
        assert result.usage.total_tokens == 120
        assert result.model_id == "gpt-test"

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["messages"] == [{"role": "user", "content": "Hi"}]
        assert kwargs["temperature"] == 0.3
        assert "tools" not in kwargs

    @pytest.mark.asyncio
    async def test_tool_call_response(self, model, client):
        client.chat.completions.create.return_value = _make_response(
            tool_calls=[_make_tool_call("getWeather", {"city": "Rome"})],
            finish_reason="tool_calls",
        )
        options = CallOptions.model_validate(
            {
                "prompt": "Weather in Rome?",
                "tools": {"getWeather": {"description": "Weather lookup", "inputSchema": {"type": "object"}}},
                "toolChoice": {"type": "tool", "toolName": "getWeather"},
            }
        )

        result = await model.generate(options)

        assert result.finish_reason == "tool-calls"
        assert result.tool_calls[0].tool_name == "getWeather"
        assert result.tool_calls[0].tool_call_id == "call_123"
        assert result.tool_calls[0].args == {"city": "Rome"}

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["tools"] == [
            {
                "type": "function",
                "function": {
                    "name": "getWeather",
                    "description": "Weather lookup",
                    "parameters": {"type": "object"},
                },
            }
        ]
        assert kwargs["tool_choice"] == {"type": "function", "function": {"name": "getWeather"}}

    @pytest.mark.asyncio
    async def test_json_response_format(self, model, client):
        client.chat.completions.create.return_value = _make_response("{}")
        schema = {"type": "object", "properties": {"x": {"type": "integer"}}}

        await model.generate(
            CallOptions(
                prompt="x?",
                response_format=ResponseFormat(type="json", name="Pick", schema=schema),
            )
        )

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {
            "type": "json_schema",
            "json_schema": {"name": "Pick", "schema": schema, "strict": False},
        }

    @pytest.mark.asyncio
    async def test_api_error_propagates(self, model, client):
        client.chat.completions.create.side_effect = RuntimeError("429")
        with pytest.raises(RuntimeError, match="429"):
            await model.generate(CallOptions(prompt="Hi"))


class TestStream:
    @pytest.mark.asyncio
    async def test_stream_parts(self, model, client):
        tool_delta = SimpleNamespace(
            index=0,
            id="call_9",
            function=SimpleNamespace(name="getWeather", arguments='{"city":'),
        )
        client.chat.completions.create.return_value = _chunks(
            _chunk(content="Hel"),
            _chunk(content="lo"),
            _chunk(tool_calls=[tool_delta]),
            _chunk(finish_reason="tool_calls"),
            _chunk(choices=False, usage=SimpleNamespace(prompt_tokens=7, completion_tokens=3)),
        )

        stream = await model.stream(CallOptions(prompt="Hi"))
        parts = [part async for part in stream]

        assert [p.delta for p in parts if isinstance(p, TextDeltaPart)] == ["Hel", "lo"]
        tool_parts = [p for p in parts if isinstance(p, ToolCallDeltaPart)]
        assert tool_parts[0].tool_name == "getWeather"
        assert tool_parts[0].args_delta == '{"city":'
        assert parts[-1] == FinishPart(
            finish_reason="tool-calls",
            usage={"input_tokens": 7, "output_tokens": 3},
        )

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["stream"] is True
        assert kwargs["stream_options"] == {"include_usage": True}
