"""Shared fixtures built on the in-memory fakes."""

import pytest

from model_router.models.routing import RouterCandidate
from tests.fakes import FakeModel, reasoner_reply


@pytest.fixture
def make_reasoner():
    """Factory for a reasoning model that always picks ``index``."""

    def _make(index: int, reasoning: str = "best fit") -> FakeModel:
        return FakeModel("reasoner", text=reasoner_reply(index, reasoning))

    return _make


@pytest.fixture
def specialists():
    """Weather, finance and formatting specialists, in that order."""
    return [
        FakeModel("weather-model", text="It is sunny."),
        FakeModel("finance-model", text="Revenue grew 12%."),
        FakeModel("format-model", text="| a | b |"),
    ]


@pytest.fixture
def candidates(specialists):
    descriptions = [
        "Weather specialist: forecasts, current conditions and climate data",
        "Finance specialist: financial analysis and report writing",
        "Formatting specialist: tables, markdown and document layout",
    ]
    return [
        RouterCandidate(model=model, description=description)
        for model, description in zip(specialists, descriptions)
    ]


@pytest.fixture
def weather_transcript():
    """A conversation where a weather lookup has already completed."""
    return [
        {"role": "user", "content": [{"type": "text", "text": "Check the weather, then write the report"}]},
        {
            "role": "assistant",
            "content": [
                {
                    "type": "tool-call",
                    "toolCallId": "call_1",
                    "toolName": "getWeather",
                    "input": {"city": "Paris"},
                }
            ],
        },
        {
            "role": "tool",
            "content": [
                {
                    "type": "tool-result",
                    "toolCallId": "call_1",
                    "toolName": "getWeather",
                    "output": {"forecast": "sunny"},
                }
            ],
        },
    ]


@pytest.fixture
def report_tools():
    return {
        "getWeather": {"description": "Get the weather forecast for a city"},
        "getFinancials": {"description": "Fetch quarterly financial statements"},
        "formatTable": {"description": "Render data as a markdown table"},
    }
