"""Generation results and stream parts."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from model_router.models.messages import TextPart, ToolCallPart


class Usage(BaseModel):
    """Token usage reported by the provider."""

    input_tokens: int | None = None
    output_tokens: int | None = None

    @property
    def total_tokens(self) -> int | None:
        if self.input_tokens is None or self.output_tokens is None:
            return None
        return self.input_tokens + self.output_tokens


FinishReason = Literal[
    "stop", "length", "content-filter", "tool-calls", "error", "other", "unknown"
]


class GenerateResult(BaseModel):
    """Result of a single non-streaming generation."""

    content: list[Annotated[Union[TextPart, ToolCallPart], Field(discriminator="type")]]
    finish_reason: FinishReason = "unknown"
    usage: Usage = Field(default_factory=Usage)
    model_id: str | None = None
    raw: Any = Field(default=None, exclude=True, repr=False)

    @property
    def text(self) -> str:
        return "".join(p.text for p in self.content if isinstance(p, TextPart))

    @property
    def tool_calls(self) -> list[ToolCallPart]:
        return [p for p in self.content if isinstance(p, ToolCallPart)]


class TextDeltaPart(BaseModel):
    type: Literal["text-delta"] = "text-delta"
    delta: str


class ToolCallDeltaPart(BaseModel):
    """A fragment of a streamed tool call; ``index`` groups fragments."""

    type: Literal["tool-call-delta"] = "tool-call-delta"
    index: int
    tool_call_id: str | None = None
    tool_name: str | None = None
    args_delta: str = ""


class FinishPart(BaseModel):
    type: Literal["finish"] = "finish"
    finish_reason: FinishReason = "unknown"
    usage: Usage = Field(default_factory=Usage)


StreamPart = Annotated[
    Union[TextDeltaPart, ToolCallDeltaPart, FinishPart],
    Field(discriminator="type"),
]
