"""Conversation messages and their tagged content parts."""

from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _Part(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TextPart(_Part):
    """Plain text content."""

    type: Literal["text"] = "text"
    text: str


class ReasoningPart(_Part):
    """Model reasoning text carried along with an assistant turn."""

    type: Literal["reasoning"] = "reasoning"
    text: str


class FilePart(_Part):
    """Inline file content (base64 data or a URL)."""

    type: Literal["file"] = "file"
    data: str
    media_type: str = Field(
        default="application/octet-stream",
        validation_alias=AliasChoices("media_type", "mediaType", "mimeType"),
    )
    filename: str | None = None


class ToolCallPart(_Part):
    """A tool invocation requested by the assistant."""

    type: Literal["tool-call"] = "tool-call"
    tool_call_id: str | None = Field(
        default=None, validation_alias=AliasChoices("tool_call_id", "toolCallId", "id")
    )
    tool_name: str = Field(validation_alias=AliasChoices("tool_name", "toolName"))
    args: Any = Field(default=None, validation_alias=AliasChoices("args", "input"))


class ToolResultPart(_Part):
    """The observed result of a tool invocation."""

    type: Literal["tool-result"] = "tool-result"
    tool_call_id: str | None = Field(
        default=None, validation_alias=AliasChoices("tool_call_id", "toolCallId", "id")
    )
    tool_name: str | None = Field(
        default=None, validation_alias=AliasChoices("tool_name", "toolName")
    )
    result: Any = Field(default=None, validation_alias=AliasChoices("result", "output"))


ContentPart = Annotated[
    Union[TextPart, ReasoningPart, FilePart, ToolCallPart, ToolResultPart],
    Field(discriminator="type"),
]

Role = Literal["system", "user", "assistant", "tool"]


class Message(BaseModel):
    """A single conversation message."""

    role: Role
    content: str | list[ContentPart]

    def parts(self) -> list[ContentPart]:
        """Content as a part list; string content becomes a single text part."""
        if isinstance(self.content, str):
            return [TextPart(text=self.content)]
        return list(self.content)

    def text(self) -> str:
        """Concatenated text of all text parts."""
        return "".join(p.text for p in self.parts() if isinstance(p, TextPart))
