"""Generation call options shared by every LanguageModel."""

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from model_router.models.messages import Message


class ToolDefinition(BaseModel):
    """A function tool advertised on a generation call."""

    model_config = ConfigDict(populate_by_name=True)

    description: str | None = None
    parameters: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        validation_alias=AliasChoices("parameters", "inputSchema", "input_schema"),
    )


class ResponseFormat(BaseModel):
    """Requested output format; ``json`` with a schema asks for structured output."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["text", "json"] = "text"
    name: str | None = None
    description: str | None = None
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")


class CallOptions(BaseModel):
    """Options for a single generate or stream call.

    Fields the router does not know about are kept as extras and travel with
    the object unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    prompt: str | list[Message] | None = None
    messages: list[Message] | None = None
    tools: dict[str, ToolDefinition] | None = None
    tool_choice: Any = Field(
        default=None, validation_alias=AliasChoices("tool_choice", "toolChoice")
    )
    temperature: float | None = None
    max_output_tokens: int | None = Field(
        default=None,
        validation_alias=AliasChoices("max_output_tokens", "maxOutputTokens"),
    )
    top_p: float | None = Field(
        default=None, validation_alias=AliasChoices("top_p", "topP")
    )
    stop_sequences: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("stop_sequences", "stopSequences")
    )
    seed: int | None = None
    response_format: ResponseFormat | None = Field(
        default=None,
        validation_alias=AliasChoices("response_format", "responseFormat"),
    )

    def transcript(self) -> list[Message] | None:
        """The conversation history carried by these options.

        ``messages`` wins over a list-valued ``prompt``; a string prompt has no
        history.
        """
        if self.messages is not None:
            return self.messages
        if isinstance(self.prompt, list):
            return self.prompt
        return None
