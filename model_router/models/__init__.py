"""Models module for model router."""

from model_router.models.messages import (
    ContentPart,
    FilePart,
    Message,
    ReasoningPart,
    TextPart,
    ToolCallPart,
    ToolResultPart,
)
from model_router.models.options import CallOptions, ResponseFormat, ToolDefinition
from model_router.models.results import (
    FinishPart,
    GenerateResult,
    StreamPart,
    TextDeltaPart,
    ToolCallDeltaPart,
    Usage,
)
from model_router.models.routing import (
    CompletedToolCall,
    ModelSelection,
    RouterCandidate,
    bounded_selection_schema,
)

__all__ = [
    "CallOptions",
    "CompletedToolCall",
    "ContentPart",
    "FilePart",
    "FinishPart",
    "GenerateResult",
    "Message",
    "ModelSelection",
    "ReasoningPart",
    "ResponseFormat",
    "RouterCandidate",
    "StreamPart",
    "TextDeltaPart",
    "TextPart",
    "ToolCallDeltaPart",
    "ToolCallPart",
    "ToolDefinition",
    "ToolResultPart",
    "Usage",
    "bounded_selection_schema",
]
