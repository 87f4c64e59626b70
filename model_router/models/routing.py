"""Routing-related models."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, create_model

if TYPE_CHECKING:
    from model_router.language_model import LanguageModel


@dataclass(frozen=True)
class RouterCandidate:
    """A model the router may delegate to, with guidance on when to use it."""

    model: "LanguageModel"
    description: str


@dataclass(frozen=True)
class CompletedToolCall:
    """A tool invocation whose result has been observed in the transcript."""

    tool_name: str
    args: Any


class ModelSelection(BaseModel):
    """Structured choice returned by the reasoning model."""

    model_config = ConfigDict(protected_namespaces=())

    model_index: int = Field(description="The 1-based index of the selected model")
    reasoning: str = Field(
        description="Brief explanation of why this model was selected"
    )


def bounded_selection_schema(candidate_count: int) -> type[ModelSelection]:
    """Build a ModelSelection schema whose index is limited to the candidate list."""
    return create_model(
        "ModelSelection",
        __base__=ModelSelection,
        model_index=(
            int,
            Field(
                ge=1,
                le=candidate_count,
                description=f"The index of the selected model (1-{candidate_count})",
            ),
        ),
    )
