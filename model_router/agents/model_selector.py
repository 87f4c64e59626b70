"""Model selector agent: asks a reasoning model which candidate runs the next step."""

import logging
from textwrap import dedent
from typing import Sequence

from model_router.agents.tool_history import format_tool_call_history
from model_router.core.config import settings
from model_router.language_model import LanguageModel
from model_router.models.options import CallOptions, ToolDefinition
from model_router.models.routing import RouterCandidate, bounded_selection_schema
from model_router.structured import generate_object

MODEL_SELECTION_PROMPT = dedent("""
    You are a model router. Select the SINGLE BEST language model to handle the CURRENT request.

    User Query:
    {query}

    Available Tools:
    {available_tools}

    Tool Call History (completed calls with successful results):
    {tool_call_history}

    Available Models:
    {model_options}

    CRITICAL INSTRUCTIONS:
    - You must select EXACTLY ONE model by number
    - Use 1-based indexing: valid numbers are 1 to {model_count} (NEVER use 0)
    - Match the model's specialty to the query and available tools
    - Consider which tools have already been called successfully
    - For sequential workflows, select the model best suited for the NEXT logical step
    - If the query has multiple tasks, pick the model best suited for the NEXT unfinished task, given what has already been completed
    - Example: If getMarketData was called, and now we need financial analysis, select the financial analysis specialist

    Your response MUST include a model_index between 1 and {model_count}.
""").strip()

NO_TOOLS = "None"


def format_tools(tools: dict[str, ToolDefinition] | None) -> str:
    """Render the call's tool set as ``name: description`` lines."""
    if not tools:
        return NO_TOOLS
    return "\n".join(
        f"{name}: {tool.description or 'No description'}"
        for name, tool in tools.items()
    )


def format_candidates(candidates: Sequence[RouterCandidate]) -> str:
    """Render candidates by position and description only."""
    return "\n".join(
        f"{idx}. Model {idx}: {candidate.description}"
        for idx, candidate in enumerate(candidates, start=1)
    )


def _candidate_name(candidate: RouterCandidate, position: int) -> str:
    return getattr(candidate.model, "model_id", None) or f"Model {position}"


class ModelSelectorAgent:
    """Agent that picks one candidate model per generation step."""

    def __init__(
        self,
        reasoning_model: LanguageModel,
        history_limit: int | None = None,
        logger: logging.Logger | None = None,
        debug: bool = False,
    ):
        """Initialize the model selector agent.

        Args:
            reasoning_model: Model that makes the routing decision
            history_limit: Completed tool calls shown to the reasoning model
                (default: from settings)
            logger: Where debug lines go (default: this module's logger)
            debug: Emit selection log lines
        """
        self.reasoning_model = reasoning_model
        self.history_limit = (
            history_limit if history_limit is not None else settings.history_limit
        )
        self.logger = logger or logging.getLogger(__name__)
        self.debug = debug

    def _log(self, msg: str, *args: object) -> None:
        if self.debug:
            self.logger.info(msg, *args)

    def build_prompt(
        self,
        candidates: Sequence[RouterCandidate],
        query: str,
        options: CallOptions,
    ) -> str:
        """Build the decision prompt for the reasoning model."""
        return MODEL_SELECTION_PROMPT.format(
            query=query,
            available_tools=format_tools(options.tools),
            tool_call_history=format_tool_call_history(
                options.transcript(),
                max_calls=self.history_limit,
                preview_length=settings.args_preview_length,
            ),
            model_options=format_candidates(candidates),
            model_count=len(candidates),
        )

    async def select(
        self,
        candidates: Sequence[RouterCandidate],
        query: str,
        options: CallOptions,
    ) -> LanguageModel:
        """Select the candidate model for this call.

        Args:
            candidates: Non-empty candidate list
            query: The user's original prompt
            options: Options of the call being routed

        Returns:
            The chosen candidate's model

        Raises:
            pydantic.ValidationError: If the reasoning model's answer does not
                fit the bounded selection schema
        """
        prompt = self.build_prompt(candidates, query, options)
        schema = bounded_selection_schema(len(candidates))

        self._log("Selecting model...")
        selection = await generate_object(self.reasoning_model, schema, prompt)

        chosen = candidates[selection.model_index - 1]
        self._log(
            "Selected: %s - %s",
            _candidate_name(chosen, selection.model_index),
            selection.reasoning,
        )
        return chosen.model


async def select_model(
    reasoning_model: LanguageModel,
    candidates: Sequence[RouterCandidate],
    original_prompt: str,
    options: CallOptions,
    *,
    history_limit: int | None = None,
    logger: logging.Logger | None = None,
    debug: bool = False,
) -> LanguageModel:
    """One-shot form of ModelSelectorAgent.select."""
    agent = ModelSelectorAgent(
        reasoning_model, history_limit=history_limit, logger=logger, debug=debug
    )
    return await agent.select(candidates, original_prompt, options)
