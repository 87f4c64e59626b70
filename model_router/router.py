"""Router model: one LanguageModel that delegates each call to a chosen candidate.

Every generate or stream call first asks the reasoning model which candidate
should handle it (seeing the call's tools and completed tool calls), then
forwards the same options object to that candidate and hands back whatever it
returns. Errors from either step propagate untouched.
"""

import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Sequence

from model_router.agents.model_selector import ModelSelectorAgent
from model_router.core.config import settings
from model_router.language_model import LanguageModel
from model_router.models.options import CallOptions
from model_router.models.results import GenerateResult, StreamPart
from model_router.models.routing import RouterCandidate


class RouterConfigurationError(ValueError):
    """Raised when a router is built without any candidate models."""


@dataclass
class ModelRouterOptions:
    """Grouped router configuration."""

    prompt: str
    reasoning_model: LanguageModel
    models: Sequence[RouterCandidate]
    debug: bool | None = None
    logger: logging.Logger | None = None
    history_limit: int | None = None


class ModelRouter:
    """LanguageModel proxy that routes every call to one candidate model."""

    provider = "model-router"
    model_id = "model-router"

    def __init__(
        self,
        reasoning_model: LanguageModel,
        models: Sequence[RouterCandidate],
        prompt: str,
        *,
        debug: bool | None = None,
        logger: logging.Logger | None = None,
        history_limit: int | None = None,
    ):
        """Initialize the router.

        Args:
            reasoning_model: Model that decides which candidate runs each step
            models: Candidate models with capability descriptions
            prompt: The user's original request, shown on every decision
            debug: Log selection and delegation steps (default: from settings)
            logger: Logger for debug lines (default: this module's logger)
            history_limit: Completed tool calls shown per decision

        Raises:
            RouterConfigurationError: If ``models`` is empty
        """
        if len(models) == 0:
            raise RouterConfigurationError(
                "Router requires at least one model configuration"
            )

        self.prompt = prompt
        self.models = list(models)
        self.debug = settings.router_debug if debug is None else debug
        self._logger = logger or logging.getLogger(__name__)
        self._selector = ModelSelectorAgent(
            reasoning_model,
            history_limit=history_limit,
            logger=self._logger,
            debug=self.debug,
        )

    @classmethod
    def from_options(cls, options: ModelRouterOptions) -> "ModelRouter":
        """Build a router from a grouped configuration object."""
        return cls(
            options.reasoning_model,
            options.models,
            options.prompt,
            debug=options.debug,
            logger=options.logger,
            history_limit=options.history_limit,
        )

    @property
    def reasoning_model(self) -> LanguageModel:
        return self._selector.reasoning_model

    def __repr__(self) -> str:
        return f"ModelRouter(candidates={len(self.models)})"

    def _log(self, msg: str, *args: object) -> None:
        if self.debug:
            self._logger.info(msg, *args)

    async def _select(self, options: CallOptions) -> LanguageModel:
        return await self._selector.select(self.models, self.prompt, options)

    async def generate(self, options: CallOptions | dict[str, Any]) -> GenerateResult:
        """Route one non-streaming generation.

        Args:
            options: Call options, or a raw dict decoded into CallOptions

        Returns:
            The chosen model's result, unchanged
        """
        if isinstance(options, dict):
            options = CallOptions.model_validate(options)

        selected = await self._select(options)
        self._log("Generating a response...")
        result = await selected.generate(options)
        self._log("Response generated.")
        return result

    async def stream(
        self, options: CallOptions | dict[str, Any]
    ) -> AsyncIterator[StreamPart]:
        """Route one streaming generation and return the chosen model's stream."""
        if isinstance(options, dict):
            options = CallOptions.model_validate(options)

        selected = await self._select(options)
        self._log("Starting stream...")
        stream = await selected.stream(options)
        self._log("Stream started.")
        return stream


def model_router(options: ModelRouterOptions) -> ModelRouter:
    """Build a routing LanguageModel from grouped options."""
    return ModelRouter.from_options(options)
