"""Schema-constrained generation on top of any LanguageModel."""

import logging
from typing import TypeVar

from pydantic import BaseModel

from model_router.language_model import LanguageModel
from model_router.models.messages import Message
from model_router.models.options import CallOptions, ResponseFormat

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


async def generate_object(
    model: LanguageModel,
    schema: type[T],
    prompt: str,
    temperature: float | None = None,
) -> T:
    """Ask ``model`` for a JSON object matching ``schema`` and validate it.

    Args:
        model: The model to query
        schema: Pydantic model describing the expected object
        prompt: User prompt
        temperature: Optional sampling temperature

    Returns:
        The validated object

    Raises:
        pydantic.ValidationError: If the output is not valid JSON for ``schema``
    """
    options = CallOptions(
        prompt=[Message(role="user", content=prompt)],
        temperature=temperature,
        response_format=ResponseFormat(
            type="json",
            name=schema.__name__,
            schema=schema.model_json_schema(),
        ),
    )

    result = await model.generate(options)
    logger.debug("Raw structured output from %s: %s", model.model_id, result.text)
    return schema.model_validate_json(result.text)
