"""Route a single prompt through a pool of OpenAI-compatible models.

The pool is described by a JSON file:

    {
        "reasoning_model": "gpt-4o-mini",
        "models": [
            {"model": "qwen3-coder", "description": "Code generation and review"},
            {"model": "gpt-4o", "description": "Financial analysis and reports"}
        ]
    }

Entries may also set "api_key" and "base_url"; anything unset falls back to
the LLM gateway settings.
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from model_router.chat_model import OpenAIChatModel
from model_router.core.config import settings
from model_router.core.logging import setup_logger
from model_router.models.options import CallOptions
from model_router.models.results import FinishPart, TextDeltaPart
from model_router.models.routing import RouterCandidate
from model_router.router import ModelRouter

logger = logging.getLogger(__name__)


def load_pool(path: Path) -> dict[str, Any]:
    """Load and sanity-check a model pool file."""
    with open(path, "r", encoding="utf-8") as f:
        pool = json.load(f)

    if not pool.get("models"):
        raise ValueError(f"{path} does not define any models")
    return pool


def build_router(pool: dict[str, Any], prompt: str, debug: bool) -> ModelRouter:
    """Create the reasoning model, candidates and router described by ``pool``."""
    reasoning_model = OpenAIChatModel(
        model_name=pool.get("reasoning_model"),
        agent_type="routing_reasoner",
    )
    candidates = [
        RouterCandidate(
            model=OpenAIChatModel(
                model_name=entry["model"],
                api_key=entry.get("api_key"),
                base_url=entry.get("base_url"),
            ),
            description=entry["description"],
        )
        for entry in pool["models"]
    ]
    return ModelRouter(reasoning_model, candidates, prompt, debug=debug)


async def run(router: ModelRouter, prompt: str, stream: bool) -> str:
    """Route ``prompt`` once and return the generated text."""
    options = CallOptions(prompt=prompt, temperature=settings.default_temperature)

    if not stream:
        result = await router.generate(options)
        logger.info(
            "Finished (%s), tokens in=%s out=%s",
            result.finish_reason,
            result.usage.input_tokens,
            result.usage.output_tokens,
        )
        return result.text

    chunks = []
    async for part in await router.stream(options):
        if isinstance(part, TextDeltaPart):
            print(part.delta, end="", flush=True)
            chunks.append(part.delta)
        elif isinstance(part, FinishPart):
            print()
            logger.info("Stream finished (%s)", part.finish_reason)
    return "".join(chunks)


def main():
    parser = argparse.ArgumentParser(
        description="Route a prompt to the best model in a pool."
    )
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="Path to the JSON model pool file",
    )
    parser.add_argument(
        "--prompt",
        type=str,
        required=True,
        help="The prompt to route",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Stream the chosen model's output",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log routing decisions and delegation steps",
    )
    args = parser.parse_args()

    setup_logger(debug=args.debug)

    pool = load_pool(args.config)
    logger.info("Loaded %d candidate models from %s", len(pool["models"]), args.config)

    router = build_router(pool, args.prompt, debug=args.debug or settings.router_debug)
    text = asyncio.run(run(router, args.prompt, args.stream))

    if not args.stream:
        print(text)


if __name__ == "__main__":
    main()
