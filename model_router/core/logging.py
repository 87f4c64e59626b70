"""Logging configuration for the model_router package.

This module provides logging setup that only affects the model_router loggers,
without modifying external library loggers.
"""

import logging
import sys


def setup_logger(
    level: int = logging.INFO,
    debug: bool = False,
    format_string: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> logging.Logger:
    """Set up logging for the model_router package only.

    The openai and httpx loggers are left untouched.

    Args:
        level: The logging level for the root model_router logger.
        debug: If True, sets the level to DEBUG regardless of the level argument.
        format_string: The format string for log messages.

    Returns:
        The configured model_router logger.
    """
    logger = logging.getLogger("model_router")

    if debug:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)  # Handler passes all messages, logger filters
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)

    logger.propagate = False

    return logger
