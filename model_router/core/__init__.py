"""Core module for model router."""

from model_router.core.config import Settings, settings
from model_router.core.logging import setup_logger

__all__ = ["Settings", "settings", "setup_logger"]
