"""Agents module for model router."""

from model_router.agents.model_selector import ModelSelectorAgent, select_model
from model_router.agents.tool_history import (
    extract_tool_call_history,
    format_tool_call_history,
)

__all__ = [
    "ModelSelectorAgent",
    "extract_tool_call_history",
    "format_tool_call_history",
    "select_model",
]
