"""Shared utilities and data models for the MCP scanner."""

from shared.models import (
    DEFAULT_TOOL_DESCRIPTION,
    MessageKind,
    Tool,
    ToolRecord,
    ToolsResponse,
)
from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "DEFAULT_TOOL_DESCRIPTION",
    "MessageKind",
    "Tool",
    "ToolRecord",
    "ToolsResponse",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
]
