"""Core data models for the MCP scanner.

Defines the normalized tool record handed to callers and the wire
envelope of a ``tools/list`` result.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TOOL_DESCRIPTION = "No description provided"


class MessageKind(str, Enum):
    """Classification of an inbound stream message."""
    SESSION = "session"
    TOOLS_RESULT = "tools_result"
    OTHER = "other"


class Tool(BaseModel):
    """A tool advertised by a remote MCP server."""
    name: str = Field(..., min_length=1)
    description: str = DEFAULT_TOOL_DESCRIPTION
    input_schema: Any = Field(default=None, description="Opaque input schema, not interpreted")


class ToolRecord(BaseModel):
    """A single tool entry as sent by the server."""
    name: str
    description: Optional[str] = None
    input_schema: Any = Field(default=None, alias="inputSchema")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_tool(self) -> Tool:
        """Normalize into a :class:`Tool`, substituting the default description."""
        return Tool(
            name=self.name,
            description=self.description or DEFAULT_TOOL_DESCRIPTION,
            input_schema=self.input_schema,
        )


class ToolsResult(BaseModel):
    """The ``result`` object of a ``tools/list`` response."""
    tools: Optional[list[ToolRecord]] = None

    model_config = ConfigDict(extra="ignore")


class ToolsResponse(BaseModel):
    """
    JSON-RPC envelope carrying a ``tools/list`` result.

    Missing or null ``result`` and ``tools`` decode as an empty tool list.
    """
    result: Optional[ToolsResult] = None

    model_config = ConfigDict(extra="ignore")

    def records(self) -> list[ToolRecord]:
        """Tool records in server order."""
        if self.result is None or self.result.tools is None:
            return []
        return self.result.tools
