"""Parsing of ``tools/list`` responses."""

from pydantic import ValidationError

from shared.models import Tool, ToolsResponse
from mcp_scanner.errors import DecodeError


def parse_tools_response(tools_response: str) -> list[Tool]:
    """
    Parse a raw ``tools/list`` response into tools.

    Args:
        tools_response: Raw JSON-RPC message as received from the stream

    Returns:
        Tools in server order; an empty list when the server lists none

    Raises:
        DecodeError: If the payload is not a valid tools-list envelope
    """
    try:
        response = ToolsResponse.model_validate_json(tools_response)
        return [record.to_tool() for record in response.records()]
    except ValidationError as e:
        raise DecodeError(f"failed to parse tools response: {e}") from e
