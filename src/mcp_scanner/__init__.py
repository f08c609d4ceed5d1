"""MCP Scanner - Tool discovery over the MCP HTTP+SSE transport.

Connects to an MCP server's event stream, performs the initialize
handshake and retrieves the list of tools the server exposes.
"""

from mcp_scanner.client import MCPToolsClient, fetch_tools, fetch_tools_response
from mcp_scanner.errors import (
    ConnectionInitiationError,
    DeadlineExceededError,
    DecodeError,
    HandshakeSendError,
    MCPScannerError,
)
from mcp_scanner.parser import parse_tools_response

__all__ = [
    "MCPToolsClient",
    "fetch_tools",
    "fetch_tools_response",
    "parse_tools_response",
    "MCPScannerError",
    "ConnectionInitiationError",
    "HandshakeSendError",
    "DeadlineExceededError",
    "DecodeError",
]
