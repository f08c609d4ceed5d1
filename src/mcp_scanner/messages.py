"""Outbound MCP protocol messages.

The payloads are fixed literals matching what MCP servers expect from an
SSE client during the handshake.
"""

import json

PROTOCOL_VERSION = "2024-11-05"
DEFAULT_CLIENT_NAME = "cursor-vscode"
CLIENT_VERSION = "1.0.0"

_INITIALIZE_TEMPLATE = (
    '{"method":"initialize","params":{"protocolVersion":"%(version)s",'
    '"capabilities":{"tools":true,"prompts":false,"resources":true,"logging":false,'
    '"roots":{"listChanged":false}},"clientInfo":{"name":%(name)s,"version":"%(client_version)s"}},'
    '"jsonrpc":"2.0","id":0}'
)


def initialize_message(client_name: str = DEFAULT_CLIENT_NAME) -> str:
    """Render the ``initialize`` request for ``client_name``."""
    return _INITIALIZE_TEMPLATE % {
        "version": PROTOCOL_VERSION,
        "name": json.dumps(client_name),
        "client_version": CLIENT_VERSION,
    }


INITIALIZE = initialize_message()
INITIALIZED = '{"method":"notifications/initialized","jsonrpc":"2.0"}'
LIST_TOOLS = '{"method":"tools/list","jsonrpc":"2.0","id":1}'
