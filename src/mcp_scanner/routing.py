"""Session negotiation and classification of inbound stream messages."""

import json
import re
from typing import Optional

from shared.models import MessageKind

SESSION_MARKER = "session"
ENDPOINT_PATTERN = re.compile(r"/messages[^\s]+")


def parse_messages_endpoint(message: str) -> Optional[str]:
    """
    Extract the message endpoint path from a session event.

    Returns the matched path including its leading ``/``, or None when the
    message carries no endpoint.
    """
    match = ENDPOINT_PATTERN.search(message)
    if match is None:
        return None
    return match.group(0)


def is_tools_result(message: str) -> bool:
    """Whether ``message`` is a JSON-RPC response whose result has a ``tools`` key."""
    try:
        payload = json.loads(message)
    except (ValueError, RecursionError):
        return False

    if not isinstance(payload, dict):
        return False
    result = payload.get("result")
    return isinstance(result, dict) and "tools" in result


def is_session_event(message: str) -> bool:
    """Whether ``message`` announces a session endpoint."""
    return SESSION_MARKER in message and parse_messages_endpoint(message) is not None


def classify(message: str) -> MessageKind:
    """
    Classify an inbound message.

    The result shape is checked first so a tools listing that happens to
    mention sessions is still delivered as a result.
    """
    if is_tools_result(message):
        return MessageKind.TOOLS_RESULT
    if is_session_event(message):
        return MessageKind.SESSION
    return MessageKind.OTHER
