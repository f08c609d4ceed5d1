"""Server-sent events stream reader.

Only the subset of the SSE framing used by MCP servers is honoured:
``data:`` lines, ``:`` comments and blank-line message termination.
``event:``, ``id:`` and ``retry:`` fields are ignored.
"""

from collections.abc import AsyncIterable, AsyncIterator
from typing import Optional


class SSEDecoder:
    """
    Incremental decoder turning SSE lines into logical messages.

    Feed one line at a time (without its terminator); a complete message is
    returned when a blank line closes a block that carried data.
    """

    def __init__(self) -> None:
        self._data: list[str] = []

    @property
    def pending(self) -> bool:
        """Whether data has been accumulated for an unfinished message."""
        return bool(self._data)

    def decode(self, line: str) -> Optional[str]:
        line = line.rstrip()

        if not line:
            if not self._data:
                return None
            message = "\n".join(self._data)
            self._data = []
            return message

        if line.startswith(":"):
            return None

        if line.startswith("data:"):
            data = line[len("data:"):].strip()
            if data:
                self._data.append(data)

        return None


async def iter_messages(lines: AsyncIterable[str]) -> AsyncIterator[str]:
    """
    Yield logical messages from an async iterable of lines.

    A trailing block without a terminating blank line is discarded.
    """
    decoder = SSEDecoder()
    async for line in lines:
        message = decoder.decode(line)
        if message is not None:
            yield message
