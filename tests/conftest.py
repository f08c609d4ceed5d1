"""Shared fixtures: a scripted MCP SSE server served through httpx.MockTransport."""

import asyncio
from typing import Optional

import httpx
import pytest

from mcp_scanner.messages import LIST_TOOLS

TOOLS_RESULT = '{"jsonrpc":"2.0","id":1,"result":{"tools":[{"name":"echo"}]}}'


class FakeSSEServer:
    """
    Minimal MCP server speaking the HTTP+SSE transport.

    The stream announces the endpoint, then answers with the tools result
    once the ``tools/list`` request has been posted. The stream is held
    open afterwards, like a real server would.
    """

    def __init__(
        self,
        endpoint_event: Optional[str] = "event: endpoint\ndata: /messages?session_id=42\n\n",
        tools_result: Optional[str] = TOOLS_RESULT,
        sse_status: int = 200,
        content_type: str = "text/event-stream",
        fail_post: Optional[str] = None,
        stream_error: Optional[BaseException] = None
    ) -> None:
        self.endpoint_event = endpoint_event
        self.tools_result = tools_result
        self.sse_status = sse_status
        self.content_type = content_type
        self.fail_post = fail_post
        self.stream_error = stream_error
        self.sse_timeout: Optional[dict] = None

        self.posts: list[tuple[str, str]] = []
        self.list_requested = asyncio.Event()
        self.stream_closed = asyncio.Event()

    async def stream(self):
        try:
            yield b": welcome\n\n"
            if self.endpoint_event is not None:
                yield self.endpoint_event.encode()
            if self.stream_error is not None:
                raise self.stream_error
            await self.list_requested.wait()
            if self.tools_result is not None:
                yield f"data: {self.tools_result}\n\n".encode()
            await asyncio.Event().wait()
        finally:
            self.stream_closed.set()

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/sse":
            self.sse_timeout = request.extensions.get("timeout")
            return httpx.Response(
                self.sse_status,
                headers={"content-type": self.content_type},
                content=self.stream()
            )

        if request.method == "POST":
            body = request.content.decode()
            self.posts.append((str(request.url), body))
            if self.fail_post is not None and self.fail_post in body:
                return httpx.Response(500, text="boom")
            if body == LIST_TOOLS:
                self.list_requested.set()
            return httpx.Response(202, text="Accepted")

        return httpx.Response(404)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def server() -> FakeSSEServer:
    return FakeSSEServer()
