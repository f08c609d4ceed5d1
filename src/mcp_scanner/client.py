"""MCP SSE client for tool discovery.

Opens the server's event stream, learns the message endpoint from it,
performs the initialize handshake and requests the tool listing.
The stream is drained by a background task while the caller sends
requests; results are handed over through queues.
"""

import asyncio
from contextlib import aclosing
from typing import Optional

import httpx

from shared.logging import get_logger
from shared.models import MessageKind, Tool
from mcp_scanner.errors import (
    ConnectionInitiationError,
    DeadlineExceededError,
    HandshakeSendError,
    MCPScannerError,
)
from mcp_scanner.messages import (
    DEFAULT_CLIENT_NAME,
    INITIALIZED,
    LIST_TOOLS,
    initialize_message,
)
from mcp_scanner.parser import parse_tools_response
from mcp_scanner.routing import classify, parse_messages_endpoint
from mcp_scanner.sse import iter_messages

logger = get_logger(__name__)

EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


class MCPToolsClient:
    """
    Client holding a single SSE session with an MCP server.

    The session endpoint is discovered once and kept for the lifetime of
    the client. Use as an async context manager, or call :meth:`close`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client_name: str = DEFAULT_CLIENT_NAME,
        http_timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
        message_buffer: int = 16
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Server base URL, e.g. ``http://localhost:8080``
            client_name: Name announced in the ``initialize`` request
            http_timeout: Connect/write timeout for HTTP requests in seconds
            http_client: Preconfigured HTTP client; not closed by this client
            message_buffer: Capacity of the generic message queue
        """
        self.base_url = base_url.rstrip("/")
        self.client_name = client_name
        self.http_timeout = http_timeout
        self.endpoint: Optional[str] = None

        self.messages: asyncio.Queue[str] = asyncio.Queue(maxsize=message_buffer)
        self.tools_results: asyncio.Queue[str] = asyncio.Queue(maxsize=1)

        self._client = http_client
        self._owns_client = http_client is None
        self._response: Optional[httpx.Response] = None
        self._reader_task: Optional[asyncio.Task[None]] = None
        self._endpoint_ready = asyncio.Event()
        self._closed = False
        self._close_lock = asyncio.Lock()

    @property
    def closed(self) -> bool:
        """Whether :meth:`close` has completed."""
        return self._closed

    @property
    def streaming(self) -> bool:
        """Whether the background stream reader is running."""
        return self._reader_task is not None and not self._reader_task.done()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.http_timeout, read=None)
            )
            self._owns_client = True
        return self._client

    async def __aenter__(self) -> "MCPToolsClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def initiate_connection(self) -> None:
        """
        Open the SSE stream and start draining it in the background.

        Raises:
            ConnectionInitiationError: If the request fails, the status is
                not 200 or the response is not an event stream
        """
        if self._closed:
            raise MCPScannerError("client is closed")
        if self._reader_task is not None:
            raise MCPScannerError("connection already initiated")

        client = await self._get_client()
        try:
            # No read timeout: the stream stays idle between events.
            request = client.build_request(
                "GET",
                f"{self.base_url}/sse",
                headers={"Accept": EVENT_STREAM_CONTENT_TYPE},
                timeout=httpx.Timeout(self.http_timeout, read=None)
            )
            response = await client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ConnectionInitiationError(f"failed to send request: {e}") from e

        if response.status_code != 200:
            await response.aclose()
            raise ConnectionInitiationError(f"unexpected status code: {response.status_code}")

        content_type = response.headers.get("content-type", "")
        if EVENT_STREAM_CONTENT_TYPE not in content_type:
            await response.aclose()
            raise ConnectionInitiationError(
                f"unexpected content type: {content_type}, expected {EVENT_STREAM_CONTENT_TYPE}"
            )

        logger.debug("Processing SSE stream", url=str(request.url))
        self._response = response
        self._reader_task = asyncio.create_task(
            self._process_stream(response),
            name="mcp-sse-reader"
        )

    async def _process_stream(self, response: httpx.Response) -> None:
        """Read the event stream and route each message until it ends."""
        try:
            async with aclosing(iter_messages(response.aiter_lines())) as messages:
                async for message in messages:
                    await self._route(message)
        except httpx.HTTPError as e:
            logger.debug("SSE stream read failed", error=str(e))
        finally:
            await response.aclose()
        logger.debug("SSE stream ended")

    async def _route(self, message: str) -> None:
        kind = classify(message)
        logger.debug("Received message", kind=kind.value, message=message)

        if kind is MessageKind.SESSION:
            self._set_endpoint(parse_messages_endpoint(message))
        elif kind is MessageKind.TOOLS_RESULT:
            await self._deliver(message)
        else:
            self._offer(message)

    def _set_endpoint(self, endpoint: Optional[str]) -> None:
        if endpoint is None:
            return
        if self.endpoint is not None:
            if endpoint != self.endpoint:
                logger.debug("Ignoring additional messages endpoint", endpoint=endpoint)
            return

        self.endpoint = endpoint
        self._endpoint_ready.set()
        logger.info("Found messages endpoint", endpoint=endpoint)

    async def _deliver(self, message: str) -> None:
        """Hand a tools result to the waiting caller; dropped once closed."""
        if self._closed:
            logger.debug("Dropping tools result after close")
            return
        await self.tools_results.put(message)

    def _offer(self, message: str) -> None:
        """Queue a generic message without blocking the reader."""
        if self._closed:
            return
        try:
            self.messages.put_nowait(message)
        except asyncio.QueueFull:
            logger.debug("Message queue full, dropping message")

    async def wait_for_endpoint(self) -> str:
        """Suspend until the session endpoint has been discovered."""
        await self._endpoint_ready.wait()
        if self.endpoint is None:
            raise MCPScannerError("endpoint signalled without a discovered endpoint")
        return self.endpoint

    def handshake_sequence(self) -> list[tuple[str, str]]:
        """Messages to send after endpoint discovery, in order, keyed by step."""
        return [
            ("initialize", initialize_message(self.client_name)),
            ("initialized", INITIALIZED),
            ("list_tools", LIST_TOOLS),
        ]

    async def send_message(self, message: str) -> None:
        """
        POST a protocol message to the session endpoint.

        Raises:
            MCPScannerError: If no endpoint has been discovered yet
            httpx.HTTPError: If the request fails or the server rejects it
        """
        if self.endpoint is None:
            raise MCPScannerError("messages endpoint not discovered")

        client = await self._get_client()
        response = await client.post(
            f"{self.base_url}{self.endpoint}",
            content=message,
            headers={"Content-Type": "application/json"}
        )
        response.raise_for_status()

    async def wait_for_tools_result(self) -> str:
        """Wait for the next non-empty tools result from the stream."""
        while True:
            message = await self.tools_results.get()
            if message:
                return message
            logger.debug("Empty tools response received")

    def reader_error(self) -> Optional[BaseException]:
        """Return the exception the background reader terminated with, if any."""
        task = self._reader_task
        if task is None or not task.done() or task.cancelled():
            return None
        return task.exception()

    async def stop_stream(self) -> None:
        """Cancel the background reader, wait for it and release the stream."""
        task = self._reader_task
        if task is not None:
            if not task.done():
                task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        if self._response is not None:
            await self._response.aclose()

    async def close(self) -> None:
        """Stop the stream and release resources. Safe to call repeatedly."""
        async with self._close_lock:
            if self._closed:
                return

            await self.stop_stream()
            self._closed = True

            if self._owns_client and self._client is not None and not self._client.is_closed:
                await self._client.aclose()
            self._client = None
            logger.debug("Client closed")


async def fetch_tools_response(client: MCPToolsClient, timeout: Optional[float] = None) -> str:
    """
    Discover the server's tools and return the raw ``tools/list`` result.

    A single deadline covers the whole exchange. The background reader is
    stopped before this function returns, whatever the outcome.

    Args:
        client: A client that has not connected yet
        timeout: Deadline in seconds; None waits indefinitely

    Returns:
        The raw JSON-RPC result message

    Raises:
        ConnectionInitiationError: If the event stream cannot be opened
        HandshakeSendError: If posting a protocol message fails
        DeadlineExceededError: If the deadline elapses first
    """
    phase = "connect"
    try:
        async with asyncio.timeout(timeout):
            logger.info("Initiating connection", url=client.base_url)
            await client.initiate_connection()

            phase = "endpoint"
            endpoint = await client.wait_for_endpoint()
            logger.info("Successfully got the messages endpoint", endpoint=endpoint)

            phase = "handshake"
            for step, message in client.handshake_sequence():
                try:
                    await client.send_message(message)
                except httpx.HTTPError as e:
                    raise HandshakeSendError(step, f"failed to send {step}: {e}") from e
                logger.debug("Sent message", step=step)

            phase = "tools_result"
            return await client.wait_for_tools_result()
    except TimeoutError as e:
        cause = client.reader_error() or e
        logger.warning("Context deadline exceeded", phase=phase)
        raise DeadlineExceededError(phase) from cause
    finally:
        await client.stop_stream()


async def fetch_tools(client: MCPToolsClient, timeout: Optional[float] = None) -> list[Tool]:
    """Fetch and parse the server's tools."""
    raw = await fetch_tools_response(client, timeout)
    return parse_tools_response(raw)
