"""Command-line entry point: list the tools an MCP SSE server exposes."""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from shared.config import get_settings
from shared.logging import get_logger, setup_logging
from mcp_scanner.client import MCPToolsClient, fetch_tools_response
from mcp_scanner.errors import MCPScannerError
from mcp_scanner.parser import parse_tools_response

logger = get_logger(__name__)


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-scanner",
        description="List the tools exposed by an MCP server over SSE"
    )
    parser.add_argument("--url", help="Base URL for MCP endpoint, e.g. http://localhost:8080")
    parser.add_argument("--timeout", type=_positive_float, help="Timeout in seconds (default: 5)")
    parser.add_argument("--client-name", help="Client name sent in the initialize request")
    parser.add_argument("--parse", action="store_true", help="Print parsed tools instead of the raw response")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    return parser


async def _fetch(url: str, timeout: float, client_name: str, http_timeout: float) -> str:
    async with MCPToolsClient(url, client_name=client_name, http_timeout=http_timeout) as client:
        return await fetch_tools_response(client, timeout)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the scanner and return the process exit status."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    setup_logging(
        log_level=args.log_level or settings.log_level,
        json_output=args.json_logs or settings.log_json
    )

    url = args.url or settings.url
    if not url:
        print("URL parameter is required", file=sys.stderr)
        return 1

    timeout = args.timeout if args.timeout is not None else settings.timeout
    client_name = args.client_name or settings.client_name

    try:
        raw = asyncio.run(_fetch(url, timeout, client_name, settings.http_timeout))
        tools = parse_tools_response(raw) if args.parse else None
    except MCPScannerError as e:
        logger.error("Failed to fetch tools", url=url, error=str(e))
        print(f"Failed to fetch tools: {e}", file=sys.stderr)
        return 1

    if tools is None:
        print(raw)
    else:
        for tool in tools:
            print(f"{tool.name}: {tool.description}")
    return 0
