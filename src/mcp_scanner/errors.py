"""Exceptions raised by the MCP scanner."""

from typing import Optional


class MCPScannerError(Exception):
    """Base exception for MCP scanner errors."""
    pass


class ConnectionInitiationError(MCPScannerError):
    """Opening the SSE stream failed (transport error, bad status or content type)."""
    pass


class HandshakeSendError(MCPScannerError):
    """Posting one of the protocol messages failed."""

    def __init__(self, step: str, message: Optional[str] = None) -> None:
        self.step = step
        super().__init__(message or f"failed to send {step}")


class DeadlineExceededError(MCPScannerError, TimeoutError):
    """The caller's deadline elapsed before the fetch completed."""

    def __init__(self, phase: str, message: Optional[str] = None) -> None:
        self.phase = phase
        super().__init__(message or f"context deadline exceeded while waiting for {phase}")


class DecodeError(MCPScannerError, ValueError):
    """A tools-list response could not be decoded."""
    pass
