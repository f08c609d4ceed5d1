"""Tests for the SSE stream reader."""

import pytest

from mcp_scanner.sse import SSEDecoder, iter_messages


async def _lines(*lines: str):
    for line in lines:
        yield line


async def _collect(*lines: str) -> list[str]:
    return [message async for message in iter_messages(_lines(*lines))]


class TestSSEDecoder:
    """Tests for SSEDecoder."""

    def test_single_data_line(self):
        """Test a data line followed by a blank line yields one message."""
        decoder = SSEDecoder()

        assert decoder.decode("data: hello") is None
        assert decoder.decode("") == "hello"

    def test_multiple_data_lines_joined_with_newline(self):
        """Test consecutive data lines are joined in arrival order."""
        decoder = SSEDecoder()

        decoder.decode("data: first")
        decoder.decode("data:second")
        decoder.decode("data:   third  ")

        assert decoder.decode("") == "first\nsecond\nthird"

    def test_blank_line_without_data_is_noop(self):
        """Test a blank line with nothing pending emits nothing."""
        decoder = SSEDecoder()

        assert decoder.decode("") is None
        assert decoder.decode("   ") is None
        assert not decoder.pending

    def test_comments_never_contribute(self):
        """Test comment lines are ignored wherever they appear."""
        decoder = SSEDecoder()

        decoder.decode(": keepalive")
        decoder.decode("data: a")
        decoder.decode(":data: not data")
        decoder.decode("data: b")

        assert decoder.decode("") == "a\nb"

    def test_other_fields_ignored(self):
        """Test event/id/retry and unknown lines do not affect the payload."""
        decoder = SSEDecoder()

        decoder.decode("event: endpoint")
        decoder.decode("id: 7")
        decoder.decode("retry: 1000")
        decoder.decode("garbage")
        decoder.decode("data: /messages?session_id=1")

        assert decoder.decode("") == "/messages?session_id=1"

    def test_trailing_whitespace_trimmed(self):
        """Test trailing whitespace and carriage returns are trimmed."""
        decoder = SSEDecoder()

        decoder.decode("data: payload \r")

        assert decoder.decode("\t") == "payload"

    def test_accumulator_resets_after_emit(self):
        """Test a second block starts from an empty accumulator."""
        decoder = SSEDecoder()

        decoder.decode("data: one")
        decoder.decode("")
        decoder.decode("data: two")

        assert decoder.decode("") == "two"


    def test_empty_data_line_contributes_nothing(self):
        """Test a block of empty data lines emits no message."""
        decoder = SSEDecoder()

        decoder.decode("data:")
        decoder.decode("data:   ")

        assert decoder.decode("") is None

    def test_empty_data_line_before_payload(self):
        """Test an empty data line adds no leading newline."""
        decoder = SSEDecoder()

        decoder.decode("data:")
        decoder.decode("data: x")

        assert decoder.decode("") == "x"


class TestIterMessages:
    """Tests for the async message iterator."""

    @pytest.mark.asyncio
    async def test_one_message_per_block(self):
        """Test each data-carrying block yields exactly one message."""
        messages = await _collect(
            ": hello",
            "",
            "data: a",
            "",
            "",
            "event: x",
            "",
            "data: b1",
            "data: b2",
            "",
        )

        assert messages == ["a", "b1\nb2"]

    @pytest.mark.asyncio
    async def test_partial_message_discarded_at_end(self):
        """Test an unterminated block is not emitted when the stream ends."""
        messages = await _collect("data: complete", "", "data: partial")

        assert messages == ["complete"]

    @pytest.mark.asyncio
    async def test_empty_stream(self):
        """Test an empty stream yields nothing."""
        assert await _collect() == []
