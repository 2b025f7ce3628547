"""Tests for status line formatting and the line writer."""

import io

import pytest

from cli_status.exceptions import OutputError
from cli_status.status.status_types import NO_WORK, StatusSnapshot
from cli_status.status.writer import (
    StatusLineWriter,
    format_elapsed,
    format_status_line,
)


def make_snapshot(count: int = 0, total: int = -1) -> StatusSnapshot:
    """Build a snapshot with the given counter at 5 seconds."""
    return StatusSnapshot(
        elapsed=5.7,
        count=count,
        total=total,
        notification=None,
        message=None,
        work=NO_WORK,
        work_count=0,
    )


class BrokenSink:
    """Sink whose writes always fail."""

    def write(self, text: str) -> int:
        raise OSError("broken pipe")


class WriteOnlySink:
    """Sink without flush()."""

    def __init__(self) -> None:
        self.parts: list[str] = []

    def write(self, text: str) -> int:
        self.parts.append(text)
        return len(text)


class TestFormatting:
    """Test elapsed time and status line formatting."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0:00:00"),
            (59.99, "0:00:59"),
            (83, "0:01:23"),
            (3661, "1:01:01"),
            (360000, "100:00:00"),
        ],
    )
    def test_format_elapsed(self, seconds, expected):
        """Elapsed time renders as H:MM:SS with unbounded hours."""
        assert format_elapsed(seconds) == expected

    def test_full_line(self):
        """Count, total and label are joined by separators."""
        line = format_status_line(make_snapshot(3, 10), "Scanning")
        assert line == "0:00:05 | 3/10 | Scanning"

    def test_hidden_total(self):
        """A negative total is omitted."""
        assert format_status_line(make_snapshot(3), None) == "0:00:05 | 3"

    def test_hidden_count_hides_total(self):
        """A negative count hides the whole counter segment."""
        line = format_status_line(make_snapshot(-1, 10), "x")
        assert line == "0:00:05 | x"


class TestStatusLineWriter:
    """Test in-place status line writes."""

    def test_write_status_skips_unchanged_line(self):
        """Writing the same line twice is a no-op."""
        output = io.StringIO()
        writer = StatusLineWriter(output)

        assert writer.write_status("abcdef") is True
        assert writer.write_status("abcdef") is False
        assert output.getvalue() == "\rabcdef"
        assert writer.last_line == "abcdef"

    def test_shorter_line_is_padded(self):
        """A shorter line erases the tail of the previous one."""
        output = io.StringIO()
        writer = StatusLineWriter(output)
        writer.write_status("abcdef")
        writer.write_status("abc")
        assert output.getvalue() == "\rabcdef\rabc   "

    def test_clear(self):
        """Clearing blanks the row and returns to column 0."""
        output = io.StringIO()
        writer = StatusLineWriter(output)
        writer.write_status("abcdef")
        writer.clear()
        assert output.getvalue() == "\rabcdef\r      \r"
        assert writer.last_line is None

    def test_write_lines_scrolls_output(self):
        """Printed lines overwrite the status row and end with newline."""
        output = io.StringIO()
        writer = StatusLineWriter(output)
        writer.write_status("abcdef")

        assert writer.write_lines(["x", "y"]) == 2
        assert output.getvalue() == "\rabcdef\rx     \n\ry\n"
        assert writer.last_line is None

    def test_sink_without_flush(self):
        """Sinks need only write()."""
        sink = WriteOnlySink()
        writer = StatusLineWriter(sink)
        writer.write_status("abc")
        writer.clear()
        assert sink.parts == ["\rabc", "\r   \r"]

    def test_failing_sink_raises_output_error(self):
        """Sink failures surface as OutputError."""
        writer = StatusLineWriter(BrokenSink())
        with pytest.raises(OutputError, match="broken pipe"):
            writer.write_status("abc")
        assert writer.last_line is None
