"""Status line rendering and terminal output.

`StatusLineWriter` owns the render cache: the last status line actually
written. A status line is rewritten in place with a carriage return and
padded to the length of the previous line so no trailing characters of a
longer line survive. Writing the same line twice is a no-op.

The writer is not thread-safe; the status worker is its only caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, TextIO

from cli_status.constants import STATUS_SEPARATOR
from cli_status.exceptions import OutputError

if TYPE_CHECKING:
    from .status_types import StatusSnapshot


def format_elapsed(seconds: float) -> str:
    """Format elapsed seconds as ``H:MM:SS`` with unbounded hours."""
    total_seconds = int(seconds)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def format_status_line(snapshot: StatusSnapshot, label: str | None) -> str:
    """Build the status line ``H:MM:SS | count[/total] | label``.

    The count segment is omitted while the count is negative, the total
    while the total is negative, and the label segment when no label
    resolved.
    """
    parts = [format_elapsed(snapshot.elapsed)]
    if snapshot.count >= 0:
        counter = str(snapshot.count)
        if snapshot.total >= 0:
            counter += f"/{snapshot.total}"
        parts.append(counter)
    if label is not None:
        parts.append(label)
    return STATUS_SEPARATOR.join(parts)


class StatusLineWriter:
    """Writes the status line and interleaved lines to an output sink.

    Attributes:
        output: Output stream (typically sys.stderr or StringIO for tests)

    """

    def __init__(self, output: TextIO) -> None:
        """Initialize status line writer.

        Args:
            output: Sink with ``write()``; ``flush()`` is used if present

        """
        self.output = output
        self._last_line: str | None = None

    @property
    def last_line(self) -> str | None:
        """Return the last status line written, or None if the row is blank."""
        return self._last_line

    def _pad_width(self) -> int:
        # Padding to the last actual line is enough: a padded write already
        # erased anything before it.
        return len(self._last_line) if self._last_line is not None else 0

    def _write(self, text: str) -> None:
        try:
            self.output.write(text)
        except (OSError, ValueError) as e:
            raise OutputError(str(e)) from e

    def _flush(self) -> None:
        flush = getattr(self.output, "flush", None)
        if not callable(flush):
            return
        try:
            flush()
        except (OSError, ValueError) as e:
            raise OutputError(str(e)) from e

    def write_status(self, line: str) -> bool:
        """Overwrite the status row with ``line`` unless it is unchanged.

        Args:
            line: Rendered status line

        Returns:
            True if anything was written

        Raises:
            OutputError: If the sink fails to write or flush

        """
        if line == self._last_line:
            return False
        self._write("\r" + line.ljust(self._pad_width()))
        self._flush()
        self._last_line = line
        return True

    def write_lines(self, lines: Iterable[str]) -> int:
        """Print lines over the status row, each ending the row.

        Each line scrolls earlier output up; afterwards the status row is
        blank on a fresh line and must be repainted by the caller.

        Args:
            lines: Lines to print, in order

        Returns:
            Number of lines written

        Raises:
            OutputError: If the sink fails to write

        """
        written = 0
        for line in lines:
            self._write("\r" + str(line).ljust(self._pad_width()) + "\n")
            self._last_line = None
            written += 1
        return written

    def clear(self) -> None:
        """Blank the status row and return to column 0 without a newline.

        Raises:
            OutputError: If the sink fails to write or flush

        """
        self._write("\r" + " " * self._pad_width() + "\r")
        self._flush()
        self._last_line = None
