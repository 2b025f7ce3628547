"""Console formatter for records shown above the status line.

INFO records read like program output and show only their message. Other
levels use the structured format with the level name colored, unless the
console cannot show colors or ANSI output is switched off in settings.
"""

import logging
import os
from typing import TextIO

from cli_status.constants import LOG_COLORS


def is_interactive(stream: TextIO) -> bool:
    """Return whether ``stream`` is a terminal that renders ANSI codes."""
    try:
        is_tty = bool(getattr(stream, "isatty", lambda: False)())
    except (OSError, ValueError):
        return False
    return is_tty and os.environ.get("TERM", "") != "dumb"


class ConsoleFormatter(logging.Formatter):
    """Console formatter: message only for INFO, structured otherwise.

    Example Output:
        INFO:     "Processed 40 of 40 items in 2.3s"
        WARNING:  "12:30:45 - cli_status.demo - WARNING - Item took long"

    Attributes:
        color: Whether level names are wrapped in ANSI colors

    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        color: bool = True,
    ) -> None:
        """Initialize console formatter.

        Args:
            fmt: Format string for non-INFO records
            datefmt: Date format string for timestamps
            color: Whether to color level names

        """
        super().__init__(fmt, datefmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        """Format a record for the console.

        The record's level name is restored afterwards so other handlers
        see it unchanged.
        """
        if record.levelno == logging.INFO:
            return record.getMessage()

        color = LOG_COLORS.get(record.levelname) if self.color else None
        if color is None:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = f"{color}{original_levelname}{LOG_COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname
