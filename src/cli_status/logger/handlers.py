"""Handler creation and management for logging system.

- Console handler writing around the active status line
- Rotating file handler with automatic log rotation, fed through a
  QueueListener so callers never block on file I/O

The console handler writes to stdout; the status line lives on stderr.
Both usually share one terminal, so a console record must be written
while the status line is cleared and before it is repainted. The console
handler therefore stays on the caller's side of the queue.
"""

import logging
import queue
import sys
from concurrent.futures import CancelledError
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from typing import TextIO

from cli_status.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROTATION_THRESHOLD_BYTES,
)
from cli_status.exceptions import (
    CliStatusError,
    ConfigurationError,
    StatusClosedError,
)
from cli_status.logger.formatters import ConsoleFormatter, is_interactive
from cli_status.logger.state import _LoggerState, get_state

ROOT_LOGGER_NAME = "cli_status"


def resolve_level(name: str, default: int) -> int:
    """Return the numeric level for a level name, or ``default``.

    Unlike ``getattr(logging, name)`` this also knows levels registered
    with logging.addLevelName(), such as TRACE.
    """
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


class StatusConsoleHandler(logging.StreamHandler):
    """Console handler that writes records around the active status line.

    While a status line is attached to the logger state, each record is
    written by that status line's worker with the line cleared, and the
    line is repainted afterwards. The logging call returns once the
    record is written. Without a status line the handler behaves like a
    plain StreamHandler.

    The handler lock is taken only around the write itself, never while
    waiting for the status worker, so the worker may log too.
    """

    def handle(self, record: logging.LogRecord) -> logging.LogRecord | bool:
        """Filter the record and write it around the status line."""
        rv = self.filter(record)
        if isinstance(rv, logging.LogRecord):
            record = rv
        if not rv:
            return rv

        guard = get_state().active_status_line()
        if guard is None:
            self._emit_locked(record)
            return rv
        try:
            guard(self._emit_locked, record)
        except (StatusClosedError, CancelledError):
            # The status line is shutting down; nothing left to clear
            self._emit_locked(record)
        except CliStatusError:
            self.handleError(record)
        return rv

    def _emit_locked(self, record: logging.LogRecord) -> None:
        self.acquire()
        try:
            self.emit(record)
        finally:
            self.release()


def _create_console_handler(
    console_level: str, stream: TextIO | None = None
) -> StatusConsoleHandler:
    """Create and configure the status-aware console handler.

    Args:
        console_level: Log level for console (e.g., "DEBUG", "WARNING")
        stream: Console stream (defaults to sys.stdout)

    Returns:
        Configured StatusConsoleHandler

    """
    stream = stream if stream is not None else sys.stdout
    console_handler = StatusConsoleHandler(stream)
    console_handler.setFormatter(
        ConsoleFormatter(
            LOG_CONSOLE_FORMAT,
            datefmt=LOG_CONSOLE_DATE_FORMAT,
            color=is_interactive(stream),
        )
    )
    console_handler.setLevel(resolve_level(console_level, logging.WARNING))
    return console_handler


def _create_file_handler(
    log_file: Path, file_level: str
) -> RotatingFileHandler:
    """Create and configure rotating file handler.

    Args:
        log_file: Path to log file
        file_level: Log level for file (e.g., "DEBUG", "INFO")

    Returns:
        Configured RotatingFileHandler

    Raises:
        ConfigurationError: If file handler creation fails

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(
            logging.Formatter(
                LOG_FILE_FORMAT,
                datefmt=LOG_FILE_DATE_FORMAT,
            )
        )
        file_handler.setLevel(resolve_level(file_level, logging.INFO))
    except OSError as e:
        msg = f"Failed to setup file logging: {e}"
        raise ConfigurationError(msg, target=str(log_file)) from e
    else:
        return file_handler


def setup_root_logger(
    state: _LoggerState,
    console_level: str,
    file_level: str,
    log_file: Path,
    enable_file_logging: bool,  # noqa: FBT001
) -> None:
    """Initialize root logger handlers.

    The console handler is attached directly to the root logger. The file
    handler, when enabled, sits behind a QueueHandler and QueueListener.
    Existing root handlers are closed and replaced.

    Args:
        state: Logger state object (from logger.state module)
        console_level: Console log level (e.g., "INFO", "WARNING")
        file_level: File log level (e.g., "DEBUG", "INFO")
        log_file: Path to log file
        enable_file_logging: Whether to enable file logging

    Raises:
        ConfigurationError: If handler setup fails

    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handlers
    root_logger.propagate = False

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    state.console_handler = _create_console_handler(console_level)
    root_logger.addHandler(state.console_handler)

    state.log_queue = None
    state.queue_listener = None
    if enable_file_logging:
        file_handler = _create_file_handler(log_file, file_level)
        state.log_queue = queue.Queue(-1)
        state.queue_listener = QueueListener(
            state.log_queue,
            file_handler,
            respect_handler_level=True,
        )
        state.queue_listener.start()
        root_logger.addHandler(QueueHandler(state.log_queue))

    state.root_initialized = True
