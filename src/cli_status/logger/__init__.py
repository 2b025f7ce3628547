"""Logging utilities for cli-status.

This package provides structured logging with:
- Colored console output that never lands on the status line
- Optional file rotation using standard RotatingFileHandler
- Non-blocking file logging via QueueHandler/QueueListener
- A TRACE level (5) below DEBUG
- Configuration-based log levels from settings.conf

Architecture:
    Application → StatusConsoleHandler → active CliStatus worker → stdout
                → QueueHandler → Queue → QueueListener → log file

Usage:
    >>> from cli_status.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Processing %s", path)  # Use %-style formatting

Environment Variables:
    LOG_LEVEL: Override console log level
    CLI_STATUS_LOG_DIR: Override the log file directory

Rules for contributors:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Use %-formatting in log calls, never f-strings
"""

from pathlib import Path

from cli_status.logger.config import (
    update_logger_from_config as _update_config,
)
from cli_status.logger.formatters import ConsoleFormatter, is_interactive
from cli_status.logger.handlers import StatusConsoleHandler
from cli_status.logger.logger import (
    attach_status_line,
    clear_logger_state,
    detach_status_line,
    enable_file_logging,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from cli_status.logger.state import _state, get_state

__all__ = [
    "ConsoleFormatter",
    "StatusConsoleHandler",
    "_state",  # For testing only
    "attach_status_line",
    "clear_logger_state",
    "detach_status_line",
    "enable_file_logging",
    "flush_all_handlers",
    "get_logger",
    "is_interactive",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config(config_dir: Path | None = None) -> None:
    """Update logger handler levels from settings.conf.

    Args:
        config_dir: Optional settings directory override

    """
    _update_config(get_state(), config_dir)
