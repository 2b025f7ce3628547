"""Configuration loading and updating for logging system.

The logger is needed while the config package is still importing, so
bootstrap values come from constants and the environment; settings.conf
levels are applied later through update_logger_from_config().
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from cli_status.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    LOG_FILE_NAME,
)
from cli_status.logger.formatters import ConsoleFormatter
from cli_status.logger.handlers import resolve_level

if TYPE_CHECKING:
    from cli_status.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load default console level, file level, and file path.

    Environment Variable Override:
        LOG_LEVEL: Overrides the console level (DEBUG, INFO, WARNING, ...).
        CLI_STATUS_LOG_DIR: Overrides the log directory. Used by the test
        suite so runs never write to ~/.config/cli-status/logs.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    console_level = os.getenv(ENV_LOG_LEVEL, DEFAULT_CONSOLE_LOG_LEVEL)
    console_level = console_level.upper()

    env_log_dir = os.getenv(ENV_LOG_DIR)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Path.home() / ".config" / CONFIG_DIR_NAME / "logs" / LOG_FILE_NAME
        )

    return console_level, DEFAULT_LOG_LEVEL, log_path


def update_logger_from_config(
    state: "_LoggerState", config_dir: Path | None = None
) -> None:
    """Update logger handlers from settings.conf.

    Applies the console and file levels, and turns console colors off
    when ANSI output is disabled. Never adds or removes handlers.

    Args:
        state: Logger state object (from logger.state module)
        config_dir: Optional settings directory override

    Note:
        Errors while reading settings are ignored so that logging
        configuration can never break application startup.
        Sets state.config_applied = True on success.

    """
    try:
        # Import here to avoid circular dependency
        from cli_status.config import SettingsManager  # noqa: PLC0415

        settings = SettingsManager(config_dir).load_settings()

        console_level = resolve_level(
            settings["console_log_level"], logging.WARNING
        )
        file_level = resolve_level(settings["log_level"], logging.INFO)

        if state.console_handler is not None:
            state.console_handler.setLevel(console_level)
            formatter = state.console_handler.formatter
            if not settings["ansi"] and isinstance(
                formatter, ConsoleFormatter
            ):
                formatter.color = False

        if state.queue_listener is not None:
            for handler in state.queue_listener.handlers:
                if isinstance(handler, RotatingFileHandler):
                    handler.setLevel(file_level)

        state.config_applied = True

    except (ImportError, KeyError, AttributeError, OSError):
        # Settings not readable yet - keep bootstrap defaults
        pass
