"""Main logger module providing public API functions.

- setup_logging(): Configure the console and optional log file handlers
- get_logger(): Get or create a logger under the ``cli_status`` root
- flush_all_handlers(): Ensure all pending log records are written
- enable_file_logging(): Add the rotating log file to running handlers
- attach_status_line() / detach_status_line(): Route console records
  around a status line
- clear_logger_state(): Clear global logger state for testing
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from cli_status.constants import TRACE_LEVEL
from cli_status.logger.config import load_log_settings
from cli_status.logger.handlers import ROOT_LOGGER_NAME, setup_root_logger
from cli_status.logger.state import StatusLineGuard, get_state

logging.addLevelName(TRACE_LEVEL, "TRACE")


def flush_all_handlers() -> None:
    """Flush the console and log file handlers.

    Waits (bounded) for the log file queue to drain, then flushes every
    handler. Safe to call from any thread.
    """
    state = get_state()
    if state.console_handler is not None:
        with contextlib.suppress(OSError, ValueError):
            state.console_handler.flush()
    if state.queue_listener is not None and state.log_queue is not None:
        # Bounded wait for the listener to take the remaining records
        timeout = 5.0
        start_time = time.monotonic()
        while not state.log_queue.empty():
            if time.monotonic() - start_time > timeout:
                break
            time.sleep(0.01)

        # Give queue listener thread time to process final records
        time.sleep(0.1)

        for handler in state.queue_listener.handlers:
            with contextlib.suppress(OSError, ValueError):
                handler.flush()


def _stop_listener() -> None:
    """Stop the log file listener and close its handlers."""
    state = get_state()
    if state.queue_listener is None:
        return
    flush_all_handlers()
    state.queue_listener.stop()
    for handler in state.queue_listener.handlers:
        handler.close()
    state.queue_listener = None
    state.log_queue = None


def _cleanup_logging() -> None:
    """Stop the log file listener on interpreter exit."""
    _stop_listener()


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = False,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Configure the console handler and the optional log file.

    The root ``cli_status`` logger is initialized exactly once; child
    loggers are created by logging.getLogger and propagate to it.

    Handler Configuration:
        - Console Handler: StatusConsoleHandler writing to stdout around
          the active status line
        - File Handler: RotatingFileHandler behind a QueueListener (only
          when enabled)

    Args:
        name: Logger name, typically __name__ for module-level loggers
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level ("DEBUG", "INFO")
        log_file: Path to log file
            (default: ~/.config/cli-status/logs/cli-status.log)
        enable_file_logging: Whether to enable file logging

    Returns:
        Logger instance (singleton per name via logging.getLogger)

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            if console_level is None or file_level is None or log_file is None:
                cfg_console, cfg_file, cfg_path = load_log_settings()
                console_level = console_level or cfg_console
                file_level = file_level or cfg_file
                log_file = log_file or cfg_path

            setup_root_logger(
                state,
                console_level,
                file_level,
                log_file,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get or create logger instance.

    This is the recommended way to get a logger in cli-status modules:
        >>> logger = get_logger(__name__)

    Library use never enables file logging implicitly; the CLI turns it
    on through setup_logging().

    Args:
        name: Logger name, typically __name__ for module loggers

    Returns:
        Configured logger instance (singleton per name)

    """
    return setup_logging(name=name)


def enable_file_logging(log_file: Path | None = None) -> Path:
    """Restart the root handlers with the rotating file handler added.

    Module loggers are created at import time without file logging; the
    CLI calls this once it knows where the log file should go. Records
    already queued are written by the old listener before it stops.

    Args:
        log_file: Path to log file (default from load_log_settings())

    Returns:
        Path of the log file in use

    Raises:
        ConfigurationError: If file logging setup fails

    """
    console_level, file_level, default_path = load_log_settings()
    log_file = log_file or default_path
    state = get_state()
    with state.lock:
        _stop_listener()
        setup_root_logger(
            state,
            console_level,
            file_level,
            log_file,
            True,  # noqa: FBT003
        )
        state.config_applied = False
    return log_file


def attach_status_line(guard: StatusLineGuard) -> None:
    """Write console records around a status line until detached.

    Args:
        guard: Callable running ``command(*args)`` with the status line
            cleared and repainting it afterwards, such as
            CliStatus.run_without_status_line

    """
    get_state().attach_status_line(guard)


def detach_status_line(guard: StatusLineGuard) -> None:
    """Stop writing console records around a status line."""
    get_state().detach_status_line(guard)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the log file listener, closes handlers and forgets every
    ``cli_status`` logger so the next get_logger() starts fresh.

    Warning:
        Intended for tests only.

    """
    state = get_state()
    with state.lock:
        _stop_listener()

        state.console_handler = None
        state.root_initialized = False
        state.config_applied = False

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(ROOT_LOGGER_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
                if logger_name in logging.Logger.manager.loggerDict:
                    del logging.Logger.manager.loggerDict[logger_name]
