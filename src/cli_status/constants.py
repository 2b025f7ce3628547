"""Constants shared across cli-status.

Centralizes defaults for the status line, ANSI escape codes, logging
formats and configuration keys so every module reads the same values.
"""

from typing import Final

# =============================================================================
# Status line defaults
# =============================================================================

# How long a notification stays visible (seconds)
DEFAULT_NOTIFICATION_DURATION: Final[float] = 8.0

# Severity used when a notification is set without one
DEFAULT_NOTIFICATION_SEVERITY: Final[str] = "INFO"

# Maximum length of the work label before middle truncation
DEFAULT_MAX_WORK_LABEL_LENGTH: Final[int] = 120

# 0 means "unknown": detect from the sink when it is a TTY
DEFAULT_TERMINAL_WIDTH: Final[int] = 0

# Bounded two-phase shutdown of the status worker (seconds)
DEFAULT_SHUTDOWN_TIMEOUT: Final[float] = 5.0
DEFAULT_SHUTDOWN_FORCE_TIMEOUT: Final[float] = 3.0

# Separator between status line segments
STATUS_SEPARATOR: Final[str] = " | "

# Single-character ellipsis used for middle truncation
ELLIPSIS: Final[str] = "…"

# Name of the thread performing all terminal writes
WORKER_THREAD_NAME: Final[str] = "cli-status-worker"

# =============================================================================
# ANSI escape codes
# =============================================================================

ANSI_BOLD: Final[str] = "\033[1m"
ANSI_RESET: Final[str] = "\033[0m"

# Accent colors for notifications keyed by severity name
SEVERITY_COLORS: Final[dict[str, str]] = {
    "ERROR": "\033[31m",  # Red
    "WARN": "\033[33m",  # Yellow
    "INFO": "\033[36m",  # Cyan
}

# =============================================================================
# Logging Constants
# =============================================================================

# Custom level below DEBUG for TRACE severity
TRACE_LEVEL: Final[int] = 5

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

# Maximum size for rotated log files (bytes)
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB

# Number of backup files to keep for rotated logs
LOG_BACKUP_COUNT: Final[int] = 3

LOG_FILE_NAME: Final[str] = "cli-status.log"

# Console and file format strings used by the logger
LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Color mapping for console output levels
LOG_COLORS: Final[dict[str, str]] = {
    "TRACE": "\033[90m",  # Grey
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# =============================================================================
# Configuration
# =============================================================================

CONFIG_DIR_NAME: Final[str] = "cli-status"
CONFIG_FILE_NAME: Final[str] = "settings.conf"

# Environment overrides (used by tests for isolation)
ENV_CONFIG_DIR: Final[str] = "CLI_STATUS_CONFIG_DIR"
ENV_LOG_DIR: Final[str] = "CLI_STATUS_LOG_DIR"
ENV_LOG_LEVEL: Final[str] = "LOG_LEVEL"

SECTION_STATUS: Final[str] = "status"
SECTION_LOGGING: Final[str] = "logging"

KEY_NOTIFICATION_DURATION: Final[str] = "notification_duration"
KEY_NOTIFICATION_SEVERITY: Final[str] = "notification_severity"
KEY_MAX_WORK_LABEL_LENGTH: Final[str] = "max_work_label_length"
KEY_TERMINAL_WIDTH: Final[str] = "terminal_width"
KEY_SHUTDOWN_TIMEOUT: Final[str] = "shutdown_timeout"
KEY_SHUTDOWN_FORCE_TIMEOUT: Final[str] = "shutdown_force_timeout"
KEY_ANSI: Final[str] = "ansi"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"

ISO_DATETIME_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S%z"
