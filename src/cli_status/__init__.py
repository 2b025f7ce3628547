"""Top-level package for cli-status.

A single continuously updated status line for command-line programs whose
work is spread across many threads.
"""

from importlib.metadata import PackageNotFoundError, version

from cli_status.exceptions import (
    CliStatusError,
    ConfigurationError,
    OutputError,
    ShutdownError,
    StatusClosedError,
)
from cli_status.status import (
    CliStatus,
    Notification,
    Severity,
    StatusConfig,
)

try:
    __version__ = version("cli-status")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"

__all__ = [
    "CliStatus",
    "CliStatusError",
    "ConfigurationError",
    "Notification",
    "OutputError",
    "Severity",
    "ShutdownError",
    "StatusClosedError",
    "StatusConfig",
    "__version__",
]
