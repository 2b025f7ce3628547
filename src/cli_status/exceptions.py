"""Exception classes for cli-status operations."""


class CliStatusError(Exception):
    """Base exception for cli-status operations."""

    error_prefix: str = "Status operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the target that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class OutputError(CliStatusError):
    """Raised when the status output sink fails to write or flush."""

    error_prefix = "Status output failed"


class ShutdownError(CliStatusError):
    """Raised when the status worker cannot be stopped in time."""

    error_prefix = "Status shutdown failed"


class StatusClosedError(CliStatusError):
    """Set on jobs submitted after the status has been closed."""

    error_prefix = "Status closed"


class ConfigurationError(CliStatusError):
    """Raised when logging or settings configuration fails."""

    error_prefix = "Configuration failed"
