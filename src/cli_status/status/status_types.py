"""Shared types for the status line components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any

from cli_status.constants import (
    DEFAULT_MAX_WORK_LABEL_LENGTH,
    DEFAULT_NOTIFICATION_DURATION,
    DEFAULT_NOTIFICATION_SEVERITY,
    DEFAULT_SHUTDOWN_FORCE_TIMEOUT,
    DEFAULT_SHUTDOWN_TIMEOUT,
    DEFAULT_TERMINAL_WIDTH,
    TRACE_LEVEL,
)


class Severity(Enum):
    """Notification severity, valued by the matching logging level."""

    TRACE = TRACE_LEVEL
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR

    @property
    def log_level(self) -> int:
        """Return the logging level used when logging at this severity."""
        return self.value

    @classmethod
    def parse(cls, name: str) -> Severity:
        """Parse a severity name, accepting logging's ``WARNING`` alias.

        Args:
            name: Case-insensitive severity name

        Returns:
            Matching severity

        Raises:
            ValueError: If the name is not a known severity

        """
        key = name.strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            msg = f"Unknown severity: {name!r}"
            raise ValueError(msg) from None


def to_seconds(duration: float | timedelta) -> float:
    """Normalize a duration given as seconds or timedelta."""
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


@dataclass(frozen=True, slots=True)
class Notification:
    """A temporary status label shown until its expiry instant.

    ``expires_at`` is exclusive and uses the same monotonic clock as the
    status that created the notification.
    """

    severity: Severity
    text: str
    expires_at: float

    @classmethod
    def create(
        cls,
        severity: Severity,
        text: str,
        duration: float | timedelta,
        now: float,
    ) -> Notification:
        """Create a notification expiring ``duration`` after ``now``."""
        return cls(severity, text, now + to_seconds(duration))

    def is_expired(self, now: float) -> bool:
        """Return whether the notification has expired at ``now``."""
        return now >= self.expires_at


@dataclass(frozen=True, slots=True)
class StatusConfig:
    """Configuration for a status line."""

    notification_duration: float = DEFAULT_NOTIFICATION_DURATION
    notification_severity: Severity = Severity[DEFAULT_NOTIFICATION_SEVERITY]
    max_work_label_length: int = DEFAULT_MAX_WORK_LABEL_LENGTH
    terminal_width: int = DEFAULT_TERMINAL_WIDTH  # 0 = detect / unknown
    shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT
    shutdown_force_timeout: float = DEFAULT_SHUTDOWN_FORCE_TIMEOUT
    ansi: bool = True

    def __post_init__(self) -> None:
        """Validate config fields to prevent invalid runtime values."""
        if self.notification_duration <= 0:
            msg = "notification_duration must be > 0"
            raise ValueError(msg)
        if self.max_work_label_length < 0:
            msg = "max_work_label_length must be >= 0"
            raise ValueError(msg)
        if self.terminal_width < 0:
            msg = "terminal_width must be >= 0"
            raise ValueError(msg)
        if self.shutdown_timeout <= 0 or self.shutdown_force_timeout <= 0:
            msg = "shutdown timeouts must be > 0"
            raise ValueError(msg)


# Marker for "no work in progress"; work identifiers may be any hashable.
NO_WORK: Any = object()


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """Mutually consistent view of the status state for one render."""

    elapsed: float
    count: int
    total: int
    notification: Notification | None
    message: str | None
    work: Any
    work_count: int

    @property
    def has_work(self) -> bool:
        """Return whether any work is in progress."""
        return self.work is not NO_WORK
