"""Process-wide logger state.

Besides the handlers of the ``cli_status`` root logger, the state tracks
the status lines currently drawn on the terminal. Console records are
written through the most recently attached one so they never land on
the status row.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import queue
    from logging.handlers import QueueListener

    from cli_status.logger.handlers import StatusConsoleHandler

# Runs ``command(*args)`` with the status line cleared, then repaints it
StatusLineGuard = Callable[..., Any]


class _LoggerState:
    """Container for logger state (avoids module-level mutable globals).

    Attributes:
        lock: Thread lock for root logger initialization
        root_initialized: Whether root logger has been set up
        config_applied: Whether settings.conf levels have been applied
        console_handler: Synchronous console handler on the root logger
        queue_listener: Background thread writing the log file, if any
        log_queue: Queue feeding the log file listener

    """

    def __init__(self) -> None:
        """Initialize logger state."""
        self.lock = threading.Lock()
        self.root_initialized = False
        self.config_applied = False
        self.console_handler: StatusConsoleHandler | None = None
        self.queue_listener: QueueListener | None = None
        self.log_queue: queue.Queue | None = None
        self._guards: list[StatusLineGuard] = []
        self._guards_lock = threading.Lock()

    def attach_status_line(self, guard: StatusLineGuard) -> None:
        """Make ``guard`` the status line console records go around."""
        with self._guards_lock:
            self._guards.append(guard)

    def detach_status_line(self, guard: StatusLineGuard) -> None:
        """Forget ``guard``; the previous status line, if any, takes over."""
        with self._guards_lock:
            if guard in self._guards:
                self._guards.remove(guard)

    def active_status_line(self) -> StatusLineGuard | None:
        """Return the most recently attached status line guard."""
        with self._guards_lock:
            return self._guards[-1] if self._guards else None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Get the global logger state singleton.

    Returns:
        The global logger state instance

    """
    return _state
