"""Mutex-guarded state record behind the status line.

Every field is read and written under a single lock shared by the
mutating callers and the render step, so a render always observes a
consistent snapshot. Notification expiry is lazy: reads that find an
expired notification clear it.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Hashable
from datetime import timedelta
from typing import Any

from .status_types import NO_WORK, Notification, Severity, StatusSnapshot


class StatusState:
    """Counter, work set, message and notification slots of one status.

    Current work policy: the work chosen for display stays chosen while it
    is still in progress; once removed, the longest running remaining work
    (earliest added) becomes current.
    """

    def __init__(
        self,
        start_time: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize empty state.

        Args:
            start_time: Start instant on the ``clock`` timeline
                (defaults to now)
            clock: Monotonic clock returning seconds

        """
        self._clock = clock
        self._lock = threading.Lock()
        self.start_time = clock() if start_time is None else start_time

        self._count = 0
        self._total = -1
        # dict keys keep insertion order for the current work policy
        self._work: dict[Hashable, None] = {}
        self._current_work: Any = NO_WORK
        self._message: str | None = None
        self._notification: Notification | None = None

    def now(self) -> float:
        """Return the current instant of the state clock."""
        return self._clock()

    def elapsed(self) -> float:
        """Return seconds elapsed since the start instant."""
        return max(0.0, self._clock() - self.start_time)

    # Counter

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    def change_count(self, delta: int) -> int:
        with self._lock:
            self._count += delta
            return self._count

    def set_count(self, count: int) -> int:
        with self._lock:
            self._count = count
            return count

    @property
    def total(self) -> int:
        with self._lock:
            return self._total

    def set_total(self, total: int) -> None:
        with self._lock:
            self._total = total

    # Work in progress

    @property
    def work_count(self) -> int:
        with self._lock:
            return len(self._work)

    def add_work(self, work: Hashable) -> bool:
        """Record work as in progress.

        Returns:
            True if the work was not already recorded

        """
        with self._lock:
            if work in self._work:
                return False
            self._work[work] = None
            return True

    def remove_work(self, work: Hashable) -> bool:
        """Remove any record of work in progress.

        Returns:
            True if the work was recorded

        """
        with self._lock:
            if work not in self._work:
                return False
            del self._work[work]
            return True

    def find_status_work(self) -> Any:
        """Return the work to display, or ``NO_WORK``."""
        with self._lock:
            return self._find_status_work()

    def _find_status_work(self) -> Any:
        if self._current_work is NO_WORK or (
            self._current_work not in self._work
        ):
            self._current_work = next(iter(self._work), NO_WORK)
        return self._current_work

    # Status message

    def find_message(self) -> str | None:
        with self._lock:
            return self._message

    def set_message(self, message: str | None) -> None:
        with self._lock:
            self._message = message

    # Notification

    def find_notification(self) -> Notification | None:
        """Return the live notification, clearing it if expired."""
        with self._lock:
            return self._find_notification(self._clock())

    def _find_notification(self, now: float) -> Notification | None:
        if self._notification is not None and self._notification.is_expired(
            now
        ):
            self._notification = None
        return self._notification

    def set_notification(
        self, severity: Severity, text: str, duration: float | timedelta
    ) -> Notification:
        """Replace any notification, expired or not."""
        with self._lock:
            self._notification = Notification.create(
                severity, text, duration, self._clock()
            )
            return self._notification

    def clear_notification(self) -> None:
        with self._lock:
            self._notification = None

    # Rendering

    def snapshot(self) -> StatusSnapshot:
        """Take a consistent snapshot, applying lazy expiry and work choice."""
        with self._lock:
            now = self._clock()
            return StatusSnapshot(
                elapsed=max(0.0, now - self.start_time),
                count=self._count,
                total=self._total,
                notification=self._find_notification(now),
                message=self._message,
                work=self._find_status_work(),
                work_count=len(self._work),
            )
