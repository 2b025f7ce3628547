"""Status line coordinator for CLI applications.

`CliStatus` keeps one continuously overwritten line on the terminal
showing the elapsed time, an optional counter and a label chosen from the
current notification, status message or work in progress:

    0:01:23 | 42/100 | /3: photos/2023/IMG_0042.jpg

Any thread may report work, counts, messages and notifications. Cheap
state changes (counter, work set) happen on the caller's thread; every
terminal write happens on a single worker thread in submission order, so
output from many threads never interleaves or corrupts the line.

Example:
    from cli_status import CliStatus, Severity

    with CliStatus[str]() as status:
        status.set_total(len(paths))
        for path in paths:
            status.add_work(path)
            process(path)
            status.increment_count()
            status.remove_work(path)
        status.warn_async(logger, "Skipped %d files", skipped)

Notes:
    - Methods ending in ``_async`` return a ``concurrent.futures.Future``
      with the rendered status line; asyncio code can await them with
      ``asyncio.wrap_future()``.
    - The same methods without the suffix apply the change now: they wait
      for the worker and re-raise its failure. From inside a job running
      on the worker they execute inline.
    - Notification expiry is evaluated when the line is rendered. Nothing
      repaints the line just because a notification expired.
    - While open, the status line is attached to the ``cli_status``
      console handler: records from this package's loggers are written
      with the line cleared and the line is repainted after them.
"""

from __future__ import annotations

import logging
import shutil
import sys
import time
from collections.abc import Callable, Hashable, Iterable
from concurrent.futures import Future
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Generic, TextIO, TypeVar

from cli_status.logger import (
    attach_status_line,
    detach_status_line,
    get_logger,
    is_interactive,
)

from .label import max_work_label_length, resolve_status_label
from .state import StatusState
from .status_types import (
    NO_WORK,
    Notification,
    Severity,
    StatusConfig,
    StatusSnapshot,
)
from .worker import SerialWorker, log_job_failure
from .writer import StatusLineWriter, format_status_line

if TYPE_CHECKING:
    from typing import Self

logger = get_logger(__name__)

W = TypeVar("W", bound=Hashable)
T = TypeVar("T")


def format_log_message(msg: object, args: tuple[Any, ...]) -> str:
    """Format a log message exactly as logging would render it."""
    record = logging.LogRecord("", logging.NOTSET, "", 0, msg, args, None)
    return record.getMessage()


class CliStatus(Generic[W]):
    """Coordinates a single status line shared by concurrent workers.

    Label priority, highest first:
        1. A notification: temporary, severity-accented, expires lazily.
        2. The status message: persists until cleared.
        3. The current work: ``/{work count}: {work label}``.

    The instance must be closed when no longer needed; closing blanks the
    status line and stops the worker thread. It is also a context manager.

    Attributes:
        output: Output sink for the status line (defaults to sys.stderr)
        config: Status configuration

    """

    def __init__(
        self,
        output: TextIO | None = None,
        start_time: float | None = None,
        config: StatusConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the status and start its worker thread.

        Args:
            output: Output sink (defaults to sys.stderr so the status does
                not mix with the program's main output)
            start_time: Start instant on the ``clock`` timeline
                (defaults to now)
            config: Status configuration
            clock: Monotonic clock returning seconds

        """
        self.output = output if output is not None else sys.stderr
        self.config = config or StatusConfig()
        self._state = StatusState(start_time=start_time, clock=clock)
        self._writer = StatusLineWriter(self.output)
        self._interactive = is_interactive(self.output)
        self._worker = SerialWorker()
        attach_status_line(self.run_without_status_line)

    def _terminal_width(self) -> int:
        """Return the terminal width, or 0 if unknown."""
        if self.config.terminal_width > 0:
            return self.config.terminal_width
        if not self._interactive:
            return 0
        try:
            return shutil.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 0

    # Executor

    def submit(
        self, fn: Callable[..., T], /, *args: Any, **kwargs: Any
    ) -> Future[T]:
        """Run an arbitrary job serially with the status output.

        Args:
            fn: Callable to run on the status worker
            *args: Positional arguments for ``fn``
            **kwargs: Keyword arguments for ``fn``

        Returns:
            Future with the job's result

        """
        return self._worker.submit(fn, *args, **kwargs)

    def _apply_now(self, fn: Callable[..., T], *args: Any) -> T:
        if self._worker.in_worker_thread():
            return fn(*args)
        return self._worker.submit(fn, *args).result()

    def _schedule_repaint(self) -> None:
        self.print_status_line_async().add_done_callback(log_job_failure)

    def run_without_status_line_async(
        self, command: Callable[..., Any], *args: Any
    ) -> Future[str]:
        """Run a command with the status line cleared, then repaint it.

        Use this for output that would otherwise corrupt the status line,
        such as printing to another stream shown on the same terminal.

        Args:
            command: Callable to run while the status line is blank
            *args: Arguments for ``command``

        Returns:
            Future with the repainted status line

        """
        return self._worker.submit(
            self._run_without_status_line, command, args
        )

    def run_without_status_line(
        self, command: Callable[..., Any], *args: Any
    ) -> str:
        """Apply run_without_status_line_async() now."""
        return self._apply_now(self._run_without_status_line, command, args)

    def _run_without_status_line(
        self, command: Callable[..., Any], args: tuple[Any, ...]
    ) -> str:
        self._clear_status_line()
        command(*args)
        return self._print_status_line()

    # Counter

    @property
    def count(self) -> int:
        """Return the counter; a negative value hides it."""
        return self._state.count

    def increment_count(self) -> int:
        """Increment the counter and schedule a repaint.

        Returns:
            The updated count

        """
        count = self._state.change_count(1)
        self._schedule_repaint()
        return count

    def increment_count_async(self) -> Future[str]:
        """Increment the counter; return the future repainted line."""
        self._state.change_count(1)
        return self.print_status_line_async()

    def change_count(self, delta: int) -> int:
        """Change the counter by ``delta`` and schedule a repaint."""
        count = self._state.change_count(delta)
        self._schedule_repaint()
        return count

    def set_count(self, count: int) -> int:
        """Set the counter and schedule a repaint."""
        self._state.set_count(count)
        self._schedule_repaint()
        return count

    def reset_count(self) -> int:
        """Reset the counter to zero and schedule a repaint."""
        return self.set_count(0)

    @property
    def total(self) -> int:
        """Return the expected total; a negative value hides it."""
        return self._state.total

    def set_total(self, total: int) -> None:
        """Set the expected total, shown from the next repaint on.

        Args:
            total: New total, or a negative value to hide it

        """
        self._state.set_total(total)

    @property
    def elapsed_time(self) -> timedelta:
        """Return the time elapsed since the start instant."""
        return timedelta(seconds=self._state.elapsed())

    # Work in progress

    @property
    def work_count(self) -> int:
        """Return the number of work items in progress."""
        return self._state.work_count

    def add_work(self, work: W) -> bool:
        """Record work in progress; repaint only if it was not recorded.

        Returns:
            True if the work was added

        """
        if self._state.add_work(work):
            self._schedule_repaint()
            return True
        return False

    def add_work_async(self, work: W) -> Future[str]:
        """Record work in progress; return the future status line."""
        if self._state.add_work(work):
            return self.print_status_line_async()
        return self._worker.submit(self._last_status_line)

    def remove_work(self, work: W) -> bool:
        """Remove work in progress; repaint only if it was recorded.

        Returns:
            True if the work was removed

        """
        if self._state.remove_work(work):
            self._schedule_repaint()
            return True
        return False

    def remove_work_async(self, work: W) -> Future[str]:
        """Remove work in progress; return the future status line."""
        if self._state.remove_work(work):
            return self.print_status_line_async()
        return self._worker.submit(self._last_status_line)

    def find_status_work(self) -> W | None:
        """Return the work currently chosen for display, if any."""
        work = self._state.find_status_work()
        return None if work is NO_WORK else work

    # Status message

    def find_status_message(self) -> str | None:
        """Return the status message, if set."""
        return self._state.find_message()

    def set_status_message_async(self, message: str) -> Future[str]:
        """Set the status message and repaint.

        Args:
            message: Message shown until cleared, unless a notification
                temporarily supersedes it

        Returns:
            Future with the repainted status line

        """
        return self._worker.submit(self._set_status_message, message)

    def set_status_message(self, message: str) -> str:
        """Apply set_status_message_async() now."""
        return self._apply_now(self._set_status_message, message)

    def _set_status_message(self, message: str | None) -> str:
        self._state.set_message(message)
        return self._print_status_line()

    def clear_status_message_async(self) -> Future[str]:
        """Remove the status message, revealing the work label."""
        return self._worker.submit(self._set_status_message, None)

    def clear_status_message(self) -> str:
        """Apply clear_status_message_async() now."""
        return self._apply_now(self._set_status_message, None)

    # Notification

    def find_notification(self) -> Notification | None:
        """Return the live notification, removing it if expired."""
        return self._state.find_notification()

    def set_notification_async(
        self,
        text: str,
        severity: Severity | None = None,
        duration: float | timedelta | None = None,
    ) -> Future[str]:
        """Show a notification, replacing any current one.

        Args:
            text: Notification text
            severity: Severity (default from config, INFO)
            duration: Seconds or timedelta (default from config, 8s)

        Returns:
            Future with the repainted status line

        """
        severity, duration = self._notification_args(severity, duration)
        return self._worker.submit(
            self._set_notification, severity, duration, text
        )

    def set_notification(
        self,
        text: str,
        severity: Severity | None = None,
        duration: float | timedelta | None = None,
    ) -> str:
        """Apply set_notification_async() now."""
        severity, duration = self._notification_args(severity, duration)
        return self._apply_now(
            self._set_notification, severity, duration, text
        )

    def _notification_args(
        self, severity: Severity | None, duration: float | timedelta | None
    ) -> tuple[Severity, float | timedelta]:
        if severity is None:
            severity = self.config.notification_severity
        if duration is None:
            duration = self.config.notification_duration
        return severity, duration

    def _set_notification(
        self, severity: Severity, duration: float | timedelta, text: str
    ) -> str:
        self._state.set_notification(severity, text, duration)
        return self._print_status_line()

    def clear_notification_async(self) -> Future[str]:
        """Remove any notification even if it has not expired."""
        return self._worker.submit(self._clear_notification)

    def clear_notification(self) -> str:
        """Apply clear_notification_async() now."""
        return self._apply_now(self._clear_notification)

    def _clear_notification(self) -> str:
        self._state.clear_notification()
        return self._print_status_line()

    # Label and rendering

    def find_status_label(self) -> str | None:
        """Resolve the label to display now, or None if nothing applies.

        Reading the label clears an expired notification.
        """
        return self._resolve_label(self._state.snapshot())

    def _resolve_label(self, snapshot: StatusSnapshot) -> str | None:
        max_length = max_work_label_length(
            snapshot,
            self.config.max_work_label_length,
            self._terminal_width(),
        )
        return resolve_status_label(
            snapshot, max_length, ansi=self.config.ansi
        )

    def print_status_line_async(self) -> Future[str]:
        """Schedule a repaint of the status line.

        Returns:
            Future with the rendered status line

        """
        return self._worker.submit(self._print_status_line)

    def print_status_line(self) -> str:
        """Apply print_status_line_async() now."""
        return self._apply_now(self._print_status_line)

    def _print_status_line(self) -> str:
        snapshot = self._state.snapshot()
        line = format_status_line(snapshot, self._resolve_label(snapshot))
        self._writer.write_status(line)
        return line

    def _last_status_line(self) -> str:
        return self._writer.last_line or ""

    # Printing above the status line

    def print_line_async(self, line: str) -> Future[str]:
        """Print a line above the status line, scrolling output up."""
        return self.print_lines_async((line,))

    def print_line(self, line: str) -> str:
        """Apply print_line_async() now."""
        return self.print_lines((line,))

    def print_lines_async(self, lines: Iterable[str]) -> Future[str]:
        """Print lines above the status line as one uninterrupted group.

        Args:
            lines: Lines to print, in order

        Returns:
            Future with the repainted status line

        """
        return self._worker.submit(self._print_lines, _as_lines(lines))

    def print_lines(self, lines: Iterable[str]) -> str:
        """Apply print_lines_async() now."""
        return self._apply_now(self._print_lines, _as_lines(lines))

    def _print_lines(self, lines: tuple[str, ...]) -> str:
        if not self._writer.write_lines(lines):
            return self._last_status_line()
        return self._print_status_line()

    def clear_status_line_async(self) -> Future[str]:
        """Blank the status line, leaving the cursor at column 0.

        Chain further output on the returned future (or use
        run_without_status_line_async()) to keep it from being
        interleaved with a concurrent repaint.

        Returns:
            Future with the empty string

        """
        return self._worker.submit(self._clear_status_line)

    def clear_status_line(self) -> str:
        """Apply clear_status_line_async() now."""
        return self._apply_now(self._clear_status_line)

    def _clear_status_line(self) -> str:
        self._writer.clear()
        return ""

    # Log bridge

    def log_async(
        self,
        severity: Severity,
        log: logging.Logger,
        msg: object,
        *args: Any,
    ) -> Future[str]:
        """Log a message and mirror it as a notification, serially.

        As one job: clear the status line, log through ``log``, and if the
        level is enabled for ``log`` show the formatted message as a
        notification with the default duration; then repaint. Console
        records of ``cli_status`` loggers are written before the repaint.

        Args:
            severity: Severity to log and notify at
            log: Logger to emit the message through
            msg: %-style format string
            *args: Format arguments

        Returns:
            Future with the repainted status line

        """
        return self._worker.submit(self._log, severity, log, msg, args)

    def log(
        self,
        severity: Severity,
        log: logging.Logger,
        msg: object,
        *args: Any,
    ) -> str:
        """Apply log_async() now."""
        return self._apply_now(self._log, severity, log, msg, args)

    def trace_async(
        self, log: logging.Logger, msg: object, *args: Any
    ) -> Future[str]:
        """Log at TRACE and notify; see log_async()."""
        return self.log_async(Severity.TRACE, log, msg, *args)

    def debug_async(
        self, log: logging.Logger, msg: object, *args: Any
    ) -> Future[str]:
        """Log at DEBUG and notify; see log_async()."""
        return self.log_async(Severity.DEBUG, log, msg, *args)

    def info_async(
        self, log: logging.Logger, msg: object, *args: Any
    ) -> Future[str]:
        """Log at INFO and notify; see log_async()."""
        return self.log_async(Severity.INFO, log, msg, *args)

    def warn_async(
        self, log: logging.Logger, msg: object, *args: Any
    ) -> Future[str]:
        """Log at WARNING and notify; see log_async()."""
        return self.log_async(Severity.WARN, log, msg, *args)

    def error_async(
        self, log: logging.Logger, msg: object, *args: Any
    ) -> Future[str]:
        """Log at ERROR and notify; see log_async()."""
        return self.log_async(Severity.ERROR, log, msg, *args)

    def _log(
        self,
        severity: Severity,
        log: logging.Logger,
        msg: object,
        args: tuple[Any, ...],
    ) -> str:
        self._clear_status_line()
        log.log(severity.log_level, msg, *args)
        if log.isEnabledFor(severity.log_level):
            return self._set_notification(
                severity,
                self.config.notification_duration,
                format_log_message(msg, args),
            )
        return self._print_status_line()

    # Lifecycle

    @property
    def closed(self) -> bool:
        """Return whether close() has been called."""
        return self._worker.is_shutdown

    def close(self) -> None:
        """Blank the status line and stop the worker.

        Jobs submitted before close() still run; jobs submitted afterwards
        never start and their futures fail with StatusClosedError. Waits
        up to ``shutdown_timeout`` for the queue to drain, then cancels
        the jobs still queued and waits up to ``shutdown_force_timeout``.
        Closing again is a no-op.

        Raises:
            ShutdownError: If the worker thread is still running after
                both waits

        """
        try:
            if self.closed:
                logger.debug("Status already closed")
                return
            self._worker.shutdown(
                final=self._clear_status_line,
                timeout=self.config.shutdown_timeout,
                force_timeout=self.config.shutdown_force_timeout,
            )
        finally:
            detach_status_line(self.run_without_status_line)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()


def _as_lines(lines: Iterable[str]) -> tuple[str, ...]:
    # Materialize on the caller's thread; a bare string is one line
    if isinstance(lines, str):
        return (lines,)
    return tuple(lines)
