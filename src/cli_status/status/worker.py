"""Single-consumer job queue serializing all terminal output.

Any number of threads submit jobs; one daemon thread runs them one at a
time in submission order. Each job's outcome lands in a
``concurrent.futures.Future`` so callers can wait, chain, or wrap it for
asyncio with ``asyncio.wrap_future()``.

Shutdown is two-phase and bounded: after the queue is closed the worker
gets a grace period to drain it; if it is still busy, jobs that have not
started are cancelled and a shorter second wait follows. A job that is
already running is never interrupted.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any, TypeVar

from cli_status.constants import (
    DEFAULT_SHUTDOWN_FORCE_TIMEOUT,
    DEFAULT_SHUTDOWN_TIMEOUT,
    WORKER_THREAD_NAME,
)
from cli_status.exceptions import ShutdownError, StatusClosedError
from cli_status.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def log_job_failure(future: Future) -> None:
    """Log the failure of a job whose future nobody inspects."""
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.debug("Status job failed: %s", exc)


class _WorkItem:
    """A queued job bound to the future reporting its outcome."""

    __slots__ = ("args", "fn", "future", "kwargs")

    def __init__(
        self,
        future: Future,
        fn: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        self.future = future
        self.fn = fn
        self.args = args
        self.kwargs = kwargs

    def run(self) -> None:
        if not self.future.set_running_or_notify_cancel():
            return
        try:
            result = self.fn(*self.args, **self.kwargs)
        except Exception as exc:  # noqa: BLE001 - delivered via the future
            self.future.set_exception(exc)
        except BaseException as exc:
            # KeyboardInterrupt or SystemExit still ends the worker
            self.future.set_exception(exc)
            raise
        else:
            self.future.set_result(result)


class SerialWorker:
    """FIFO job queue drained by exactly one worker thread.

    Attributes:
        name: Name of the worker thread

    """

    def __init__(self, name: str = WORKER_THREAD_NAME) -> None:
        """Start the worker thread.

        Args:
            name: Name for the worker thread

        """
        self.name = name
        self._queue: queue.SimpleQueue[_WorkItem | None] = queue.SimpleQueue()
        # Guards the shutdown flag so no job is enqueued after the sentinel
        self._lock = threading.Lock()
        self._shutdown = False
        self._thread = threading.Thread(
            target=self._run, name=name, daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        try:
            while True:
                item = self._queue.get()
                if item is None:
                    break
                item.run()
        finally:
            self._reject_pending()
        logger.debug("Status worker %s stopped", self.name)

    def _reject_pending(self) -> None:
        """Stop accepting jobs and fail those the thread will never run."""
        with self._lock:
            self._shutdown = True
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            if item is None:
                continue
            if item.future.set_running_or_notify_cancel():
                item.future.set_exception(
                    StatusClosedError("worker stopped", target=self.name)
                )

    @property
    def is_shutdown(self) -> bool:
        """Return whether the worker stopped accepting jobs."""
        return self._shutdown

    def is_alive(self) -> bool:
        """Return whether the worker thread is still running."""
        return self._thread.is_alive()

    def in_worker_thread(self) -> bool:
        """Return whether the calling thread is the worker thread."""
        return threading.current_thread() is self._thread

    def submit(
        self, fn: Callable[..., T], /, *args: Any, **kwargs: Any
    ) -> Future[T]:
        """Queue a job for serial execution without blocking.

        Args:
            fn: Callable to run on the worker thread
            *args: Positional arguments for ``fn``
            **kwargs: Keyword arguments for ``fn``

        Returns:
            Future completed with the job's result or exception. After
            shutdown the future already holds a StatusClosedError.

        """
        future: Future[T] = Future()
        with self._lock:
            if not self._shutdown:
                self._queue.put(_WorkItem(future, fn, args, kwargs))
                return future
        future.set_exception(
            StatusClosedError("job submitted after shutdown", target=self.name)
        )
        return future

    def shutdown(
        self,
        final: Callable[[], Any] | None = None,
        timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
        force_timeout: float = DEFAULT_SHUTDOWN_FORCE_TIMEOUT,
    ) -> None:
        """Stop accepting jobs and wait, bounded, for the worker to finish.

        Jobs queued before this call still run, ``final`` last of all.
        Calling shutdown again is a no-op.

        Args:
            final: Optional last job to run before the worker exits
            timeout: Seconds to wait for the queue to drain
            force_timeout: Seconds to wait after cancelling queued jobs

        Raises:
            ShutdownError: If the worker is still running after both waits

        """
        with self._lock:
            if self._shutdown:
                return
            if final is not None:
                final_future: Future = Future()
                final_future.add_done_callback(log_job_failure)
                self._queue.put(_WorkItem(final_future, final, (), {}))
            self._shutdown = True
            self._queue.put(None)

        if self.in_worker_thread():
            # The sentinel stops the thread once the current job returns
            logger.debug("Status worker shutdown requested from itself")
            return

        self._thread.join(timeout)
        if not self._thread.is_alive():
            return

        cancelled = self._cancel_pending()
        logger.warning(
            "Status worker still busy after %.1fs; cancelled %d queued jobs",
            timeout,
            cancelled,
        )
        self._queue.put(None)
        self._thread.join(force_timeout)
        if self._thread.is_alive():
            waited = timeout + force_timeout
            msg = f"worker did not terminate within {waited:.1f}s"
            raise ShutdownError(msg, target=self.name)

    def _cancel_pending(self) -> int:
        cancelled = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return cancelled
            if item is not None and item.future.cancel():
                cancelled += 1
