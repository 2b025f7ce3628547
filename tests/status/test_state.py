"""Tests for the mutex-guarded status state."""

import threading
from datetime import timedelta

from cli_status.status.state import StatusState
from cli_status.status.status_types import NO_WORK, Severity


class TestStatusStateCounter:
    """Test counter and total."""

    def test_initial_values(self, clock):
        """Count starts at 0 and the total starts hidden."""
        state = StatusState(clock=clock)
        assert state.count == 0
        assert state.total == -1
        assert state.work_count == 0
        assert state.find_status_work() is NO_WORK

    def test_change_and_set(self, clock):
        """Counter changes return the updated value."""
        state = StatusState(clock=clock)
        assert state.change_count(5) == 5
        assert state.change_count(-2) == 3
        assert state.set_count(-1) == -1
        assert state.count == -1

    def test_concurrent_increments_are_not_lost(self, clock):
        """8 threads x 1000 increments yield exactly 8000."""
        state = StatusState(clock=clock)
        barrier = threading.Barrier(8)

        def increment() -> None:
            barrier.wait()
            for _ in range(1000):
                state.change_count(1)

        threads = [threading.Thread(target=increment) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert state.count == 8000

    def test_elapsed_uses_start_time(self, clock):
        """Elapsed time is measured from the start instant."""
        state = StatusState(start_time=clock.now - 10, clock=clock)
        clock.advance(5)
        assert state.elapsed() == 15


class TestStatusStateWork:
    """Test the work set and the current work policy."""

    def test_add_and_remove_report_changes(self, clock):
        """Adding twice or removing unknown work changes nothing."""
        state = StatusState(clock=clock)
        assert state.add_work("a") is True
        assert state.add_work("a") is False
        assert state.work_count == 1
        assert state.remove_work("b") is False
        assert state.remove_work("a") is True
        assert state.work_count == 0

    def test_current_work_is_sticky(self, clock):
        """Current work stays chosen while in progress."""
        state = StatusState(clock=clock)
        for work in ("a", "b", "c"):
            state.add_work(work)
        assert state.find_status_work() == "a"

        state.remove_work("a")
        assert state.find_status_work() == "b"

        state.add_work("a")
        assert state.find_status_work() == "b"

    def test_longest_running_work_replaces_removed(self, clock):
        """Earliest added remaining work becomes current."""
        state = StatusState(clock=clock)
        for work in ("a", "b", "c"):
            state.add_work(work)
        state.find_status_work()
        state.remove_work("a")
        state.remove_work("b")
        state.add_work("d")
        assert state.find_status_work() == "c"

        state.remove_work("c")
        state.remove_work("d")
        assert state.find_status_work() is NO_WORK

    def test_any_hashable_work(self, clock):
        """Work identifiers may be any hashable value."""
        state = StatusState(clock=clock)
        state.add_work(("job", 1))
        assert state.find_status_work() == ("job", 1)


class TestStatusStateNotification:
    """Test lazy notification expiry."""

    def test_notification_expires_lazily(self, clock):
        """A notification disappears once now reaches its expiry."""
        state = StatusState(clock=clock)
        state.set_notification(Severity.INFO, "hello", 8)

        clock.advance(7.5)
        notification = state.find_notification()
        assert notification is not None
        assert notification.text == "hello"

        clock.advance(0.5)
        assert state.find_notification() is None
        assert state.snapshot().notification is None

    def test_timedelta_duration(self, clock):
        """Durations may be given as timedelta."""
        state = StatusState(clock=clock)
        notification = state.set_notification(
            Severity.ERROR, "boom", timedelta(seconds=2)
        )
        assert notification.expires_at == clock.now + 2

    def test_set_replaces_and_clear_removes(self, clock):
        """Setting replaces any notification; clearing removes it."""
        state = StatusState(clock=clock)
        state.set_notification(Severity.INFO, "first", 8)
        state.set_notification(Severity.WARN, "second", 8)
        assert state.find_notification().text == "second"

        state.clear_notification()
        assert state.find_notification() is None


class TestStatusStateSnapshot:
    """Test consistent snapshots."""

    def test_snapshot_reflects_state(self, clock):
        """Snapshot carries every field of the state."""
        state = StatusState(clock=clock)
        state.change_count(3)
        state.set_total(10)
        state.add_work("file1.txt")
        state.set_message("Scanning")
        clock.advance(61)

        snapshot = state.snapshot()

        assert snapshot.elapsed == 61
        assert snapshot.count == 3
        assert snapshot.total == 10
        assert snapshot.message == "Scanning"
        assert snapshot.work == "file1.txt"
        assert snapshot.work_count == 1
        assert snapshot.has_work
