"""Tests for logging through the status line."""

import logging
import threading

import pytest

from cli_status.logger import get_logger
from cli_status.logger.state import get_state
from cli_status.status import Severity
from cli_status.status.cli_status import format_log_message

BRIDGE_LOGGER = "tests.bridge"
PACKAGE_LOGGER = "cli_status.tests.bridge"


def bridge_records(caplog) -> list[logging.LogRecord]:
    """Return captured records of the bridge logger only."""
    return [r for r in caplog.records if r.name == BRIDGE_LOGGER]


@pytest.fixture
def bridge_logger():
    """Provide a plain logger the status can log through."""
    log = logging.getLogger(BRIDGE_LOGGER)
    yield log
    log.setLevel(logging.NOTSET)


@pytest.fixture
def shared_console(output):
    """Point the package console handler at the status output."""
    get_logger(PACKAGE_LOGGER)
    handler = get_state().console_handler
    original = handler.setStream(output)
    yield handler
    handler.setStream(original)


class OutputSnapshotHandler(logging.Handler):
    """Handler recording the status output at the time of each record."""

    def __init__(self, output) -> None:
        super().__init__()
        self.output = output
        self.seen: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.seen.append(self.output.getvalue())


class TestLogBridge:
    """Test log records mirrored as notifications."""

    def test_warn_logs_and_notifies(
        self, status, bridge_logger, caplog, clock
    ):
        """An enabled record is logged and shown as a notification."""
        caplog.set_level(logging.INFO, logger=BRIDGE_LOGGER)

        line = status.warn_async(bridge_logger, "Copied %d files", 3).result(
            timeout=5
        )

        assert line == "0:00:00 | 0 | Copied 3 files"
        assert [
            (r.levelno, r.getMessage()) for r in bridge_records(caplog)
        ] == [(logging.WARNING, "Copied 3 files")]
        notification = status.find_notification()
        assert notification.severity is Severity.WARN
        assert notification.expires_at == clock.now + 8

    def test_disabled_level_does_not_notify(
        self, status, bridge_logger, caplog
    ):
        """A record below the logger's level leaves the label alone."""
        caplog.set_level(logging.INFO, logger=BRIDGE_LOGGER)
        status.set_status_message("Scanning")

        line = status.debug_async(bridge_logger, "noise").result(timeout=5)

        assert line == "0:00:00 | 0 | Scanning"
        assert status.find_notification() is None
        assert bridge_records(caplog) == []

    def test_trace_level(self, status, bridge_logger, caplog):
        """TRACE maps to logging level 5."""
        caplog.set_level(5, logger=BRIDGE_LOGGER)

        status.trace_async(bridge_logger, "deep detail").result(timeout=5)

        assert bridge_records(caplog)[0].levelno == 5
        assert status.find_notification().severity is Severity.TRACE

    def test_every_severity_helper(self, status, bridge_logger, caplog):
        """Each helper logs at its own level."""
        caplog.set_level(logging.DEBUG, logger=BRIDGE_LOGGER)
        status.debug_async(bridge_logger, "d").result(timeout=5)
        status.info_async(bridge_logger, "i").result(timeout=5)
        status.error_async(bridge_logger, "e").result(timeout=5)

        assert [r.levelno for r in bridge_records(caplog)] == [
            logging.DEBUG,
            logging.INFO,
            logging.ERROR,
        ]
        assert status.find_notification().severity is Severity.ERROR

    def test_sync_log(self, status, bridge_logger, caplog):
        """The sync form returns the repainted line."""
        caplog.set_level(logging.INFO, logger=BRIDGE_LOGGER)
        line = status.log(Severity.ERROR, bridge_logger, "Failed %s", "x")
        assert line == "0:00:00 | 0 | Failed x"

    def test_status_line_cleared_before_logging(
        self, status, output, bridge_logger
    ):
        """Handlers see a blank status row when the record is emitted."""
        bridge_logger.setLevel(logging.INFO)
        handler = OutputSnapshotHandler(output)
        bridge_logger.addHandler(handler)
        try:
            status.print_status_line()
            status.info_async(bridge_logger, "hello").result(timeout=5)
        finally:
            bridge_logger.removeHandler(handler)

        assert len(handler.seen) == 1
        assert handler.seen[0].endswith("\r")

    def test_package_logger_written_before_repaint(
        self, status, output, shared_console
    ):
        """Console records of package loggers get a row of their own."""
        log = get_logger(PACKAGE_LOGGER)

        for i in range(20):
            status.log(Severity.WARN, log, "msg-%d", i)

        *log_rows, last_row = output.getvalue().split("\n")
        assert len(log_rows) == 20
        for i, row in enumerate(log_rows):
            # What remains visible after the last carriage return
            visible = row.rsplit("\r", 1)[-1]
            assert "WARNING" in visible
            assert visible.endswith(f" - msg-{i}")
        assert last_row.rsplit("\r", 1)[-1] == "0:00:00 | 0 | msg-19"

    def test_package_logger_from_other_thread(
        self, status, output, shared_console
    ):
        """Direct package logging also clears the status line first."""
        log = get_logger(PACKAGE_LOGGER)
        status.set_status_message("Scanning")

        thread = threading.Thread(target=log.error, args=("disk full",))
        thread.start()
        thread.join(5)

        assert not thread.is_alive()
        before, after = output.getvalue().rsplit("\n", 1)
        assert before.rsplit("\r", 1)[-1].endswith(" - disk full")
        assert after.rsplit("\r", 1)[-1] == "0:00:00 | 0 | Scanning"


class TestFormatLogMessage:
    """Test %-style message formatting."""

    def test_formats_args(self):
        """Arguments are interpolated like logging does."""
        assert format_log_message("%s of %d", ("3", 10)) == "3 of 10"

    def test_no_args_keeps_percent(self):
        """Without arguments the message is used verbatim."""
        assert format_log_message("100% done", ()) == "100% done"

    def test_mapping_arg(self):
        """A single mapping argument supports named fields."""
        assert format_log_message("%(n)s files", ({"n": 4},)) == "4 files"
