"""Pytest configuration and fixtures for cli-status tests."""

import io
import logging

import pytest

from cli_status.status import CliStatus, StatusConfig


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("cli_status"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture(autouse=True)
def isolate_environment(tmp_path, monkeypatch):
    """Keep settings and logs of test runs out of the home directory."""
    monkeypatch.setenv("CLI_STATUS_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("CLI_STATUS_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at 1000s."""
    return FakeClock()


@pytest.fixture
def output() -> io.StringIO:
    """Provide an in-memory, non-interactive output sink."""
    return io.StringIO()


@pytest.fixture
def status(output, clock):
    """Provide a CliStatus without ANSI accents, closed after the test."""
    cli_status: CliStatus[str] = CliStatus(
        output=output, config=StatusConfig(ansi=False), clock=clock
    )
    yield cli_status
    cli_status.close()
