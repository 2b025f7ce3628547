"""Tests for the CLI runner, its commands and the entry point."""

import logging

import pytest

from cli_status import __version__, main
from cli_status.cli import CLIRunner


@pytest.fixture
def cli_runner(tmp_path):
    """Provide a runner bound to a temporary settings directory."""
    return CLIRunner(config_dir=tmp_path)


@pytest.mark.asyncio
async def test_version(cli_runner, capsys):
    """--version prints the package version."""
    await cli_runner.run(["--version"])
    assert capsys.readouterr().out.strip() == __version__


@pytest.mark.asyncio
async def test_no_command_exits(cli_runner, capsys):
    """Running without a command exits with status 1."""
    with pytest.raises(SystemExit) as exc_info:
        await cli_runner.run([])
    assert exc_info.value.code == 1
    assert "No command specified" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_config_shows_defaults(cli_runner, capsys):
    """config prints effective settings."""
    await cli_runner.run(["config"])
    out = capsys.readouterr().out
    assert "not found, showing defaults" in out
    assert "[status]" in out
    assert "notification_duration = 8.0" in out
    assert "console_log_level = WARNING" in out


@pytest.mark.asyncio
async def test_config_init(cli_runner, tmp_path, capsys):
    """config --init writes settings.conf once."""
    await cli_runner.run(["config", "--init"])
    settings_file = tmp_path / "settings.conf"
    assert settings_file.exists()
    assert f"Created {settings_file}" in capsys.readouterr().out

    await cli_runner.run(["config", "--init"])
    assert "already exist" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_demo_runs_to_completion(cli_runner, capsys, caplog):
    """The demo processes every item and reports a summary."""
    caplog.set_level(logging.WARNING)

    await cli_runner.run(
        [
            "demo",
            "--workers",
            "2",
            "--items",
            "5",
            "--delay",
            "0",
            "--warn-every",
            "2",
            "--no-color",
        ]
    )

    captured = capsys.readouterr()
    assert "Processed 5 of 5 items" in captured.out
    assert "Halfway: batch-000/item-00001.dat" in captured.err
    assert "/5 | Processed 5 of 5 items" in captured.err
    warnings = sorted(
        r.getMessage()
        for r in caplog.records
        if r.name == "cli_status.cli.commands.demo"
    )
    assert warnings == [
        "Item batch-000/item-00001.dat took a slow path",
        "Item batch-000/item-00003.dat took a slow path",
    ]


@pytest.mark.asyncio
async def test_log_file_option(cli_runner, tmp_path):
    """--log-file enables the rotating log file."""
    log_file = tmp_path / "cli.log"
    await cli_runner.run(["--log-file", str(log_file), "config"])
    assert log_file.exists()


def test_main_runs_under_uvloop(mocker):
    """The entry point drives async_main with uvloop."""
    run = mocker.patch(
        "cli_status.main.uvloop.run", side_effect=lambda coro: coro.close()
    )
    main.main()
    run.assert_called_once()


def test_main_exits_on_interrupt(mocker):
    """Ctrl-C exits with status 1."""

    def interrupt(coro):
        coro.close()
        raise KeyboardInterrupt

    mocker.patch("cli_status.main.uvloop.run", side_effect=interrupt)
    with pytest.raises(SystemExit) as exc_info:
        main.main()
    assert exc_info.value.code == 1
