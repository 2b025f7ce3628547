"""Tests for the CLI argument parser."""

import pytest

from cli_status.cli import CLIParser
from cli_status.config import SettingsManager


@pytest.fixture
def parser() -> CLIParser:
    """Provide a parser built from default settings."""
    return CLIParser(SettingsManager.get_default_settings())


def test_demo_defaults(parser):
    """Demo options have sensible defaults."""
    args = parser.parse_args(["demo"])
    assert args.command == "demo"
    assert args.workers == 4
    assert args.items == 40
    assert args.delay == 0.1
    assert args.warn_every == 0
    assert args.no_color is False


def test_demo_options(parser):
    """Demo options are parsed and typed."""
    args = parser.parse_args(
        [
            "demo",
            "--workers",
            "8",
            "--items",
            "200",
            "--delay",
            "0",
            "--warn-every",
            "25",
            "--no-color",
        ]
    )
    assert (args.workers, args.items, args.delay) == (8, 200, 0.0)
    assert args.warn_every == 25
    assert args.no_color is True


def test_no_color_default_follows_settings():
    """ansi = false in settings turns colors off by default."""
    settings = SettingsManager.get_default_settings()
    settings["ansi"] = False
    args = CLIParser(settings).parse_args(["demo"])
    assert args.no_color is True


@pytest.mark.parametrize(
    "argv",
    [
        ["demo", "--workers", "0"],
        ["demo", "--items", "-3"],
        ["demo", "--delay", "-1"],
    ],
)
def test_invalid_demo_options(parser, argv):
    """Out-of-range values are rejected by argparse."""
    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(argv)
    assert exc_info.value.code == 2


def test_global_options(parser, tmp_path):
    """--version and --log-file are global."""
    args = parser.parse_args(["--version"])
    assert args.version is True
    assert args.command is None

    args = parser.parse_args(["--log-file", str(tmp_path / "x.log"), "config"])
    assert args.log_file == tmp_path / "x.log"
    assert args.init is False
