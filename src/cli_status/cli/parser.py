"""CLI argument parser for cli-status.

Defines the ``demo`` and ``config`` commands and the global options.
"""

import argparse
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path

from cli_status.config import Settings


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        msg = f"must be at least 1, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        msg = f"must not be negative, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


class CLIParser:
    """Command-line argument parser for cli-status."""

    def __init__(self, settings: Settings) -> None:
        """Initialize the CLI parser with the loaded settings.

        Args:
            settings: Settings used for option defaults

        """
        self.settings = settings

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Namespace: Parsed arguments namespace.

        """
        parser = self._create_main_parser()
        self._add_global_options(parser)
        self._add_subcommands(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser."""
        return argparse.ArgumentParser(
            prog="cli-status",
            description="Terminal status line for concurrent CLI work",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Watch eight workers share one status line
  %(prog)s demo --workers 8 --items 200

  # Slow it down and post a warning every 25 items
  %(prog)s demo --delay 0.2 --warn-every 25

  # Show effective settings, or write a commented settings.conf
  %(prog)s config
  %(prog)s config --init
            """,
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        """Add global options to the main parser.

        Args:
            parser: The main parser to add options to.

        """
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show cli-status version and exit",
        )
        parser.add_argument(
            "--log-file",
            type=Path,
            default=None,
            help="Also write logs to this rotating log file",
        )

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        """Add all subcommands to the parser."""
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )
        self._add_demo_command(subparsers)
        self._add_config_command(subparsers)

    def _add_demo_command(self, subparsers) -> None:
        """Add demo command parser.

        Args:
            subparsers: The subparsers object to add the demo command to.

        """
        demo_parser = subparsers.add_parser(
            "demo",
            help="Process simulated work items under a live status line",
        )
        demo_parser.add_argument(
            "--workers",
            type=_positive_int,
            default=4,
            help="Number of concurrent workers (default: 4)",
        )
        demo_parser.add_argument(
            "--items",
            type=_positive_int,
            default=40,
            help="Number of work items to process (default: 40)",
        )
        demo_parser.add_argument(
            "--delay",
            type=_non_negative_float,
            default=0.1,
            help="Average seconds spent per item (default: 0.1)",
        )
        demo_parser.add_argument(
            "--warn-every",
            type=int,
            default=0,
            metavar="K",
            help="Log a warning notification every K items (0 = never)",
        )
        demo_parser.add_argument(
            "--no-color",
            action="store_true",
            default=not self.settings["ansi"],
            help="Do not accent notifications with ANSI colors",
        )

    def _add_config_command(self, subparsers) -> None:
        """Add config command parser."""
        config_parser = subparsers.add_parser(
            "config", help="Show or initialize settings.conf"
        )
        config_parser.add_argument(
            "--init",
            action="store_true",
            help="Write a commented settings.conf with default values",
        )
