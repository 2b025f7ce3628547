"""CLI runner for cli-status.

Orchestrates the execution of CLI commands by routing parsed
arguments to the appropriate command handlers.
"""

import sys
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path

from cli_status import __version__
from cli_status.config import SettingsManager
from cli_status.exceptions import CliStatusError
from cli_status.logger import (
    enable_file_logging,
    get_logger,
    update_logger_from_config,
)

from .commands import ConfigHandler, DemoHandler
from .parser import CLIParser

logger = get_logger(__name__)


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize CLI runner with shared dependencies.

        Args:
            config_dir: Settings directory override

        """
        self.settings_manager = SettingsManager(config_dir)
        self.settings = self.settings_manager.load_settings()
        self.command_handlers = {
            "demo": DemoHandler(self.settings_manager),
            "config": ConfigHandler(self.settings_manager),
        }

    async def run(self, argv: Sequence[str] | None = None) -> None:
        """Run the CLI application.

        Parses arguments, handles global flags, validates commands,
        and routes to the appropriate handler.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        """
        try:
            args = CLIParser(self.settings).parse_args(argv)

            if args.version:
                print(__version__)
                return

            if not args.command:
                print("No command specified. Use --help.")
                sys.exit(1)

            if args.log_file is not None:
                log_file = enable_file_logging(args.log_file)
                logger.debug("Logging to %s", log_file)
            update_logger_from_config(self.settings_manager.config_dir)

            await self._execute_command(args)

        except KeyboardInterrupt:
            print("\nOperation cancelled by user")
            sys.exit(1)
        except CliStatusError as e:
            logger.error("%s", e)
            print(f"Error: {e}")
            sys.exit(1)

    async def _execute_command(self, args: Namespace) -> None:
        """Execute the specified command with the appropriate handler.

        Args:
            args: Parsed command-line arguments namespace.

        """
        handler = self.command_handlers[args.command]
        logger.debug("Running command %s", args.command)
        await handler.execute(args)
