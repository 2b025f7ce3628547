"""Main CLI entry point for cli-status.

This module provides the minimal entry point for the command-line
interface, delegating all functionality to the CLI runner.
"""

import sys

import uvloop

from cli_status.cli import CLIRunner
from cli_status.logger import get_logger

logger = get_logger(__name__)


async def async_main() -> None:
    """Run the CLI asynchronously."""
    logger.debug("CLI started")
    runner = CLIRunner()
    try:
        await runner.run()
        logger.debug("CLI completed successfully")
    except Exception:
        logger.exception("CLI encountered an error")
        raise


def main() -> None:
    """Run the CLI application under uvloop.

    Raises:
        SystemExit: With status 1 on cancellation or unexpected errors.

    """
    try:
        uvloop.run(async_main())
    except KeyboardInterrupt:
        logger.info("CLI cancelled by user")
        sys.exit(1)
    except Exception:
        logger.exception("Unexpected error")
        sys.exit(1)


if __name__ == "__main__":
    main()
