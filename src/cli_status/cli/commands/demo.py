"""Demo command handler for cli-status CLI.

Runs simulated work items on a pool of asyncio tasks, each doing its
blocking part in a worker thread, so many threads report to one status
line at once.
"""

import asyncio
import dataclasses
import random
import time
from argparse import Namespace

from cli_status.logger import get_logger
from cli_status.status import CliStatus, Severity

from .base import BaseCommandHandler

logger = get_logger(__name__)


def _simulate_work(delay: float) -> None:
    """Block the calling thread for roughly ``delay`` seconds."""
    if delay > 0:
        time.sleep(random.uniform(0.5, 1.5) * delay)  # noqa: S311


class DemoHandler(BaseCommandHandler):
    """Handler for the demo command."""

    async def execute(self, args: Namespace) -> None:
        """Execute the demo command."""
        config = self.settings_manager.load_status_config()
        if args.no_color:
            config = dataclasses.replace(config, ansi=False)

        items = [
            f"batch-{i // 10:03d}/item-{i:05d}.dat" for i in range(args.items)
        ]
        status: CliStatus[str] = CliStatus(config=config)
        try:
            await self._run(status, items, args)
        finally:
            # close() blocks until pending output is written
            await asyncio.to_thread(status.close)

    async def _run(
        self, status: CliStatus[str], items: list[str], args: Namespace
    ) -> None:
        status.set_total(len(items))
        await asyncio.wrap_future(
            status.set_status_message_async(
                f"Starting {args.workers} workers"
            )
        )

        semaphore = asyncio.Semaphore(args.workers)
        await asyncio.wrap_future(status.clear_status_message_async())
        await asyncio.gather(
            *(
                self._process(status, semaphore, index, item, args)
                for index, item in enumerate(items, start=1)
            )
        )

        elapsed = status.elapsed_time
        summary = (
            f"Processed {status.count} of {status.total} items "
            f"in {elapsed.total_seconds():.1f}s"
        )
        await asyncio.wrap_future(
            status.run_without_status_line_async(print, summary)
        )
        await asyncio.wrap_future(
            status.set_notification_async(summary, Severity.INFO)
        )

    async def _process(
        self,
        status: CliStatus[str],
        semaphore: asyncio.Semaphore,
        index: int,
        item: str,
        args: Namespace,
    ) -> None:
        async with semaphore:
            status.add_work(item)
            try:
                await asyncio.to_thread(_simulate_work, args.delay)
            finally:
                status.remove_work(item)
            status.increment_count()

            if args.warn_every > 0 and index % args.warn_every == 0:
                await asyncio.wrap_future(
                    status.warn_async(
                        logger, "Item %s took a slow path", item
                    )
                )
            if index == status.total // 2:
                await asyncio.wrap_future(
                    status.print_line_async(f"Halfway: {item}")
                )
