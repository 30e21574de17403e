"""``newswire-fetch``: walk one source's pages from the command line.

The first page runs immediately in the calling thread. Each later page runs
as a continuation on a BlockingScheduler after the page delay, and the
process exits once the walk completes or fails.
"""

from __future__ import annotations

import argparse
import logging
import sys

from apscheduler.schedulers.blocking import BlockingScheduler

from newswire.config import load_config
from newswire.ingestion.registry import AdapterFactory
from newswire.log import setup_logging
from newswire.runner import IngestionRunner, RunOutcome
from newswire.storage import init_db
from newswire.workqueue import SchedulerWorkQueue

logger = logging.getLogger("newswire")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="newswire-fetch",
        description="Fetch articles from a news API and save them to the database.",
    )
    parser.add_argument("--source", help="Source to fetch from (e.g. newsapi, guardian, nytimes)")
    parser.add_argument("--page", type=int, default=1, help="Page to start from (default: 1)")
    parser.add_argument(
        "--from", dest="from_date", default=None,
        help="Start date as YYYY-MM-DD (default: yesterday)",
    )
    parser.add_argument(
        "--delay", type=int, default=None,
        help="Seconds between page fetches (default: PAGE_DELAY_SECONDS, 12)",
    )
    return parser.parse_args(argv)


class _Walk:
    """Feeds continuations back into the runner and stops the scheduler at the end."""

    def __init__(
        self, runner: IngestionRunner, scheduler: BlockingScheduler, delay_seconds: int | None
    ) -> None:
        self._runner = runner
        self._scheduler = scheduler
        self._delay_seconds = delay_seconds
        self.failed = False

    def step(self, source: str, page: int, from_date: str) -> RunOutcome:
        try:
            outcome = self._runner.run(source, page, from_date, delay_seconds=self._delay_seconds)
        except Exception:
            self.failed = True
            if self._scheduler.running:
                self._scheduler.shutdown(wait=False)
            raise
        if outcome.exit_code:
            self.failed = True
        if outcome.continuation is None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        return outcome


def main(argv: list[str] | None = None) -> int:
    """Run a pagination walk for one source. Returns the process exit code."""
    args = _parse_args(argv)
    try:
        config = load_config()
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_format)
    init_db(config.database_path)

    scheduler = BlockingScheduler(timezone=config.fetch_timezone)
    work_queue = SchedulerWorkQueue(scheduler)
    runner = IngestionRunner(config, AdapterFactory(config), work_queue)
    walk = _Walk(runner, scheduler, args.delay)
    work_queue.bind(walk.step)

    first = runner.run(args.source, args.page, args.from_date, delay_seconds=args.delay)
    if first.continuation is None:
        return first.exit_code

    logger.info("Following %s pagination; press Ctrl+C to stop", first.source)
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Interrupted; pending pages were not fetched")
        return 1
    return 1 if walk.failed else 0


if __name__ == "__main__":
    sys.exit(main())
