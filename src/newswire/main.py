"""Service entry point: periodic fetch scheduler and web API in one process."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from newswire.config import Config, load_config
from newswire.ingestion.registry import AdapterFactory
from newswire.log import setup_logging
from newswire.runner import IngestionRunner
from newswire.storage import init_db
from newswire.web.app import create_app
from newswire.web.config import load_web_config
from newswire.workqueue import SchedulerWorkQueue

logger = logging.getLogger("newswire")


def _build_scheduler(config: Config) -> tuple[BackgroundScheduler, IngestionRunner]:
    """Create a BackgroundScheduler with one periodic fetch job per configured source.

    The same scheduler carries page continuations, so a walk started by the
    periodic job proceeds in the background one page at a time.
    """
    scheduler = BackgroundScheduler(timezone=config.fetch_timezone)
    work_queue = SchedulerWorkQueue(scheduler)
    runner = IngestionRunner(config, AdapterFactory(config), work_queue)
    work_queue.bind(runner.run)

    cron_parts = config.fetch_schedule_cron.split()
    for source in config.configured_sources:
        scheduler.add_job(
            runner.run,
            trigger=CronTrigger(
                minute=cron_parts[0],
                hour=cron_parts[1],
                day=cron_parts[2],
                month=cron_parts[3],
                day_of_week=cron_parts[4],
                timezone=config.fetch_timezone,
            ),
            kwargs={"source": source},
            id=f"daily:{source}",
            name=f"Daily {source} fetch",
            max_instances=1,
            coalesce=True,
        )

    return scheduler, runner


def main() -> None:
    """Load config, set up logging, and start scheduler + web server."""
    config = load_config()
    web_config = load_web_config()

    setup_logging(config.log_level, config.log_format)

    logger.info(
        "Newswire starting (env=%s, db=%s, sources=%s)",
        config.app_env,
        config.database_path,
        ", ".join(config.configured_sources) or "none",
    )
    if not config.configured_sources:
        logger.warning("No API keys configured; no sources will be fetched")

    init_db(config.database_path)

    scheduler, _ = _build_scheduler(config)

    @asynccontextmanager
    async def lifespan(app):
        logger.info("Scheduler starting")
        scheduler.start()
        yield
        logger.info("Scheduler shutting down")
        scheduler.shutdown(wait=False)

    app = create_app(web_config, lifespan=lifespan)

    uvicorn.run(app, host=web_config.web_host, port=web_config.web_port)


if __name__ == "__main__":
    main()
