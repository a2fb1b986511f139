"""
Crawl Scheduler - Cron and On-Demand Execution

Runs the crawl job once (default) or on a cron schedule via APScheduler.

In RUN_ONCE mode a ConfigLoadError ends the process with status 1. In
scheduled mode it only skips that run: the target file is re-read on the
next tick, so fixing it does not require a restart.

Usage:
    # Run once and exit (default)
    python -m apps.crawler

    # Scheduled mode
    RUN_ONCE=false python -m apps.crawler
"""

import asyncio
import logging
import signal
import sys

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from apps.crawler.crawl_job import CrawlSummary, run_crawl
from utils.config import settings
from utils.errors import ConfigLoadError
from utils.logging import setup_logging

logger = logging.getLogger(__name__)

JOB_ID = "crawl_job"


def log_summary(summary: CrawlSummary) -> None:
    """Report every app that produced no CSV, then the run totals."""
    for outcome in summary.failed:
        logger.warning(
            "App not saved: %s/%s",
            outcome.platform,
            outcome.app_id,
            extra={"country": outcome.country, "error": outcome.error},
        )

    logger.info(
        "Crawl summary: saved=%d, failed=%d, records=%d",
        len(summary.succeeded),
        len(summary.failed),
        sum(o.records for o in summary.succeeded),
    )


class CrawlScheduler:
    """Drives run_crawl either once or on CRAWL_SCHEDULE_CRON."""

    def __init__(self, run_once: bool = True, cron: str | None = None) -> None:
        self.run_once = run_once
        self.cron = cron or settings.CRAWL_SCHEDULE_CRON
        self.scheduler: AsyncIOScheduler | None = None
        self.shutdown_event = asyncio.Event()
        self.last_summary: CrawlSummary | None = None

    async def execute_crawl(self) -> CrawlSummary:
        """
        Execute one crawl over every configured application.

        Raises:
            ConfigLoadError: If the target apps file cannot be loaded
        """
        logger.info("Starting app review crawler...")

        try:
            summary = await run_crawl()
        except ConfigLoadError as e:
            logger.error("Failed to load target apps: %s", e)
            raise
        finally:
            if self.run_once:
                self.shutdown_event.set()

        log_summary(summary)
        self.last_summary = summary
        return summary

    async def scheduled_crawl(self) -> None:
        """Cron tick: a bad target file skips this run only."""
        try:
            await self.execute_crawl()
        except ConfigLoadError:
            job = self.scheduler.get_job(JOB_ID) if self.scheduler else None
            logger.warning(
                "Crawl skipped, retrying on next schedule",
                extra={"next_run": str(getattr(job, "next_run_time", None))},
            )

    def _request_shutdown(self, signum: int, frame: object) -> None:
        logger.info("Received signal %d, stopping crawler", signum)
        self.shutdown_event.set()

    async def start(self) -> None:
        """Run once and return, or schedule crawls until SIGINT/SIGTERM."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            signal.signal(sig, self._request_shutdown)

        if self.run_once:
            await self.execute_crawl()
            return

        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.scheduled_crawl,
            trigger=CronTrigger.from_crontab(self.cron),
            id=JOB_ID,
            name="App review crawl",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        job = self.scheduler.get_job(JOB_ID)
        logger.info("Crawl scheduled: cron=%s, next_run=%s", self.cron, getattr(job, "next_run_time", None))

        await self.shutdown_event.wait()

        self.scheduler.shutdown(wait=True)
        logger.info("Scheduler stopped")


async def main() -> None:
    """Main entry point for the crawler."""
    setup_logging(
        level=settings.LOG_LEVEL,
        format_type=settings.LOG_FORMAT,
        static_fields={
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        },
    )

    scheduler = CrawlScheduler(run_once=settings.RUN_ONCE)

    try:
        await scheduler.start()
    except Exception as e:
        logger.error("Crawler failed", extra={"error": str(e)}, exc_info=True)
        sys.exit(1)


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
