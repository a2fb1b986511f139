"""
Crawl Job - one full crawl over every configured application.

Flow per application:
    PageSource -> Fetcher.run() -> Extractor.extract() per page -> writer.persist()

The App Store and Play Store units run concurrently as asyncio tasks and
share only the HTTP client and the frozen TargetApps snapshot. Inside a unit,
applications and pages are processed strictly in order.

Failure scope:
- ConfigLoadError aborts the whole run before any request is sent
- RequestError / ParseError / PersistError abort one application only
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx

from apps.crawler.extractors import AppStoreExtractor, Extractor, PlayStoreExtractor
from apps.crawler.fetcher import Fetcher
from apps.crawler.page_sources import AppStorePageSource, PageSource, PlayStorePageSource
from utils.config import settings
from utils.errors import CrawlerError
from utils.http import create_http_client
from utils.schemas import ReviewRecord, TargetApp, TargetApps
from utils.storage import CsvReviewWriter, destination_key
from utils.targets import load_target_apps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Platform:
    """Binds a platform name to its page source factory and extractor."""

    name: str
    page_source: Callable[[TargetApp], PageSource]
    extractor: Extractor


PLATFORMS: tuple[Platform, ...] = (
    Platform("app_store", AppStorePageSource.from_target, AppStoreExtractor()),
    Platform("play_store", PlayStorePageSource.from_target, PlayStoreExtractor()),
)


@dataclass
class AppOutcome:
    platform: str
    app_id: str
    country: str
    records: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CrawlSummary:
    """Per-application results of one crawl run."""

    outcomes: list[AppOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[AppOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[AppOutcome]:
        return [o for o in self.outcomes if not o.ok]


def extract_pages(extractor: Extractor, pages: list[bytes]) -> list[ReviewRecord]:
    """
    Extract and concatenate records from every page, in page order.

    Raises:
        ParseError: If any page fails; earlier pages' records are discarded
    """
    records: list[ReviewRecord] = []
    for i, page in enumerate(pages, 1):
        logger.debug("Processing response %d/%d", i, len(pages))
        records.extend(extractor.extract(page))
    return records


async def crawl_app(
    platform: Platform,
    target: TargetApp,
    fetcher: Fetcher,
    writer: CsvReviewWriter,
) -> AppOutcome:
    """
    Fetch, extract and persist one application.

    Never raises: CrawlerErrors and unexpected exceptions alike are logged
    and reported in the returned outcome, so the caller continues with the
    next application and the other platform unit is unaffected.
    """
    outcome = AppOutcome(platform=platform.name, app_id=target.app_id, country=target.country)
    start_time = time.time()

    try:
        pages = await fetcher.run(platform.page_source(target))
        logger.info("Fetched %d pages for app: %s", len(pages), target.app_id)

        records = extract_pages(platform.extractor, pages)
        writer.persist(records, destination_key(platform.name, target.app_id))
        outcome.records = len(records)

    except CrawlerError as e:
        outcome.error = str(e)
        logger.error(
            "Failed to crawl app %s: %s",
            target.app_id,
            e,
            extra={"platform": platform.name, "app_id": target.app_id, "country": target.country},
        )
        return outcome

    except Exception as e:
        outcome.error = f"Unexpected error: {e!r}"
        logger.error(
            "Unexpected failure while crawling app %s",
            target.app_id,
            extra={"platform": platform.name, "app_id": target.app_id, "country": target.country},
            exc_info=True,
        )
        return outcome

    logger.info(
        "Successfully processed and saved reviews for app: %s (records=%d, elapsed=%.3fs)",
        target.app_id,
        outcome.records,
        time.time() - start_time,
    )
    return outcome


async def crawl_platform(
    platform: Platform,
    targets: tuple[TargetApp, ...],
    fetcher: Fetcher,
    writer: CsvReviewWriter,
) -> list[AppOutcome]:
    """Crawl every target of one platform, one application at a time."""
    logger.info("Found %d %s apps to crawl", len(targets), platform.name)

    outcomes = []
    for i, target in enumerate(targets, 1):
        logger.info(
            "Crawling %s app %d/%d: %s (country: %s)",
            platform.name,
            i,
            len(targets),
            target.app_id,
            target.country,
        )
        outcomes.append(await crawl_app(platform, target, fetcher, writer))
    return outcomes


async def crawl_targets(
    targets: TargetApps,
    client: httpx.AsyncClient,
    writer: CsvReviewWriter,
    request_delay: float = 0.0,
    platforms: tuple[Platform, ...] = PLATFORMS,
) -> CrawlSummary:
    """
    Run one concurrent unit per platform and wait for all of them.

    Args:
        targets: Frozen snapshot of configured applications
        client: Shared HTTP client
        writer: Destination for each application's result set
        request_delay: Advisory delay between pages, in seconds
        platforms: Platform bindings; the name selects the TargetApps field

    Returns:
        CrawlSummary with one outcome per application
    """
    fetcher = Fetcher(client, request_delay=request_delay)

    results = await asyncio.gather(
        *(
            crawl_platform(platform, getattr(targets, platform.name), fetcher, writer)
            for platform in platforms
        )
    )

    summary = CrawlSummary()
    for outcomes in results:
        summary.outcomes.extend(outcomes)
    return summary


async def run_crawl(
    targets_path: Optional[str] = None,
    output_dir: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
    request_delay: Optional[float] = None,
) -> CrawlSummary:
    """
    Load targets and crawl all of them once.

    Args:
        targets_path: Target apps JSON, defaults to settings.TARGET_APPS_PATH
        output_dir: CSV output root, defaults to settings.OUTPUT_DIR
        client: HTTP client to use; when omitted one is created and closed here
        request_delay: Seconds between pages, defaults to settings.REQUEST_DELAY_MS

    Returns:
        CrawlSummary with one outcome per application

    Raises:
        ConfigLoadError: If the target apps file cannot be loaded
    """
    targets = load_target_apps(targets_path or settings.TARGET_APPS_PATH)
    writer = CsvReviewWriter(output_dir or settings.OUTPUT_DIR)
    if request_delay is None:
        request_delay = settings.REQUEST_DELAY_MS / 1000

    owns_client = client is None
    if client is None:
        client = create_http_client()

    start_time = time.time()
    try:
        summary = await crawl_targets(targets, client, writer, request_delay=request_delay)
    finally:
        if owns_client:
            await client.aclose()

    logger.info(
        "Crawler finished: succeeded=%d, failed=%d, elapsed=%.3fs",
        len(summary.succeeded),
        len(summary.failed),
        time.time() - start_time,
    )
    return summary
