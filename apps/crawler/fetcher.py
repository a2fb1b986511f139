"""
Paginated Fetcher

Walks every page of one application's feed and returns the raw response
bodies in request order.

Features:
- Store-agnostic: driven entirely through the PageSource protocol
- Sequential requests with an optional advisory delay between pages
- Single-shot requests: the first transport failure aborts the run

Usage:
    fetcher = Fetcher(client, request_delay=0.05)
    pages = await fetcher.run(AppStorePageSource("1194408342", "us"))
"""

import asyncio
import logging

import httpx

from apps.crawler.page_sources import PageSource
from utils.errors import RequestError

logger = logging.getLogger(__name__)


class Fetcher:
    """
    Pagination loop for one application.

    Handles:
    - Request building and sending for each page
    - Body collection in page order
    - Mapping transport failures to RequestError
    """

    def __init__(self, client: httpx.AsyncClient, request_delay: float = 0.0) -> None:
        """
        Initialize fetcher.

        Args:
            client: Shared HTTP client, owned by the caller
            request_delay: Seconds to sleep after each page (0 disables)
        """
        self.client = client
        self.request_delay = request_delay

    async def run(self, page_source: PageSource) -> list[bytes]:
        """
        Fetch every page until the page source is exhausted.

        Either every page is returned or none is: on failure the pages
        fetched so far are dropped and RequestError is raised.

        Args:
            page_source: Mutable pagination state for one application

        Returns:
            Raw response bodies, one per page, in page order

        Raises:
            RequestError: On the first connection, timeout or body read failure
        """
        pages: list[bytes] = []

        while page_source.has_more_pages():
            page = page_source.current_page()
            spec = page_source.build_request(page)
            # Merge the client defaults (headers, timeout) into the page request
            request = self.client.build_request(spec.method, spec.url)

            logger.debug("Crawling page %d: %s", page, request.url)

            try:
                response = await self.client.send(request, stream=True)
                try:
                    body = await response.aread()
                finally:
                    await response.aclose()
            except httpx.HTTPError as e:
                raise RequestError(f"page {page} ({request.url}): {e}") from e

            if not response.is_success:
                logger.warning(
                    "Unexpected status for page %d: status=%d, url=%s",
                    page,
                    response.status_code,
                    request.url,
                )

            pages.append(body)
            page_source.increment_page()

            if self.request_delay > 0:
                await asyncio.sleep(self.request_delay)

        return pages
