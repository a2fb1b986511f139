"""
Page Sources - per-platform pagination state and request building.

A page source is bound to one TargetApp and owns its page counter. The
fetcher only talks to the PageSource protocol, so every platform is a flat,
independent implementation of the same four operations.

The page bound is fixed per platform and never derived from response
content: a crawl always issues (max_pages - start_page + 1) requests.
"""

from typing import Protocol, runtime_checkable
from urllib.parse import quote, urlencode

import httpx

from utils.schemas import TargetApp

APP_STORE_URL = (
    "https://itunes.apple.com/{country}/rss/customerreviews/"
    "id={app_id}/page={page}/sortby=mostrecent/xml"
)
PLAY_STORE_URL = "https://play.google.com/store/getreviews"


@runtime_checkable
class PageSource(Protocol):
    """Pagination capability for one paginated review feed."""

    def build_request(self, current_page: int) -> httpx.Request:
        """Describe the GET request for `current_page`; no side effects."""
        ...

    def has_more_pages(self) -> bool:
        ...

    def increment_page(self) -> None:
        ...

    def current_page(self) -> int:
        ...


class AppStorePageSource:
    """Apple App Store customer-reviews Atom feed, pages 1..10."""

    platform = "app_store"
    start_page = 1
    max_pages = 10

    def __init__(self, app_id: str, country: str, start_page: int | None = None) -> None:
        self.app_id = app_id
        self.country = country
        self._page = self.start_page if start_page is None else start_page

    @classmethod
    def from_target(cls, target: TargetApp) -> "AppStorePageSource":
        return cls(target.app_id, target.country, target.pages)

    def build_request(self, current_page: int) -> httpx.Request:
        url = APP_STORE_URL.format(
            country=quote(self.country, safe=""),
            app_id=quote(self.app_id, safe=""),
            page=current_page,
        )
        return httpx.Request("GET", url)

    def has_more_pages(self) -> bool:
        return self._page <= self.max_pages

    def increment_page(self) -> None:
        self._page += 1

    def current_page(self) -> int:
        return self._page

    def __repr__(self) -> str:
        return f"AppStorePageSource(app_id={self.app_id!r}, country={self.country!r}, page={self._page})"


class PlayStorePageSource:
    """Google Play Store review endpoint, zero-indexed pages 0..100."""

    platform = "play_store"
    start_page = 0
    max_pages = 100

    def __init__(self, app_id: str, country: str, start_page: int | None = None) -> None:
        self.app_id = app_id
        self.country = country
        self._page = self.start_page if start_page is None else start_page

    @classmethod
    def from_target(cls, target: TargetApp) -> "PlayStorePageSource":
        return cls(target.app_id, target.country, target.pages)

    def build_request(self, current_page: int) -> httpx.Request:
        query = urlencode(
            [
                ("hl", self.country),
                ("gl", self.country),
                ("reviewType", 0),
                ("reviewSortOrder", 4),
                ("pageNum", current_page),
                ("id", self.app_id),
            ]
        )
        return httpx.Request("GET", f"{PLAY_STORE_URL}?{query}")

    def has_more_pages(self) -> bool:
        return self._page <= self.max_pages

    def increment_page(self) -> None:
        self._page += 1

    def current_page(self) -> int:
        return self._page

    def __repr__(self) -> str:
        return f"PlayStorePageSource(app_id={self.app_id!r}, country={self.country!r}, page={self._page})"
