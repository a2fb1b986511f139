"""
Crawler error types.

Each kind is scoped differently by the crawl job:
- ConfigLoadError: fatal to the whole run
- RequestError, ParseError, PersistError: fatal to one application only
"""


class CrawlerError(Exception):
    """Base class for all crawler failures."""

    kind = "Crawler"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind} error: {self.message}"


class ConfigLoadError(CrawlerError):
    """Target apps file is missing or does not have the expected structure."""

    kind = "Config load"


class RequestError(CrawlerError):
    """Transport failure while fetching a page (connection, timeout, body read)."""

    kind = "Request"


class ParseError(CrawlerError):
    """Hard syntax error while extracting records from a page."""

    kind = "Parse"


class PersistError(CrawlerError):
    """Result set could not be written to its destination."""

    kind = "Persist"
