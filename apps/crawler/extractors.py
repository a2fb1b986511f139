"""
Review Extractors - raw page bytes to ReviewRecords.

Every platform provides one Extractor: a single `extract(raw)` call that
turns one page payload into zero or more complete records, or raises
ParseError on a hard syntax error. Incomplete entries and unparseable
counters are not errors; they are dropped or defaulted to 0.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Protocol, runtime_checkable

from utils.errors import ParseError
from utils.schemas import ReviewRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class Extractor(Protocol):
    """Extraction capability for one platform's page payloads."""

    def extract(self, raw: bytes) -> list[ReviewRecord]:
        ...


def _local_name(tag: str) -> str:
    """Strip the `{namespace}` prefix ElementTree puts on qualified tags."""
    return tag.rpartition("}")[2]


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


class AppStoreExtractor:
    """
    Streaming parser for the App Store customer-reviews Atom feed.

    Walks start/end events in one forward pass. Only direct children of an
    <entry> are mapped; feed-level <title>/<updated> and nested elements such
    as <author><name> are ignored. Finished entries are cleared as soon as
    they close, so the document tree never grows beyond one entry.
    """

    def extract(self, raw: bytes) -> list[ReviewRecord]:
        if not raw.strip():
            return []

        parser = ET.XMLPullParser(events=("start", "end"))
        reviews: list[ReviewRecord] = []

        in_entry = False
        depth = 0
        entry_depth = 0
        vote_total = 0
        current = ReviewRecord()

        def handle(event: str, elem: ET.Element) -> None:
            nonlocal in_entry, depth, entry_depth, vote_total, current

            name = _local_name(elem.tag)

            if event == "start":
                depth += 1
                if name == "entry" and not in_entry:
                    in_entry = True
                    entry_depth = depth
                    vote_total = 0
                    current = ReviewRecord()
                return

            # end event: element text is complete here
            if in_entry and depth == entry_depth + 1:
                text = (elem.text or "").strip()

                if name == "title":
                    current.title = text
                elif name == "content":
                    if elem.get("type") == "text":
                        current.review = text
                elif name == "rating":
                    current.star = _to_int(text)
                elif name == "voteSum":
                    current.like = _to_int(text)
                elif name == "voteCount":
                    vote_total = _to_int(text)
                elif name == "updated":
                    current.date = text

            elif in_entry and name == "entry" and depth == entry_depth:
                current.dislike = max(vote_total - current.like, 0)
                if current.is_complete():
                    reviews.append(current)
                else:
                    logger.debug("Skipped incomplete entry: %r", current)
                in_entry = False
                elem.clear()

            depth -= 1

        try:
            parser.feed(raw)
            for event, elem in parser.read_events():
                handle(event, elem)
            parser.close()
            for event, elem in parser.read_events():
                handle(event, elem)
        # expat raises LookupError for an unknown declared encoding and
        # ValueError for multi-byte ones (shift_jis, utf-32)
        except (ET.ParseError, LookupError, ValueError) as e:
            logger.error("XML parsing error: %s", e)
            raise ParseError(str(e)) from e

        logger.debug("XML parsing completed. Found %d reviews", len(reviews))
        return reviews


class PlayStoreExtractor:
    """
    Placeholder extractor for Play Store review pages.

    The Play Store response format has no field mapping yet, so every payload
    is rejected with ParseError; the crawl job logs it and skips the app.
    """

    def extract(self, raw: bytes) -> list[ReviewRecord]:
        raise ParseError("Play Store review extraction is not supported")
