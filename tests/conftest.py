"""
Shared fixtures: sample App Store feeds and a mock HTTP transport.
"""

from typing import Callable

import httpx
import pytest

FEED_HEAD = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<feed xmlns:im="http://itunes.apple.com/rss" xmlns="http://www.w3.org/2005/Atom" xml:lang="en">\n'
    "  <id>https://itunes.apple.com/us/rss/customerreviews/id=1194408342/sortby=mostrecent/xml</id>\n"
    "  <title>iTunes Store: Customer Reviews</title>\n"
    "  <updated>2025-06-22T11:36:11-07:00</updated>\n"
)
FEED_TAIL = "</feed>\n"


def make_entry(
    title: str | None = "Great idea but not well executed.",
    content: str | None = "The clothing choices are not accurate.",
    content_type: str = "text",
    rating: str | None = "2",
    vote_sum: str | None = "0",
    vote_count: str | None = "0",
    updated: str | None = "2025-05-11T10:19:38-07:00",
) -> str:
    """Build one <entry> block; pass None to leave an element out."""
    parts = ["  <entry>", "    <id>12645174720</id>"]
    if title is not None:
        parts.append(f"    <title>{title}</title>")
    if content is not None:
        parts.append(f'    <content type="{content_type}">{content}</content>')
    parts.append('    <im:contentType term="Application" label="Application"/>')
    if vote_sum is not None:
        parts.append(f"    <im:voteSum>{vote_sum}</im:voteSum>")
    if vote_count is not None:
        parts.append(f"    <im:voteCount>{vote_count}</im:voteCount>")
    if rating is not None:
        parts.append(f"    <im:rating>{rating}</im:rating>")
    if updated is not None:
        parts.append(f"    <updated>{updated}</updated>")
    parts.append("    <im:version>7.2.3</im:version>")
    parts.append("    <author>")
    parts.append("      <name>Beegirl200073</name>")
    parts.append("      <uri>https://itunes.apple.com/us/reviews/id167338708</uri>")
    parts.append("    </author>")
    parts.append("  </entry>")
    return "\n".join(parts) + "\n"


def make_feed(*entries: str) -> bytes:
    return (FEED_HEAD + "".join(entries) + FEED_TAIL).encode("utf-8")


@pytest.fixture
def two_entry_feed() -> bytes:
    return make_feed(
        make_entry(),
        make_entry(
            title="Love it!!",
            content="Super helpful and cute!",
            rating="4",
            updated="2025-03-30T15:13:14-07:00",
        ),
    )


@pytest.fixture
def empty_feed() -> bytes:
    return make_feed()


@pytest.fixture
def mock_client_factory():
    """Build AsyncClients whose requests are answered by a handler function."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def write_targets(tmp_path):
    """Write a target apps JSON file and return its path."""

    def write(content: str) -> str:
        path = tmp_path / "target_apps.json"
        path.write_text(content, encoding="utf-8")
        return str(path)

    return write
