import pytest

from apps.crawler.extractors import AppStoreExtractor, Extractor, PlayStoreExtractor
from tests.conftest import FEED_HEAD, FEED_TAIL, make_entry, make_feed
from utils.errors import ParseError
from utils.schemas import ReviewRecord


@pytest.fixture
def extractor() -> AppStoreExtractor:
    return AppStoreExtractor()


def test_extracts_two_entries_in_document_order(extractor, two_entry_feed):
    reviews = extractor.extract(two_entry_feed)

    assert len(reviews) == 2

    first = reviews[0]
    assert first.title == "Great idea but not well executed."
    assert first.review == "The clothing choices are not accurate."
    assert first.star == 2
    assert first.like == 0
    assert first.dislike == 0
    assert first.date == "2025-05-11T10:19:38-07:00"

    second = reviews[1]
    assert second.title == "Love it!!"
    assert second.star == 4
    assert second.date == "2025-03-30T15:13:14-07:00"
    assert second.review.startswith("Super helpful")


def test_feed_level_title_and_updated_are_not_used(extractor, two_entry_feed):
    reviews = extractor.extract(two_entry_feed)

    assert all(r.title != "iTunes Store: Customer Reviews" for r in reviews)
    assert all(r.date != "2025-06-22T11:36:11-07:00" for r in reviews)


def test_feed_without_entries_is_empty(extractor, empty_feed):
    assert extractor.extract(empty_feed) == []


def test_empty_input_is_empty(extractor):
    assert extractor.extract(b"") == []
    assert extractor.extract(b"  \n") == []


def test_extraction_is_repeatable(extractor, two_entry_feed):
    assert extractor.extract(two_entry_feed) == extractor.extract(two_entry_feed)


def test_missing_counters_default_to_zero(extractor):
    feed = make_feed(make_entry(rating=None, vote_sum=None, vote_count=None))

    [review] = extractor.extract(feed)

    assert (review.star, review.like, review.dislike) == (0, 0, 0)


def test_unparseable_counters_default_to_zero(extractor):
    feed = make_feed(make_entry(rating="five", vote_sum="", vote_count="n/a"))

    [review] = extractor.extract(feed)

    assert (review.star, review.like, review.dislike) == (0, 0, 0)


def test_entry_without_title_is_dropped(extractor):
    with_title = make_feed(make_entry(), make_entry(title="Second"))
    without_title = make_feed(make_entry(), make_entry(title=None))

    assert len(extractor.extract(with_title)) == 2
    assert len(extractor.extract(without_title)) == 1


def test_entry_with_empty_title_is_dropped(extractor):
    assert extractor.extract(make_feed(make_entry(title=""))) == []


def test_entry_without_text_content_is_dropped(extractor):
    feed = make_feed(make_entry(content=None))

    assert extractor.extract(feed) == []


def test_html_content_is_ignored(extractor):
    feed = make_feed(make_entry(content="&lt;b&gt;bold&lt;/b&gt;", content_type="html"))

    assert extractor.extract(feed) == []


def test_text_content_wins_over_html_variant(extractor):
    entry = make_entry(content="plain text body").replace(
        "  </entry>",
        '    <content type="html">&lt;p&gt;html body&lt;/p&gt;</content>\n  </entry>',
    )

    [review] = extractor.extract(make_feed(entry))

    assert review.review == "plain text body"


@pytest.mark.parametrize(
    "vote_sum, vote_count, like, dislike",
    [
        ("3", "10", 3, 7),
        ("5", "2", 5, 0),
        ("4", "4", 4, 0),
        ("0", "9", 0, 9),
    ],
)
def test_dislike_is_total_minus_like_clamped(extractor, vote_sum, vote_count, like, dislike):
    feed = make_feed(make_entry(vote_sum=vote_sum, vote_count=vote_count))

    [review] = extractor.extract(feed)

    assert review.like == like
    assert review.dislike == dislike


def test_dislike_does_not_depend_on_element_order(extractor):
    entry = (
        "  <entry>\n"
        "    <title>t</title>\n"
        '    <content type="text">c</content>\n'
        "    <im:voteCount>10</im:voteCount>\n"
        "    <im:voteSum>3</im:voteSum>\n"
        "  </entry>\n"
    )

    [review] = extractor.extract(make_feed(entry))

    assert review.dislike == 7


def test_unknown_elements_are_ignored(extractor):
    entry = make_entry().replace(
        "  </entry>",
        "    <im:newField>x</im:newField>\n    <link rel=\"related\" href=\"https://example.com\"/>\n  </entry>",
    )

    assert len(extractor.extract(make_feed(entry))) == 1


def test_nested_author_name_is_not_mapped(extractor):
    [review] = extractor.extract(make_feed(make_entry()))

    assert "Beegirl" not in review.title


def test_text_is_stripped(extractor):
    feed = make_feed(make_entry(title="  padded  ", content="\n  body\n  "))

    [review] = extractor.extract(feed)

    assert review.title == "padded"
    assert review.review == "body"


def test_truncated_document_raises_parse_error(extractor):
    truncated = (FEED_HEAD + make_entry()).encode("utf-8")

    with pytest.raises(ParseError):
        extractor.extract(truncated)


def test_mismatched_tag_raises_parse_error(extractor):
    broken = (FEED_HEAD + "  <entry><title>x</content></entry>\n" + FEED_TAIL).encode("utf-8")

    with pytest.raises(ParseError) as exc_info:
        extractor.extract(broken)

    assert str(exc_info.value).startswith("Parse error:")


@pytest.mark.parametrize(
    "payload",
    [
        bytes([0xFF, 0xFE, 0x00, 0x00]),
        b"not xml at all",
        b"{\"feed\": {}}",
        b"<html><body>Service Unavailable",
        b'<?xml version="1.0" encoding="bogus-enc"?><feed/>',
        b'<?xml version="1.0" encoding="shift_jis"?><feed/>',
        b'<?xml version="1.0" encoding="utf-32"?><feed/>',
    ],
)
def test_non_xml_input_is_empty_or_parse_error(extractor, payload):
    try:
        result = extractor.extract(payload)
    except ParseError:
        return
    assert result == []


@pytest.mark.parametrize("encoding", ["bogus-enc", "shift_jis", "utf-32"])
def test_unsupported_declared_encoding_is_parse_error(extractor, encoding):
    payload = f'<?xml version="1.0" encoding="{encoding}"?><feed/>'.encode("ascii")

    with pytest.raises(ParseError):
        extractor.extract(payload)


def test_records_are_review_records(extractor, two_entry_feed):
    assert all(isinstance(r, ReviewRecord) for r in extractor.extract(two_entry_feed))


def test_play_store_extractor_reports_parse_error():
    with pytest.raises(ParseError):
        PlayStoreExtractor().extract(b"<html></html>")


@pytest.mark.parametrize("cls", [AppStoreExtractor, PlayStoreExtractor])
def test_extractors_satisfy_protocol(cls):
    assert isinstance(cls(), Extractor)
