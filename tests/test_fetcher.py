"""
tests/test_fetcher.py

Fetch outcome classification: content, timeout, ban and propagated errors.
"""

from __future__ import annotations

import pytest
import requests

from crawl_fakes import BAN_MARKER, TEST_TEMPLATE, FakeSession, entry_url, make_response, record_page
from nointro_crawler.scraping.fetcher import EntryFetcher
from nointro_crawler.scraping.types import FetchOutcome


def _fetcher(session: FakeSession) -> EntryFetcher:
    return EntryFetcher(
        session=session,
        address_template=TEST_TEMPLATE,
        timeout_seconds=20.0,
        user_agent="TestCrawler/1.0",
        ban_marker=BAN_MARKER,
    )


def test_url_zero_pads_entry_id(nes) -> None:
    fetcher = _fetcher(FakeSession())
    assert fetcher.url_for(nes, 7) == "https://catalog.test/record?s=NES&n=0007"
    assert fetcher.url_for(nes, 12345) == "https://catalog.test/record?s=NES&n=12345"


def test_template_may_use_group_id(nes) -> None:
    fetcher = EntryFetcher(
        session=FakeSession(),
        address_template="https://catalog.test/{group_id}/{entry_id:04d}",
        timeout_seconds=5.0,
        user_agent="TestCrawler/1.0",
    )
    assert fetcher.url_for(nes, 42) == "https://catalog.test/3/0042"


def test_content_result(nes) -> None:
    page = record_page(rows=[("Name:", "Contra")])
    session = FakeSession({entry_url("NES", 1): page})

    result = _fetcher(session).fetch(nes, 1)

    assert result.kind == FetchOutcome.CONTENT
    assert result.body == page
    assert result.elapsed_seconds >= 0.0


def test_timeout_reports_configured_maximum(nes) -> None:
    session = FakeSession({entry_url("NES", 2): requests.ReadTimeout("slow")})

    result = _fetcher(session).fetch(nes, 2)

    assert result.kind == FetchOutcome.TIMEOUT
    assert result.elapsed_seconds == 20.0
    assert result.body is None


def test_ban_marker_wins_over_parseable_content(nes) -> None:
    page = record_page(rows=[("Name:", "Contra")]) + f"<p>{BAN_MARKER}, contact the admin.</p>"
    session = FakeSession({entry_url("NES", 3): page})

    result = _fetcher(session).fetch(nes, 3)

    assert result.kind == FetchOutcome.BANNED
    assert result.body is None


def test_ban_marker_on_error_status_is_still_a_ban(nes) -> None:
    session = FakeSession({entry_url("NES", 4): make_response(f"{BAN_MARKER}", status_code=403)})

    assert _fetcher(session).fetch(nes, 4).kind == FetchOutcome.BANNED


def test_other_transport_errors_propagate(nes) -> None:
    session = FakeSession({entry_url("NES", 5): requests.ConnectionError("refused")})

    with pytest.raises(requests.ConnectionError):
        _fetcher(session).fetch(nes, 5)


def test_http_error_status_propagates(nes) -> None:
    session = FakeSession({entry_url("NES", 6): make_response("boom", status_code=500)})

    with pytest.raises(requests.HTTPError):
        _fetcher(session).fetch(nes, 6)
