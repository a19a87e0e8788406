"""
tests/test_engine.py

End-to-end engine runs against a fake session.
"""

from __future__ import annotations

import json
import logging
import random

import pytest

from crawl_fakes import BAN_MARKER, TEST_ROBOTS_URL, FakeSession, entry_url, make_response, record_page
from nointro_crawler.scraping.engine import CrawlEngine
from nointro_crawler.scraping.types import CrawlBannedError


def _engine(settings, session: FakeSession, sleeps: list[float]) -> CrawlEngine:
    return CrawlEngine(settings=settings, session=session, sleep=sleeps.append, rng=random.Random(7))


def test_run_consolidates_then_crawls(tmp_path, settings_factory) -> None:
    settings = settings_factory()
    (tmp_path / "NES-Temp-otherhost.json").write_text(
        json.dumps({"SystemId": 3, "GameId": 9, "ConsoleName": "NES", "Duration": 1.0}) + "\n",
        encoding="utf-8",
    )
    session = FakeSession(
        {
            TEST_ROBOTS_URL: "User-agent: *\nCrawl-delay: 2\nDisallow: /admin\n",
            entry_url("NES", 1): record_page(rows=[("Name:", "Duck Hunt")]),
            entry_url("NES", 2): record_page(rows=[("Name:", "Pinball")]),
        }
    )
    sleeps: list[float] = []

    summaries = _engine(settings, session, sleeps).run()

    assert session.requested[0] == TEST_ROBOTS_URL
    final = json.loads((tmp_path / "NES-Final.json").read_text(encoding="utf-8"))
    assert [record["GameId"] for record in final] == [9]
    assert sleeps == [4.0, 4.0]
    assert len(summaries) == 1
    assert summaries[0].group == "NES"
    assert summaries[0].status == "success"
    assert summaries[0].succeeded == 2


def test_consolidate_only_skips_network(tmp_path, settings_factory) -> None:
    settings = settings_factory()
    (tmp_path / "NES-Temp-otherhost.json").write_text(
        json.dumps({"SystemId": 3, "GameId": 1, "ConsoleName": "NES", "Duration": 1.0}) + "\n",
        encoding="utf-8",
    )
    session = FakeSession()

    summaries = _engine(settings, session, []).run(consolidate_only=True)

    assert summaries == []
    assert session.requested == []
    assert (tmp_path / "NES-Final.json").exists()


def test_failed_group_does_not_stop_the_next(tmp_path, settings_factory) -> None:
    groups_file = tmp_path / "groups.txt"
    groups_file.write_text("Bad = 1\nNES = 3\n", encoding="utf-8")
    settings = settings_factory(groups_path=str(groups_file), batch_size=1)
    session = FakeSession(
        {
            entry_url("Bad", 1): make_response("server error", status_code=500),
            entry_url("NES", 1): record_page(rows=[("Name:", "Popeye")]),
        }
    )

    summaries = _engine(settings, session, []).run()

    assert [(summary.group, summary.status) for summary in summaries] == [
        ("Bad", "failed"),
        ("NES", "success"),
    ]
    assert summaries[0].errors


def test_ban_aborts_remaining_groups(tmp_path, settings_factory) -> None:
    groups_file = tmp_path / "groups.txt"
    groups_file.write_text("NES = 3\nSNES = 4\n", encoding="utf-8")
    settings = settings_factory(groups_path=str(groups_file), batch_size=1)
    session = FakeSession(
        {
            entry_url("NES", 1): f"<html>{BAN_MARKER}</html>",
            entry_url("SNES", 1): record_page(rows=[("Name:", "F-Zero")]),
        }
    )

    with pytest.raises(CrawlBannedError):
        _engine(settings, session, []).run()

    assert entry_url("SNES", 1) not in session.requested
    assert not (tmp_path / "NES-Status.log").exists()


def test_group_selection_is_case_insensitive(tmp_path, settings_factory) -> None:
    groups_file = tmp_path / "groups.txt"
    groups_file.write_text("NES = 3\nSNES = 4\n", encoding="utf-8")
    settings = settings_factory(groups_path=str(groups_file), batch_size=1)
    session = FakeSession({entry_url("SNES", 1): record_page(rows=[("Name:", "F-Zero")])})

    summaries = _engine(settings, session, []).run(groups=["snes"])

    assert [summary.group for summary in summaries] == ["SNES"]
    assert entry_url("NES", 1) not in session.requested


def test_shuffle_covers_every_group(tmp_path, settings_factory) -> None:
    groups_file = tmp_path / "groups.txt"
    names = ["A", "B", "C", "D", "E"]
    groups_file.write_text("".join(f"{name} = {index}\n" for index, name in enumerate(names, 1)), encoding="utf-8")
    settings = settings_factory(groups_path=str(groups_file), batch_size=1, shuffle_groups=True)

    summaries = _engine(settings, FakeSession(), []).run()

    assert sorted(summary.group for summary in summaries) == names


def test_unknown_group_selection_is_logged(tmp_path, settings_factory, caplog) -> None:
    settings = settings_factory(batch_size=1)
    session = FakeSession({entry_url("NES", 1): record_page(rows=[("Name:", "Popeye")])})

    with caplog.at_level(logging.WARNING, logger="nointro_crawler.scraping.engine"):
        summaries = _engine(settings, session, []).run(groups=["NES", "Virtual Boy"])

    assert [summary.group for summary in summaries] == ["NES"]
    warnings = [json.loads(record.getMessage()) for record in caplog.records if record.levelno == logging.WARNING]
    assert {"event": "group_not_configured", "group": "virtual boy"} in warnings
