from __future__ import annotations

import pytest

from crawl_fakes import BAN_MARKER, TEST_ROBOTS_URL, TEST_TEMPLATE
from nointro_crawler.config.models import CatalogGroup, CrawlerSettings


@pytest.fixture()
def nes() -> CatalogGroup:
    return CatalogGroup(name="NES", group_id=3)


@pytest.fixture()
def settings_factory(tmp_path):
    def _build(**overrides) -> CrawlerSettings:
        groups_file = tmp_path / "groups.txt"
        if not groups_file.exists():
            groups_file.write_text("NES = 3\n", encoding="utf-8")
        values = dict(
            groups_path=str(groups_file),
            data_dir=str(tmp_path),
            batch_size=2,
            timeout_seconds=20.0,
            default_delay_seconds=5.0,
            delay_multiplier=2.0,
            robots_url=TEST_ROBOTS_URL,
            address_template=TEST_TEMPLATE,
            user_agent="TestCrawler/1.0",
            ban_marker=BAN_MARKER,
            machine_name="testhost",
            shuffle_groups=False,
        )
        values.update(overrides)
        return CrawlerSettings(**values)

    return _build
