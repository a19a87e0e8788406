"""
Catalog crawl engine.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

import requests

from nointro_crawler.config import load_catalog_groups
from nointro_crawler.config.models import CatalogGroup, CrawlerSettings
from nointro_crawler.domain.crawl import GroupCrawlSummary
from nointro_crawler.scraping.crawler import GroupCrawler
from nointro_crawler.scraping.fetcher import EntryFetcher
from nointro_crawler.scraping.logging_utils import log_event
from nointro_crawler.scraping.parsing import RecordExtractor, TrustedDumpExtractor
from nointro_crawler.scraping.rate_limiter import RequestThrottle
from nointro_crawler.scraping.robots import resolve_crawl_delay
from nointro_crawler.scraping.types import CrawlBannedError
from nointro_crawler.storage import consolidate_all

logger = logging.getLogger(__name__)


class CrawlEngine:
    """
    Orchestrates consolidation and the per-group crawl passes of one process run.
    """

    def __init__(
        self,
        *,
        settings: CrawlerSettings,
        session: requests.Session | None = None,
        extractor: RecordExtractor | None = None,
        sleep: Callable[[float], None] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._extractor = extractor or TrustedDumpExtractor()
        self._sleep = sleep
        self._rng = rng or random.Random()

    def run(
        self,
        *,
        groups: Sequence[str] | None = None,
        consolidate_only: bool = False,
    ) -> list[GroupCrawlSummary]:
        """
        Consolidate every configured group, then crawl the selected ones in turn.

        Raises CrawlBannedError when the site bans this client mid-run.
        """

        configured = load_catalog_groups(groups_path=self._settings.groups_path)
        log_event(
            logger,
            logging.INFO,
            "groups_loaded",
            path=self._settings.groups_path,
            groups=len(configured),
        )

        if consolidate_only:
            consolidate_all(groups=configured, data_dir=self._settings.data_dir)
            return []

        delay_seconds = resolve_crawl_delay(
            session=self._session,
            robots_url=self._settings.robots_url,
            user_agent=self._settings.user_agent,
            default_delay_seconds=self._settings.default_delay_seconds,
            timeout_seconds=self._settings.timeout_seconds,
            multiplier=self._settings.delay_multiplier,
        )
        consolidate_all(groups=configured, data_dir=self._settings.data_dir)

        selected = self._select_groups(configured=configured, groups=groups)
        if self._settings.shuffle_groups:
            self._rng.shuffle(selected)

        crawler = GroupCrawler(
            fetcher=EntryFetcher(
                session=self._session,
                address_template=self._settings.address_template,
                timeout_seconds=self._settings.timeout_seconds,
                user_agent=self._settings.user_agent,
                ban_marker=self._settings.ban_marker,
            ),
            extractor=self._extractor,
            throttle=self._build_throttle(delay_seconds),
            data_dir=self._settings.data_dir,
            machine_name=self._settings.machine_name,
            batch_size=self._settings.batch_size,
        )

        summaries: list[GroupCrawlSummary] = []
        for group in selected:
            try:
                result = crawler.crawl(group)
            except CrawlBannedError as exc:
                log_event(
                    logger,
                    logging.ERROR,
                    "crawl_aborted_banned",
                    group=exc.group,
                    entry_id=exc.entry_id,
                    url=exc.url,
                    groups_completed=len(summaries),
                )
                raise
            except Exception as exc:
                summaries.append(GroupCrawlSummary.failed(group.name, str(exc)))
                log_event(
                    logger,
                    logging.ERROR,
                    "group_crawl_failed",
                    group=group.name,
                    error=str(exc),
                )
                continue

            summary = GroupCrawlSummary.from_result(result)
            summaries.append(summary)
            log_event(
                logger,
                logging.INFO,
                "group_crawl_completed",
                group=summary.group,
                planned=summary.planned,
                attempted=summary.attempted,
                succeeded=summary.succeeded,
                timed_out=summary.timed_out,
                no_data=summary.no_data,
                skipped=summary.skipped,
            )
        return summaries

    def _build_throttle(self, delay_seconds: float) -> RequestThrottle:
        if self._sleep is None:
            return RequestThrottle(delay_seconds=delay_seconds)
        return RequestThrottle(delay_seconds=delay_seconds, sleep=self._sleep)

    @staticmethod
    def _select_groups(
        *,
        configured: list[CatalogGroup],
        groups: Sequence[str] | None,
    ) -> list[CatalogGroup]:
        if not groups:
            return list(configured)

        normalized = {item.strip().lower() for item in groups if item.strip()}
        if not normalized:
            return list(configured)
        configured_names = {group.name.lower() for group in configured}
        for name in sorted(normalized - configured_names):
            log_event(logger, logging.WARNING, "group_not_configured", group=name)
        return [group for group in configured if group.name.lower() in normalized]
