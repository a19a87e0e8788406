"""
Single-entry fetcher for catalog record pages.
"""

from __future__ import annotations

import logging
import time

import requests

from nointro_crawler.config.models import DEFAULT_BAN_MARKER, CatalogGroup
from nointro_crawler.scraping.logging_utils import log_event
from nointro_crawler.scraping.types import FetchResult

logger = logging.getLogger(__name__)


class EntryFetcher:
    """
    Fetch one record page and classify it as content, timeout or ban.

    Transport errors other than timeouts propagate to the caller.
    """

    def __init__(
        self,
        *,
        session: requests.Session,
        address_template: str,
        timeout_seconds: float,
        user_agent: str,
        ban_marker: str = DEFAULT_BAN_MARKER,
    ) -> None:
        self.session = session
        self.address_template = address_template
        self.timeout_seconds = timeout_seconds
        self.ban_marker = ban_marker
        self.request_headers = {"User-Agent": user_agent}

    def url_for(self, group: CatalogGroup, entry_id: int) -> str:
        return self.address_template.format(
            name=group.name,
            group_id=group.group_id,
            entry_id=entry_id,
        )

    def fetch(self, group: CatalogGroup, entry_id: int) -> FetchResult:
        url = self.url_for(group, entry_id)
        started = time.monotonic()
        try:
            response = self.session.get(
                url,
                headers=self.request_headers,
                timeout=self.timeout_seconds,
            )
        except requests.Timeout:
            log_event(
                logger,
                logging.WARNING,
                "entry_timeout",
                group=group.name,
                entry_id=entry_id,
                url=url,
                timeout_seconds=self.timeout_seconds,
            )
            return FetchResult.timeout(self.timeout_seconds)

        elapsed = time.monotonic() - started
        body = response.text
        if self.ban_marker and self.ban_marker in body:
            log_event(
                logger,
                logging.WARNING,
                "ban_detected",
                group=group.name,
                entry_id=entry_id,
                url=url,
                message="!!! Ban Detected !!! Ban Detected !!! Ban Detected !!!",
            )
            return FetchResult.banned(elapsed)

        response.raise_for_status()
        return FetchResult.content(body, elapsed)
