"""
robots.txt crawl-delay policy for the catalog site.
"""

from __future__ import annotations

import logging
from urllib.robotparser import RobotFileParser

import requests

from nointro_crawler.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)


def advertised_crawl_delay(robots_text: str, *, user_agent: str) -> float | None:
    """
    Return the crawl-delay published for `user_agent`, falling back to `*`.
    """

    parser = RobotFileParser()
    parser.parse(robots_text.splitlines())
    delay = parser.crawl_delay(user_agent)
    if delay is None:
        delay = parser.crawl_delay("*")
    if delay is None:
        return None
    return float(delay)


def resolve_crawl_delay(
    *,
    session: requests.Session,
    robots_url: str,
    user_agent: str,
    default_delay_seconds: float,
    timeout_seconds: float,
    multiplier: float = 2.0,
) -> float:
    """
    Return the inter-request delay in seconds for this process.

    The advertised delay is multiplied to stay well clear of the site's ban
    threshold. When robots.txt is unreachable or silent the default is used.
    """

    try:
        response = session.get(
            robots_url,
            headers={"User-Agent": user_agent},
            timeout=timeout_seconds,
        )
    except requests.RequestException as exc:
        log_event(
            logger,
            logging.WARNING,
            "robots_fetch_failed",
            robots_url=robots_url,
            delay_seconds=default_delay_seconds,
            error=str(exc),
        )
        return default_delay_seconds

    advertised = None
    if response.ok and response.text:
        advertised = advertised_crawl_delay(response.text, user_agent=user_agent)

    if advertised is None:
        log_event(
            logger,
            logging.WARNING,
            "crawl_delay_unavailable",
            robots_url=robots_url,
            status_code=response.status_code,
            delay_seconds=default_delay_seconds,
        )
        return default_delay_seconds

    delay_seconds = advertised * multiplier
    log_event(
        logger,
        logging.INFO,
        "crawl_delay_resolved",
        robots_url=robots_url,
        advertised_seconds=advertised,
        delay_seconds=delay_seconds,
    )
    return delay_seconds
