"""
Crawler configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ADDRESS_TEMPLATE = (
    "https://datomatic.no-intro.org/index.php?page=show_record&s={name}&n={entry_id:04d}"
)
DEFAULT_ROBOTS_URL = "https://datomatic.no-intro.org/robots.txt"
DEFAULT_BAN_MARKER = "To remove the ban"


@dataclass(frozen=True)
class CatalogGroup:
    """
    One catalog group (console/system) to crawl.
    """

    name: str
    group_id: int


@dataclass(frozen=True)
class CrawlerSettings:
    """
    Runtime settings for the catalog crawler.
    """

    groups_path: str
    data_dir: str
    batch_size: int
    timeout_seconds: float
    default_delay_seconds: float
    delay_multiplier: float
    robots_url: str
    address_template: str
    user_agent: str
    ban_marker: str
    machine_name: str
    shuffle_groups: bool
