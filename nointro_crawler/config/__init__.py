"""
Config helpers for the catalog crawler.
"""

from nointro_crawler.config.loader import (
    GroupConfigError,
    get_crawler_settings,
    load_catalog_groups,
    parse_group_lines,
)
from nointro_crawler.config.models import CatalogGroup, CrawlerSettings

__all__ = [
    "CatalogGroup",
    "CrawlerSettings",
    "GroupConfigError",
    "get_crawler_settings",
    "load_catalog_groups",
    "parse_group_lines",
]
