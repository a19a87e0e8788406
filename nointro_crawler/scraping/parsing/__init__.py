"""
Extraction layer exports.
"""

from nointro_crawler.scraping.parsing.base import RecordExtractor, add_field, resolve_key
from nointro_crawler.scraping.parsing.trusted_dump import TrustedDumpExtractor

__all__ = ["RecordExtractor", "TrustedDumpExtractor", "add_field", "resolve_key"]
