"""
nointro_crawler/domain package marker.
"""

from nointro_crawler.domain.catalog import (
    RETRYABLE_STATUSES,
    TERMINAL_STATUSES,
    EntryStatus,
    LedgerState,
    RecordField,
)
from nointro_crawler.domain.crawl import ConsolidationResult, GroupCrawlResult, GroupCrawlSummary

__all__ = [
    "ConsolidationResult",
    "EntryStatus",
    "GroupCrawlResult",
    "GroupCrawlSummary",
    "LedgerState",
    "RecordField",
    "RETRYABLE_STATUSES",
    "TERMINAL_STATUSES",
]
