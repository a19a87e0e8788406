"""
Storage layer exports.
"""

from nointro_crawler.storage.consolidator import consolidate_all, consolidate_group
from nointro_crawler.storage.run_batch import RunBatchWriter
from nointro_crawler.storage.status_ledger import StatusLedger, replay_events

__all__ = [
    "RunBatchWriter",
    "StatusLedger",
    "consolidate_all",
    "consolidate_group",
    "replay_events",
]
