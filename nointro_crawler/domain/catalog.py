"""
nointro_crawler/domain/catalog.py

Domain models for per-entry crawl status tracking.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class EntryStatus:
    SUCCESS = "Success"
    TIMEOUT = "Timeout"
    # Ledgers written by earlier crawler versions use this name for "no extractable data".
    NO_EXTRACTABLE_DATA = "NoTrustedDumpTable"


ALL_STATUSES = frozenset(
    {EntryStatus.SUCCESS, EntryStatus.TIMEOUT, EntryStatus.NO_EXTRACTABLE_DATA}
)
RETRYABLE_STATUSES = frozenset({EntryStatus.TIMEOUT})
TERMINAL_STATUSES = frozenset({EntryStatus.SUCCESS, EntryStatus.NO_EXTRACTABLE_DATA})


@dataclass
class LedgerState:
    """
    In-memory status map replayed from one group's status ledger.
    """

    statuses: dict[int, str] = field(default_factory=dict)
    highest_id: int = 0
    skipped_lines: int = 0

    def apply(self, entry_id: int, status: str) -> None:
        self.statuses[entry_id] = status
        if entry_id > self.highest_id:
            self.highest_id = entry_id

    def retryable_ids(self) -> list[int]:
        return sorted(
            entry_id for entry_id, status in self.statuses.items() if status in RETRYABLE_STATUSES
        )

    def is_terminal(self, entry_id: int) -> bool:
        return self.statuses.get(entry_id) in TERMINAL_STATUSES


class RecordField:
    GROUP_ID = "SystemId"
    ENTRY_ID = "GameId"
    GROUP_NAME = "ConsoleName"
    DURATION = "Duration"
