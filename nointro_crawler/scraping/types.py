"""
Shared crawl runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass


class FetchOutcome:
    CONTENT = "content"
    TIMEOUT = "timeout"
    BANNED = "banned"


@dataclass(frozen=True)
class FetchResult:
    """
    Classified result of fetching one catalog entry.
    """

    kind: str
    elapsed_seconds: float
    body: str | None = None

    @classmethod
    def content(cls, body: str, elapsed_seconds: float) -> "FetchResult":
        return cls(kind=FetchOutcome.CONTENT, elapsed_seconds=elapsed_seconds, body=body)

    @classmethod
    def timeout(cls, elapsed_seconds: float) -> "FetchResult":
        return cls(kind=FetchOutcome.TIMEOUT, elapsed_seconds=elapsed_seconds)

    @classmethod
    def banned(cls, elapsed_seconds: float) -> "FetchResult":
        return cls(kind=FetchOutcome.BANNED, elapsed_seconds=elapsed_seconds)


class CrawlBannedError(RuntimeError):
    """
    Raised when the catalog site reports that this client is banned.

    Aborts the whole run; records and ledger events already written stay valid.
    """

    def __init__(self, *, group: str, entry_id: int, url: str) -> None:
        super().__init__(f"Ban detected while fetching group={group} entry={entry_id} url={url}")
        self.group = group
        self.entry_id = entry_id
        self.url = url
