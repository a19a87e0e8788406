"""
nointro_crawler/domain/crawl.py

Domain models for crawl and consolidation summaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GroupCrawlResult:
    """
    Counters for one group's crawl pass.
    """

    group: str
    planned: int = 0
    attempted: int = 0
    succeeded: int = 0
    timed_out: int = 0
    no_data: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class ConsolidationResult:
    """
    Outcome of merging one group's run batches into its canonical dataset.
    """

    group: str
    existing_records: int
    batch_files: int
    batch_records: int
    merged_records: int
    skipped_lines: int
    written: bool


@dataclass(frozen=True)
class GroupCrawlSummary:
    """
    Summary for one group in a crawl run.
    """

    group: str
    planned: int
    attempted: int
    succeeded: int
    timed_out: int
    no_data: int
    skipped: int
    status: str
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_result(cls, result: GroupCrawlResult) -> "GroupCrawlSummary":
        return cls(
            group=result.group,
            planned=result.planned,
            attempted=result.attempted,
            succeeded=result.succeeded,
            timed_out=result.timed_out,
            no_data=result.no_data,
            skipped=result.skipped,
            status="success",
        )

    @classmethod
    def failed(cls, group: str, error: str) -> "GroupCrawlSummary":
        return cls(
            group=group,
            planned=0,
            attempted=0,
            succeeded=0,
            timed_out=0,
            no_data=0,
            skipped=0,
            status="failed",
            errors=[error],
        )
