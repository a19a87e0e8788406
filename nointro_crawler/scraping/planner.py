"""
Choose which entry ids a group crawl attempts in one run.
"""

from __future__ import annotations

from nointro_crawler.domain.catalog import LedgerState


def plan_entries(state: LedgerState, batch_size: int) -> list[int]:
    """
    Return timed-out ids first, then new ids after the highest id seen.

    Retries are capped at `batch_size`; the remaining slots go to sequential
    ids starting at `highest_id + 1`.
    """

    retries = state.retryable_ids()[: max(0, batch_size)]
    new_count = max(0, batch_size - len(retries))
    start = state.highest_id + 1
    return retries + list(range(start, start + new_count))
