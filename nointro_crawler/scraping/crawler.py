"""
Sequential crawl loop for one catalog group.
"""

from __future__ import annotations

import logging
from pathlib import Path

from nointro_crawler.config.models import CatalogGroup
from nointro_crawler.domain.catalog import EntryStatus, RecordField
from nointro_crawler.domain.crawl import GroupCrawlResult
from nointro_crawler.scraping.fetcher import EntryFetcher
from nointro_crawler.scraping.logging_utils import log_event
from nointro_crawler.scraping.parsing.base import RecordExtractor
from nointro_crawler.scraping.planner import plan_entries
from nointro_crawler.scraping.rate_limiter import RequestThrottle
from nointro_crawler.scraping.types import CrawlBannedError, FetchOutcome
from nointro_crawler.storage.run_batch import RunBatchWriter
from nointro_crawler.storage.status_ledger import StatusLedger

logger = logging.getLogger(__name__)


class GroupCrawler:
    """
    Drive fetch, extract and ledger updates for the planned entries of a group.
    """

    def __init__(
        self,
        *,
        fetcher: EntryFetcher,
        extractor: RecordExtractor,
        throttle: RequestThrottle,
        data_dir: str | Path,
        machine_name: str,
        batch_size: int,
    ) -> None:
        self.fetcher = fetcher
        self.extractor = extractor
        self.throttle = throttle
        self.data_dir = data_dir
        self.machine_name = machine_name
        self.batch_size = batch_size

    def crawl(self, group: CatalogGroup) -> GroupCrawlResult:
        """
        Crawl one group; raises CrawlBannedError as soon as a ban is seen.
        """

        ledger = StatusLedger(group=group, data_dir=self.data_dir)
        state = ledger.load()
        plan = plan_entries(state, self.batch_size)
        result = GroupCrawlResult(group=group.name, planned=len(plan))
        log_event(
            logger,
            logging.INFO,
            "crawl_plan",
            group=group.name,
            highest_id=state.highest_id,
            retries=len(state.retryable_ids()),
            planned=len(plan),
            first_id=plan[0] if plan else None,
            last_id=plan[-1] if plan else None,
        )

        with RunBatchWriter(
            data_dir=self.data_dir,
            group=group.name,
            machine=self.machine_name,
        ) as batch:
            for entry_id in plan:
                if state.is_terminal(entry_id):
                    result.skipped += 1
                    log_event(
                        logger,
                        logging.INFO,
                        "entry_skipped",
                        group=group.name,
                        group_id=group.group_id,
                        entry_id=entry_id,
                        status=state.statuses[entry_id],
                    )
                    continue

                self._attempt(group, entry_id, ledger=ledger, batch=batch, result=result)
                self.throttle.pause()

            log_event(
                logger,
                logging.INFO,
                "run_batch_updated",
                group=group.name,
                path=str(batch.path),
                records_written=batch.records_written,
            )
        return result

    def _attempt(
        self,
        group: CatalogGroup,
        entry_id: int,
        *,
        ledger: StatusLedger,
        batch: RunBatchWriter,
        result: GroupCrawlResult,
    ) -> None:
        fetched = self.fetcher.fetch(group, entry_id)
        if fetched.kind == FetchOutcome.BANNED:
            raise CrawlBannedError(
                group=group.name,
                entry_id=entry_id,
                url=self.fetcher.url_for(group, entry_id),
            )

        result.attempted += 1
        if fetched.kind == FetchOutcome.TIMEOUT:
            ledger.append(entry_id, EntryStatus.TIMEOUT, fetched.elapsed_seconds)
            result.timed_out += 1
            return

        record = self.extractor.extract(fetched.body or "", group=group, entry_id=entry_id)
        if record is None:
            ledger.append(entry_id, EntryStatus.NO_EXTRACTABLE_DATA, fetched.elapsed_seconds)
            result.no_data += 1
            return

        record[RecordField.DURATION] = round(fetched.elapsed_seconds, 1)
        record[RecordField.GROUP_NAME] = group.name
        batch.append(record)
        ledger.append(entry_id, EntryStatus.SUCCESS, fetched.elapsed_seconds)
        result.succeeded += 1
