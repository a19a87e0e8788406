"""
Merge per-machine run batches into each group's canonical dataset.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from nointro_crawler.config.models import CatalogGroup
from nointro_crawler.domain.catalog import RecordField
from nointro_crawler.domain.crawl import ConsolidationResult
from nointro_crawler.scraping.logging_utils import log_event
from nointro_crawler.storage.paths import canonical_dataset_path, run_batch_paths

logger = logging.getLogger(__name__)

RecordKey = tuple[Any, Any]


def record_key(record: dict[str, Any]) -> RecordKey:
    return (record.get(RecordField.GROUP_NAME), record.get(RecordField.ENTRY_ID))


def merge_records(
    merged: dict[RecordKey, dict[str, Any]],
    records: Iterable[dict[str, Any]],
) -> int:
    """
    Fold `records` into `merged`, a later record replacing and moving behind an earlier one.
    """

    count = 0
    for record in records:
        key = record_key(record)
        merged.pop(key, None)
        merged[key] = record
        count += 1
    return count


def read_batch_records(path: Path) -> tuple[list[dict[str, Any]], int]:
    """
    Read one run batch file, returning its records and the number of skipped lines.
    """

    records: list[dict[str, Any]] = []
    skipped = 0
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                skipped += 1
                continue
            if not isinstance(record, dict):
                skipped += 1
                continue
            records.append(record)
    return records, skipped


def load_canonical_dataset(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        return []

    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Canonical dataset {path} must hold a JSON array.")
    return [item for item in data if isinstance(item, dict)]


def consolidate_group(*, group: CatalogGroup, data_dir: str | Path) -> ConsolidationResult:
    """
    Merge the canonical dataset and every run batch of `group` into a new canonical dataset.

    Run batch files are left in place, so the pass can be repeated safely.
    """

    final_path = canonical_dataset_path(data_dir, group.name)
    merged: dict[RecordKey, dict[str, Any]] = {}
    existing_records = merge_records(merged, load_canonical_dataset(final_path))

    batch_paths = run_batch_paths(data_dir, group.name)
    batch_records = 0
    skipped_lines = 0
    for batch_path in batch_paths:
        records, skipped = read_batch_records(batch_path)
        batch_records += merge_records(merged, records)
        skipped_lines += skipped
        if skipped:
            log_event(
                logger,
                logging.WARNING,
                "batch_line_skipped",
                group=group.name,
                path=str(batch_path),
                skipped_lines=skipped,
            )

    written = False
    if merged:
        final_path.parent.mkdir(parents=True, exist_ok=True)
        final_path.write_text(
            json.dumps(list(merged.values()), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        written = True

    result = ConsolidationResult(
        group=group.name,
        existing_records=existing_records,
        batch_files=len(batch_paths),
        batch_records=batch_records,
        merged_records=len(merged),
        skipped_lines=skipped_lines,
        written=written,
    )
    log_event(
        logger,
        logging.INFO,
        "group_consolidated",
        group=group.name,
        path=str(final_path),
        existing_records=result.existing_records,
        batch_files=result.batch_files,
        batch_records=result.batch_records,
        merged_records=result.merged_records,
        written=result.written,
    )
    return result


def consolidate_all(
    *,
    groups: Sequence[CatalogGroup],
    data_dir: str | Path,
) -> list[ConsolidationResult]:
    """
    Consolidate every group; a failing group is logged and the rest continue.
    """

    log_event(logger, logging.INFO, "consolidation_started", groups=len(groups), data_dir=str(data_dir))
    results: list[ConsolidationResult] = []
    for group in groups:
        try:
            results.append(consolidate_group(group=group, data_dir=data_dir))
        except (OSError, ValueError) as exc:
            log_event(
                logger,
                logging.ERROR,
                "group_consolidation_failed",
                group=group.name,
                error=str(exc),
            )
    return results
