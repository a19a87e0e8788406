"""
File naming for per-group crawl artifacts.
"""

from __future__ import annotations

import glob
from pathlib import Path

RUN_BATCH_FILENAME_TEMPLATE = "{group}-Temp-{machine}.json"
CANONICAL_FILENAME_TEMPLATE = "{group}-Final.json"
STATUS_FILENAME_TEMPLATE = "{group}-Status.log"


def status_ledger_path(data_dir: str | Path, group: str) -> Path:
    return Path(data_dir) / STATUS_FILENAME_TEMPLATE.format(group=group)


def run_batch_path(data_dir: str | Path, group: str, machine: str) -> Path:
    return Path(data_dir) / RUN_BATCH_FILENAME_TEMPLATE.format(group=group, machine=machine)


def canonical_dataset_path(data_dir: str | Path, group: str) -> Path:
    return Path(data_dir) / CANONICAL_FILENAME_TEMPLATE.format(group=group)


def run_batch_paths(data_dir: str | Path, group: str) -> list[Path]:
    """
    Every run batch file for `group`, across machines, in sorted name order.
    """

    pattern = RUN_BATCH_FILENAME_TEMPLATE.format(group=glob.escape(group), machine="*")
    return sorted(path for path in Path(data_dir).glob(pattern) if path.is_file())
