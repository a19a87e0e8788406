"""
Per-run, per-machine batch file of extracted records.
"""

from __future__ import annotations

import json
from pathlib import Path
from types import TracebackType
from typing import Any, TextIO

from nointro_crawler.storage.paths import run_batch_path


class RunBatchWriter:
    """
    Appends extracted records as JSON lines, flushing after every record.
    """

    def __init__(self, *, data_dir: str | Path, group: str, machine: str) -> None:
        self.path = run_batch_path(data_dir, group, machine)
        self._handle: TextIO | None = None
        self.records_written = 0

    def __enter__(self) -> "RunBatchWriter":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("a", encoding="utf-8")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def append(self, record: dict[str, Any]) -> None:
        if self._handle is None:
            raise RuntimeError(f"Run batch {self.path} is not open.")
        self._handle.write(json.dumps(record, ensure_ascii=False) + "\n")
        self._handle.flush()
        self.records_written += 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
