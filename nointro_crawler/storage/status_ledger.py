"""
Append-only status ledger, one JSON object per line per catalog group.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from nointro_crawler.config.models import CatalogGroup
from nointro_crawler.domain.catalog import LedgerState
from nointro_crawler.schemas.status_event import StatusEvent
from nointro_crawler.scraping.logging_utils import log_event
from nointro_crawler.storage.paths import status_ledger_path

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def replay_events(lines: list[str]) -> LedgerState:
    """
    Fold ledger lines in order into a status map, last write per id winning.

    `highest_id` is the largest id of any parsed event, whatever its status.
    Lines that are not valid JSON or fail validation are counted and skipped.
    """

    state = LedgerState()
    for line in lines:
        if not line.strip():
            continue
        try:
            event = StatusEvent.model_validate_json(line)
        except ValidationError:
            state.skipped_lines += 1
            continue
        state.apply(event.GameId, event.Status)
    return state


class StatusLedger:
    """
    Status history for one catalog group.
    """

    def __init__(
        self,
        *,
        group: CatalogGroup,
        data_dir: str | Path,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.group = group
        self.path = status_ledger_path(data_dir, group.name)
        self._clock = clock

    def load(self) -> LedgerState:
        if not self.path.exists():
            return LedgerState()

        state = replay_events(self.path.read_text(encoding="utf-8").splitlines())
        if state.skipped_lines:
            log_event(
                logger,
                logging.WARNING,
                "ledger_line_skipped",
                group=self.group.name,
                path=str(self.path),
                skipped_lines=state.skipped_lines,
            )
        return state

    def append(self, entry_id: int, status: str, duration: float = 0.0) -> StatusEvent:
        """
        Persist one status event and echo it to the log stream.
        """

        event = StatusEvent(
            SystemId=self.group.group_id,
            System=self.group.name,
            GameId=entry_id,
            Status=status,
            UpdatedOn=self._clock(),
            Duration=duration,
        )
        payload = event.model_dump(mode="json")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload) + "\n")

        log_event(logger, logging.INFO, "entry_status", **payload)
        return event
