"""
nointro_crawler/schemas/status_event.py

Wire schema for one status ledger line.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class StatusEvent(BaseModel):
    """
    One append-only ledger event. Field names match the on-disk JSON keys.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    SystemId: int | None = None
    System: str | None = None
    GameId: int = Field(..., ge=0)
    Status: Literal["Success", "Timeout", "NoTrustedDumpTable"]
    UpdatedOn: datetime | None = None
    Duration: float = 0.0
