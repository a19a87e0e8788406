"""
Extractor contract and record assembly helpers.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, Protocol

from nointro_crawler.config.models import CatalogGroup


class RecordExtractor(Protocol):
    """
    Turn one fetched page into a flat record, or None when the page has no data.

    Implementations must be deterministic and free of side effects.
    """

    def extract(
        self,
        content: str,
        *,
        group: CatalogGroup,
        entry_id: int,
    ) -> dict[str, Any] | None: ...


def resolve_key(existing_keys: Collection[str], key: str) -> str:
    """
    Return `key`, or `key_1`, `key_2`, ... for the first suffix not already taken.
    """

    if key not in existing_keys:
        return key

    counter = 1
    while f"{key}_{counter}" in existing_keys:
        counter += 1
    return f"{key}_{counter}"


def add_field(record: dict[str, Any], key: str, value: Any) -> str:
    resolved = resolve_key(record.keys(), key)
    record[resolved] = value
    return resolved
