"""
BeautifulSoup extractor for the "Trusted Dump" table of a catalog record page.
"""

from __future__ import annotations

import re
from typing import Any

from bs4 import BeautifulSoup, Tag

from nointro_crawler.config.models import CatalogGroup
from nointro_crawler.domain.catalog import RecordField
from nointro_crawler.scraping.parsing.base import add_field

TRUSTED_DUMP_MARKER = "Trusted Dump"


class TrustedDumpExtractor:
    """
    Extract key/value rows from the trusted dump table and the info block after it.
    """

    def extract(
        self,
        content: str,
        *,
        group: CatalogGroup,
        entry_id: int,
    ) -> dict[str, Any] | None:
        soup = BeautifulSoup(content, "html.parser")
        table = self._find_trusted_dump_table(soup)
        if table is None:
            return None

        record: dict[str, Any] = {
            RecordField.GROUP_ID: group.group_id,
            RecordField.ENTRY_ID: entry_id,
        }

        for row in table.find_all("tr"):
            cells = row.find_all("td")
            if len(cells) != 3:
                continue
            self._add_cells(record, cells[1], cells[2])

        info_block = table.find_next_sibling("div")
        if info_block is not None:
            for row in info_block.find_all("tr"):
                cells = row.find_all("td")
                if len(cells) < 3:
                    continue
                self._add_cells(record, cells[1], cells[2])

        return record

    @staticmethod
    def _find_trusted_dump_table(soup: BeautifulSoup) -> Tag | None:
        for table in soup.find_all("table", class_="RecordTable"):
            if TRUSTED_DUMP_MARKER in table.get_text():
                return table
        return None

    @classmethod
    def _add_cells(cls, record: dict[str, Any], key_cell: Tag, value_cell: Tag) -> None:
        key = cls.clean_key(key_cell.get_text())
        if not key:
            return
        add_field(record, key, cls.clean_value(value_cell.get_text()))

    @staticmethod
    def clean_value(value: str) -> str:
        return re.sub(r"[ \t]+", " ", value.replace("\xa0", " ")).strip()

    @classmethod
    def clean_key(cls, value: str) -> str:
        return cls.clean_value(value.replace(":", ""))
