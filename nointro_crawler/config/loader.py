"""
Environment + group file loader for the catalog crawler.
"""

from __future__ import annotations

import os
import socket
from functools import lru_cache
from pathlib import Path

from nointro_crawler.config.env import load_env_files
from nointro_crawler.config.models import (
    DEFAULT_ADDRESS_TEMPLATE,
    DEFAULT_BAN_MARKER,
    DEFAULT_ROBOTS_URL,
    CatalogGroup,
    CrawlerSettings,
)


class GroupConfigError(ValueError):
    """
    Raised when the group file cannot be read.
    """


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def resolve_path(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (Path.cwd() / candidate).resolve()


@lru_cache(maxsize=1)
def get_crawler_settings() -> CrawlerSettings:
    """
    Return cached crawler settings from environment variables.
    """

    load_env_files()
    return CrawlerSettings(
        groups_path=str(resolve_path(_get_str_env("NOINTRO_GROUPS_PATH", "ConsolesToDownload.txt"))),
        data_dir=str(resolve_path(_get_str_env("NOINTRO_DATA_DIR", "."))),
        batch_size=max(1, _get_int_env("NOINTRO_BATCH_SIZE", 50)),
        timeout_seconds=max(1.0, _get_float_env("NOINTRO_TIMEOUT_SECONDS", 20.0)),
        default_delay_seconds=max(0.0, _get_float_env("NOINTRO_DEFAULT_DELAY_SECONDS", 5.0)),
        delay_multiplier=max(1.0, _get_float_env("NOINTRO_DELAY_MULTIPLIER", 2.0)),
        robots_url=_get_str_env("NOINTRO_ROBOTS_URL", DEFAULT_ROBOTS_URL),
        address_template=_get_str_env("NOINTRO_ADDRESS_TEMPLATE", DEFAULT_ADDRESS_TEMPLATE),
        user_agent=_get_str_env("NOINTRO_USER_AGENT", "NoIntroCrawler/1.0"),
        ban_marker=_get_str_env("NOINTRO_BAN_MARKER", DEFAULT_BAN_MARKER),
        machine_name=_get_str_env("NOINTRO_MACHINE_NAME", socket.gethostname() or "local"),
        shuffle_groups=_get_bool_env("NOINTRO_SHUFFLE_GROUPS", True),
    )


def parse_group_lines(lines: list[str]) -> list[CatalogGroup]:
    """
    Parse `name = 12,345` lines into catalog groups.

    Lines that do not split into exactly one name and one integer are skipped.
    A name listed twice keeps its last id and its first position.
    """

    groups: dict[str, int] = {}
    for raw_line in lines:
        parts = raw_line.split("=")
        if len(parts) != 2:
            continue

        name = parts[0].strip()
        number_part = parts[1].strip().replace(",", "")
        if not name:
            continue
        try:
            groups[name] = int(number_part)
        except ValueError:
            continue

    return [CatalogGroup(name=name, group_id=group_id) for name, group_id in groups.items()]


def load_catalog_groups(*, groups_path: str) -> list[CatalogGroup]:
    """
    Load catalog groups from a line-oriented key=value text file.
    """

    path = resolve_path(groups_path)
    if not path.exists():
        raise GroupConfigError(f"Group file not found: {path}")

    return parse_group_lines(path.read_text(encoding="utf-8").splitlines())
