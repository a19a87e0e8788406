"""
Run the catalog crawler from the command line.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import os

from nointro_crawler.config import GroupConfigError, get_crawler_settings
from nointro_crawler.config.loader import resolve_path
from nointro_crawler.scraping.engine import CrawlEngine
from nointro_crawler.scraping.logging_utils import configure_logging, log_event
from nointro_crawler.scraping.types import CrawlBannedError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_BANNED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Crawl catalog record pages into per-group JSON datasets.")
    parser.add_argument("--groups-file", dest="groups_file", default=None, help="Group list file (name = id).")
    parser.add_argument("--data-dir", dest="data_dir", default=None, help="Directory for ledgers and datasets.")
    parser.add_argument(
        "--group",
        dest="groups",
        action="append",
        default=None,
        help="Crawl only this group; may be repeated.",
    )
    parser.add_argument("--batch-size", dest="batch_size", type=int, default=None, help="Entries per group per run.")
    parser.add_argument(
        "--consolidate-only",
        dest="consolidate_only",
        action="store_true",
        help="Merge run batches into final datasets and exit.",
    )
    parser.add_argument("--no-shuffle", dest="no_shuffle", action="store_true", help="Crawl groups in file order.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    settings = get_crawler_settings()
    overrides: dict[str, object] = {}
    if args.groups_file:
        overrides["groups_path"] = str(resolve_path(args.groups_file))
    if args.data_dir:
        overrides["data_dir"] = str(resolve_path(args.data_dir))
    if args.batch_size is not None:
        overrides["batch_size"] = max(1, args.batch_size)
    if args.no_shuffle:
        overrides["shuffle_groups"] = False
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    engine = CrawlEngine(settings=settings)
    try:
        summaries = engine.run(groups=args.groups, consolidate_only=args.consolidate_only)
    except GroupConfigError as exc:
        log_event(logger, logging.ERROR, "group_config_invalid", error=str(exc))
        return EXIT_CONFIG_ERROR
    except CrawlBannedError as exc:
        log_event(
            logger,
            logging.ERROR,
            "crawl_banned",
            group=exc.group,
            entry_id=exc.entry_id,
            message="Run aborted: the site reported a ban. Wait before crawling again.",
        )
        return EXIT_BANNED

    payload = [dataclasses.asdict(summary) for summary in summaries]
    print(json.dumps(payload, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
