"""CLI entrypoint for Oorlogsbronnen archive search."""

from __future__ import annotations

import argparse
import asyncio
from datetime import datetime, timezone
import json
import sys
from typing import List, Optional

from rich.console import Console
from rich.markdown import Markdown

from aggregator.data_aggregator import ArchiveSearchAggregator
from config import get_settings
from outputs import build_search_payload, render_search_report
from processing import ALL_CATEGORIES
from utils.exceptions import AggregateError
from utils.logger import bind_package_loggers, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search the Dutch WW2 archives (Netwerk Oorlogsbronnen)",
    )
    parser.add_argument("query", nargs="?", default="", help="search terms (may be empty)")
    parser.add_argument(
        "--type",
        dest="category",
        default=None,
        help=f"restrict to one category: {', '.join(ALL_CATEGORIES)}",
    )
    parser.add_argument("--count", type=int, default=None, help="number of results (1-100)")
    parser.add_argument("--format", choices=["markdown", "json"], default="markdown")
    parser.add_argument("--log-level", default=None, help="DEBUG / INFO / WARNING / ERROR")
    parser.add_argument("--progress", action="store_true", help="show progress and summary table")
    return parser


async def _run(args: argparse.Namespace) -> int:
    settings = get_settings()
    started_at = datetime.now(timezone.utc)

    try:
        async with ArchiveSearchAggregator(settings=settings) as aggregator:
            result = await aggregator.run_search(
                args.query,
                category=args.category,
                count=args.count,
                show_progress=args.progress,
            )
    except AggregateError as e:
        if args.format == "json":
            print(json.dumps(e.to_dict(), ensure_ascii=False))
        else:
            print(f"Error performing search: {e.message}", file=sys.stderr)
        return 1

    finished_at = datetime.now(timezone.utc)
    threshold = settings.search.hint_threshold

    if args.format == "json":
        payload = build_search_payload(
            args.query,
            result,
            started_at=started_at,
            finished_at=finished_at,
            hint_threshold=threshold,
        )
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    report = render_search_report(
        args.query,
        result,
        started_at=started_at,
        finished_at=finished_at,
        hint_threshold=threshold,
    )
    if sys.stdout.isatty():
        Console().print(Markdown(report))
    else:
        print(report, end="")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = args.log_level or get_settings().general.log_level
    logger = setup_logger(level=level)
    bind_package_loggers(logger)

    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
