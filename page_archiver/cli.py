"""Command-line entry point for the page archiver."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Iterable, Sequence

from dotenv import load_dotenv

from .config import DEFAULT_OUTPUT_DIR, parse_bool, resolve_config
from .crawler import run_crawler
from .errors import ConfigError
from .models import CrawlReport

logger = logging.getLogger("page_archiver.cli")

EXIT_OK = 0
EXIT_FAILURE = 1


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return ("run",)
    first = argv[0]
    if first in commands or first in ("-h", "--help"):
        return argv
    return ("run", *argv)


def _bool_flag(value: str) -> bool:
    try:
        return parse_bool(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _add_run_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--url", help="Seed URL to render and archive")
    parser.add_argument(
        "--out",
        default=DEFAULT_OUTPUT_DIR,
        help="Directory where MHTML, HTML and screenshots should be written",
    )
    parser.add_argument(
        "--login",
        type=_bool_flag,
        nargs="?",
        const=True,
        default=None,
        help="Run the form login before each page (defaults to LOGIN_ENABLED)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=0,
        help="Follow same-origin links this many levels below the seed URL",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Navigation timeout in seconds (default: 60)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop the crawl at the first page that fails",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render web pages in Chromium and save them as MHTML, HTML and PNG.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run", help="Archive a URL and optionally crawl its same-origin links"
    )
    _add_run_arguments(run_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _log_summary(report: CrawlReport) -> None:
    total = len(report.results)
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        report.elapsed,
        len(report.succeeded),
        total,
        len(report.failed),
    )
    for result in report.results:
        logger.debug(
            "Timing for %s (depth %d) -> %.2fs",
            result.url,
            result.depth,
            result.total_seconds,
        )
    for result in report.failed:
        logger.error("Failed: %s (%s)", result.url, result.error)


def _run(args: argparse.Namespace) -> int:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    load_dotenv()
    try:
        config = resolve_config(args)
    except ConfigError as exc:
        logger.error("ERROR: %s", exc)
        return EXIT_FAILURE

    report = asyncio.run(run_crawler(config))
    _log_summary(report)
    return EXIT_OK if report.ok else EXIT_FAILURE


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())
