"""MCP server exposing the page archiver as a tool."""

from __future__ import annotations

import logging
import os
from argparse import Namespace
from typing import List, Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_OUTPUT_DIR, resolve_config
from .crawler import run_crawler
from .models import CrawlReport

logger = logging.getLogger("page_archiver.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="page-archiver")


def format_report(report: CrawlReport) -> str:
    """Render a crawl report as plain text for tool output."""
    lines: List[str] = [
        f"Archived {len(report.succeeded)} of {len(report.results)} page(s) "
        f"in {report.elapsed:.2f}s"
    ]
    for result in report.results:
        if result.artifacts is None:
            lines.append(f"- {result.url} (depth {result.depth}): FAILED {result.error}")
            continue
        artifacts = result.artifacts
        lines.append(f"- {result.url} (depth {result.depth})")
        if artifacts.mhtml_path is not None:
            lines.append(f"  mhtml: {artifacts.mhtml_path}")
        lines.append(f"  html: {artifacts.html_path}")
        lines.append(f"  png: {artifacts.png_path}")
    return "\n".join(lines)


@mcp.tool()
async def archive(
    url: str,
    depth: int = 0,
    output_dir: Optional[str] = None,
) -> str:
    """Render a page in Chromium and save it as MHTML, HTML and a screenshot.

    Same-origin links are followed ``depth`` levels deep. Login settings are
    taken from the server's environment.
    """
    load_dotenv()
    args = Namespace(
        url=url,
        depth=depth,
        out=output_dir or os.getenv("ARCHIVE_OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
        login=None,
        timeout=None,
        fail_fast=False,
    )
    config = resolve_config(args)
    report = await run_crawler(config)
    return format_report(report)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
