"""High-level orchestration for crawling and archiving pages."""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Iterable, Optional, Set

from playwright.async_api import async_playwright

from .capture import capture_page
from .config import ArchiveConfig
from .errors import RenderError
from .links import discover_links
from .models import CaptureArtifacts, CrawlReport, FrontierItem, PageResult
from .renderer import PageRenderer
from .utils import normalize_url, safe_name

logger = logging.getLogger("page_archiver")

PageProcessor = Callable[[str], Awaitable[CaptureArtifacts]]


class CrawlScheduler:
    """Breadth-first, same-origin crawl over a FIFO frontier."""

    def __init__(
        self,
        config: ArchiveConfig,
        process_page: PageProcessor,
        frontier: Optional[Iterable[FrontierItem]] = None,
        visited: Optional[Iterable[str]] = None,
    ) -> None:
        self.config = config
        self.process_page = process_page
        if frontier is None:
            frontier = [FrontierItem(url=normalize_url(config.seed_url), depth=0)]
        self.frontier: Deque[FrontierItem] = deque(frontier)
        self.visited: Set[str] = set(visited or ())
        self.origin = config.seed_origin

    async def _process(self, item: FrontierItem) -> PageResult:
        start = time.perf_counter()
        try:
            artifacts = await self.process_page(item.url)
        except RenderError as exc:
            logger.error("Failed to archive %s: %s", item.url, exc)
            return PageResult(
                url=item.url,
                depth=item.depth,
                total_seconds=time.perf_counter() - start,
                error=str(exc),
            )
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected error archiving %s", item.url)
            return PageResult(
                url=item.url,
                depth=item.depth,
                total_seconds=time.perf_counter() - start,
                error=str(exc) or type(exc).__name__,
            )
        return PageResult(
            url=item.url,
            depth=item.depth,
            total_seconds=time.perf_counter() - start,
            artifacts=artifacts,
        )

    def _enqueue_links(self, item: FrontierItem, artifacts: CaptureArtifacts) -> int:
        if self.origin is None:
            return 0
        try:
            markup = artifacts.html_path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not read %s for link discovery: %s", artifacts.html_path, exc)
            return 0

        added = 0
        for url in discover_links(markup, item.url, self.origin, self.visited):
            self.frontier.append(FrontierItem(url=url, depth=item.depth + 1))
            added += 1
        logger.debug("Queued %d link(s) from %s", added, item.url)
        return added

    async def run(self) -> CrawlReport:
        """Process the frontier until it is empty, never visiting a URL twice."""
        report = CrawlReport()
        start = time.perf_counter()
        while self.frontier:
            item = self.frontier.popleft()
            if item.url in self.visited:
                continue
            self.visited.add(item.url)

            logger.info("Processing (depth %d): %s", item.depth, item.url)
            result = await self._process(item)
            report.results.append(result)

            if not result.ok:
                if self.config.fail_fast:
                    logger.error(
                        "Stopping crawl after failure; %d queued item(s) dropped",
                        len(self.frontier),
                    )
                    report.aborted = True
                    break
                continue

            if item.depth < self.config.max_depth and result.artifacts is not None:
                self._enqueue_links(item, result.artifacts)

        report.elapsed = time.perf_counter() - start
        return report


async def archive_page(renderer: PageRenderer, url: str) -> CaptureArtifacts:
    """Render ``url`` and write its artifacts into the configured output directory."""
    async with renderer.render(url) as page:
        return await capture_page(page, url, renderer.config.output_dir, safe_name(url))


async def run_crawler(config: ArchiveConfig) -> CrawlReport:
    """Crawl from the configured seed URL, archiving every page reached."""
    async with async_playwright() as playwright:
        renderer = PageRenderer(playwright, config)

        async def process(url: str) -> CaptureArtifacts:
            return await archive_page(renderer, url)

        scheduler = CrawlScheduler(config, process)
        report = await scheduler.run()
    logger.info("All done. Output in: %s", config.output_dir)
    return report
