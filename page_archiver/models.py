"""Data models used throughout the crawl pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class FrontierItem:
    """A URL waiting in the crawl queue together with its link depth."""

    url: str
    depth: int


@dataclass
class CaptureArtifacts:
    """Files written for a single rendered page."""

    html_path: Path
    png_path: Path
    mhtml_path: Optional[Path] = None


@dataclass
class PageResult:
    """Outcome of processing one frontier item."""

    url: str
    depth: int
    total_seconds: float
    artifacts: Optional[CaptureArtifacts] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CrawlReport:
    """Summary of a complete crawl run."""

    results: List[PageResult] = field(default_factory=list)
    elapsed: float = 0.0
    aborted: bool = False

    @property
    def succeeded(self) -> List[PageResult]:
        return [result for result in self.results if result.ok]

    @property
    def failed(self) -> List[PageResult]:
        return [result for result in self.results if not result.ok]

    @property
    def ok(self) -> bool:
        return not self.failed
