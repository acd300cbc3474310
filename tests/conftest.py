from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from page_archiver.config import ArchiveConfig


class FakeNavigation:
    def __init__(self, page: "FakePage", error: Optional[Exception]) -> None:
        self.page = page
        self.error = error

    async def __aenter__(self) -> "FakeNavigation":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and self.error is not None:
            raise self.error
        return False


class FakeKeyboard:
    def __init__(self, page: "FakePage") -> None:
        self.page = page

    async def press(self, key: str) -> None:
        self.page.calls.append(("press", key))


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str) -> None:
        self.page = page
        self.selector = selector

    async def press_sequentially(self, text: str, delay: Optional[float] = None) -> None:
        self.page.calls.append(("type", self.selector, text, delay))


class FakeCDPSession:
    def __init__(self, page: "FakePage") -> None:
        self.page = page
        self.detached = False

    async def send(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.page.calls.append(("cdp", method))
        if method == "Page.captureSnapshot":
            if self.page.snapshot_error is not None:
                raise self.page.snapshot_error
            return {"data": self.page.snapshot_data}
        return {}

    async def detach(self) -> None:
        self.detached = True


class FakeContext:
    def __init__(self, page: "FakePage") -> None:
        self.page = page
        self.sessions: List[FakeCDPSession] = []

    async def new_cdp_session(self, page: "FakePage") -> FakeCDPSession:
        session = FakeCDPSession(page)
        self.sessions.append(session)
        return session


class FakePage:
    def __init__(
        self,
        html: str = "<html><body>ok</body></html>",
        url: str = "https://example.com/",
    ) -> None:
        self.html = html
        self.url = url
        self.calls: List[tuple] = []
        self.keyboard = FakeKeyboard(self)
        self.context = FakeContext(self)
        self.default_navigation_timeout: Optional[float] = None
        self.missing_selectors: Set[str] = set()
        self.goto_errors: Dict[str, Exception] = {}
        self.navigation_error: Optional[Exception] = None
        self.snapshot_data = "MIME-Version: 1.0\r\n\r\nsnapshot"
        self.snapshot_error: Optional[Exception] = None
        self.content_error: Optional[Exception] = None
        self.screenshot_error: Optional[Exception] = None

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.default_navigation_timeout = timeout

    async def goto(self, url: str, wait_until: Optional[str] = None) -> None:
        self.calls.append(("goto", url, wait_until))
        if url in self.goto_errors:
            raise self.goto_errors[url]
        self.url = url

    async def wait_for_selector(self, selector: str, timeout: Optional[float] = None) -> None:
        self.calls.append(("wait_for_selector", selector, timeout))
        if selector in self.missing_selectors:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self, selector)

    async def click(self, selector: str) -> None:
        self.calls.append(("click", selector))

    def expect_navigation(self, wait_until: Optional[str] = None, timeout: Optional[float] = None) -> FakeNavigation:
        self.calls.append(("expect_navigation", wait_until, timeout))
        return FakeNavigation(self, self.navigation_error)

    async def content(self) -> str:
        if self.content_error is not None:
            raise self.content_error
        return self.html

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        self.calls.append(("screenshot", path, full_page))
        if self.screenshot_error is not None:
            raise self.screenshot_error
        data = b"\x89PNG\r\n\x1a\nfake"
        if path:
            Path(path).write_bytes(data)
        return data

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


class FakeBrowserContext:
    def __init__(self, page: FakePage) -> None:
        self.page = page

    async def new_page(self) -> FakePage:
        return self.page


class FakeBrowser:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.closed = False
        self.context_options: Dict[str, Any] = {}

    async def new_context(self, **options: Any) -> FakeBrowserContext:
        self.context_options = options
        return FakeBrowserContext(self.page)

    async def close(self) -> None:
        self.closed = True


class FakeChromium:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.launches: List[Dict[str, Any]] = []
        self.browsers: List[FakeBrowser] = []

    async def launch(self, **options: Any) -> FakeBrowser:
        self.launches.append(options)
        browser = FakeBrowser(self.page)
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, page: FakePage) -> None:
        self.chromium = FakeChromium(page)


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def make_config(tmp_path: Path):
    def factory(**overrides: Any) -> ArchiveConfig:
        options: Dict[str, Any] = {
            "seed_url": "https://example.com/",
            "output_dir": tmp_path,
        }
        options.update(overrides)
        return ArchiveConfig(**options)

    return factory


@pytest.fixture
def login_config(make_config):
    def factory(**overrides: Any) -> ArchiveConfig:
        options: Dict[str, Any] = {
            "login_enabled": True,
            "login_url": "https://example.com/login",
            "login_user_selector": "#user",
            "login_pass_selector": "#pass",
            "login_submit_selector": "button[type=submit]",
            "login_user": "alice",
            "login_pass": "hunter2",
        }
        options.update(overrides)
        return make_config(**options)

    return factory
