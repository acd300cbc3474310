"""Browser session management and page navigation."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Browser, Page, Playwright

from .config import ArchiveConfig
from .errors import NavigationError, RenderError
from .login import perform_login

logger = logging.getLogger("page_archiver.renderer")

BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class PageRenderer:
    """Launches an isolated Chromium instance for every rendered URL."""

    def __init__(self, playwright: Playwright, config: ArchiveConfig) -> None:
        self.playwright = playwright
        self.config = config

    async def _launch(self) -> Browser:
        return await self.playwright.chromium.launch(headless=True, args=BROWSER_ARGS)

    async def _new_page(self, browser: Browser) -> Page:
        context = await browser.new_context(user_agent=self.config.user_agent or None)
        page = await context.new_page()
        page.set_default_navigation_timeout(self.config.navigation_timeout * 1000)
        return page

    async def _navigate(self, page: Page, url: str) -> None:
        if self.config.login_enabled:
            await perform_login(page, self.config, url)
        logger.info("Navigating to target URL: %s", url)
        await page.goto(url, wait_until="networkidle")

    @asynccontextmanager
    async def render(self, url: str) -> AsyncIterator[Page]:
        """Yield a page that has finished loading ``url``.

        The browser stays open for the body of the ``async with`` block and is
        closed on every exit path. Failures before the page is handed out are
        raised as :class:`NavigationError`.
        """
        try:
            browser = await self._launch()
        except Exception as exc:  # pylint: disable=broad-except
            raise RenderError(url, f"could not launch browser: {exc}") from exc
        try:
            try:
                page = await self._new_page(browser)
                await self._navigate(page, url)
            except Exception as exc:  # pylint: disable=broad-except
                raise NavigationError(url, str(exc)) from exc
            yield page
        except RenderError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            raise RenderError(url, str(exc)) from exc
        finally:
            await browser.close()
