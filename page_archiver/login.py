"""Form-based login performed before the target page is rendered."""

from __future__ import annotations

import logging

from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from .config import ArchiveConfig

logger = logging.getLogger("page_archiver.login")


async def _submit(page: Page, config: ArchiveConfig) -> None:
    timeout_ms = config.navigation_timeout * 1000
    if config.login_submit_selector:
        async with page.expect_navigation(wait_until="networkidle", timeout=timeout_ms):
            await page.click(config.login_submit_selector)
        return

    try:
        async with page.expect_navigation(wait_until="networkidle", timeout=timeout_ms):
            await page.keyboard.press("Enter")
    except PlaywrightTimeoutError:
        logger.debug("No navigation followed the Enter key press")


async def perform_login(page: Page, config: ArchiveConfig, target_url: str) -> None:
    """Open the login page and submit credentials; never raises on form problems.

    Navigation to the login page itself is not guarded, so a dead login URL
    fails the page like any other navigation error.
    """
    logger.info("Login enabled. Navigating to login URL...")
    await page.goto(config.login_url or target_url, wait_until="networkidle")

    if not config.login_selectors_configured:
        logger.warning("Login requested but selectors not configured. Skipping login.")
        return
    if not config.credentials_present:
        logger.warning(
            "Login is enabled but LOGIN_USER/LOGIN_PASS are empty. Skipping credential fill."
        )
        return

    try:
        await page.wait_for_selector(
            config.login_user_selector,
            timeout=config.login_selector_timeout * 1000,
        )
        await page.locator(config.login_user_selector).press_sequentially(
            config.login_user, delay=config.typing_delay_ms
        )
        await page.locator(config.login_pass_selector).press_sequentially(
            config.login_pass, delay=config.typing_delay_ms
        )
        await _submit(page, config)
        logger.info("Login attempt finished.")
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Login selectors not found or login failed: %s", exc)
