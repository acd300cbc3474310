"""Persist a rendered page as MHTML, HTML and a full-page screenshot."""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.async_api import Page

from .errors import CaptureError
from .models import CaptureArtifacts

logger = logging.getLogger("page_archiver.capture")


def artifact_path(output_dir: Path, base_name: str, suffix: str) -> Path:
    return output_dir / f"{base_name}.{suffix}"


async def capture_mhtml(page: Page) -> bytes:
    """Capture an MHTML snapshot of the page through the DevTools protocol."""
    client = await page.context.new_cdp_session(page)
    try:
        await client.send("Page.enable")
        result = await client.send("Page.captureSnapshot", {"format": "mhtml"})
    finally:
        await client.detach()
    return result["data"].encode("utf-8")


async def capture_page(
    page: Page,
    url: str,
    output_dir: Path,
    base_name: str,
) -> CaptureArtifacts:
    """Write all three artifacts for a page already navigated to ``url``.

    A failed MHTML snapshot is logged and leaves ``mhtml_path`` unset; failures
    writing the HTML or the screenshot raise :class:`CaptureError`.
    """
    mhtml_path = artifact_path(output_dir, base_name, "mhtml")
    artifacts = CaptureArtifacts(
        html_path=artifact_path(output_dir, base_name, "html"),
        png_path=artifact_path(output_dir, base_name, "png"),
    )

    try:
        data = await capture_mhtml(page)
        mhtml_path.write_bytes(data)
        artifacts.mhtml_path = mhtml_path
        logger.info("Saved MHTML to %s", mhtml_path)
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("MHTML capture failed: %s", exc)

    try:
        rendered = await page.content()
        artifacts.html_path.write_text(rendered, encoding="utf-8")
    except Exception as exc:  # pylint: disable=broad-except
        raise CaptureError(url, f"could not save HTML: {exc}") from exc
    logger.info("Saved HTML to %s", artifacts.html_path)

    try:
        await page.screenshot(path=str(artifacts.png_path), full_page=True)
    except Exception as exc:  # pylint: disable=broad-except
        raise CaptureError(url, f"could not save screenshot: {exc}") from exc
    logger.info("Saved screenshot to %s", artifacts.png_path)

    return artifacts
