"""Exception types raised by the archiver."""

from __future__ import annotations


class ArchiverError(Exception):
    """Base class for archiver failures."""


class ConfigError(ArchiverError):
    """Startup configuration is missing or invalid."""


class RenderError(ArchiverError):
    """A page could not be rendered or captured."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url


class NavigationError(RenderError):
    """Main navigation to the target URL failed."""


class CaptureError(RenderError):
    """Writing the markup or the screenshot failed."""
