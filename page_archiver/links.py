"""Same-origin link discovery over raw rendered markup."""

from __future__ import annotations

import re
from typing import AbstractSet, Iterator, Optional
from urllib.parse import urljoin

from .utils import normalize_url, url_origin

HREF_PATTERN = re.compile(r"""href\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
IGNORED_PREFIXES = ("#", "mailto:", "javascript:")


def extract_hrefs(markup: str) -> Iterator[str]:
    """Yield every quoted ``href`` value found in the markup text."""
    for match in HREF_PATTERN.finditer(markup):
        yield match.group(1)


def resolve_link(href: str, base_url: str) -> Optional[str]:
    """Resolve ``href`` against ``base_url``; ``None`` if the result is not a usable URL."""
    try:
        absolute = normalize_url(urljoin(base_url, href.strip()))
    except ValueError:
        return None
    if url_origin(absolute) is None:
        return None
    return absolute


def discover_links(
    markup: str,
    base_url: str,
    origin: str,
    visited: AbstractSet[str] = frozenset(),
) -> Iterator[str]:
    """Yield absolute same-origin URLs referenced by ``markup``.

    Fragment-only, ``mailto:`` and ``javascript:`` values are skipped, as are
    malformed links and URLs already present in ``visited`` when they are
    reached. The same URL may be yielded more than once.
    """
    for href in extract_hrefs(markup):
        if href.startswith(IGNORED_PREFIXES):
            continue
        absolute = resolve_link(href, base_url)
        if absolute is None:
            continue
        if url_origin(absolute) != origin:
            continue
        if absolute in visited:
            continue
        yield absolute
