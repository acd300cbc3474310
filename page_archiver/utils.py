"""Utility helpers for URL naming and origin checks."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

SAFE_NAME_PATTERN = re.compile(r"^\w+:|[:/]+|[?#&=]", re.ASCII)
MAX_SAFE_NAME_CHARS = 120

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


def safe_name(url: str) -> str:
    """Derive the artifact base name for a URL.

    The leading scheme, runs of ``:``/``/`` and the ``?#&=`` delimiters are
    each replaced with a single underscore and the result is cut to 120
    characters. Distinct URLs can map to the same name.
    """
    return SAFE_NAME_PATTERN.sub("_", url)[:MAX_SAFE_NAME_CHARS]


def url_origin(url: str) -> Optional[str]:
    """Return ``scheme://host[:port]`` for a URL, or ``None`` if it has no origin."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    host = parts.hostname
    if not scheme or not host:
        return None
    if ":" in host:
        host = f"[{host}]"
    if port is None or port == _DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def normalize_url(url: str) -> str:
    """Return an absolute URL in canonical form.

    The scheme and host are lowercased, a default port is dropped, an empty
    path becomes ``/`` and characters outside the URL-safe set are
    percent-encoded. Raises ``ValueError`` for an invalid host or port.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    port = parts.port
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    netloc = host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{port}"
    if "@" in parts.netloc:
        netloc = f"{parts.netloc.rpartition('@')[0]}@{netloc}"
    path = quote(parts.path, safe=_PATH_SAFE)
    if not path and host:
        path = "/"
    query = quote(parts.query, safe=_QUERY_SAFE)
    fragment = quote(parts.fragment, safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, fragment))
