"""Configuration objects and constants for the archiver."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .errors import ConfigError
from .utils import url_origin

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_NAVIGATION_TIMEOUT = 60.0
DEFAULT_LOGIN_SELECTOR_TIMEOUT = 5.0
DEFAULT_TYPING_DELAY_MS = 50

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class ArchiveConfig:
    """Settings that control rendering, login and crawling."""

    seed_url: str
    output_dir: Path
    max_depth: int = 0
    login_enabled: bool = False
    login_url: str = ""
    login_user_selector: str = ""
    login_pass_selector: str = ""
    login_submit_selector: str = ""
    login_user: str = ""
    login_pass: str = ""
    user_agent: str = ""
    navigation_timeout: float = DEFAULT_NAVIGATION_TIMEOUT
    login_selector_timeout: float = DEFAULT_LOGIN_SELECTOR_TIMEOUT
    typing_delay_ms: int = DEFAULT_TYPING_DELAY_MS
    fail_fast: bool = False

    @property
    def seed_origin(self) -> Optional[str]:
        return url_origin(self.seed_url)

    @property
    def login_selectors_configured(self) -> bool:
        return bool(self.login_user_selector and self.login_pass_selector)

    @property
    def credentials_present(self) -> bool:
        return bool(self.login_user and self.login_pass)


def parse_bool(value: str) -> bool:
    """Parse a command-line or environment boolean such as ``true``/``false``."""
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean value, got {value!r}")


def prepare_output_dir(path: Path | str) -> Path:
    """Resolve the output directory against the working directory and create it."""
    output_dir = Path(path).expanduser().resolve()
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def resolve_config(args: Any, environ: Optional[Mapping[str, str]] = None) -> ArchiveConfig:
    """Merge parsed CLI arguments with login/user-agent environment variables."""
    env = os.environ if environ is None else environ

    seed_url = (getattr(args, "url", None) or "").strip()
    if not seed_url:
        raise ConfigError('Missing seed URL; pass --url="https://..."')
    if url_origin(seed_url) is None:
        raise ConfigError(f"Seed URL is not an absolute URL: {seed_url}")

    depth = getattr(args, "depth", 0) or 0
    if depth < 0:
        raise ConfigError(f"Crawl depth must be non-negative, got {depth}")

    login = getattr(args, "login", None)
    if login is None:
        login = env.get("LOGIN_ENABLED", "").strip().lower() == "true"

    timeout = getattr(args, "timeout", None)
    if timeout is None:
        timeout = DEFAULT_NAVIGATION_TIMEOUT
    if timeout <= 0:
        raise ConfigError(f"Navigation timeout must be positive, got {timeout}")

    output = getattr(args, "out", None) or DEFAULT_OUTPUT_DIR

    return ArchiveConfig(
        seed_url=seed_url,
        output_dir=prepare_output_dir(output),
        max_depth=depth,
        login_enabled=login,
        login_url=env.get("LOGIN_URL", ""),
        login_user_selector=env.get("LOGIN_USER_SELECTOR", ""),
        login_pass_selector=env.get("LOGIN_PASS_SELECTOR", ""),
        login_submit_selector=env.get("LOGIN_SUBMIT_SELECTOR", ""),
        login_user=env.get("LOGIN_USER", ""),
        login_pass=env.get("LOGIN_PASS", ""),
        user_agent=env.get("USER_AGENT", ""),
        navigation_timeout=float(timeout),
        fail_fast=bool(getattr(args, "fail_fast", False)),
    )
