"""
Configuration constants and the immutable crawl configuration.
"""

import os
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from dir_crawler.errors import ConfigError

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_OUTPUT = "downloads"
DEFAULT_AVOID_INITIAL_LINKS = 0
DEFAULT_ENV_FILE = ".env"

# Environment variable names
ENV_BASE_URL = "BASE_URL"
ENV_DOWNLOADS_FOLDER = "DOWNLOADS_FOLDERS"
ENV_AVOID_INITIAL_LINKS = "AVOID_INITIAL_LINKS"

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT = 30           # seconds per request (connect + read)
CHUNK_SIZE = 64 * 1024         # streaming chunk size for bodies

USER_AGENT = "dir-crawler/1.0 (+open directory mirror)"

# Media types that mark a URL as a listing to descend into
HTML_CONTENT_TYPES = frozenset({
    "text/html",
    "application/xhtml+xml",
})

# Suffix for in-flight downloads, renamed into place when complete
PARTIAL_SUFFIX = ".part"


@dataclass(frozen=True)
class CrawlConfig:
    """Everything the traversal needs, read once at startup."""

    base_url: str
    output_dir: Path = Path(DEFAULT_OUTPUT)
    avoid_initial_links: int = DEFAULT_AVOID_INITIAL_LINKS
    timeout: float = REQUEST_TIMEOUT
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        try:
            scheme = urllib.parse.urlsplit(self.base_url).scheme
        except ValueError as exc:
            raise ConfigError(f"base URL cannot be parsed: {self.base_url!r}") from exc
        if scheme not in ("http", "https"):
            raise ConfigError(f"base URL must be http(s): {self.base_url!r}")
        if self.avoid_initial_links < 0:
            raise ConfigError(
                f"avoid_initial_links must be >= 0, got {self.avoid_initial_links}"
            )
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")


def _parse_count(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(
            f"{ENV_AVOID_INITIAL_LINKS} must be an integer, got {raw!r}"
        ) from None


def load_config(
    env_file: str | None = DEFAULT_ENV_FILE,
    environ: Mapping[str, str] | None = None,
    base_url: str | None = None,
    output_dir: str | Path | None = None,
    avoid_initial_links: int | None = None,
    timeout: float = REQUEST_TIMEOUT,
    verify_ssl: bool = True,
) -> CrawlConfig:
    """Build a :class:`CrawlConfig` from the environment.

    When *environ* is not given, *env_file* is loaded into ``os.environ``
    first (existing variables win) and ``os.environ`` is read.  Explicit
    keyword arguments override the environment.
    """
    if environ is None:
        if env_file:
            load_dotenv(env_file)
        environ = os.environ

    url = base_url or environ.get(ENV_BASE_URL, "").strip()
    if not url:
        raise ConfigError(f"no base URL given and {ENV_BASE_URL} is not set")

    if output_dir is None:
        output_dir = environ.get(ENV_DOWNLOADS_FOLDER, "").strip() or DEFAULT_OUTPUT

    if avoid_initial_links is None:
        raw = environ.get(ENV_AVOID_INITIAL_LINKS, "").strip()
        avoid_initial_links = _parse_count(raw) if raw else DEFAULT_AVOID_INITIAL_LINKS

    return CrawlConfig(
        base_url=url,
        output_dir=Path(output_dir),
        avoid_initial_links=avoid_initial_links,
        timeout=timeout,
        verify_ssl=verify_ssl,
    )
