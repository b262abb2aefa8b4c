"""Utility helpers for URL handling and logging."""

from dir_crawler.utils.url import (
    is_valid_link,
    last_path_segment,
    resolve_url,
    url_key,
    url_path,
)
from dir_crawler.utils.log import setup_logging, log

__all__ = [
    "is_valid_link",
    "last_path_segment",
    "resolve_url",
    "url_key",
    "url_path",
    "setup_logging",
    "log",
]
