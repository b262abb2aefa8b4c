"""
Exception hierarchy for the directory crawler.

Everything raised on purpose derives from :class:`CrawlerError`, which is
what the traversal engine catches per node.
"""


class CrawlerError(Exception):
    """Base class for all crawler errors."""

    kind = "error"


class ConfigError(CrawlerError):
    """Missing or malformed configuration value."""

    kind = "config"


class FetchError(CrawlerError):
    """The remote URL could not be reached (DNS, connection, TLS, timeout)."""

    kind = "fetch"

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url


class HTTPStatusError(FetchError):
    """The server answered with a non-success status code."""

    kind = "http-status"

    def __init__(self, url: str, status: int) -> None:
        super().__init__(url, f"HTTP {status}")
        self.status = status


class ParseError(CrawlerError):
    """A URL could not be parsed or mapped."""

    kind = "parse"


class UnsafePathError(ParseError):
    """A URL path segment cannot be used as a local file name."""

    kind = "unsafe-path"


class FileSystemError(CrawlerError):
    """Creating a local directory or file failed."""

    kind = "filesystem"


class ClassificationError(CrawlerError):
    """The metadata probe for a node failed at the transport level."""

    kind = "classification"


class DownloadError(CrawlerError):
    """Transferring a file body failed part-way."""

    kind = "download"
