"""
In-memory stand-in for HttpTransport used across the test modules.
"""

from dataclasses import dataclass, field

from dir_crawler.errors import FetchError
from dir_crawler.session import FetchResult, HeadResult

HTML = {"Content-Type": "text/html; charset=utf-8"}
BINARY = {"Content-Type": "application/octet-stream"}


@dataclass
class Page:
    body: bytes = b""
    headers: dict = field(default_factory=lambda: dict(HTML))
    status: int = 200
    redirect_to: str | None = None
    error: str | None = None


def listing(*hrefs: str) -> Page:
    """An autoindex-style page with one anchor per href."""
    anchors = "\n".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return Page(body=f"<html><body><pre>{anchors}</pre></body></html>".encode())


def file(data: bytes, content_type: str | None = "application/octet-stream") -> Page:
    headers = {"Content-Type": content_type} if content_type else {}
    return Page(body=data, headers=headers)


class FakeTransport:
    """Serves *pages* keyed by absolute URL; unknown URLs answer 404."""

    def __init__(self, pages: dict[str, Page]) -> None:
        self.pages = pages
        self.heads: list[str] = []
        self.gets: list[str] = []
        self.bytes_sent = 0
        self.closed = False

    def _resolve(self, url: str) -> tuple[Page, str]:
        page = self.pages.get(url, Page(status=404))
        if page.error:
            raise FetchError(url, page.error)
        if page.redirect_to:
            return self._resolve(page.redirect_to)
        return page, url

    def fetch_head(self, url: str) -> HeadResult:
        self.heads.append(url)
        page, final_url = self._resolve(url)
        return HeadResult(page.status, page.headers, final_url)

    def fetch_full(self, url: str) -> FetchResult:
        self.gets.append(url)
        page, final_url = self._resolve(url)

        def body():
            self.bytes_sent += len(page.body)
            yield page.body

        return FetchResult(page.status, page.headers, body(), final_url)

    def close(self) -> None:
        self.closed = True
