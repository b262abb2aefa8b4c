"""
Anchor extraction from directory listing pages via BeautifulSoup.
"""

from bs4 import BeautifulSoup, SoupStrainer

from dir_crawler.errors import HTTPStatusError
from dir_crawler.utils.log import log
from dir_crawler.utils.url import resolve_url

_BS4_PARSER = "lxml"
_ANCHORS = SoupStrainer("a")


def parse_links(html: bytes | str, document_url: str) -> list[str]:
    """
    Return the ``href`` of every ``<a>`` in *html*, resolved against
    *document_url*, in document order.  Duplicates are kept; hrefs that
    fail to resolve are dropped.
    """
    soup = BeautifulSoup(html, _BS4_PARSER, parse_only=_ANCHORS)
    links: list[str] = []
    for el in soup.find_all("a"):
        href = el.get("href")
        if href is None:
            continue
        try:
            links.append(resolve_url(document_url, href))
        except ValueError as exc:
            log.debug("  Dropping malformed href %r on %s: %s", href, document_url, exc)
    return links


def extract_links(transport, document_url: str) -> list[str]:
    """
    Fetch *document_url* through *transport* and return its anchor links.

    Links resolve against the post-redirect URL so a listing reached via
    ``/dir`` → ``/dir/`` yields ``/dir/child`` rather than ``/child``.

    Raises :class:`~dir_crawler.errors.FetchError` when the page cannot be
    retrieved and :class:`~dir_crawler.errors.HTTPStatusError` on a
    non-success status.
    """
    with transport.fetch_full(document_url) as result:
        if not result.ok:
            raise HTTPStatusError(document_url, result.status)
        content = b"".join(result.body)
        final_url = result.final_url or document_url

    links = parse_links(content, final_url)
    log.debug("  %d link(s) on %s", len(links), final_url)
    return links
