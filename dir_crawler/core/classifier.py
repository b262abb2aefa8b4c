"""
Folder-or-file classification of a node through a HEAD probe.
"""

from collections.abc import Mapping

from dir_crawler.config import HTML_CONTENT_TYPES
from dir_crawler.core.node import Node
from dir_crawler.errors import ClassificationError, FetchError
from dir_crawler.utils.log import log
from dir_crawler.utils.url import is_valid_link


def media_type(headers: Mapping[str, str]) -> str:
    """Lower-cased media type of the Content-Type header, parameters
    stripped.  Empty when the header is absent."""
    ct = headers.get("Content-Type") or ""
    return ct.split(";")[0].strip().lower()


def is_listing(headers: Mapping[str, str]) -> bool:
    return media_type(headers) in HTML_CONTENT_TYPES


def classify(transport, node: Node, base_url: str | None = None) -> None:
    """
    Probe *node* and record whether it is a folder or a file.

    A transport failure raises :class:`ClassificationError`; a non-success
    status leaves the node invalid.  When *base_url* is given, a redirect
    that lands outside its subtree also leaves the node invalid.
    """
    try:
        result = transport.fetch_head(node.link)
    except FetchError as exc:
        raise ClassificationError(f"HEAD {node.link} failed: {exc}") from exc

    final_url = result.final_url or node.link
    if final_url != node.link:
        log.debug("  [REDIRECT] %s → %s", node.link, final_url)

    if not result.ok:
        log.info("  [INERT] HTTP %s for %s", result.status, node.link)
        node.set_classification(is_valid=False, is_folder=None, final_url=final_url)
        return

    if base_url is not None and not is_valid_link(base_url, final_url):
        log.info("  [INERT] %s redirects out of scope to %s", node.link, final_url)
        node.set_classification(is_valid=False, is_folder=None, final_url=final_url)
        return

    folder = is_listing(result.headers)
    log.debug(
        "  [PROBE] %s  CT: %s  → %s",
        node.link, result.headers.get("Content-Type") or "-",
        "folder" if folder else "file",
    )
    node.set_classification(is_valid=True, is_folder=folder, final_url=final_url)
