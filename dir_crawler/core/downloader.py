"""
File download with existence-based skip.
"""

import enum
from dataclasses import dataclass

from dir_crawler.core.node import Node
from dir_crawler.core.storage import LocalStorage, stream_to_file
from dir_crawler.errors import DownloadError, FetchError, HTTPStatusError
from dir_crawler.utils.log import log


class DownloadStatus(enum.Enum):
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class DownloadOutcome:
    status: DownloadStatus
    size: int = 0


def download(transport, storage: LocalStorage, node: Node) -> DownloadOutcome:
    """
    Fetch *node* into ``node.local_path`` unless a file is already there.

    An existing regular file counts as a completed download and no request
    is made.  Raises :class:`HTTPStatusError` or :class:`FetchError` when the
    file cannot be requested, :class:`DownloadError` when the body transfer
    breaks off, and :class:`FileSystemError` when it cannot be written.
    """
    path = node.local_path
    if storage.file_exists(path):
        log.info("  [SKIP] Already on disk: %s", path)
        return DownloadOutcome(DownloadStatus.SKIPPED)

    url = node.document_url
    log.info("  [FILE] GET %s", url)
    with transport.fetch_full(url) as result:
        if not result.ok:
            raise HTTPStatusError(url, result.status)
        try:
            size = stream_to_file(storage, path, result.body)
        except FetchError as exc:
            raise DownloadError(f"transfer of {url} interrupted: {exc}") from exc

    log.info("  [SAVE] %s (%d bytes)", path, size)
    return DownloadOutcome(DownloadStatus.DOWNLOADED, size)
