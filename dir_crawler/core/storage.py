"""
Local storage helpers – mapping URLs to paths and writing files.
"""

import contextlib
import logging
import os
from pathlib import Path
from typing import BinaryIO, Iterator

from dir_crawler.config import PARTIAL_SUFFIX
from dir_crawler.errors import FileSystemError, UnsafePathError
from dir_crawler.utils.url import last_path_segment

log = logging.getLogger("dir-crawler")

_FORBIDDEN_IN_SEGMENT = ("/", "\\", "\x00")


def node_local_path(parent_path: Path, link: str) -> Path:
    """
    Map *link* to ``parent_path / <last path segment of link>``.

    Segments that would escape *parent_path* or are not usable as a file
    name (empty, ``.``, ``..``, or containing a separator or NUL) raise
    :class:`UnsafePathError`.
    """
    name = last_path_segment(link)
    if name in ("", ".", "..") or any(c in name for c in _FORBIDDEN_IN_SEGMENT):
        raise UnsafePathError(f"unusable path segment {name!r} in {link}")
    return parent_path / name


class LocalStorage:
    """Filesystem capability used by the crawler."""

    def ensure_directory(self, path: Path) -> None:
        """Create *path* and its parents; an existing directory is fine."""
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileSystemError(f"cannot create directory {path}: {exc}") from exc

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    @contextlib.contextmanager
    def create_file(self, path: Path) -> Iterator[BinaryIO]:
        """Yield a binary stream that becomes *path* once the block exits
        cleanly.

        Data goes to ``<path>.part`` first and is renamed into place with
        ``os.replace``; on any exception the partial file is removed and
        *path* is left untouched.
        """
        tmp = path.with_name(path.name + PARTIAL_SUFFIX)
        try:
            fh = tmp.open("wb")
        except OSError as exc:
            raise FileSystemError(f"cannot create file {path}: {exc}") from exc

        try:
            with fh:
                yield fh
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise FileSystemError(f"write to {path} failed: {exc}") from exc
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

        try:
            os.replace(tmp, path)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise FileSystemError(f"cannot move {tmp} into place: {exc}") from exc
        log.debug("Saved → %s", path)


def stream_to_file(storage: LocalStorage, path: Path, chunks: Iterator[bytes]) -> int:
    """Write streaming *chunks* to *path* through *storage*.

    Returns the total number of bytes written.
    """
    total = 0
    with storage.create_file(path) as fh:
        for chunk in chunks:
            if chunk:
                fh.write(chunk)
                total += len(chunk)
    log.debug("Streamed → %s (%d bytes)", path, total)
    return total
