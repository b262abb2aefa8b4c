"""
URL resolution, scope checking and path-segment helpers.
"""

import posixpath
import urllib.parse


def resolve_url(document_url: str, href: str) -> str:
    """
    Resolve *href* against *document_url* using standard URL-reference
    resolution (relative → absolute).  Query strings and fragments of
    *href* are kept.

    Raises ``ValueError`` when either value cannot be parsed (for example
    an invalid IPv6 literal in the netloc).
    """
    href = href.strip()
    resolved = urllib.parse.urljoin(document_url, href)
    # urljoin does not check the port; reading it raises on garbage.
    _ = urllib.parse.urlsplit(resolved).port
    return resolved


def _split(url: str) -> urllib.parse.SplitResult | None:
    try:
        parts = urllib.parse.urlsplit(url)
        _ = parts.port
    except ValueError:
        return None
    return parts


def is_valid_link(base_url: str, candidate_url: str) -> bool:
    """
    Return ``True`` when *candidate_url* lies inside the subtree rooted
    at *base_url*.

    The candidate must share the base's scheme, host and port (userinfo is
    ignored), and its path must either equal the base path or extend it past
    a ``/`` boundary, so ``/dir`` admits ``/dir/x`` but not ``/dir2/x``.
    Either URL failing to parse makes the link invalid.
    """
    base = _split(base_url)
    candidate = _split(candidate_url)
    if base is None or candidate is None:
        return False

    if base.scheme != candidate.scheme:
        return False
    if (base.hostname, base.port) != (candidate.hostname, candidate.port):
        return False

    base_path = base.path
    path = candidate.path
    if not path.startswith(base_path) or len(path) < len(base_path):
        return False

    if len(path) == len(base_path) or base_path.endswith("/"):
        return True
    return path[len(base_path)] == "/"


def last_path_segment(url: str) -> str:
    """
    Return the percent-decoded final segment of *url*'s path.

    A trailing slash is ignored, so ``/pub/iso/`` yields ``iso``.  The
    root path yields ``""``.
    """
    path = urllib.parse.urlsplit(url).path
    return urllib.parse.unquote(posixpath.basename(path.rstrip("/")))


def url_path(url: str) -> str:
    """Path of *url* without its trailing slash (``/`` becomes ``""``)."""
    return urllib.parse.urlsplit(url).path.rstrip("/")


def url_key(url: str) -> str:
    """Identity key: scheme, host, path and query (no fragment)."""
    p = urllib.parse.urlsplit(url)
    return urllib.parse.urlunsplit((p.scheme, p.netloc, p.path, p.query, ""))
