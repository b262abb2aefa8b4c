"""
HTTP session creation and the transport the crawler fetches through.

The crawler never touches ``requests`` directly; it calls
:meth:`HttpTransport.fetch_head` and :meth:`HttpTransport.fetch_full`,
both of which follow redirects and report the post-redirect URL.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Callable

import requests
from requests.adapters import HTTPAdapter

from dir_crawler.config import CHUNK_SIZE, REQUEST_TIMEOUT, USER_AGENT
from dir_crawler.errors import FetchError
from dir_crawler.utils.log import log


def build_session(verify_ssl: bool = True) -> requests.Session:
    """Return a keep-alive ``requests.Session``.

    No retry adapter is mounted: a failed request surfaces immediately.
    """
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=4, pool_maxsize=4, max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    })
    return session


@dataclass
class HeadResult:
    """Outcome of a metadata probe."""

    status: int
    headers: Mapping[str, str]
    final_url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class FetchResult:
    """Outcome of a full fetch.  *body* yields the payload in chunks and
    can be consumed once; call :meth:`close` (or use ``with``) afterwards."""

    status: int
    headers: Mapping[str, str]
    body: Iterator[bytes]
    final_url: str
    _close: Callable[[], None] = field(default=lambda: None, repr=False)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def close(self) -> None:
        self._close()

    def __enter__(self) -> "FetchResult":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class HttpTransport:
    """``requests``-backed implementation of the fetch capability."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        verify_ssl: bool = True,
    ) -> None:
        self.session = session or build_session(verify_ssl=verify_ssl)
        self.timeout = timeout

    def fetch_head(self, url: str) -> HeadResult:
        log.debug("  HEAD %s", url)
        try:
            resp = self.session.head(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        resp.close()
        return HeadResult(resp.status_code, resp.headers, resp.url)

    def fetch_full(self, url: str) -> FetchResult:
        log.debug("  GET %s", url)
        try:
            resp = self.session.get(
                url, timeout=self.timeout, allow_redirects=True, stream=True
            )
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        return FetchResult(
            status=resp.status_code,
            headers=resp.headers,
            body=self._iter_body(resp, url),
            final_url=resp.url,
            _close=resp.close,
        )

    @staticmethod
    def _iter_body(resp: requests.Response, url: str) -> Iterator[bytes]:
        try:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    yield chunk
        except requests.RequestException as exc:
            raise FetchError(url, f"body transfer failed: {exc}") from exc

    def close(self) -> None:
        self.session.close()
