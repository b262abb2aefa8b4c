"""
Depth-first open-directory crawler.

Walks the listing tree below a base URL, mirrors each folder as a local
directory and downloads each file once.  Supports:

* Same-origin subtree scoping against the configured base URL
* Skipping the first N links of the root listing (autoindex chrome)
* Per-node error isolation with an end-of-run failure report
* Resume at file granularity (existing files are not fetched again)
* Guard against self and parent links (autoindex sort links, "../")

Traversal is iterative: an explicit stack of pending links replaces
recursion, so deep remote hierarchies do not grow the Python call stack.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path

from tqdm import tqdm

from dir_crawler.config import CrawlConfig
from dir_crawler.core.classifier import classify
from dir_crawler.core.downloader import DownloadStatus, download
from dir_crawler.core.node import Node, NodeState
from dir_crawler.core.storage import LocalStorage, node_local_path
from dir_crawler.errors import CrawlerError, ParseError
from dir_crawler.extraction.links import extract_links
from dir_crawler.session import HttpTransport
from dir_crawler.utils.log import log
from dir_crawler.utils.url import is_valid_link, url_key, url_path


@dataclass(frozen=True)
class Failure:
    url: str
    kind: str
    message: str


@dataclass
class CrawlReport:
    """Counters and failures collected over one run."""

    folders: int = 0
    files: int = 0
    downloaded: int = 0
    skipped: int = 0
    inert: int = 0
    rejected: int = 0
    bytes: int = 0
    failures: list[Failure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def add_failure(self, url: str, exc: CrawlerError) -> None:
        self.failures.append(Failure(url, exc.kind, str(exc)))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["failed"] = self.failed
        return data


class Crawler:
    """
    Mirror an open directory listing to local disk.

    *transport* must provide ``fetch_head(url)`` and ``fetch_full(url)``;
    *storage* must provide ``ensure_directory``, ``file_exists`` and
    ``create_file``.  Both default to the real HTTP / filesystem
    implementations.
    """

    def __init__(
        self,
        config: CrawlConfig,
        transport=None,
        storage=None,
        progress: bool = False,
    ) -> None:
        self.config = config
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(
            timeout=config.timeout, verify_ssl=config.verify_ssl
        )
        self.storage = storage or LocalStorage()
        self.progress = progress

        self.root = Node.root(config.base_url, config.output_dir)
        self.report = CrawlReport()

        # (parent, link) pairs still to visit; top of the stack is next
        self._stack: list[tuple[Node, str]] = []
        self._claimed: dict[Path, Node] = {}
        self._bar: tqdm | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> CrawlReport:
        log.info("Output directory : %s", self.config.output_dir.resolve())
        log.info("Base URL         : %s", self.config.base_url)
        if self.config.avoid_initial_links:
            log.info("Skipping first   : %d root link(s)", self.config.avoid_initial_links)

        if self.progress:
            self._bar = tqdm(desc="Crawling", unit="node", total=0, dynamic_ncols=True)

        try:
            self._expand(self.root)
            while self._stack:
                parent, link = self._stack.pop()
                self._visit(parent, link)
                if self._bar is not None:
                    self._bar.update(1)
                    self._bar.set_postfix(
                        files=self.report.files, err=self.report.failed
                    )
        finally:
            if self._bar is not None:
                self._bar.close()
                self._bar = None
            if self._owns_transport:
                self.transport.close()

        self._log_summary()
        return self.report

    # ------------------------------------------------------------------
    # Per-node state transitions
    # ------------------------------------------------------------------

    def _visit(self, parent: Node, link: str) -> None:
        """Create, classify, then expand or download the node for *link*."""
        try:
            local_path = node_local_path(parent.local_path, link)
        except ParseError as exc:
            self._record(link, exc)
            return

        node = Node(link=link, local_path=local_path, parent=parent)

        try:
            classify(self.transport, node, self.config.base_url)
            claimed = not node.is_valid or self._claim(node)
        except CrawlerError as exc:
            parent.children.append(node)
            self._fail(node, exc)
            return

        if not claimed:
            self.report.rejected += 1
            return
        parent.children.append(node)

        if not node.is_valid:
            self.report.inert += 1
            return

        if node.is_folder:
            self._expand(node)
        else:
            self._download(node)

    def _claim(self, node: Node) -> bool:
        """
        Reserve ``node.local_path`` for *node*.

        Returns ``False`` when the path already belongs to a node that
        resolved to the same resource (``sub`` redirecting to ``sub/``);
        raises :class:`ParseError` when it belongs to a different one.
        """
        owner = self._claimed.get(node.local_path)
        if owner is None:
            self._claimed[node.local_path] = node
            return True
        if url_key(owner.final_url or owner.link) == url_key(node.final_url or node.link):
            log.debug("  [REJECT] Same resource as %s: %s", owner.link, node.link)
            return False
        raise ParseError(
            f"{node.link} maps to {node.local_path}, already used by {owner.link}"
        )

    def _expand(self, node: Node) -> None:
        """Mirror *node* as a directory and queue its in-scope links."""
        node.state = NodeState.EXPANDING
        log.info("[DIR] %s → %s", node.document_url, node.local_path)
        try:
            self.storage.ensure_directory(node.local_path)
            links = extract_links(self.transport, node.document_url)
        except CrawlerError as exc:
            self._fail(node, exc)
            return

        if node.is_root and self.config.avoid_initial_links:
            skipped = links[:self.config.avoid_initial_links]
            links = links[self.config.avoid_initial_links:]
            for link in skipped:
                log.debug("  [SKIP] Initial link %s", link)

        own_paths = set()
        for ancestor in node.ancestors():
            own_paths.add(url_path(ancestor.link))
            if ancestor.final_url:
                own_paths.add(url_path(ancestor.final_url))

        accepted: list[str] = []
        seen: set[str] = set()
        for link in links:
            if not is_valid_link(self.config.base_url, link):
                log.debug("  [REJECT] Out of scope: %s", link)
                self.report.rejected += 1
            elif url_path(link) in own_paths:
                log.debug("  [REJECT] Self or ancestor: %s", link)
                self.report.rejected += 1
            elif url_key(link) in seen:
                log.debug("  [REJECT] Duplicate: %s", link)
                self.report.rejected += 1
            else:
                seen.add(url_key(link))
                accepted.append(link)

        self.report.folders += 1
        node.state = NodeState.DONE
        self._stack.extend((node, link) for link in reversed(accepted))
        if self._bar is not None:
            self._bar.total += len(accepted)
            self._bar.refresh()

    def _download(self, node: Node) -> None:
        node.state = NodeState.DOWNLOADING
        self.report.files += 1
        try:
            outcome = download(self.transport, self.storage, node)
        except CrawlerError as exc:
            self._fail(node, exc)
            return

        if outcome.status is DownloadStatus.SKIPPED:
            self.report.skipped += 1
        else:
            self.report.downloaded += 1
            self.report.bytes += outcome.size
        node.state = NodeState.DONE

    # ------------------------------------------------------------------
    # Failure bookkeeping
    # ------------------------------------------------------------------

    def _fail(self, node: Node, exc: CrawlerError) -> None:
        node.fail(exc)
        self._record(node.link, exc)

    def _record(self, link: str, exc: CrawlerError) -> None:
        log.warning("  [ERR] %s – %s", link, exc)
        self.report.add_failure(link, exc)

    def _log_summary(self) -> None:
        r = self.report
        log.info(
            "Crawl complete. folders=%d  files=%d  downloaded=%d  skip=%d  "
            "inert=%d  rejected=%d  err=%d  bytes=%d",
            r.folders, r.files, r.downloaded, r.skipped,
            r.inert, r.rejected, r.failed, r.bytes,
        )
        for failure in r.failures:
            log.error("  [ERR] %s (%s): %s", failure.url, failure.kind, failure.message)
        log.info("Files saved in: %s", self.config.output_dir.resolve())
