"""
The unit of traversal: one URL met during the crawl.
"""

import enum
from dataclasses import dataclass, field
from pathlib import Path

from dir_crawler.errors import CrawlerError


class NodeState(enum.Enum):
    CREATED = "created"
    CLASSIFIED = "classified"
    EXPANDING = "expanding"
    DOWNLOADING = "downloading"
    INERT = "inert"
    FAILED = "failed"
    DONE = "done"


@dataclass(eq=False)
class Node:
    """
    One URL plus its classification and local path mapping.

    ``is_folder`` stays ``None`` until the node is classified; the root is
    always expanded as a listing regardless.  Classification results are
    write-once, see :meth:`set_classification`.
    """

    link: str
    local_path: Path
    is_root: bool = False
    parent: "Node | None" = field(default=None, repr=False)
    is_folder: bool | None = None
    is_valid: bool = False
    final_url: str | None = None
    state: NodeState = NodeState.CREATED
    error: CrawlerError | None = field(default=None, repr=False)
    children: list["Node"] = field(default_factory=list, repr=False)

    _classified: bool = field(default=False, init=False, repr=False)

    @classmethod
    def root(cls, base_url: str, output_dir: Path) -> "Node":
        return cls(link=base_url, local_path=output_dir, is_root=True, is_folder=True)

    @property
    def classified(self) -> bool:
        return self._classified

    @property
    def document_url(self) -> str:
        """URL to fetch the node from: post-redirect when known."""
        return self.final_url or self.link

    def set_classification(
        self, *, is_valid: bool, is_folder: bool | None, final_url: str | None
    ) -> None:
        if self._classified:
            raise RuntimeError(f"node already classified: {self.link}")
        self._classified = True
        self.is_valid = is_valid
        self.is_folder = is_folder
        self.final_url = final_url
        self.state = NodeState.CLASSIFIED if is_valid else NodeState.INERT

    def fail(self, exc: CrawlerError) -> None:
        self.error = exc
        self.state = NodeState.FAILED

    def ancestors(self):
        """Yield this node, then its parent, up to the root."""
        node: Node | None = self
        while node is not None:
            yield node
            node = node.parent

    def walk(self):
        """Yield this node and all descendants, depth-first in child order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
