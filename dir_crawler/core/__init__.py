"""Core crawler logic – traversal, classification, download and storage."""

from dir_crawler.core.crawler import Crawler, CrawlReport, Failure
from dir_crawler.core.node import Node, NodeState
from dir_crawler.core.storage import LocalStorage, node_local_path

__all__ = [
    "Crawler",
    "CrawlReport",
    "Failure",
    "Node",
    "NodeState",
    "LocalStorage",
    "node_local_path",
]
