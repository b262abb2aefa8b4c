"""
dir_crawler
===========
Mirror an open web directory listing (Apache / Nginx autoindex) to local
disk: every sub-listing becomes a directory, every file is downloaded once.

Package structure
-----------------
dir_crawler/
├── __init__.py       – package init and public API
├── config.py         – constants, CrawlConfig, env / .env loading
├── errors.py         – exception hierarchy
├── session.py        – requests.Session factory and HttpTransport
├── cli.py            – argparse CLI (``python -m dir_crawler``)
├── core/             – traversal, classification, download, storage
├── extraction/       – anchor extraction from listing pages
└── utils/            – URL helpers and logging

Quick start
-----------
    from pathlib import Path
    from dir_crawler import CrawlConfig, Crawler

    config = CrawlConfig(
        base_url="http://mirror.example.com/pub/",
        output_dir=Path("downloads"),
        avoid_initial_links=1,
    )
    report = Crawler(config).run()
"""

from .config  import CrawlConfig, load_config
from .core    import Crawler, CrawlReport, Node
from .errors  import CrawlerError
from .extraction import extract_links
from .session import HttpTransport
from .utils   import is_valid_link

__all__ = [
    "CrawlConfig",
    "load_config",
    "Crawler",
    "CrawlReport",
    "Node",
    "CrawlerError",
    "extract_links",
    "HttpTransport",
    "is_valid_link",
]
