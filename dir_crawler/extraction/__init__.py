"""Link extraction from HTML directory listings."""

from dir_crawler.extraction.links import extract_links, parse_links

__all__ = ["extract_links", "parse_links"]
