"""
Main entry point for the dir_crawler package.

Allows running the crawler as: python -m dir_crawler
"""

import sys

from dir_crawler.cli import main

if __name__ == "__main__":
    sys.exit(main())
