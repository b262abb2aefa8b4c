"""
Command-line interface for the directory crawler.
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from dir_crawler.config import DEFAULT_ENV_FILE, REQUEST_TIMEOUT, load_config
from dir_crawler.core.crawler import Crawler
from dir_crawler.core.storage import LocalStorage
from dir_crawler.errors import ConfigError, FileSystemError
from dir_crawler.utils.log import setup_logging, log

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Mirror an open directory listing to local disk. "
                    "Settings come from BASE_URL, DOWNLOADS_FOLDERS and "
                    "AVOID_INITIAL_LINKS (environment or .env); flags override.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m dir_crawler\n"
            "  python -m dir_crawler http://mirror.example.com/pub/\n"
            "  python -m dir_crawler http://mirror.example.com/pub/ --output pub --skip 1\n"
            "  python -m dir_crawler --report failures.json --log-file crawl.log\n"
        ),
    )
    parser.add_argument(
        "url", nargs="?",
        help="Base URL to crawl (default: $BASE_URL)",
    )
    parser.add_argument(
        "--output",
        help="Local download root (default: $DOWNLOADS_FOLDERS or 'downloads')",
    )
    parser.add_argument(
        "--skip", "--avoid-initial-links", dest="avoid_initial_links",
        type=int, metavar="N",
        help="Ignore the first N links of the root listing "
             "(default: $AVOID_INITIAL_LINKS or 0)",
    )
    parser.add_argument(
        "--env-file", default=DEFAULT_ENV_FILE,
        help=f"dotenv file to load before reading the environment (default: {DEFAULT_ENV_FILE})",
    )
    parser.add_argument(
        "--timeout", type=float, default=REQUEST_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {REQUEST_TIMEOUT})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--no-progress", dest="progress", action="store_false", default=None,
        help="Disable the progress bar (shown by default on a terminal)",
    )
    parser.add_argument(
        "--report", metavar="PATH",
        help="Write the end-of-run report (counters and failures) as JSON",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    return parser.parse_args(argv)


def write_report(path: str, report) -> None:
    report_path = Path(path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(
        json.dumps(report.to_dict(), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    log.info("Report written to %s", report_path.resolve())


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    try:
        config = load_config(
            env_file=args.env_file,
            base_url=args.url,
            output_dir=args.output,
            avoid_initial_links=args.avoid_initial_links,
            timeout=args.timeout,
            verify_ssl=args.verify_ssl,
        )
    except ConfigError as exc:
        log.error("Configuration error: %s", exc)
        return EXIT_CONFIG

    try:
        LocalStorage().ensure_directory(config.output_dir)
    except FileSystemError as exc:
        log.error("Download root is unusable: %s", exc)
        return EXIT_CONFIG

    progress = args.progress if args.progress is not None else sys.stderr.isatty()
    crawler = Crawler(config, progress=progress)

    t0 = time.monotonic()
    report = crawler.run()
    elapsed = time.monotonic() - t0
    log.info("Total elapsed time: %.1f s", elapsed)

    if args.report:
        try:
            write_report(args.report, report)
        except OSError as exc:
            log.error("Could not write report: %s", exc)

    return EXIT_OK if report.ok else EXIT_FAILURES


if __name__ == "__main__":
    sys.exit(main())
