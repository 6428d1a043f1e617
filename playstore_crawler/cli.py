"""
Command-line interface for the Play Store crawler.
"""

import argparse
import logging
import time
from pathlib import Path

from playstore_crawler.config import DEFAULT_DELAY_MS, DEFAULT_MAX_APPS, DEFAULT_OUTPUT
from playstore_crawler.core.crawler import Crawler
from playstore_crawler.exporters import exporter_for_path
from playstore_crawler.session import StoreClient
from playstore_crawler.utils.log import setup_logging, log

try:
    from tqdm import tqdm as _tqdm  # noqa: F401
    _TQDM_AVAILABLE = True
except ImportError:
    _TQDM_AVAILABLE = False

try:
    import colorlog  # noqa: F401
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play Store crawler – searches the store for keywords "
                    "and exports the details of every app found.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m playstore_crawler calculator\n"
            "  python -m playstore_crawler calculator \"unit converter\" --max-apps 50\n"
            "  python -m playstore_crawler --keywords-file keywords.txt --output apps.csv\n"
            "  python -m playstore_crawler notes --output apps.jsonl --delay 500\n"
        ),
    )
    parser.add_argument(
        "keywords", nargs="*", metavar="KEYWORD",
        help="Search keyword(s), processed in order",
    )
    parser.add_argument(
        "--keywords-file", metavar="FILE",
        help="Read additional keywords from FILE (one per line, '#' comments)",
    )
    parser.add_argument(
        "--output", default=DEFAULT_OUTPUT,
        help="Export records to this .csv / .jsonl file "
             "(default: print records to stdout)",
    )
    parser.add_argument(
        "--max-apps", type=int, default=DEFAULT_MAX_APPS, metavar="N",
        help=f"Maximum apps collected per keyword (0 = unlimited, default: {DEFAULT_MAX_APPS})",
    )
    parser.add_argument(
        "--delay", type=int, default=DEFAULT_DELAY_MS, metavar="MS",
        help=f"Delay between requests in milliseconds (default: {DEFAULT_DELAY_MS})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--progress", action="store_true",
        help="Show a progress bar while parsing apps (requires tqdm)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    args = parser.parse_args(argv)

    if args.keywords_file:
        try:
            args.keywords.extend(read_keywords(Path(args.keywords_file)))
        except OSError as exc:
            parser.error(f"cannot read --keywords-file: {exc}")
    if not args.keywords:
        parser.error("no keywords given (pass KEYWORD arguments or --keywords-file)")
    if args.max_apps < 0:
        parser.error("--max-apps must be >= 0")
    if args.delay < 0:
        parser.error("--delay must be >= 0")
    if args.output:
        try:
            args.exporter = exporter_for_path(args.output)
        except ValueError as exc:
            parser.error(str(exc))
    else:
        args.exporter = None
    return args


def read_keywords(path: Path) -> list[str]:
    """Return the non-empty, non-comment lines of *path*."""
    keywords = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            keywords.append(line)
    return keywords


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if args.debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    if args.progress and not _TQDM_AVAILABLE:
        log.info("Tip: install tqdm for a live progress bar  (pip install tqdm)")
    if not _COLORLOG_AVAILABLE:
        log.info("Tip: install colorlog for colored output   (pip install colorlog)")

    crawler = Crawler(
        args.keywords,
        exporter=args.exporter,
        max_app_urls=args.max_apps,
        download_delay=args.delay,
        client_factory=lambda: StoreClient(verify_ssl=args.verify_ssl),
        show_progress=args.progress,
    )

    t0 = time.monotonic()
    crawler.run()
    elapsed = time.monotonic() - t0
    log.info("Total elapsed time: %.1f s", elapsed)


if __name__ == "__main__":
    main()
