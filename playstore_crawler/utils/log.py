"""
Logging configuration for the crawler.

All modules log through the ``playstore-crawler`` logger.  Console
output is coloured by ``colorlog`` when it is installed, the crawl's
``[CATEGORY]`` tags are highlighted inline, and warnings / errors become
``::warning::`` / ``::error::`` annotations when running on GitHub Actions.
"""

import logging
import os
from pathlib import Path

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("playstore-crawler")

_CONSOLE_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_CONSOLE_DATEFMT = "%H:%M:%S"
_FILE_LOG_FMT = "%(asctime)s [%(levelname)s] %(message)s"
_FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_ANSI_RESET = "\033[0m"
_TAG_STYLES: dict[str, str] = {
    "[SEARCH]": "\033[1;34m",
    "[INSERT]": "\033[32m",
    "[DUP]":    "\033[90m",
    "[HTTP]":   "\033[33m",
    "[RETRY]":  "\033[36m",
    "[PARSED]": "\033[1;32m",
    "[SAVE]":   "\033[1;32m",
    "[ERR]":    "\033[1;31m",
    "[DONE]":   "\033[1;35m",
}

_GH_ANNOTATIONS: dict[int, str] = {
    logging.WARNING:  "::warning::",
    logging.ERROR:    "::error::",
    logging.CRITICAL: "::error::",
}


def _in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def _highlight_tags(msg: str) -> str:
    """Wrap every known ``[CATEGORY]`` tag in *msg* in its ANSI style."""
    for tag, style in _TAG_STYLES.items():
        if tag in msg:
            msg = msg.replace(tag, f"{style}{tag}{_ANSI_RESET}")
    return msg


class _ConsoleFormatter(logging.Formatter):
    """Delegates to *base*, then highlights tags and, with *annotate*,
    prefixes the GitHub Actions command for the record's level."""

    def __init__(self, base: logging.Formatter, annotate: bool = False) -> None:
        super().__init__()
        self._base = base
        self._annotate = annotate

    def format(self, record: logging.LogRecord) -> str:
        text = _highlight_tags(self._base.format(record))
        if self._annotate:
            text = _GH_ANNOTATIONS.get(record.levelno, "") + text
        return text


def _console_formatter() -> logging.Formatter:
    if _in_github_actions():
        return _ConsoleFormatter(
            logging.Formatter(_CONSOLE_FMT, datefmt=_CONSOLE_DATEFMT), annotate=True
        )
    if _COLORLOG_AVAILABLE:
        return _ConsoleFormatter(colorlog.ColoredFormatter(
            "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
            datefmt=_CONSOLE_DATEFMT,
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "bold_red",
            },
        ))
    return _ConsoleFormatter(logging.Formatter(_CONSOLE_FMT, datefmt=_CONSOLE_DATEFMT))


def setup_logging(debug: bool = False, log_file: str | None = None) -> None:
    """(Re)configure the crawler logger.

    Parameters
    ----------
    debug : bool
        Enable DEBUG-level console output (default is INFO).
    log_file : str | None
        If given, also write every record (DEBUG and up) to this path.
    """
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in list(log.handlers):
        handler.close()
    log.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(_console_formatter())
    log.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_LOG_FMT, datefmt=_FILE_LOG_DATEFMT))
        log.addHandler(fh)
        log.info("Logging to file: %s", log_path.resolve())
