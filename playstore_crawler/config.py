"""
Configuration constants for the Play Store crawler.
"""

import os

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_OUTPUT = ""            # empty = print records to stdout
DEFAULT_MAX_APPS = 0           # 0 = unlimited apps per keyword
DEFAULT_DELAY_MS = 0           # milliseconds between requests

# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------
HOST = "play.google.com"

# Search endpoint; ``{0}`` is the URL-quoted keyword
CRAWL_URL = "https://play.google.com/store/search?q={0}&c=apps"

# Form payload for the first search page
INITIAL_POST_DATA = "ipf=1&xhr=1"

# Form payload for every following page; ``{0}`` is the page token
POST_DATA = "start=0&num=0&numChildren=0&pagTok={0}&ipf=1&xhr=1"

# App identifiers are path fragments appended to this prefix
APP_URL_PREFIX = "https://play.google.com"

# ---------------------------------------------------------------------------
# Request headers
# ---------------------------------------------------------------------------
# Can be overridden with the PLAYSTORE_LANGUAGE env var (e.g. "pt-BR")
ACCEPT_LANGUAGE = os.environ.get("PLAYSTORE_LANGUAGE", "en-US,en;q=0.9")

RESPONSE_ENCODING = "utf-8"

USER_AGENTS: list[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) "
    "Gecko/20100101 Firefox/125.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Safari/605.1.15",
]

# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT = 30           # seconds per HTTP request
TRANSPORT_RETRIES = 3          # connection-level retries inside urllib3

# ---------------------------------------------------------------------------
# Failure budgets
# ---------------------------------------------------------------------------
# Failed search requests tolerated per keyword before giving up on it
MAX_REQUEST_ERRORS = 100

# Detail-page backoff: 2 ** retry_counter seconds until the counter
# reaches BACKOFF_CEILING, then a flat BACKOFF_MAX_WAIT
BACKOFF_CEILING = 11
BACKOFF_MAX_WAIT = 35 * 60     # seconds
