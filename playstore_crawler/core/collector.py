"""
Search pagination loop.

POSTs to the streaming search endpoint for one keyword, collects the app
identifiers of every result page and follows the page token embedded in
each response until one of three things happens:

* the per-keyword cap is reached,
* a response carries no page token (end of stream),
* more than ``MAX_REQUEST_ERRORS`` requests have failed.

Whatever has been collected at that point is returned; the loop never
raises.
"""

import time
import urllib.parse
from dataclasses import dataclass
from typing import Callable

from playstore_crawler.codec import encode_non_ascii
from playstore_crawler.config import (
    CRAWL_URL,
    HOST,
    INITIAL_POST_DATA,
    MAX_REQUEST_ERRORS,
    POST_DATA,
)
from playstore_crawler.extraction.parser import PlayStoreParser
from playstore_crawler.extraction.token import extract_page_token
from playstore_crawler.session import StoreClient
from playstore_crawler.utils.log import log


@dataclass
class CollectStats:
    inserted: int = 0
    skipped: int = 0
    errors: int = 0
    requests: int = 0


class UrlCollector:
    """Collects unique app identifiers for a search keyword."""

    def __init__(
        self,
        client: StoreClient | None = None,
        parser: PlayStoreParser | None = None,
        token_extractor: Callable[[str], str] = extract_page_token,
        max_request_errors: int = MAX_REQUEST_ERRORS,
        page_delay: int = 0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client if client is not None else StoreClient()
        self.parser = parser if parser is not None else PlayStoreParser()
        self.token_extractor = token_extractor
        self.max_request_errors = max_request_errors
        self.page_delay = page_delay
        self._sleep = sleep
        self.stats = CollectStats()

    def collect(self, keyword: str, max_results: int = 0) -> list[str]:
        """Return the unique app identifiers found for *keyword*, in
        discovery order.

        *max_results* caps the number of identifiers (0 = unlimited).
        """
        self.stats = CollectStats()
        seen: set[str] = set()
        result: list[str] = []

        log.info("[SEARCH] Crawling search term: [ %s ]", keyword)

        crawl_url = CRAWL_URL.format(urllib.parse.quote_plus(keyword))
        self.client.host = HOST
        post_data = INITIAL_POST_DATA

        while True:
            response = self.client.post(crawl_url, post_data)
            self.stats.requests += 1

            if not self.client.ok:
                log.error("[HTTP] Search error – status code: %s", self.client.status_code)
                self.stats.errors += 1
                if self.stats.errors > self.max_request_errors:
                    log.info("Crawl stopped: MAX_REQUEST_ERRORS reached")
                    break
                continue

            try:
                if self._add_urls(self.parser.parse_app_urls(response), seen, result, max_results):
                    break
                page_token = self.token_extractor(response)
            except Exception as exc:
                log.error("[ERR] %s – %s", keyword, exc)
                log.debug("Traceback for search page of %s", keyword, exc_info=True)
                break
            if not page_token:
                break

            # Decoded token is re-escaped to \uXXXX; no-op for ASCII tokens
            post_data = POST_DATA.format(encode_non_ascii(page_token))
            if self.page_delay > 0:
                self._sleep(self.page_delay / 1000)

        log.info("Inserted app count: %d", self.stats.inserted)
        log.info("Skipped app count: %d", self.stats.skipped)
        log.info("Error count: %d", self.stats.errors)
        return result

    def _add_urls(
        self,
        urls: list[str],
        seen: set[str],
        result: list[str],
        max_results: int,
    ) -> bool:
        """Record *urls*; return ``True`` once *max_results* is reached."""
        for url in urls:
            if url in seen:
                self.stats.skipped += 1
                log.info("[DUP] Duplicated app, skipped: %s", url)
                continue
            seen.add(url)
            result.append(url)
            self.stats.inserted += 1
            log.info("[INSERT] Inserted app: %s", url)
            if max_results > 0 and self.stats.inserted >= max_results:
                return True
        return False


def collect_app_urls(
    keyword: str,
    max_results: int = 0,
    client: StoreClient | None = None,
    parser: PlayStoreParser | None = None,
) -> list[str]:
    """Convenience wrapper: run a :class:`UrlCollector` for one keyword."""
    return UrlCollector(client=client, parser=parser).collect(keyword, max_results)
