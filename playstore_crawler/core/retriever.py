"""
Detail-page retrieval loop.

Fetches every collected app identifier, parses the detail page into an
:class:`~playstore_crawler.models.AppRecord` and hands it to an
exporter, a callback, or stdout.

Failure policy
--------------
A failed fetch (non-200 status or empty body) does not re-fetch the app.
Instead the HTTP client is replaced with a fresh one (dropping cookies),
the retry counter is incremented and the loop sleeps
``backoff_seconds(retry_counter)`` before moving on to the *next* app.
The counter is shared by the whole pass and only resets after a
successful fetch, so a run of failures means "the upstream is
throttling us" and the pause keeps growing.
"""

import enum
import time
from dataclasses import dataclass
from typing import Callable, Iterable

try:
    from tqdm import tqdm as _tqdm
    _TQDM_AVAILABLE = True
except ImportError:
    _TQDM_AVAILABLE = False

from playstore_crawler.config import (
    ACCEPT_LANGUAGE,
    APP_URL_PREFIX,
    BACKOFF_CEILING,
    BACKOFF_MAX_WAIT,
    HOST,
    RESPONSE_ENCODING,
)
from playstore_crawler.extraction.parser import PlayStoreParser
from playstore_crawler.models import AppRecord
from playstore_crawler.session import StoreClient
from playstore_crawler.utils.log import log


def backoff_seconds(retry_counter: int) -> float:
    """Wait time after the *retry_counter*-th consecutive failure:
    ``2 ** retry_counter`` seconds, flat ``BACKOFF_MAX_WAIT`` from
    ``BACKOFF_CEILING`` on."""
    if retry_counter >= BACKOFF_CEILING:
        return float(BACKOFF_MAX_WAIT)
    return float(2 ** retry_counter)


class FailureKind(enum.Enum):
    TRANSPORT = "transport"    # non-200 status or empty body
    ERROR = "error"            # exception while fetching, parsing or exporting


@dataclass
class ItemResult:
    url: str
    record: AppRecord | None = None
    failure: FailureKind | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None


class AppRetriever:
    """Fetches and parses app detail pages for one retrieval pass."""

    def __init__(
        self,
        parser: PlayStoreParser | None = None,
        client_factory: Callable[[], StoreClient] = StoreClient,
        sleep: Callable[[float], None] = time.sleep,
        retry_counter: int = 0,
        show_progress: bool = False,
    ) -> None:
        self.parser = parser if parser is not None else PlayStoreParser()
        self.client_factory = client_factory
        self.client = client_factory()
        self.retry_counter = retry_counter
        self.show_progress = show_progress and _TQDM_AVAILABLE
        self._sleep = sleep

    def retrieve(
        self,
        urls: Iterable[str],
        download_delay: int = 0,
        exporter=None,
        write_callback: Callable[[AppRecord], None] | None = None,
    ) -> list[ItemResult]:
        """Fetch every identifier in *urls* in order.

        *download_delay* is in milliseconds and applied after each parsed
        app.  Returns one :class:`ItemResult` per identifier.
        """
        log.info("Parsing app URLs...")
        urls = list(urls)
        results: list[ItemResult] = []

        bar = None
        if self.show_progress:
            bar = _tqdm(total=len(urls), desc="Apps", unit="app", dynamic_ncols=True)

        for url in urls:
            try:
                result = self._fetch_one(url, download_delay, exporter, write_callback)
            except Exception as exc:
                log.error("[ERR] %s – %s", url, exc)
                log.debug("Traceback for %s", url, exc_info=True)
                result = ItemResult(url=url, failure=FailureKind.ERROR, error=str(exc))
            results.append(result)
            if bar is not None:
                bar.update(1)
                bar.set_postfix(retry=self.retry_counter)

        if bar is not None:
            bar.close()

        parsed = sum(1 for r in results if r.ok)
        log.info("[DONE] Finished. Parsed app count: %d", parsed)
        return results

    def _fetch_one(
        self,
        url: str,
        download_delay: int,
        exporter,
        write_callback: Callable[[AppRecord], None] | None,
    ) -> ItemResult:
        app_url = APP_URL_PREFIX + url

        self.client.configure(
            accept_language=ACCEPT_LANGUAGE,
            host=HOST,
            encoding=RESPONSE_ENCODING,
            detect_charset=True,
        )
        response = self.client.get(app_url)

        if not response or not self.client.ok:
            log.info("[HTTP] Error opening app page: %s", app_url)
            self._reset_client()
            self.retry_counter += 1
            wait = backoff_seconds(self.retry_counter)
            log.info("[RETRY] Retrying: %d – sleeping %.0f s", self.retry_counter, wait)
            self._sleep(wait)
            return ItemResult(url=url, failure=FailureKind.TRANSPORT)

        self.retry_counter = 0
        record = self.parser.parse_app_page(response, app_url)

        if exporter is not None:
            log.info("[PARSED] Parsed app: %s", record.name)
            exporter.write(record)
        if write_callback is not None:
            write_callback(record)
        if exporter is None and write_callback is None:
            print(record)

        if download_delay > 0:
            self._sleep(download_delay / 1000)
        return ItemResult(url=url, record=record)

    def close(self) -> None:
        self.client.close()

    def _reset_client(self) -> None:
        """Swap the client for a fresh one to drop cookies and session state."""
        self.client.close()
        self.client = self.client_factory()
