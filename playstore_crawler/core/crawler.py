"""
Keyword-driven Play Store crawler.

For every keyword, in order:

1. collect the app identifiers from the paginated search endpoint
   (:class:`~playstore_crawler.core.collector.UrlCollector`),
2. fetch and parse each app's detail page
   (:class:`~playstore_crawler.core.retriever.AppRetriever`),
3. hand every parsed record to the exporter / callback.

Keywords are processed one after the other.  The same app may be parsed
again under a different keyword.
"""

import time
from typing import Callable, Iterable

from playstore_crawler.core.collector import UrlCollector
from playstore_crawler.core.retriever import AppRetriever
from playstore_crawler.extraction.parser import PlayStoreParser
from playstore_crawler.models import AppRecord
from playstore_crawler.session import StoreClient
from playstore_crawler.utils.log import log


class Crawler:
    """Crawl the store for a list of search keywords."""

    def __init__(
        self,
        keywords: Iterable[str],
        exporter=None,
        max_app_urls: int = 0,
        download_delay: int = 0,
        write_callback: Callable[[AppRecord], None] | None = None,
        client_factory: Callable[[], StoreClient] = StoreClient,
        parser: PlayStoreParser | None = None,
        sleep: Callable[[float], None] = time.sleep,
        show_progress: bool = False,
    ) -> None:
        self.keywords = list(keywords)
        self.exporter = exporter
        self.max_app_urls = max_app_urls
        self.download_delay = download_delay
        self.write_callback = write_callback
        self.client_factory = client_factory
        self.parser = parser if parser is not None else PlayStoreParser()
        self.show_progress = show_progress
        self._sleep = sleep
        self._stats = {"keywords": 0, "collected": 0, "parsed": 0, "failed": 0}

    @property
    def stats(self) -> dict[str, int]:
        return dict(self._stats)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> None:
        log.info("Keywords         : %s", ", ".join(self.keywords))
        log.info("Max apps/keyword : %s", self.max_app_urls or "unlimited")
        log.info("Download delay   : %d ms", self.download_delay)

        if self.exporter is not None:
            self.exporter.open()
        try:
            for keyword in self.keywords:
                self._crawl_keyword(keyword)
        finally:
            if self.exporter is not None:
                self.exporter.close()

        log.info(
            "[DONE] Crawl complete. keywords=%d  collected=%d  parsed=%d  failed=%d",
            self._stats["keywords"],
            self._stats["collected"],
            self._stats["parsed"],
            self._stats["failed"],
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _crawl_keyword(self, keyword: str) -> None:
        client = self.client_factory()
        try:
            collector = UrlCollector(
                client=client,
                parser=self.parser,
                page_delay=self.download_delay,
                sleep=self._sleep,
            )
            urls = collector.collect(keyword, self.max_app_urls)
        finally:
            client.close()

        self._stats["keywords"] += 1
        self._stats["collected"] += len(urls)

        if self.download_delay > 0:
            self._sleep(self.download_delay / 1000)

        retriever = AppRetriever(
            parser=self.parser,
            client_factory=self.client_factory,
            sleep=self._sleep,
            show_progress=self.show_progress,
        )
        try:
            results = retriever.retrieve(
                urls, self.download_delay, self.exporter, self.write_callback
            )
        finally:
            retriever.close()

        ok = sum(1 for r in results if r.ok)
        self._stats["parsed"] += ok
        self._stats["failed"] += len(results) - ok


def crawl(
    keywords: Iterable[str],
    exporter=None,
    max_app_urls: int = 0,
    download_delay: int = 0,
    write_callback: Callable[[AppRecord], None] | None = None,
) -> None:
    """Crawl the store for *keywords*.

    Parameters
    ----------
    keywords : Iterable[str]
        Search terms, processed in order.
    exporter : BaseExporter | None
        Receives every parsed record; opened once before the crawl and
        closed once after it.
    max_app_urls : int
        Maximum app identifiers collected per keyword (0 = unlimited).
    download_delay : int
        Delay between requests in milliseconds.
    write_callback : Callable[[AppRecord], None] | None
        Called with every parsed record.  Records are printed when
        neither an exporter nor a callback is given.
    """
    Crawler(
        keywords,
        exporter=exporter,
        max_app_urls=max_app_urls,
        download_delay=download_delay,
        write_callback=write_callback,
    ).run()
