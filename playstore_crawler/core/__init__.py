"""Core crawl logic – search pagination, detail retrieval and orchestration."""

from playstore_crawler.core.collector import CollectStats, UrlCollector, collect_app_urls
from playstore_crawler.core.crawler import Crawler, crawl
from playstore_crawler.core.retriever import (
    AppRetriever,
    FailureKind,
    ItemResult,
    backoff_seconds,
)

__all__ = [
    "AppRetriever",
    "CollectStats",
    "Crawler",
    "FailureKind",
    "ItemResult",
    "UrlCollector",
    "backoff_seconds",
    "collect_app_urls",
    "crawl",
]
