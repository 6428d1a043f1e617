"""
playstore_crawler
=================
Keyword-driven crawler for the Play Store web front end: walks the
paginated search results for each keyword, then fetches and parses
every app's detail page.

Package structure
-----------------
playstore_crawler/
├── __init__.py       – package init and public API
├── __main__.py       – ``python -m playstore_crawler``
├── cli.py            – argparse CLI
├── config.py         – endpoints, headers, failure budgets
├── codec.py          – ``\\uXXXX`` escape encoding / decoding
├── models.py         – AppRecord dataclass
├── session.py        – StoreClient (requests.Session wrapper)
├── core/
│   ├── collector.py  – search pagination loop
│   ├── retriever.py  – detail-page loop with backoff
│   └── crawler.py    – keyword orchestration
├── extraction/
│   ├── parser.py     – BeautifulSoup search / detail parsing
│   └── token.py      – page-token extraction
├── exporters/        – CSV and JSON Lines sinks
└── utils/log.py      – logging setup

Quick start
-----------
    from playstore_crawler import crawl, CsvExporter

    crawl(["calculator"], exporter=CsvExporter("apps.csv"), max_app_urls=20)
"""

from .codec      import decode_non_ascii, encode_non_ascii
from .core       import AppRetriever, Crawler, UrlCollector, backoff_seconds, crawl
from .exporters  import BaseExporter, CsvExporter, JsonLinesExporter, exporter_for_path
from .extraction import PlayStoreParser, extract_page_token
from .models     import AppRecord
from .session    import StoreClient

__all__ = [
    "AppRecord",
    "AppRetriever",
    "BaseExporter",
    "Crawler",
    "CsvExporter",
    "JsonLinesExporter",
    "PlayStoreParser",
    "StoreClient",
    "UrlCollector",
    "backoff_seconds",
    "crawl",
    "decode_non_ascii",
    "encode_non_ascii",
    "exporter_for_path",
    "extract_page_token",
]
