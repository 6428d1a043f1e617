"""Result extraction: app identifiers, app records and page tokens."""

from playstore_crawler.extraction.parser import PlayStoreParser, app_identifier
from playstore_crawler.extraction.token import PAGE_TOKEN_RE, extract_page_token

__all__ = ["PlayStoreParser", "app_identifier", "PAGE_TOKEN_RE", "extract_page_token"]
