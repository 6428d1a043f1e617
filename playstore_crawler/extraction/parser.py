"""
Search-result and detail-page extraction via BeautifulSoup.

Detail pages are read through their schema.org ``itemprop`` markup, with
a handful of fallbacks (``<h1>``, ``og:image``) for fields the markup
does not always carry.
"""

import re
import urllib.parse

from bs4 import BeautifulSoup

from playstore_crawler.config import APP_URL_PREFIX
from playstore_crawler.models import AppRecord

try:
    import lxml  # noqa: F401
    _BS4_PARSER = "lxml"
except ImportError:
    _BS4_PARSER = "html.parser"

_DETAILS_PATH = "/store/apps/details"
_NON_DIGIT_RE = re.compile(r"[^\d]")


def app_identifier(href: str) -> str | None:
    """Reduce an app link to its canonical identifier
    (``/store/apps/details?id=<package>``).

    Returns ``None`` for links that do not point at an app detail page.
    """
    try:
        parsed = urllib.parse.urlparse(href.strip())
    except ValueError:
        # e.g. "http://[broken" (unbalanced IPv6 brackets)
        return None
    if parsed.netloc and parsed.netloc != urllib.parse.urlparse(APP_URL_PREFIX).netloc:
        return None
    if parsed.path != _DETAILS_PATH:
        return None
    app_id = urllib.parse.parse_qs(parsed.query).get("id")
    if not app_id or not app_id[0]:
        return None
    return f"{_DETAILS_PATH}?id={app_id[0]}"


def _itemprop(soup: BeautifulSoup, name: str) -> str:
    el = soup.find(attrs={"itemprop": name})
    return _itemprop_value(el) if el is not None else ""


def _itemprop_value(el) -> str:
    if el.name == "meta":
        return (el.get("content") or "").strip()
    if el.name == "img":
        return (el.get("src") or "").strip()
    return el.get_text(" ", strip=True)


def _app_name(soup: BeautifulSoup) -> str:
    # The developer block carries its own itemprop="name"
    for el in soup.find_all(attrs={"itemprop": "name"}):
        if el.find_parent(attrs={"itemprop": "author"}) is None:
            return _itemprop_value(el)
    h1 = soup.find("h1")
    return h1.get_text(" ", strip=True) if h1 else ""


def _to_float(raw: str) -> float | None:
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        return None


def _to_int(raw: str) -> int | None:
    digits = _NON_DIGIT_RE.sub("", raw)
    return int(digits) if digits else None


def _is_free(price: str) -> bool:
    amount = _to_int(price)
    return amount is None or amount == 0


def _unwrap_redirect(href: str) -> str:
    """Strip Google's ``/url?q=`` redirect wrapper from outbound links."""
    parsed = urllib.parse.urlparse(href)
    if parsed.path == "/url":
        target = urllib.parse.parse_qs(parsed.query).get("q")
        if target:
            return target[0]
    return href


class PlayStoreParser:
    """Extracts app identifiers from search pages and
    :class:`~playstore_crawler.models.AppRecord` objects from detail pages."""

    def parse_app_urls(self, html: str) -> list[str]:
        """Return the app identifiers found in *html* in document order.

        Duplicates are kept; deduplication belongs to the caller.
        """
        soup = BeautifulSoup(html, _BS4_PARSER)
        urls: list[str] = []
        for anchor in soup.find_all("a", href=True):
            ident = app_identifier(anchor["href"])
            if ident:
                urls.append(ident)
        return urls

    def parse_app_page(self, html: str, url: str) -> AppRecord:
        soup = BeautifulSoup(html, _BS4_PARSER)
        record = AppRecord(url=url)

        record.name = _app_name(soup)

        author = soup.find(attrs={"itemprop": "author"})
        if author is not None:
            record.developer = author.get_text(" ", strip=True)
            link = author.find("a", href=True)
            if link:
                record.developer_url = urllib.parse.urljoin(APP_URL_PREFIX, link["href"])

        record.category = _itemprop(soup, "genre")
        record.price = _itemprop(soup, "price")
        record.is_free = _is_free(record.price)
        record.score = _to_float(_itemprop(soup, "ratingValue"))
        record.rating_count = _to_int(_itemprop(soup, "ratingCount"))
        record.description = _itemprop(soup, "description")

        record.cover_image_url = _itemprop(soup, "image")
        if not record.cover_image_url:
            og = soup.find("meta", attrs={"property": "og:image"})
            record.cover_image_url = (og.get("content") or "") if og else ""

        record.last_update = _itemprop(soup, "datePublished")
        record.app_size = _itemprop(soup, "fileSize")
        record.installs = _itemprop(soup, "numDownloads")
        record.current_version = _itemprop(soup, "softwareVersion")
        record.min_os_version = _itemprop(soup, "operatingSystems")
        record.content_rating = _itemprop(soup, "contentRating")

        for anchor in soup.find_all("a", href=True):
            href = anchor["href"].strip()
            if href.startswith("mailto:") and not record.developer_email:
                record.developer_email = href[len("mailto:"):]
            elif (not record.developer_website
                  and "website" in anchor.get_text(" ", strip=True).lower()):
                record.developer_website = _unwrap_redirect(href)

        record.has_in_app_purchases = "in-app purchases" in soup.get_text(" ").lower()
        return record
