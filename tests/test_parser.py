"""
Tests for search-result and detail-page parsing.
"""

import unittest

from playstore_crawler.extraction.parser import PlayStoreParser, app_identifier
from playstore_crawler.models import AppRecord


SEARCH_HTML = """
<div class="card-list">
  <div class="card"><a class="card-click-target" href="/store/apps/details?id=com.calc.one"></a>
    <a class="title" href="/store/apps/details?id=com.calc.one">Calc One</a></div>
  <div class="card"><a href="https://play.google.com/store/apps/details?id=com.calc.two&amp;hl=en">Calc Two</a></div>
  <div class="card"><a href="/store/apps/developer?id=Some+Dev">Some Dev</a></div>
  <div class="card"><a href="https://example.com/store/apps/details?id=com.evil">Elsewhere</a></div>
  <div class="card"><a href="/store/apps/details?id=com.calc.three">Calc Three</a></div>
</div>
"""

DETAIL_HTML = """
<html>
<head><meta property="og:image" content="https://lh3.example/og.png"></head>
<body>
<div itemscope itemtype="http://schema.org/MobileApplication">
  <h1 class="document-title" itemprop="name"><span>Super Calculator</span></h1>
  <div itemprop="author" itemscope itemtype="http://schema.org/Organization">
    <a class="document-subtitle primary" href="/store/apps/developer?id=Calc+Labs">
      <span itemprop="name">Calc Labs</span></a>
  </div>
  <a class="document-subtitle category" href="/store/apps/category/TOOLS">
    <span itemprop="genre">Tools</span></a>
  <meta itemprop="price" content="0">
  <img class="cover-image" itemprop="image" src="https://lh3.example/cover.png">
  <div class="score-container" itemprop="aggregateRating" itemscope>
    <meta itemprop="ratingValue" content="4.5">
    <meta itemprop="ratingCount" content="12,345">
  </div>
  <div itemprop="description"><div>Adds, subtracts and more.</div></div>
  <div class="details-section-contents">
    <div class="content" itemprop="datePublished">March 3, 2024</div>
    <div class="content" itemprop="fileSize">4.2M</div>
    <div class="content" itemprop="numDownloads">1,000,000 - 5,000,000</div>
    <div class="content" itemprop="softwareVersion">3.1.0</div>
    <div class="content" itemprop="operatingSystems">5.0 and up</div>
    <div class="content" itemprop="contentRating">Everyone</div>
    <div class="inapp-msg">Offers in-app purchases</div>
    <a class="dev-link" href="https://www.google.com/url?q=https://calclabs.example&amp;sa=D">Visit website</a>
    <a class="dev-link" href="mailto:support@calclabs.example">Email support@calclabs.example</a>
  </div>
</div>
</body>
</html>
"""


class TestAppIdentifier(unittest.TestCase):
    def test_relative_link(self):
        self.assertEqual(
            app_identifier("/store/apps/details?id=com.a"),
            "/store/apps/details?id=com.a",
        )

    def test_absolute_link_extra_params_dropped(self):
        self.assertEqual(
            app_identifier("https://play.google.com/store/apps/details?id=com.a&hl=en"),
            "/store/apps/details?id=com.a",
        )

    def test_other_host_rejected(self):
        self.assertIsNone(app_identifier("https://example.com/store/apps/details?id=com.a"))

    def test_non_detail_path_rejected(self):
        self.assertIsNone(app_identifier("/store/apps/developer?id=Dev"))

    def test_malformed_url_rejected(self):
        self.assertIsNone(app_identifier("http://[broken"))

    def test_missing_id_rejected(self):
        self.assertIsNone(app_identifier("/store/apps/details?hl=en"))


class TestParseAppUrls(unittest.TestCase):
    def test_document_order_with_duplicates(self):
        urls = PlayStoreParser().parse_app_urls(SEARCH_HTML)
        self.assertEqual(urls, [
            "/store/apps/details?id=com.calc.one",
            "/store/apps/details?id=com.calc.one",
            "/store/apps/details?id=com.calc.two",
            "/store/apps/details?id=com.calc.three",
        ])

    def test_empty_body(self):
        self.assertEqual(PlayStoreParser().parse_app_urls(""), [])


class TestParseAppPage(unittest.TestCase):
    URL = "https://play.google.com/store/apps/details?id=com.calc.super"

    def setUp(self):
        self.record = PlayStoreParser().parse_app_page(DETAIL_HTML, self.URL)

    def test_returns_app_record(self):
        self.assertIsInstance(self.record, AppRecord)
        self.assertEqual(self.record.url, self.URL)

    def test_name_ignores_developer_name(self):
        self.assertEqual(self.record.name, "Super Calculator")

    def test_developer(self):
        self.assertEqual(self.record.developer, "Calc Labs")
        self.assertEqual(
            self.record.developer_url,
            "https://play.google.com/store/apps/developer?id=Calc+Labs",
        )

    def test_category_and_price(self):
        self.assertEqual(self.record.category, "Tools")
        self.assertEqual(self.record.price, "0")
        self.assertTrue(self.record.is_free)

    def test_rating(self):
        self.assertEqual(self.record.score, 4.5)
        self.assertEqual(self.record.rating_count, 12345)

    def test_details_section(self):
        self.assertEqual(self.record.last_update, "March 3, 2024")
        self.assertEqual(self.record.app_size, "4.2M")
        self.assertEqual(self.record.installs, "1,000,000 - 5,000,000")
        self.assertEqual(self.record.current_version, "3.1.0")
        self.assertEqual(self.record.min_os_version, "5.0 and up")
        self.assertEqual(self.record.content_rating, "Everyone")

    def test_description_and_cover(self):
        self.assertEqual(self.record.description, "Adds, subtracts and more.")
        self.assertEqual(self.record.cover_image_url, "https://lh3.example/cover.png")

    def test_developer_contacts(self):
        self.assertEqual(self.record.developer_email, "support@calclabs.example")
        self.assertEqual(self.record.developer_website, "https://calclabs.example")

    def test_in_app_purchases(self):
        self.assertTrue(self.record.has_in_app_purchases)

    def test_paid_app(self):
        html = '<h1>Pro Calc</h1><meta itemprop="price" content="$2.99">'
        record = PlayStoreParser().parse_app_page(html, self.URL)
        self.assertEqual(record.name, "Pro Calc")
        self.assertFalse(record.is_free)
        self.assertFalse(record.has_in_app_purchases)

    def test_sparse_page_falls_back(self):
        html = '<head><meta property="og:image" content="https://lh3.example/og.png"></head>'
        record = PlayStoreParser().parse_app_page(html, self.URL)
        self.assertEqual(record.name, "")
        self.assertEqual(record.cover_image_url, "https://lh3.example/og.png")
        self.assertIsNone(record.score)
        self.assertIsNone(record.rating_count)


if __name__ == "__main__":
    unittest.main()
