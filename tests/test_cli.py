"""
Tests for the command-line interface.
"""

import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest.mock import patch

from playstore_crawler.cli import main, parse_args, read_keywords
from playstore_crawler.exporters import CsvExporter, JsonLinesExporter


class TestParseArgs(unittest.TestCase):
    def test_defaults(self):
        args = parse_args(["calculator"])
        self.assertEqual(args.keywords, ["calculator"])
        self.assertEqual(args.max_apps, 0)
        self.assertEqual(args.delay, 0)
        self.assertIsNone(args.exporter)
        self.assertTrue(args.verify_ssl)

    def test_output_picks_exporter(self):
        self.assertIsInstance(parse_args(["a", "--output", "x.csv"]).exporter, CsvExporter)
        self.assertIsInstance(parse_args(["a", "--output", "x.jsonl"]).exporter,
                              JsonLinesExporter)

    def _assert_usage_error(self, argv):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as cm:
            parse_args(argv)
        self.assertEqual(cm.exception.code, 2)

    def test_no_keywords_is_error(self):
        self._assert_usage_error([])

    def test_bad_output_suffix_is_error(self):
        self._assert_usage_error(["a", "--output", "x.xlsx"])

    def test_negative_values_are_errors(self):
        self._assert_usage_error(["a", "--max-apps", "-1"])
        self._assert_usage_error(["a", "--delay", "-5"])

    def test_keywords_file_appended(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "kw.txt"
            path.write_text("# comment\nnotes\n\n  todo list  \n", encoding="utf-8")
            args = parse_args(["calculator", "--keywords-file", str(path)])
        self.assertEqual(args.keywords, ["calculator", "notes", "todo list"])

    def test_missing_keywords_file_is_error(self):
        self._assert_usage_error(["--keywords-file", "/nonexistent/kw.txt"])


class TestReadKeywords(unittest.TestCase):
    def test_skips_blank_and_comment_lines(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "kw.txt"
            path.write_text("a\n#b\n\nc\n", encoding="utf-8")
            self.assertEqual(read_keywords(path), ["a", "c"])


class TestMain(unittest.TestCase):
    @patch("playstore_crawler.cli.setup_logging")
    @patch("playstore_crawler.cli.Crawler")
    def test_main_builds_and_runs_crawler(self, mock_crawler, mock_logging):
        main(["calculator", "notes", "--max-apps", "10", "--delay", "250"])

        mock_logging.assert_called_once_with(debug=False, log_file=None)
        args, kwargs = mock_crawler.call_args
        self.assertEqual(args[0], ["calculator", "notes"])
        self.assertEqual(kwargs["max_app_urls"], 10)
        self.assertEqual(kwargs["download_delay"], 250)
        self.assertIsNone(kwargs["exporter"])
        self.assertTrue(callable(kwargs["client_factory"]))
        mock_crawler.return_value.run.assert_called_once()


if __name__ == "__main__":
    unittest.main()
