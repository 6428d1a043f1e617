"""Logging helpers."""

from playstore_crawler.utils.log import setup_logging, log

__all__ = ["setup_logging", "log"]
