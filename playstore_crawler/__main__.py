"""
Main entry point for the playstore_crawler package.

Allows running the crawler as: python -m playstore_crawler
"""

from playstore_crawler.cli import main

if __name__ == "__main__":
    main()
