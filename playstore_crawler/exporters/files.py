"""
File exporters – CSV and JSON Lines.
"""

import csv
import json
from pathlib import Path

from playstore_crawler.exporters.base import BaseExporter
from playstore_crawler.models import AppRecord
from playstore_crawler.utils.log import log


class _FileExporter(BaseExporter):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._fh = None
        self.count = 0

    def open(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self.path.open("w", encoding="utf-8", newline="")
        self.count = 0
        log.info("[SAVE] Writing records to %s", self.path.resolve())

    def close(self) -> None:
        if self._fh is None:
            return
        self._fh.close()
        self._fh = None
        log.info("[SAVE] %d record(s) written to %s", self.count, self.path)

    def _require_open(self):
        if self._fh is None:
            raise RuntimeError(f"{type(self).__name__} is not open")
        return self._fh


class CsvExporter(_FileExporter):
    """Writes one CSV row per app; the header row is written on open."""

    def __init__(self, path: str | Path, delimiter: str = ",") -> None:
        super().__init__(path)
        self.delimiter = delimiter
        self._writer: csv.DictWriter | None = None

    def open(self) -> None:
        super().open()
        self._writer = csv.DictWriter(
            self._fh, fieldnames=AppRecord.field_names(), delimiter=self.delimiter,
        )
        self._writer.writeheader()

    def write(self, record: AppRecord) -> None:
        self._require_open()
        self._writer.writerow(record.to_dict())
        self.count += 1


class JsonLinesExporter(_FileExporter):
    """Writes one JSON object per line."""

    def write(self, record: AppRecord) -> None:
        fh = self._require_open()
        fh.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
        self.count += 1
