"""Record sinks."""

from pathlib import Path

from playstore_crawler.exporters.base import BaseExporter
from playstore_crawler.exporters.files import CsvExporter, JsonLinesExporter

_BY_SUFFIX = {
    ".csv":   CsvExporter,
    ".jsonl": JsonLinesExporter,
    ".json":  JsonLinesExporter,
}


def exporter_for_path(path: str | Path) -> BaseExporter:
    """Return an exporter for *path* chosen by its file extension."""
    suffix = Path(path).suffix.lower()
    try:
        return _BY_SUFFIX[suffix](path)
    except KeyError:
        raise ValueError(
            f"Unsupported output format '{suffix or path}' "
            f"(expected one of: {', '.join(sorted(_BY_SUFFIX))})"
        ) from None


__all__ = ["BaseExporter", "CsvExporter", "JsonLinesExporter", "exporter_for_path"]
