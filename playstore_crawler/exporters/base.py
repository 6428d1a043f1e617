"""
Exporter interface.
"""

from playstore_crawler.models import AppRecord


class BaseExporter:
    """Sink for parsed app records.

    ``open`` is called once before the first record and ``close`` once
    after the last one.  Exporters can also be used as context managers.
    """

    def open(self) -> None:
        pass

    def write(self, record: AppRecord) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self) -> "BaseExporter":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
