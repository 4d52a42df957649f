from typing import Iterable, List, Optional, Protocol

from calllogger.core.config import Settings
from calllogger.core.errors import ConfigurationMissing, UpstreamFailure
from calllogger.services.codec import HEADER, Row
from calllogger.services.sheets_client import GoogleSheetsStore


class RowStore(Protocol):
    def fetch_all_rows(self) -> List[Row]:
        ...

    def append_row(self, row: Row) -> None:
        ...

    def replace_row(self, position: int, row: Row) -> None:
        ...


class MemoryRowStore:
    """List-backed store used for local runs and tests."""

    def __init__(self, rows: Optional[Iterable[Row]] = None) -> None:
        self.rows: List[Row] = [list(row) for row in rows or []]

    def fetch_all_rows(self) -> List[Row]:
        return [list(row) for row in self.rows]

    def append_row(self, row: Row) -> None:
        self.rows.append(list(row))

    def replace_row(self, position: int, row: Row) -> None:
        if position < 1 or position > len(self.rows):
            raise UpstreamFailure(f"Row {position} is out of range")
        self.rows[position - 1] = list(row)


def build_store(settings: Settings) -> RowStore:
    if settings.storage_backend == "memory":
        return MemoryRowStore([list(HEADER)])
    if settings.storage_backend == "sheets":
        return GoogleSheetsStore.from_settings(settings)
    raise ConfigurationMissing(f"Unknown storage backend {settings.storage_backend!r}")
