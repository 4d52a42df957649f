"""Conversion between spreadsheet rows and call log entries.

A row holds the 13 fields of a call log in a fixed order, id first. The
first row of the sheet may be a header naming those columns.
"""
import time as _time
from datetime import datetime, timezone
from typing import Any, Iterable, List, Tuple

from calllogger.schemas import CallLogEntry

Row = List[Any]

# (attribute, column header)
COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("id", "id"),
    ("phone", "phone"),
    ("name", "name"),
    ("city", "city"),
    ("first_time", "firstTime"),
    ("time", "time"),
    ("call_type", "callType"),
    ("purpose", "purpose"),
    ("result", "result"),
    ("notes", "notes"),
    ("priority", "priority"),
    ("duration", "duration"),
    ("recording_url", "recordingUrl"),
)
HEADER: Tuple[str, ...] = tuple(header for _, header in COLUMNS)
ID_INDEX = 0
TIME_INDEX = 5


def now_millis() -> int:
    return int(_time.time() * 1000)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def cell_values(entry: CallLogEntry) -> Row:
    """Positional values of an entry with absent fields as empty strings."""
    values = []
    for attr, _ in COLUMNS:
        value = getattr(entry, attr)
        values.append("" if is_empty(value) else value)
    return values


def to_row(entry: CallLogEntry) -> Row:
    row = cell_values(entry)
    if is_empty(row[ID_INDEX]):
        row[ID_INDEX] = now_millis()
    if is_empty(row[TIME_INDEX]):
        row[TIME_INDEX] = now_iso()
    return row


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def from_row(row: Row, ordinal: int) -> CallLogEntry:
    values = {}
    for index, (attr, _) in enumerate(COLUMNS):
        values[attr] = _text(row[index]) if index < len(row) else ""
    if not values["id"]:
        values["id"] = f"call_{ordinal}"
    return CallLogEntry(**values)


def is_header(row: Row) -> bool:
    return bool(row) and row[ID_INDEX] == HEADER[ID_INDEX]


def is_blank(row: Row) -> bool:
    return all(is_empty(cell) for cell in row)


def materialize(rows: Iterable[Row]) -> List[CallLogEntry]:
    """Decode every data row, numbering entries by their 1-based sheet row."""
    entries = []
    for index, row in enumerate(rows):
        if index == 0 and is_header(row):
            continue
        if is_blank(row):
            continue
        entries.append(from_row(row, index + 1))
    return entries
