import logging
from typing import List, Optional

from calllogger.core.errors import CallLogNotFound
from calllogger.schemas import CallLogEntry, CallLogUpdate
from calllogger.services.codec import (
    COLUMNS,
    ID_INDEX,
    Row,
    from_row,
    is_empty,
    is_header,
    materialize,
    to_row,
)
from calllogger.services.row_store import RowStore

logger = logging.getLogger(__name__)


def fetch_calls(store: RowStore) -> List[CallLogEntry]:
    return materialize(store.fetch_all_rows())


def append_call(store: RowStore, entry: CallLogEntry) -> Row:
    row = to_row(entry)
    store.append_row(row)
    logger.info("Appended call log %s", row[ID_INDEX])
    return row


def find_row(rows: List[Row], call_id: str) -> Optional[int]:
    """Index of the first row whose id cell equals call_id."""
    for index, row in enumerate(rows):
        if index == 0 and is_header(row):
            continue
        if row and str(row[ID_INDEX]) == call_id:
            return index
    return None


def merge_row(existing: Row, call_id: str, changes: CallLogUpdate) -> Row:
    merged: Row = []
    for index, (attr, _) in enumerate(COLUMNS):
        if index == ID_INDEX:
            merged.append(call_id)
            continue
        incoming = getattr(changes, attr)
        stored = existing[index] if index < len(existing) else None
        if not is_empty(incoming):
            merged.append(incoming)
        elif stored is not None:
            merged.append(stored)
        else:
            merged.append("")
    return merged


def update_call(store: RowStore, call_id: str, changes: CallLogUpdate) -> CallLogEntry:
    """Merge non-empty fields of changes into the stored row for call_id.

    Empty values never clear a stored field. The read and the full-row write
    are two separate store calls, so concurrent updates of the same id can
    overwrite each other.
    """
    rows = store.fetch_all_rows()
    index = find_row(rows, call_id)
    if index is None:
        raise CallLogNotFound(call_id)
    row = merge_row(rows[index], call_id, changes)
    position = index + 1
    store.replace_row(position, row)
    logger.info("Updated call log %s at row %s", call_id, position)
    return from_row(row, position)
