from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple

from calllogger.schemas import CallLogEntry

DEFAULT_PAGE_SIZE = 20

PRIORITY_RANK = {
    "Urgent": 1,
    "Time-Sensitive": 2,
    "Standard": 3,
    "Low Priority": 4,
    "N/A": 5,
}
UNKNOWN_PRIORITY_RANK = 6

SEARCH_FIELDS = ("name", "phone", "city")


class SortOrder(str, Enum):
    NONE = "none"
    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"
    PRIORITY_ASC = "priority_asc"
    PRIORITY_DESC = "priority_desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        if not value:
            return cls.NONE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.NONE


def parse_positive_int(value: object, default: int) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    return number


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return value


@dataclass(frozen=True)
class CallLogQuery:
    search: str = ""
    priority: Optional[str] = None
    call_type: Optional[str] = None
    sort: SortOrder = SortOrder.NONE
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_params(
        cls,
        search: Optional[str] = None,
        priority: Optional[str] = None,
        call_type: Optional[str] = None,
        sort: Optional[str] = None,
        page: object = None,
        page_size: object = None,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "CallLogQuery":
        """Build a query from raw request values, defaulting anything unusable."""
        return cls(
            search=search if search and search.strip() else "",
            priority=_blank_to_none(priority),
            call_type=_blank_to_none(call_type),
            sort=SortOrder.parse(sort),
            page=parse_positive_int(page, 1),
            page_size=parse_positive_int(page_size, default_page_size),
        )


def matches_search(entry: CallLogEntry, term: str) -> bool:
    needle = term.casefold()
    for field in SEARCH_FIELDS:
        value = getattr(entry, field)
        if value and needle in str(value).casefold():
            return True
    return False


def filter_calls(entries: List[CallLogEntry], query: CallLogQuery) -> List[CallLogEntry]:
    results = entries
    if query.search:
        results = [entry for entry in results if matches_search(entry, query.search)]
    if query.priority is not None:
        results = [entry for entry in results if entry.priority == query.priority]
    if query.call_type is not None:
        results = [entry for entry in results if entry.call_type == query.call_type]
    return results


def parse_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def priority_rank(entry: CallLogEntry) -> int:
    return PRIORITY_RANK.get(entry.priority or "", UNKNOWN_PRIORITY_RANK)


def sort_calls(entries: List[CallLogEntry], order: SortOrder) -> List[CallLogEntry]:
    if order in (SortOrder.DATE_ASC, SortOrder.DATE_DESC):
        dated: List[Tuple[datetime, CallLogEntry]] = []
        undated: List[CallLogEntry] = []
        for entry in entries:
            timestamp = parse_time(entry.time)
            if timestamp is None:
                undated.append(entry)
            else:
                dated.append((timestamp, entry))
        # Entries without a readable time keep their relative order at the end.
        dated.sort(key=lambda item: item[0], reverse=order is SortOrder.DATE_DESC)
        return [entry for _, entry in dated] + undated
    if order in (SortOrder.PRIORITY_ASC, SortOrder.PRIORITY_DESC):
        return sorted(entries, key=priority_rank, reverse=order is SortOrder.PRIORITY_DESC)
    return list(entries)


def paginate(entries: List[CallLogEntry], page: int, page_size: int) -> List[CallLogEntry]:
    start = (page - 1) * page_size
    return entries[start:start + page_size]


def export_calls(entries: List[CallLogEntry], query: CallLogQuery) -> List[CallLogEntry]:
    return sort_calls(filter_calls(entries, query), query.sort)


def list_calls(entries: List[CallLogEntry], query: CallLogQuery) -> Tuple[int, List[CallLogEntry]]:
    """Search, filter, sort and slice entries; returns the match count and the page."""
    matched = export_calls(entries, query)
    return len(matched), paginate(matched, query.page, query.page_size)
