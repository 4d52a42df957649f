import csv
from io import StringIO
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from calllogger.core.config import settings
from calllogger.core.deps import get_store, require_api_token
from calllogger.schemas import (
    CallLogEntry,
    CallLogPage,
    CallLogUpdate,
    CallLogUpdated,
    ErrorResponse,
    SuccessResponse,
)
from calllogger.services.call_log import append_call, fetch_calls, update_call
from calllogger.services.codec import HEADER, cell_values
from calllogger.services.query import CallLogQuery
from calllogger.services.query import export_calls as export_entries
from calllogger.services.query import list_calls as list_entries
from calllogger.services.row_store import RowStore

router = APIRouter(tags=["calls"], dependencies=[Depends(require_api_token)])


def call_log_query(
    search: Optional[str] = None,
    priority: Optional[str] = None,
    call_type: Optional[str] = Query(default=None, alias="callType"),
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    page_size: Optional[str] = Query(default=None, alias="pageSize"),
) -> CallLogQuery:
    return CallLogQuery.from_params(
        search=search,
        priority=priority,
        call_type=call_type,
        sort=sort,
        page=page,
        page_size=page_size or limit,
        default_page_size=settings.default_page_size,
    )


@router.post("/log-call", response_model=SuccessResponse)
def log_call(payload: CallLogEntry, store: RowStore = Depends(get_store)):
    append_call(store, payload)
    return SuccessResponse()


@router.get("/calls", response_model=CallLogPage)
def list_calls(
    query: CallLogQuery = Depends(call_log_query),
    store: RowStore = Depends(get_store),
):
    total, items = list_entries(fetch_calls(store), query)
    return CallLogPage(page=query.page, limit=query.page_size, total=total, data=items)


@router.get("/calls/export")
def export_calls(
    query: CallLogQuery = Depends(call_log_query),
    store: RowStore = Depends(get_store),
):
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(HEADER)
    for entry in export_entries(fetch_calls(store), query):
        writer.writerow(cell_values(entry))
    return Response(
        content=output.getvalue(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=calls.csv"},
    )


@router.api_route(
    "/calls/{call_id}",
    methods=["PUT", "PATCH"],
    response_model=CallLogUpdated,
    responses={404: {"model": ErrorResponse}},
)
def update_call_log(
    call_id: str,
    payload: CallLogUpdate,
    store: RowStore = Depends(get_store),
):
    entry = update_call(store, call_id, payload)
    return CallLogUpdated(data=entry)
