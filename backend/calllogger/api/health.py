from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from calllogger.core.deps import get_store
from calllogger.services.row_store import RowStore

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def index():
    return "Call logger is running."


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/ready")
def ready(store: RowStore = Depends(get_store)):
    store.fetch_all_rows()
    return {"status": "ready"}
