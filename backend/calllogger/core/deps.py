import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader

from calllogger.core.config import settings
from calllogger.services.row_store import RowStore

api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


def get_store(request: Request) -> RowStore:
    return request.app.state.store


def require_api_token(api_key: Optional[str] = Depends(api_key_header)) -> None:
    expected = settings.api_token
    if not expected:
        return
    if not api_key or not secrets.compare_digest(api_key, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API token")
