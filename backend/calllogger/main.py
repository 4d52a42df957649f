import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from calllogger.api import calls, health
from calllogger.core.config import settings
from calllogger.core.errors import CallLogNotFound, UpstreamFailure
from calllogger.services.row_store import build_store

app = FastAPI(title=settings.app_name)

logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(calls.router)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.on_event("startup")
def on_startup() -> None:
    configure_logging()
    app.state.store = build_store(settings)
    logger.info(
        "%s started (%s, %s storage)",
        settings.app_name,
        settings.environment,
        settings.storage_backend,
    )


@app.exception_handler(CallLogNotFound)
async def call_log_not_found_handler(request: Request, exc: CallLogNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"success": False, "error": str(exc)})


@app.exception_handler(UpstreamFailure)
async def upstream_failure_handler(request: Request, exc: UpstreamFailure) -> JSONResponse:
    logger.error("Backing store request failed: %s", exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Invalid request",
            "detail": jsonable_encoder(exc.errors()),
        },
    )
