# travel_sync/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from sqlalchemy.engine import make_url
from starlette.exceptions import HTTPException as StarletteHTTPException

from travel_sync.api.admin import router as admin_router
from travel_sync.api.sync import router as sync_router
from travel_sync.config import DB_URL, MAX_BODY_BYTES, STATIC_DIR, STATIC_MAX_AGE
from travel_sync.db.store import SyncStore
from travel_sync.errors import InvalidUserIdError
from travel_sync.limits import rate_limits
from travel_sync.middleware import SECURITY_HEADERS, BodySizeLimitMiddleware, security_headers
from travel_sync.static import CachedStaticFiles

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = SyncStore.open(app.state.db_url)
    app.state.store = store
    logger.info("Database: %s", make_url(app.state.db_url).render_as_string(hide_password=True))
    try:
        yield
    finally:
        store.close()
        logger.info("Database closed")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods both look like a missing resource
    if exc.status_code in (404, 405):
        return _error(404, "Not found")
    # Only raised by FastAPI itself when the body cannot be decoded
    if exc.status_code == 400:
        return _error(400, "Invalid JSON body")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def invalid_user_id_handler(request: Request, exc: InvalidUserIdError) -> JSONResponse:
    logger.debug("Rejected user id %r", exc.raw)
    return _error(400, "Invalid user ID")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, "Invalid JSON body")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Server error on %s %s", request.method, request.url.path, exc_info=exc)
    # Sent by ServerErrorMiddleware, outside security_headers
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers=SECURITY_HEADERS,
    )


def create_app(db_url: str = DB_URL, static_dir: Path = STATIC_DIR) -> FastAPI:
    app = FastAPI(
        title="Europe Travel Map Sync",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.db_url = db_url

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(InvalidUserIdError, invalid_user_id_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Last added runs first: rate limits before the body limit, headers around both
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=MAX_BODY_BYTES)
    app.middleware("http")(rate_limits)
    app.middleware("http")(security_headers)

    app.include_router(sync_router)
    app.include_router(admin_router)

    static_dir = Path(static_dir)
    index_file = static_dir / "index.html"

    @app.get("/", include_in_schema=False)
    def index():
        if not index_file.is_file():
            raise HTTPException(status_code=404)
        return FileResponse(
            index_file,
            headers={"Cache-Control": f"public, max-age={STATIC_MAX_AGE}"},
        )

    if static_dir.is_dir():
        # Mounted last so API routes always win
        app.mount("/", CachedStaticFiles(directory=static_dir), name="static")
    else:
        logger.warning("Static directory %s not found; only the API is served", static_dir)

    return app


app = create_app()
