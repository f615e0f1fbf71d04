from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kbo_stats.config import settings
from kbo_stats.routers.health import router as health_router
from kbo_stats.routers.players import router as players_router
from kbo_stats.routers.search import router as search_router
from kbo_stats.scraper.extract import DocumentParseError
from kbo_stats.scraper.koreabaseball import UpstreamFetchError

logger = logging.getLogger("kbo_stats.api")


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(UpstreamFetchError)
    async def _upstream_failed(request: Request, exc: UpstreamFetchError) -> JSONResponse:
        logger.warning("upstream failure path=%s url=%s status=%s", request.url.path, exc.url, exc.status_code)
        return JSONResponse(
            status_code=502,
            content={"error": "Could not fetch player data from KBO.", "kind": "upstream"},
        )

    @app.exception_handler(DocumentParseError)
    async def _document_unreadable(request: Request, exc: DocumentParseError) -> JSONResponse:
        logger.warning("parse failure path=%s reason=%s", request.url.path, exc.reason)
        return JSONResponse(
            status_code=502,
            content={"error": "KBO returned a page that could not be read.", "kind": "parse"},
        )

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error path=%s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="KBO Player Stats API")

    allow_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
    if not allow_origins and settings.app_env.lower() == "dev":
        allow_origins = ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    _register_error_handlers(app)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(search_router, prefix=settings.api_prefix)
    app.include_router(players_router, prefix=settings.api_prefix)
    return app


app = create_app()
