"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.posts import router as posts_router
from backend.app.core.errors import (
    ApiError,
    error_envelope,
    normalize_unknown_error,
    render_api_error,
)
from backend.app.core.logging import setup_logging
from backend.app.core.settings import settings
from backend.app.db.engine import init_db
from backend.app.db.migrations import run_migrations

setup_logging(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("app_start")
    logger.info("config_loaded: %s", settings.safe_dump())
    init_db()
    run_migrations()
    logger.info("Blog Post API ready")
    yield
    logger.info("Blog Post API shutting down")


app = FastAPI(
    title="Blog Post API",
    version="0.1.0",
    description="CRUD API for blog posts.",
    lifespan=lifespan,
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return render_api_error(exc, operation=f"{request.method} {request.url.path}")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler: log details, return a safe generic message."""
    error = normalize_unknown_error(exc, operation=f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=error.http_status,
        content=error_envelope(error.user_message),
    )


app.include_router(health_router, tags=["health"])
app.include_router(posts_router, tags=["posts"])
