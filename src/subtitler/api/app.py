"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from subtitler.api.errors import ApiError
from subtitler.api.logging import setup_logging
from subtitler.api.routes import router
from subtitler.api.sessions import SessionManager

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging and own the session manager for the app's lifetime."""
    setup_logging()
    manager = SessionManager()
    app.state.session_manager = manager
    await manager.start_cleanup_loop()
    logger.info("app_started", session_ttl_seconds=manager.ttl_seconds)
    yield
    await manager.close()
    logger.info("app_stopped")


def _error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Subtitler",
        description="Subtitle timing editor",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
        return _error_response(exc)

    # Body validation failures use the same error shape as ApiError
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        return _error_response(
            ApiError(
                status_code=422,
                code="invalid_request",
                message="Request validation failed",
                detail=f"{location}: {first.get('msg', '')}".strip(": "),
            )
        )

    app.include_router(router)

    return app


app = create_app()
