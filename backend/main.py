"""
TalentFit FastAPI Application
Main entry point for the staffing match and notification API.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from backend.api import dev, matches
from backend.container import Container
from backend.core.config import Settings, get_settings
from backend.core.exceptions import (
    EmptyInputError,
    InvalidProjectIDError,
    MalformedScoreResponseError,
    ProjectNotEmbeddedError,
    ProjectNotFoundError,
    ProviderError,
    TalentFitError,
    VectorStoreError,
)
from backend.core.logging import configure_logging
from backend.core.sentry import capture_exception, init_sentry

logger = structlog.get_logger(__name__)

# Most specific first: ProjectNotEmbeddedError is a VectorStoreError.
ERROR_STATUS_CODES: list[tuple[type[TalentFitError], int]] = [
    (EmptyInputError, status.HTTP_400_BAD_REQUEST),
    (InvalidProjectIDError, status.HTTP_400_BAD_REQUEST),
    (ProjectNotFoundError, status.HTTP_404_NOT_FOUND),
    (ProjectNotEmbeddedError, status.HTTP_409_CONFLICT),
    (ProviderError, status.HTTP_502_BAD_GATEWAY),
    (VectorStoreError, status.HTTP_502_BAD_GATEWAY),
    (MalformedScoreResponseError, status.HTTP_502_BAD_GATEWAY),
]


def status_code_for(exc: TalentFitError) -> int:
    for error_type, code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings, defaults to get_settings().
        container: Pre-built component graph, built from settings otherwise.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "app_starting",
            environment=settings.environment,
            debug=settings.debug,
            version=settings.app_version,
        )
        init_sentry(settings)

        yield

        logger.info("app_shutting_down")
        app.state.container.close()

    app = FastAPI(
        title="TalentFit API",
        description="Project staffing matches and state-change notifications.",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container or Container(settings)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": True,
                "message": exc.detail,
                "status_code": exc.status_code,
            },
        )

    @app.exception_handler(TalentFitError)
    async def talentfit_exception_handler(request: Request, exc: TalentFitError) -> JSONResponse:
        """Map domain errors to HTTP status codes."""
        code = status_code_for(exc)
        logger.warning(
            "request_failed",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
            status_code=code,
        )
        return JSONResponse(
            status_code=code,
            content={
                "error": True,
                "message": str(exc),
                "status_code": code,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("unexpected_error", path=request.url.path, error=str(exc))

        event_id = capture_exception(
            exc,
            extra={
                "request_url": str(request.url),
                "request_method": request.method,
                "request_path": request.url.path,
            },
        )

        if settings.debug:
            detail = str(exc)
        else:
            detail = f"Internal server error (ref: {event_id})" if event_id else "Internal server error"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "message": detail,
                "status_code": 500,
                "error_id": event_id,
            },
        )

    app.include_router(matches.router)
    app.include_router(dev.router)

    return app
