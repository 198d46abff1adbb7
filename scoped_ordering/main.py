"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from scoped_ordering.config import Settings, configure_logging, get_settings
from scoped_ordering.database import dispose_engine, initialize_database
from scoped_ordering.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
)
from scoped_ordering.domain.common.exceptions import ValidationError as DomainValidationError
from scoped_ordering.exceptions import ScopedOrderingError
from scoped_ordering.infrastructure.ordering.routers import router as ordering_router

logger = logging.getLogger(__name__)


def _domain_error_status(exc: DomainError) -> int:
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DomainValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, BusinessRuleViolationError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API application."""
    settings = settings or get_settings()
    configure_logging(settings.ENVIRONMENT)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        initialize_database(settings)
        logger.info(f"{settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")
        yield
        dispose_engine()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        lifespan=lifespan,
    )

    @app.exception_handler(ScopedOrderingError)
    async def scoped_ordering_error_handler(
        _request: Request, exc: ScopedOrderingError
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(DomainError)
    async def domain_error_handler(_request: Request, exc: DomainError) -> JSONResponse:
        status_code = _domain_error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"Unhandled domain error: {exc.message}", exc_info=exc)
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get(f"{settings.API_V1_PREFIX}/")
    def api_root() -> dict[str, str]:
        """API v1 root endpoint."""
        return {
            "message": f"{settings.PROJECT_NAME} v1",
            "version": settings.VERSION,
            "docs": f"{settings.API_V1_PREFIX}/docs",
        }

    app.include_router(ordering_router, prefix=settings.API_V1_PREFIX)
    return app


app = create_app()
