"""Catalogue API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue_api.api.catalogue import router as catalogue_router
from catalogue_api.api.health import router as health_router
from catalogue_api.api.middleware import setup_middleware
from catalogue_api.domain.exceptions import (
    CatalogueError,
    CatalogueItemNotFoundError,
    CatalogueValidationError,
    SkuConflictError,
)
from catalogue_api.infrastructure.config import settings
from catalogue_api.infrastructure.database import Database
from catalogue_api.infrastructure.logging import configure_logging

configure_logging(settings.log_level)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    logger.info(
        "Starting Catalogue API",
        version=settings.api_version,
        debug=settings.debug,
    )

    database = Database(settings.database_url, echo=settings.debug)
    await database.connect()
    if settings.create_schema:
        await database.create_schema()
        logger.info("Database schema ensured")
    app.state.database = database

    yield

    # Shutdown
    await database.disconnect()
    logger.info("Shutting down Catalogue API")


app = FastAPI(
    title="Catalogue API",
    description="Product catalogue management backend",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request ID, logging and the 500 fallback
setup_middleware(app)

# CORS is added last so it wraps every response, 500s included
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Request-ID"],
)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(catalogue_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


ERROR_STATUS: dict[type[CatalogueError], int] = {
    CatalogueValidationError: status.HTTP_400_BAD_REQUEST,
    SkuConflictError: status.HTTP_400_BAD_REQUEST,
    CatalogueItemNotFoundError: status.HTTP_404_NOT_FOUND,
}


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    """Build the standard error body."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "error_code": error_code,
            "details": details or {},
            "request_id": getattr(request.state, "request_id", None),
        },
    )


@app.exception_handler(CatalogueError)
async def catalogue_exception_handler(request: Request, exc: CatalogueError) -> JSONResponse:
    """Handle rejected catalogue operations."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return error_response(request, status_code, exc.error_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed request bodies and parameters."""
    errors = exc.errors()
    first = errors[0] if errors else {"loc": (), "msg": "Invalid request"}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        message,
        {"errors": [str(error.get("msg")) for error in errors]},
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
    else:
        error_code = "ERROR"
        message = str(detail)

    return error_response(request, exc.status_code, error_code, message)
