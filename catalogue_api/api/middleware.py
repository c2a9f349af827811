"""Request context middleware for the Catalogue API.

Each request is tagged with a correlation ID, taken from the
``X-Request-ID`` header or generated. The ID is bound into the structlog
context while the request runs and echoed on the response. Exceptions
that escape the routers are logged and turned into the standard 500 body
here, so failed responses still carry the ID.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from catalogue_api.api.schemas import ErrorResponse

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def internal_error_response(request_id: str | None) -> JSONResponse:
    """Build the 500 body for an unhandled exception."""
    body = ErrorResponse(
        error="An internal error occurred",
        error_code="INTERNAL_ERROR",
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlate, time and log every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled exception",
                method=request.method,
                path=request.url.path,
            )
            response = internal_error_response(request_id)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            query=str(request.url.query),
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        structlog.contextvars.unbind_contextvars("request_id")
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install the request context middleware on app."""
    app.add_middleware(RequestContextMiddleware)
