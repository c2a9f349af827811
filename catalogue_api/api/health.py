"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text

from catalogue_api.infrastructure.config import settings

router = APIRouter()
logger = structlog.get_logger()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="catalogue-api",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status; 503 when the database cannot be reached.
    """
    database = request.app.state.database
    try:
        async with database.session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Readiness check failed", error=str(e))
        return JSONResponse(status_code=503, content={"status": "unavailable"})

    return JSONResponse(content={"status": "ready"})
