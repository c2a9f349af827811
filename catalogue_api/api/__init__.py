"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from catalogue_api.api.catalogue import router as catalogue_router
from catalogue_api.api.health import router as health_router

__all__ = [
    "catalogue_router",
    "health_router",
]
