"""Catalogue API endpoints.

Provides listing, search, facet filtering, CRUD and bulk export over
catalogue items.
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.api.schemas import (
    AvailableFiltersResponse,
    CatalogueItemDetailSchema,
    CatalogueItemSchema,
    CataloguePageResponse,
    DeleteResultResponse,
    ErrorResponse,
    ExportRequest,
    UpdateResultResponse,
)
from catalogue_api.catalogue.pagination import Page, PageRequest
from catalogue_api.catalogue.query import FilterParams, SearchParams
from catalogue_api.catalogue.service import CatalogueService
from catalogue_api.infrastructure.database import get_session

router = APIRouter(prefix="/catalogue", tags=["Catalogue"])

EXPORT_FILENAME = "catalogues.json"


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogueService:
    """Get catalogue service bound to the request session."""
    return CatalogueService(session)


def get_pagination(
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Items per page")] = None,
) -> PageRequest:
    """Parse pagination parameters, falling back to defaults."""
    return PageRequest.parse(page=page, limit=limit)


# ============================================================================
# Converters
# ============================================================================


def page_to_response(page: Page[dict[str, Any]]) -> CataloguePageResponse:
    """Convert a result page to response schema."""
    return CataloguePageResponse(
        catalogue_items=[CatalogueItemSchema.model_validate(item) for item in page.items],
        max_page=page.max_page,
        total=page.total,
        page=page.page,
        limit=page.limit,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=CataloguePageResponse,
    summary="List catalogue items",
)
async def list_items(
    service: Annotated[CatalogueService, Depends(get_service)],
    pagination: Annotated[PageRequest, Depends(get_pagination)],
) -> CataloguePageResponse:
    """List all items in insertion order, one page at a time."""
    return page_to_response(await service.list_items(pagination))


@router.get(
    "/search",
    response_model=CataloguePageResponse,
    summary="Search catalogue items",
    description=(
        "Free-text search over name, model, description and SKU, combined "
        "with comma-separated facet lists and an inclusive price range."
    ),
)
async def search_items(
    service: Annotated[CatalogueService, Depends(get_service)],
    pagination: Annotated[PageRequest, Depends(get_pagination)],
    search: Annotated[str | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
    type: Annotated[str | None, Query()] = None,
    manufacturer: Annotated[str | None, Query()] = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
) -> CataloguePageResponse:
    """Search items with free text, facets and a price range."""
    params = SearchParams(
        search=search,
        category=category,
        type=type,
        manufacturer=manufacturer,
        min_price=min_price,
        max_price=max_price,
    )
    return page_to_response(await service.search_items(params, pagination))


@router.get(
    "/filter",
    response_model=CataloguePageResponse,
    summary="Filter catalogue items by facets",
    description="Each facet may be given once or repeated; values within a facet are ORed.",
)
async def filter_items(
    service: Annotated[CatalogueService, Depends(get_service)],
    pagination: Annotated[PageRequest, Depends(get_pagination)],
    category: Annotated[list[str] | None, Query()] = None,
    type: Annotated[list[str] | None, Query()] = None,
    manufacturer: Annotated[list[str] | None, Query()] = None,
) -> CataloguePageResponse:
    """Filter items by discrete facet values."""
    params = FilterParams(category=category, type=type, manufacturer=manufacturer)
    return page_to_response(await service.filter_items(params, pagination))


@router.get(
    "/available-filters",
    response_model=AvailableFiltersResponse,
    summary="Get facet values",
)
async def available_filters(
    service: Annotated[CatalogueService, Depends(get_service)],
) -> AvailableFiltersResponse:
    """Get distinct categories, types and manufacturers."""
    return AvailableFiltersResponse.model_validate(await service.available_filters())


@router.get(
    "/{sku}",
    response_model=CatalogueItemDetailSchema | None,
    summary="Get catalogue item by SKU",
)
async def get_item(
    sku: str,
    service: Annotated[CatalogueService, Depends(get_service)],
) -> CatalogueItemDetailSchema | None:
    """Get an item by SKU; the body is null when nothing matches."""
    item = await service.get_item(sku)
    return CatalogueItemDetailSchema.model_validate(item) if item else None


@router.post(
    "",
    response_model=CatalogueItemSchema,
    responses={400: {"model": ErrorResponse}},
    summary="Create catalogue item",
)
async def create_item(
    body: Annotated[Any, Body()],
    service: Annotated[CatalogueService, Depends(get_service)],
) -> CatalogueItemSchema:
    """Create an item.

    Raises:
        CatalogueValidationError: If the body is not a valid record.
        SkuConflictError: If the SKU is already in use.
    """
    return CatalogueItemSchema.model_validate(await service.create_item(body))


@router.put(
    "/{item_id}",
    response_model=UpdateResultResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update catalogue item",
)
async def update_item(
    item_id: str,
    body: Annotated[Any, Body()],
    service: Annotated[CatalogueService, Depends(get_service)],
) -> UpdateResultResponse:
    """Update an item addressed by its opaque identity.

    Raises:
        CatalogueValidationError: If the body is not a valid record.
        CatalogueItemNotFoundError: If no item has this identity.
        SkuConflictError: If the SKU changes to one already in use.
    """
    result = await service.update_item(item_id, body)
    return UpdateResultResponse(
        acknowledged=result.acknowledged,
        matched_count=result.matched_count,
        modified_count=result.modified_count,
    )


@router.delete(
    "/{sku}",
    response_model=DeleteResultResponse,
    summary="Delete catalogue item by SKU",
)
async def delete_item(
    sku: str,
    service: Annotated[CatalogueService, Depends(get_service)],
) -> DeleteResultResponse:
    """Delete the item carrying sku; deleted_count is 0 when none matched."""
    result = await service.delete_item(sku)
    return DeleteResultResponse(
        acknowledged=result.acknowledged,
        deleted_count=result.deleted_count,
    )


@router.post(
    "/bulk/export",
    responses={
        200: {"content": {"application/json": {}}, "description": "JSON attachment"},
        400: {"model": ErrorResponse},
    },
    summary="Export catalogue items",
)
async def export_items(
    export_request: ExportRequest,
    service: Annotated[CatalogueService, Depends(get_service)],
) -> Response:
    """Export the listed SKUs as a downloadable JSON file."""
    items = await service.export_items(export_request.skus)
    return Response(
        content=json.dumps(items),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )
