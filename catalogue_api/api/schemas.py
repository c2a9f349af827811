"""API schemas for the Catalogue API.

Pydantic models for request/response validation and serialization.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from catalogue_api.catalogue.query import INT_MAX, INT_MIN
from catalogue_api.catalogue.records import CatalogueRecord, CategoryRef


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional error details")
    request_id: str | None = Field(default=None, description="Request ID for correlation")


# ============================================================================
# Catalogue Schemas
# ============================================================================


class CatalogueItemSchema(CatalogueRecord):
    """A catalogue item as returned to clients."""


class CatalogueItemDetailSchema(CatalogueItemSchema):
    """A catalogue item including its opaque identity for edit flows."""

    id: str = Field(..., description="Opaque identity used to address updates")


class CataloguePageResponse(BaseModel):
    """One page of catalogue items."""

    model_config = ConfigDict(populate_by_name=True)

    catalogue_items: list[CatalogueItemSchema] = Field(
        ..., alias="catalogueItems", description="Items on this page"
    )
    max_page: int = Field(..., alias="maxPage", description="Number of pages")
    total: int = Field(..., description="Total number of matching items")
    page: int = Field(..., description="Current page number (1-based)")
    limit: int = Field(..., description="Items per page")


class AvailableFiltersResponse(BaseModel):
    """Distinct facet values for filter menus."""

    categories: list[CategoryRef] = Field(..., description="Distinct category entries")
    types: list[str] = Field(..., description="Distinct product types")
    manufacturers: list[str] = Field(..., description="Distinct manufacturers")


class UpdateResultResponse(BaseModel):
    """Raw result of an update."""

    acknowledged: bool = Field(default=True, description="Whether the write was applied")
    matched_count: int = Field(..., description="Items matched by the update")
    modified_count: int = Field(..., description="Items whose stored values changed")


class DeleteResultResponse(BaseModel):
    """Raw result of a delete."""

    acknowledged: bool = Field(default=True, description="Whether the write was applied")
    deleted_count: int = Field(..., description="Items removed")


class ExportRequest(BaseModel):
    """Request to export items by SKU."""

    skus: list[Annotated[int, Field(ge=INT_MIN, le=INT_MAX)]] = Field(
        default_factory=list, description="SKUs to export"
    )
