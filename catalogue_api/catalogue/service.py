"""Catalogue service for product operations.

High-level service that combines query construction, pagination, the
repository, the mutation guard and the facet aggregator.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.catalogue.facets import FacetAggregator
from catalogue_api.catalogue.guard import MutationGuard
from catalogue_api.catalogue.pagination import Page, PageRequest
from catalogue_api.catalogue.query import (
    MATCH_ALL,
    FilterParams,
    Predicate,
    SearchParams,
    build_filter_predicate,
    build_search_predicate,
    parse_int,
)
from catalogue_api.catalogue.repository import (
    CatalogueRepository,
    DeleteResult,
    UpdateResult,
)


class CatalogueService:
    """Service for catalogue operations.

    Example usage:
        async with database.session() as session:
            service = CatalogueService(session)

            results = await service.search_items(
                SearchParams(search="widget", category="Electronics,Books"),
                PageRequest.parse(page="2", limit="24"),
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = CatalogueRepository(session)
        self.guard = MutationGuard(session)
        self.facets = FacetAggregator(self.repository)

    async def list_items(self, pagination: PageRequest) -> Page[dict[str, Any]]:
        """List all items, one page at a time."""
        return await self._paginate(MATCH_ALL, pagination)

    async def search_items(
        self,
        params: SearchParams,
        pagination: PageRequest,
    ) -> Page[dict[str, Any]]:
        """Free-text + faceted search with pagination."""
        return await self._paginate(build_search_predicate(params), pagination)

    async def filter_items(
        self,
        params: FilterParams,
        pagination: PageRequest,
    ) -> Page[dict[str, Any]]:
        """Discrete facet filtering with pagination."""
        return await self._paginate(build_filter_predicate(params), pagination)

    async def get_item(self, sku: str | int) -> dict[str, Any] | None:
        """Get item by SKU, including its opaque identity.

        Args:
            sku: SKU from the request path; non-numeric values match nothing.

        Returns:
            Item if found.
        """
        parsed = parse_int(sku)
        if parsed is None:
            return None

        item = await self.repository.find_by_sku(parsed)
        return item.to_dict(include_id=True) if item else None

    async def create_item(self, body: Any) -> dict[str, Any]:
        """Create an item through the mutation guard."""
        return await self.guard.create(body)

    async def update_item(self, item_id: str, body: Any) -> UpdateResult:
        """Update an item through the mutation guard."""
        return await self.guard.update(item_id, body)

    async def delete_item(self, sku: str | int) -> DeleteResult:
        """Delete an item by SKU through the mutation guard."""
        return await self.guard.delete(sku)

    async def available_filters(self) -> dict[str, list[Any]]:
        """Get facet values for filter menus."""
        return await self.facets.available_filters()

    async def export_items(self, skus: Sequence[int]) -> list[dict[str, Any]]:
        """Get every item whose SKU is listed.

        Args:
            skus: SKUs to export.

        Returns:
            Items without their opaque identity.
        """
        items = await self.repository.find_by_skus(skus)
        return [item.to_dict() for item in items]

    async def _paginate(
        self,
        predicate: Predicate,
        pagination: PageRequest,
    ) -> Page[dict[str, Any]]:
        items = await self.repository.find_page(
            predicate,
            offset=pagination.offset,
            limit=pagination.limit,
        )
        total = await self.repository.count(predicate)

        return Page(
            items=[item.to_dict() for item in items],
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )
