"""Tests for facet aggregation."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.catalogue.facets import FacetAggregator
from catalogue_api.catalogue.repository import CatalogueRepository


@pytest.mark.asyncio
async def test_available_filters_are_distinct(session: AsyncSession, make_item) -> None:
    """Each facet lists every distinct value once."""
    repository = CatalogueRepository(session)
    for item in (
        make_item(1, type="HardGood", manufacturer="Acme",
                  category=[{"id": "c1", "name": "Electronics"}]),
        make_item(2, type="HardGood", manufacturer="Globex",
                  category=[{"id": "c1", "name": "Electronics"}, {"id": "c2", "name": "Books"}]),
        make_item(3, type="Software", manufacturer="Acme", category=[]),
    ):
        await repository.insert(item)
    await repository.commit()

    filters = await FacetAggregator(repository).available_filters()

    assert filters["types"] == ["HardGood", "Software"]
    assert filters["manufacturers"] == ["Acme", "Globex"]
    assert filters["categories"] == [
        {"id": "c2", "name": "Books"},
        {"id": "c1", "name": "Electronics"},
    ]


@pytest.mark.asyncio
async def test_available_filters_drop_null_and_empty(session: AsyncSession, make_item) -> None:
    """Null and empty category names never reach filter menus."""
    repository = CatalogueRepository(session)
    await repository.insert(
        make_item(
            1,
            category=[
                {"id": "c1", "name": "Electronics"},
                {"id": "c2", "name": ""},
                {"id": "c3", "name": None},
            ],
        )
    )
    await repository.commit()

    filters = await FacetAggregator(repository).available_filters()

    assert filters["categories"] == [{"id": "c1", "name": "Electronics"}]


@pytest.mark.asyncio
async def test_available_filters_empty_collection(session: AsyncSession) -> None:
    """An empty catalogue has no facet values."""
    filters = await FacetAggregator(CatalogueRepository(session)).available_filters()

    assert filters == {"categories": [], "types": [], "manufacturers": []}
