"""Facet value aggregation for filter menus."""

from typing import Any

from catalogue_api.catalogue.repository import CatalogueRepository


def _present(value: Any) -> bool:
    return value is not None and value != ""


class FacetAggregator:
    """Computes distinct facet values over the whole collection.

    Null and empty values are dropped. Nothing is cached; every call
    queries storage.
    """

    def __init__(self, repository: CatalogueRepository) -> None:
        self.repository = repository

    async def available_filters(self) -> dict[str, list[Any]]:
        """Get distinct categories, types and manufacturers.

        Returns:
            Mapping with ``categories`` (``{id, name}`` dicts), ``types``
            and ``manufacturers``.
        """
        categories = await self.repository.distinct_values("category")
        types = await self.repository.distinct_values("type")
        manufacturers = await self.repository.distinct_values("manufacturer")

        return {
            "categories": [c for c in categories if _present(c["name"])],
            "types": [t for t in types if _present(t)],
            "manufacturers": [m for m in manufacturers if _present(m)],
        }
