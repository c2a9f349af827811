"""Catalogue domain.

Provides query construction, pagination, storage access, the mutation
guard and facet aggregation for catalogue items.
"""

from catalogue_api.catalogue.facets import FacetAggregator
from catalogue_api.catalogue.guard import MutationGuard
from catalogue_api.catalogue.models import CatalogueItem, CategoryEntry
from catalogue_api.catalogue.pagination import Page, PageRequest
from catalogue_api.catalogue.query import (
    FilterParams,
    Predicate,
    QueryBuilder,
    SearchParams,
    build_filter_predicate,
    build_search_predicate,
)
from catalogue_api.catalogue.repository import CatalogueRepository
from catalogue_api.catalogue.service import CatalogueService

__all__ = [
    # Models
    "CatalogueItem",
    "CategoryEntry",
    # Query
    "FilterParams",
    "Predicate",
    "QueryBuilder",
    "SearchParams",
    "build_filter_predicate",
    "build_search_predicate",
    # Pagination
    "Page",
    "PageRequest",
    # Repository
    "CatalogueRepository",
    # Mutations and facets
    "FacetAggregator",
    "MutationGuard",
    # Service
    "CatalogueService",
]
