"""Catalogue repository for database operations.

The only component that touches storage. Predicates built by
``catalogue_api.catalogue.query`` are lowered here into SQLAlchemy
expressions.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import String, and_, cast, func, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from catalogue_api.catalogue.models import CatalogueItem, CategoryEntry
from catalogue_api.catalogue.query import (
    MATCH_ALL,
    Clause,
    Membership,
    Predicate,
    Range,
    TextMatch,
)

SCALAR_FIELDS = (
    "sku",
    "name",
    "type",
    "price",
    "upc",
    "shipping",
    "description",
    "manufacturer",
    "model",
    "url",
    "image",
)


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a field update."""

    matched_count: int
    modified_count: int
    acknowledged: bool = True


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete."""

    deleted_count: int
    acknowledged: bool = True


def _column(field_name: str) -> Any:
    if field_name not in SCALAR_FIELDS:
        raise ValueError(f"Unknown catalogue field: {field_name}")
    return getattr(CatalogueItem, field_name)


def _lower_clause(clause: Clause) -> ColumnElement[bool]:
    if isinstance(clause, TextMatch):
        matches = []
        for field_name in clause.fields:
            column = _column(field_name)
            if field_name == "sku":
                column = cast(column, String)
            matches.append(column.icontains(clause.term, autoescape=True))
        return or_(*matches)

    if isinstance(clause, Membership):
        if clause.field == "category":
            return CatalogueItem.categories.any(CategoryEntry.name.in_(clause.values))
        return _column(clause.field).in_(clause.values)

    if isinstance(clause, Range):
        column = _column(clause.field)
        bounds = []
        if clause.minimum is not None:
            bounds.append(column >= clause.minimum)
        if clause.maximum is not None:
            bounds.append(column <= clause.maximum)
        return and_(*bounds) if bounds else true()

    raise TypeError(f"Unsupported clause: {clause!r}")


def lower_predicate(predicate: Predicate) -> ColumnElement[bool] | None:
    """Lower a predicate into a SQL condition.

    Args:
        predicate: Predicate to lower.

    Returns:
        SQL condition, or None when the predicate matches everything.
    """
    if predicate.matches_all:
        return None
    return and_(*(_lower_clause(clause) for clause in predicate.clauses))


class CatalogueRepository:
    """Repository for CatalogueItem database operations.

    Example usage:
        async with database.session() as session:
            repo = CatalogueRepository(session)
            items = await repo.find_page(predicate, offset=0, limit=48)
            total = await repo.count(predicate)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def find_page(
        self,
        predicate: Predicate = MATCH_ALL,
        offset: int = 0,
        limit: int = 48,
    ) -> Sequence[CatalogueItem]:
        """Find one page of items matching predicate, in insertion order.

        Args:
            predicate: Selection predicate.
            offset: Number of matching items to skip.
            limit: Maximum results.

        Returns:
            Sequence of matching items.
        """
        query = select(CatalogueItem)

        condition = lower_predicate(predicate)
        if condition is not None:
            query = query.where(condition)

        query = query.order_by(CatalogueItem.pk).limit(limit).offset(offset)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, predicate: Predicate = MATCH_ALL) -> int:
        """Count items matching predicate.

        Args:
            predicate: Selection predicate.

        Returns:
            Count of matching items.
        """
        query = select(func.count(CatalogueItem.pk))

        condition = lower_predicate(predicate)
        if condition is not None:
            query = query.where(condition)

        result = await self.session.execute(query)
        return result.scalar_one()

    async def find_by_sku(self, sku: int) -> CatalogueItem | None:
        """Get item by SKU.

        Args:
            sku: Stock Keeping Unit.

        Returns:
            Item if found, None otherwise.
        """
        result = await self.session.execute(
            select(CatalogueItem).where(CatalogueItem.sku == sku)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, item_id: str) -> CatalogueItem | None:
        """Get item by opaque identity.

        Args:
            item_id: Opaque identity (UUID string).

        Returns:
            Item if found, None otherwise.
        """
        result = await self.session.execute(
            select(CatalogueItem).where(CatalogueItem.id == item_id)
        )
        return result.scalar_one_or_none()

    async def sku_exists(self, sku: int) -> bool:
        """Check whether any live item carries sku."""
        result = await self.session.execute(
            select(CatalogueItem.pk).where(CatalogueItem.sku == sku).limit(1)
        )
        return result.first() is not None

    async def find_by_skus(self, skus: Sequence[int]) -> Sequence[CatalogueItem]:
        """Find every item whose SKU is listed, in insertion order.

        Args:
            skus: SKUs to fetch.

        Returns:
            Matching items.
        """
        if not skus:
            return []

        result = await self.session.execute(
            select(CatalogueItem)
            .where(CatalogueItem.sku.in_(list(skus)))
            .order_by(CatalogueItem.pk)
        )
        return result.scalars().all()

    async def insert(self, fields: dict[str, Any]) -> str:
        """Insert a new item.

        Args:
            fields: Scalar fields plus a ``category`` list of ``{id, name}``.

        Returns:
            The assigned opaque identity.
        """
        item = CatalogueItem(
            **{name: fields[name] for name in SCALAR_FIELDS},
            categories=self._category_entries(fields.get("category") or []),
        )
        self.session.add(item)
        await self.session.flush()
        return item.id

    async def update_fields(self, item_id: str, fields: dict[str, Any]) -> UpdateResult:
        """Overwrite the given fields of an item, leaving the others untouched.

        A ``category`` entry replaces the whole category list.

        Args:
            item_id: Opaque identity.
            fields: Fields to overwrite.

        Returns:
            Matched and modified counts.
        """
        item = await self.get_by_id(item_id)
        if item is None:
            return UpdateResult(matched_count=0, modified_count=0)

        modified = False
        for name, value in fields.items():
            if name == "category":
                current = [entry.to_dict() for entry in item.categories]
                submitted = [
                    {"id": entry.get("id"), "name": entry.get("name")} for entry in value
                ]
                if current != submitted:
                    item.categories = self._category_entries(value)
                    modified = True
            elif name in SCALAR_FIELDS:
                if getattr(item, name) != value:
                    setattr(item, name, value)
                    modified = True

        await self.session.flush()
        return UpdateResult(matched_count=1, modified_count=1 if modified else 0)

    async def delete_by_sku(self, sku: int) -> DeleteResult:
        """Delete the single item carrying sku.

        Args:
            sku: Stock Keeping Unit.

        Returns:
            Number of deleted items (0 or 1).
        """
        item = await self.find_by_sku(sku)
        if item is None:
            return DeleteResult(deleted_count=0)

        await self.session.delete(item)
        await self.session.flush()
        return DeleteResult(deleted_count=1)

    async def distinct_values(self, field_name: str) -> list[Any]:
        """Get the distinct values of a facet field across all items.

        Args:
            field_name: ``category``, ``type`` or ``manufacturer``.

        Returns:
            Distinct values; category values are ``{id, name}`` dicts.
        """
        if field_name == "category":
            result = await self.session.execute(
                select(CategoryEntry.category_id, CategoryEntry.name)
                .distinct()
                .order_by(CategoryEntry.name, CategoryEntry.category_id)
            )
            return [{"id": row.category_id, "name": row.name} for row in result.all()]

        column = _column(field_name)
        result = await self.session.execute(select(column).distinct().order_by(column))
        return list(result.scalars().all())

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self.session.rollback()

    @staticmethod
    def _category_entries(categories: list[dict[str, Any]]) -> list[CategoryEntry]:
        return [
            CategoryEntry(
                position=position,
                category_id=entry.get("id"),
                name=entry.get("name"),
            )
            for position, entry in enumerate(categories)
        ]
