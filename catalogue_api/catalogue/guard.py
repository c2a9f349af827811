"""Mutation guard for catalogue writes.

Enforces SKU uniqueness around create and update and implements the
partial-update semantics. The application-level check gives an explicit
error before any write; the unique constraint on ``sku`` catches writes
that race past it.
"""

import uuid
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalogue_api.catalogue.query import parse_int
from catalogue_api.catalogue.records import strip_identity, validate_record
from catalogue_api.catalogue.repository import (
    CatalogueRepository,
    DeleteResult,
    UpdateResult,
)
from catalogue_api.domain.exceptions import (
    CatalogueItemNotFoundError,
    SkuConflictError,
)

logger = structlog.get_logger()


class MutationGuard:
    """Create, update and delete protocols for catalogue items."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize guard with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = CatalogueRepository(session)

    async def create(self, body: Any) -> dict[str, Any]:
        """Create an item.

        Args:
            body: Submitted JSON body.

        Returns:
            The created record, without its opaque identity.

        Raises:
            CatalogueValidationError: If the body is not a valid record.
            SkuConflictError: If the SKU is already in use.
        """
        record = validate_record(body)

        if await self.repository.sku_exists(record.sku):
            logger.warning("Rejected duplicate SKU on create", sku=record.sku)
            raise SkuConflictError(record.sku)

        try:
            item_id = await self.repository.insert(record.model_dump())
            await self.repository.commit()
        except IntegrityError as e:
            await self.repository.rollback()
            logger.warning("SKU unique constraint violated on create", sku=record.sku)
            raise SkuConflictError(record.sku) from e

        created = await self.repository.get_by_id(item_id)
        logger.info("Catalogue item created", sku=record.sku, item_id=item_id)
        return created.to_dict()

    async def update(self, item_id: str, body: Any) -> UpdateResult:
        """Update an item addressed by its opaque identity.

        Every field present in the body overwrites the stored value; the
        category list is replaced as a whole.

        Args:
            item_id: Opaque identity from the request path.
            body: Submitted JSON body.

        Returns:
            Matched and modified counts.

        Raises:
            CatalogueValidationError: If the body is not a valid record.
            CatalogueItemNotFoundError: If no item has this identity.
            SkuConflictError: If the SKU changes to one already in use.
        """
        identity = self._resolve_identity(item_id)
        record = validate_record(body)

        existing = await self.repository.get_by_id(identity) if identity else None
        if existing is None:
            logger.warning("Update target not found", item_id=item_id)
            raise CatalogueItemNotFoundError(item_id)

        if existing.sku != record.sku and await self.repository.sku_exists(record.sku):
            logger.warning(
                "Rejected duplicate SKU on update",
                item_id=item_id,
                sku=record.sku,
            )
            raise SkuConflictError(record.sku)

        fields = record.model_dump(include=set(strip_identity(body)), exclude_unset=True)

        try:
            result = await self.repository.update_fields(identity, fields)
            await self.repository.commit()
        except IntegrityError as e:
            await self.repository.rollback()
            logger.warning("SKU unique constraint violated on update", sku=record.sku)
            raise SkuConflictError(record.sku) from e

        logger.info(
            "Catalogue item updated",
            item_id=item_id,
            sku=record.sku,
            modified=result.modified_count,
        )
        return result

    async def delete(self, sku: str | int) -> DeleteResult:
        """Delete the item carrying sku.

        Args:
            sku: SKU from the request path; non-numeric values match nothing.

        Returns:
            Number of deleted items.
        """
        parsed = parse_int(sku)
        if parsed is None:
            return DeleteResult(deleted_count=0)

        result = await self.repository.delete_by_sku(parsed)
        await self.repository.commit()

        if result.deleted_count:
            logger.info("Catalogue item deleted", sku=parsed)
        return result

    @staticmethod
    def _resolve_identity(item_id: str) -> str | None:
        try:
            return str(uuid.UUID(item_id))
        except ValueError:
            return None
