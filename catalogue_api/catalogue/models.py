"""SQLAlchemy models for the catalogue.

Defines CatalogueItem and CategoryEntry tables for persistent storage.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalogue_api.infrastructure.database import Base


class CatalogueItem(Base):
    """Product record in the catalogue.

    Attributes:
        pk: Internal row key; its order is the insertion order.
        id: Opaque storage identity (UUID) used to address updates.
        sku: Stock Keeping Unit, the unique business key.
        name: Product name.
        type: Product type.
        price: Price (non-negative integer).
        upc: Universal Product Code.
        shipping: Shipping cost (non-negative integer).
        description: Product description.
        manufacturer: Manufacturer name.
        model: Manufacturer model.
        url: Product page URL.
        image: Product image URL.
        categories: Ordered category entries.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "catalogue_items"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        nullable=False,
        unique=True,
        default=lambda: str(uuid4()),
    )
    sku: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    upc: Mapped[str] = mapped_column(String(100), nullable=False)
    shipping: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    manufacturer: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    model: Mapped[str] = mapped_column(String(200), nullable=False)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    image: Mapped[str] = mapped_column(String(1000), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    categories: Mapped[list["CategoryEntry"]] = relationship(
        "CategoryEntry",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="CategoryEntry.position",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<CatalogueItem(id={self.id}, sku={self.sku}, name={self.name[:30]}...)>"

    def to_dict(self, include_id: bool = False) -> dict[str, Any]:
        """Convert to the client-facing dictionary.

        Args:
            include_id: Whether to include the opaque identity.

        Returns:
            Dictionary representation.
        """
        data: dict[str, Any] = {}
        if include_id:
            data["id"] = self.id
        data.update(
            {
                "sku": self.sku,
                "name": self.name,
                "type": self.type,
                "price": self.price,
                "upc": self.upc,
                "category": [entry.to_dict() for entry in self.categories],
                "shipping": self.shipping,
                "description": self.description,
                "manufacturer": self.manufacturer,
                "model": self.model,
                "url": self.url,
                "image": self.image,
            }
        )
        return data


class CategoryEntry(Base):
    """One `{id, name}` entry of an item's category list.

    Attributes:
        pk: Internal row key.
        item_pk: Owning catalogue item.
        position: Index within the item's category list.
        category_id: Client-supplied category identifier.
        name: Category display name (matched by category filters).
    """

    __tablename__ = "catalogue_categories"

    pk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    item_pk: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("catalogue_items.pk", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)

    # Relationships
    item: Mapped["CatalogueItem"] = relationship("CatalogueItem", back_populates="categories")

    def __repr__(self) -> str:
        """String representation."""
        return f"<CategoryEntry(id={self.category_id}, name={self.name})>"

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary."""
        return {"id": self.category_id, "name": self.name}
