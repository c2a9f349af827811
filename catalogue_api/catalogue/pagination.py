"""Pagination parameters and results."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from catalogue_api.catalogue.query import parse_int

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 48


def _positive_or_default(value: str | int | None, default: int) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed < 1:
        return default
    return parsed


@dataclass(frozen=True)
class PageRequest:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def parse(
        cls,
        page: str | int | None = None,
        limit: str | int | None = None,
    ) -> "PageRequest":
        """Build from raw query parameters.

        Missing, non-numeric or non-positive values revert to the defaults.
        """
        return cls(
            page=_positive_or_default(page, DEFAULT_PAGE),
            limit=_positive_or_default(limit, DEFAULT_LIMIT),
        )

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit


def max_page(total: int, limit: int) -> int:
    """Number of pages needed for total items, 0 when there are none."""
    return (total + limit - 1) // limit


@dataclass
class Page(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items on this page.
        total: Total number of matching items.
        page: Current page.
        limit: Items per page.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def max_page(self) -> int:
        """Calculate total pages."""
        return max_page(self.total, self.limit)
