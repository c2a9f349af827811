"""Domain exceptions.

All catalogue-level errors that represent rejected operations. They are
raised by the mutation guard and translated to HTTP responses by the
application's exception handlers.
"""

from typing import Any


class CatalogueError(Exception):
    """Base class for all catalogue exceptions.

    Attributes:
        error_code: Machine-readable error code for API responses.
    """

    error_code = "CATALOGUE_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalogue error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CatalogueValidationError(CatalogueError):
    """Raised when a submitted record is missing or mistypes a field."""

    error_code = "VALIDATION_ERROR"


class SkuConflictError(CatalogueError):
    """Raised when a write would duplicate an existing SKU."""

    error_code = "SKU_CONFLICT"

    def __init__(self, sku: int) -> None:
        """Initialize SKU conflict error.

        Args:
            sku: The conflicting SKU.
        """
        super().__init__("SKU already exists", details={"sku": sku})


class CatalogueItemNotFoundError(CatalogueError):
    """Raised when the update target does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, item_id: str) -> None:
        """Initialize not found error.

        Args:
            item_id: Opaque identity that was looked up.
        """
        super().__init__("Catalogue item not found", details={"id": item_id})
