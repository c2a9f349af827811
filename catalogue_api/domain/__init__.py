"""Domain layer - catalogue errors.

Exceptions raised when a catalogue operation is rejected. The HTTP layer
maps each one to a status code and error body.
"""

from catalogue_api.domain.exceptions import (
    CatalogueError,
    CatalogueItemNotFoundError,
    CatalogueValidationError,
    SkuConflictError,
)

__all__ = [
    "CatalogueError",
    "CatalogueItemNotFoundError",
    "CatalogueValidationError",
    "SkuConflictError",
]
