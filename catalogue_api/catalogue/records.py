"""Structural validation of submitted catalogue records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from catalogue_api.catalogue.query import INT_MAX, INT_MIN
from catalogue_api.domain.exceptions import CatalogueValidationError

# Identity keys a client may echo back from a fetched record.
IDENTITY_FIELDS = ("id", "_id")


class CategoryRef(BaseModel):
    """Category entry as submitted by clients."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None


class CatalogueRecord(BaseModel):
    """A complete catalogue record.

    Required strings must be non-empty; price and shipping must be
    non-negative. Integers must fit the storage columns. Unknown keys are
    ignored.
    """

    model_config = ConfigDict(extra="ignore")

    sku: int = Field(..., ge=INT_MIN, le=INT_MAX)
    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    price: int = Field(..., ge=0, le=INT_MAX)
    upc: str = Field(..., min_length=1)
    category: list[CategoryRef]
    shipping: int = Field(..., ge=0, le=INT_MAX)
    description: str = Field(..., min_length=1)
    manufacturer: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)


def _describe(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "body"
    return f"{location}: {error['msg']}"


def validate_record(body: Any) -> CatalogueRecord:
    """Validate a submitted body as a catalogue record.

    Args:
        body: Decoded JSON body.

    Returns:
        The validated record.

    Raises:
        CatalogueValidationError: With the first violation found.
    """
    if not isinstance(body, dict):
        raise CatalogueValidationError("Catalogue validation failed: body: Input should be an object")

    try:
        return CatalogueRecord.model_validate(body)
    except ValidationError as e:
        errors = e.errors()
        raise CatalogueValidationError(
            f"Catalogue validation failed: {_describe(errors[0])}",
            details={"errors": [_describe(error) for error in errors]},
        ) from e


def strip_identity(body: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of body without identity fields."""
    return {key: value for key, value in body.items() if key not in IDENTITY_FIELDS}
