"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``) and only coerce
types; ``stock`` is strict, so booleans, floats and numeric strings are
rejected.  Business rules live in ``modules.products.validators`` so
that every offending field is reported together.

- ``CreateProductDTO``: input for product creation.
- ``ReplaceProductDTO``: input for full replacement (PUT), all fields required.
- ``PatchProductDTO``: input for partial updates (PATCH).
- ``ProductOutputDTO``: read projection with all product fields.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, StrictInt

if TYPE_CHECKING:
    from modules.products.models import Product


MUTABLE_FIELDS = ("name", "description", "price", "stock")


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests."""

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    description: str = ""
    stock: StrictInt = 0


class ReplaceProductDTO(BaseModel):
    """Immutable DTO for full product replacement (PUT).

    Every mutable field must be supplied; a missing field is rejected
    while parsing the request, before the Service Layer is reached.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    price: Decimal
    stock: StrictInt


class PatchProductDTO(BaseModel):
    """Immutable DTO for partial product updates (PATCH).

    A field counts as supplied when it was present in the payload, even
    with an explicit ``null``; absent fields keep their default ``None``
    but are not reported by ``supplied_fields``.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[StrictInt] = None

    def supplied_fields(self) -> Dict[str, Any]:
        """Return only the fields the caller actually sent."""
        return {
            field: getattr(self, field)
            for field in MUTABLE_FIELDS
            if field in self.model_fields_set
        }


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str
    price: Decimal
    stock: int
    created_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            created_at=product.created_at,
        )
