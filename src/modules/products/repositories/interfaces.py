"""Product repository interface.

Specialises ``IRepository[Product]``; the Product aggregate needs no
look-ups beyond the generic unit-of-work contract.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""
