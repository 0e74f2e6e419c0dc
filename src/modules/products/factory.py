"""Product factory: the single gate through which a new product passes.

The factory is a pure constructor.  It checks the creation invariants in
a fixed order (name, price, stock), stamps ``created_at`` and returns an
unsaved ``Product``.  Trimming is left to the Service Layer.
"""

from __future__ import annotations

from decimal import Decimal

from django.utils import timezone

from modules.products.models import Product


class InvalidProductArgument(ValueError):
    """A constructor argument violates a creation invariant."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


def build_product(name: str, description: str, price: Decimal, stock: int) -> Product:
    """Build a new, unsaved ``Product``.

    Raises:
        InvalidProductArgument: naming ``name``, ``price`` or ``stock``.
    """
    if not name or not name.strip():
        raise InvalidProductArgument("name", "Name is required.")
    if not price.is_finite() or price <= 0:
        raise InvalidProductArgument("price", "Price must be greater than zero.")
    if stock < 0:
        raise InvalidProductArgument("stock", "Stock cannot be negative.")

    return Product(
        name=name,
        description=description,
        price=price,
        stock=stock,
        created_at=timezone.now(),
    )
