"""Product model.

Business rules backed at the storage level:
- Price must be greater than zero (CHECK constraint).
- Stock cannot be negative (CHECK constraint).

``created_at`` is stamped by ``modules.products.factory`` and is never
written again; field-level rules live in ``modules.products.validators``
and are enforced by the Service Layer before any mutation.
"""

from __future__ import annotations

from django.db import models


class Product(models.Model):
    """Product aggregate root with an integer, store-assigned primary key."""

    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock = models.IntegerField(default=0)
    created_at = models.DateTimeField(editable=False)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"#{self.id} - {self.name}"
