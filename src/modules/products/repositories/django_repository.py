"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's async QuerySet API for
reads.  Writes are staged in memory and only reach the database inside
``commit``, which applies them in a single ``transaction.atomic`` block.
A cancelled or failed operation that never commits therefore leaves no
partial write behind.

Inserts are forced, and updates or removals that match no row raise
``StaleEntityError`` instead of silently re-creating a deleted product.
A staged update may name its columns, so concurrent partial updates to
different fields do not overwrite each other.

Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, and the Service Layer decides how to translate a
missing entity into a business error.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import structlog
from asgiref.sync import sync_to_async
from django.db import transaction

from modules.core.repositories.interfaces import StaleEntityError
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_INSERT = "insert"
_UPDATE = "update"
_DELETE = "delete"

WRITABLE_COLUMNS = tuple(
    field.name
    for field in Product._meta.concrete_fields
    if field.editable and not field.primary_key
)

_Staged = Tuple[str, Product, Tuple[str, ...]]


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def __init__(self) -> None:
        self._pending: List[_Staged] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_all(self) -> List[Product]:
        return [product async for product in Product.objects.all()]

    async def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key, or ``None``."""
        return await Product.objects.filter(pk=id).afirst()

    # ------------------------------------------------------------------
    # Staged writes
    # ------------------------------------------------------------------

    async def add(self, entity: Product) -> None:
        self._pending.append((_INSERT, entity, ()))

    async def update(
        self, entity: Product, fields: Optional[Sequence[str]] = None
    ) -> None:
        self._pending.append((_UPDATE, entity, tuple(fields or WRITABLE_COLUMNS)))

    async def remove(self, entity: Product) -> None:
        self._pending.append((_DELETE, entity, ()))

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    async def commit(self) -> None:
        """Flush every staged write atomically."""
        if not self._pending:
            return
        pending, self._pending = self._pending, []
        await sync_to_async(self._flush)(pending)

    async def rollback(self) -> None:
        if self._pending:
            logger.info("product.rolled_back", discarded=len(self._pending))
        self._pending = []

    @staticmethod
    @transaction.atomic
    def _flush(pending: List[_Staged]) -> None:
        applied = []
        for operation, product, columns in pending:
            product_id = product.pk
            if operation == _INSERT:
                product.save(force_insert=True)
                product_id = product.pk
            elif operation == _UPDATE:
                values = {column: getattr(product, column) for column in columns}
                if not Product.objects.filter(pk=product_id).update(**values):
                    raise StaleEntityError(product_id)
            else:
                deleted, _ = product.delete()
                if not deleted:
                    raise StaleEntityError(product_id)
            applied.append((operation, product_id, columns))

        for operation, product_id, columns in applied:
            logger.info(
                "product.committed",
                operation=operation,
                product_id=product_id,
                columns=list(columns),
            )
