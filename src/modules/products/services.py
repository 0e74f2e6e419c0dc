"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to an ``IProductRepository`` unit of work.  Every operation
opens its own repository scope; validation runs before any mutation,
mutation before ``commit``, and a scope that exits without committing
discards whatever it staged.

Business rules enforced here:
- Name is required, trimmed, 3 to 100 characters.
- Description is trimmed, at most 500 characters.
- Price is greater than zero with at most 2 decimal places.
- Stock cannot be negative.
- ``id`` and ``created_at`` never change after creation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List

import structlog

from modules.core.exceptions import ResourceNotFound, ValidationFailed
from modules.core.repositories.interfaces import StaleEntityError
from modules.products.dtos import ProductOutputDTO
from modules.products.factory import InvalidProductArgument, build_product
from modules.products.validators import collect_errors, validate_id

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        PatchProductDTO,
        ReplaceProductDTO,
    )
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

RESOURCE = "Product"


def _normalise(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Trim the string fields that are stored trimmed."""
    return {
        field: value.strip() if field in ("name", "description") else value
        for field, value in fields.items()
    }


class ProductService:
    """Application service for Product use-cases.

    Receives a repository factory via constructor injection (DIP); each
    call produces a fresh unit of work scoped to one operation.
    """

    def __init__(self, repository_factory: Callable[[], IProductRepository]) -> None:
        self._repository_factory = repository_factory

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_products(self) -> List[Product]:
        """Return every product in the store's natural order."""
        async with self._repository_factory() as repo:
            products = await repo.get_all()
        logger.info("product.listed", count=len(products))
        return products

    async def get_product(self, id: int) -> ProductOutputDTO:
        """Retrieve a single product as a read projection.

        Raises:
            ValidationFailed: if ``id`` is not positive.
            ResourceNotFound: if the product does not exist.
        """
        messages = validate_id(id)
        if messages:
            raise ValidationFailed({"id": messages})

        async with self._repository_factory() as repo:
            product = await repo.get_by_id(id)
        if product is None:
            raise ResourceNotFound(RESOURCE, id)
        logger.info("product.retrieved", product_id=id)
        return ProductOutputDTO.from_entity(product)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_product(self, dto: CreateProductDTO) -> Product:
        """Create and persist a new product.

        Raises:
            ValidationFailed: keyed by every field that breaks a rule.
        """
        fields = {
            "name": dto.name,
            "description": dto.description,
            "price": dto.price,
            "stock": dto.stock,
        }
        self._ensure_valid(fields, operation="create")
        fields = _normalise(fields)

        try:
            product = build_product(**fields)
        except InvalidProductArgument as exc:
            raise ValidationFailed.for_field(exc.field, str(exc)) from exc

        async with self._repository_factory() as repo:
            await repo.add(product)
            await repo.commit()
        logger.info("product.created", product_id=product.id, name=product.name)
        return product

    async def replace_product(self, id: int, dto: ReplaceProductDTO) -> Product:
        """Overwrite every mutable field of an existing product (PUT).

        Raises:
            ResourceNotFound: if the product does not exist.
            ValidationFailed: keyed by every field that breaks a rule.
        """
        fields = {
            "name": dto.name,
            "description": dto.description,
            "price": dto.price,
            "stock": dto.stock,
        }
        async with self._repository_factory() as repo:
            product = await self._get_existing(repo, id)
            self._ensure_valid(fields, operation="replace", product_id=id)
            self._apply(product, _normalise(fields))
            await repo.update(product, fields=list(fields))
            await self._commit_existing(repo, id)
        logger.info("product.replaced", product_id=id)
        return product

    async def patch_product(self, id: int, dto: PatchProductDTO) -> Product:
        """Overwrite only the fields the caller supplied (PATCH).

        A failure on any supplied field aborts the whole update before
        anything is written.

        Raises:
            ResourceNotFound: if the product does not exist.
            ValidationFailed: keyed by every supplied field that breaks a rule.
        """
        fields = dto.supplied_fields()
        async with self._repository_factory() as repo:
            product = await self._get_existing(repo, id)
            self._ensure_valid(fields, operation="patch", product_id=id)
            if fields:
                self._apply(product, _normalise(fields))
                await repo.update(product, fields=sorted(fields))
                await self._commit_existing(repo, id)
        logger.info("product.patched", product_id=id, fields=sorted(fields))
        return product

    async def remove_product(self, id: int) -> bool:
        """Delete a product.

        Returns ``True`` when the product existed and was removed,
        ``False`` when there was nothing to remove.
        """
        async with self._repository_factory() as repo:
            product = await repo.get_by_id(id)
            if product is None:
                logger.info("product.remove_missing", product_id=id)
                return False
            await repo.remove(product)
            try:
                await repo.commit()
            except StaleEntityError:
                logger.info("product.remove_missing", product_id=id)
                return False
        logger.info("product.removed", product_id=id)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def _get_existing(repo: IProductRepository, id: int) -> Product:
        product = await repo.get_by_id(id)
        if product is None:
            raise ResourceNotFound(RESOURCE, id)
        return product

    @staticmethod
    async def _commit_existing(repo: IProductRepository, id: int) -> None:
        # the row may have been deleted after it was read in this scope
        try:
            await repo.commit()
        except StaleEntityError as exc:
            raise ResourceNotFound(RESOURCE, id) from exc

    @staticmethod
    def _ensure_valid(fields: Dict[str, Any], **context: Any) -> None:
        errors = collect_errors(fields)
        if errors:
            logger.warning(
                "product.validation_failed", fields=sorted(errors), **context
            )
            raise ValidationFailed(errors)

    @staticmethod
    def _apply(product: Product, fields: Dict[str, Any]) -> None:
        for field, value in fields.items():
            setattr(product, field, value)
