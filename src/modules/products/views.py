"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Request
bodies are parsed into Pydantic DTOs here; business errors raised by the
service propagate to ``modules.core.exception_handler``, which renders
them as problem-details responses.  The view never swallows exceptions.

DRF views are synchronous, so each service coroutine is driven through
``async_to_sync``.
"""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ResourceNotFound, ValidationFailed
from modules.products.dtos import CreateProductDTO, PatchProductDTO, ReplaceProductDTO
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import RESOURCE, ProductService
from modules.products.validators import INT_MAX

DTO = TypeVar("DTO", bound=BaseModel)


def _parse_id(pk: Optional[str]) -> int:
    try:
        id = int(pk)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationFailed.for_field("id", "Id must be an integer.") from None
    if id > INT_MAX:
        raise ValidationFailed.for_field("id", f"Id must be at most {INT_MAX}.")
    return id


def _parse_body(request: Request, dto_class: Type[DTO]) -> DTO:
    data: Any = request.data
    if hasattr(data, "dict"):
        data = data.dict()
    try:
        return dto_class.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationFailed.from_pydantic(exc) from exc


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository_factory=ProductDjangoRepository)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        products = async_to_sync(self._service.list_products)()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: Optional[str] = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = async_to_sync(self._service.get_product)(_parse_id(pk))
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Replace / Patch / Destroy
    # ------------------------------------------------------------------

    @extend_schema(request=CreateProductDTO, responses={201: ProductSerializer})
    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        dto = _parse_body(request, CreateProductDTO)
        product = async_to_sync(self._service.create_product)(dto)
        return Response(
            ProductSerializer(product).data,
            status=status.HTTP_201_CREATED,
            headers={"Location": f"{request.path.rstrip('/')}/{product.id}/"},
        )

    @extend_schema(request=ReplaceProductDTO, responses={200: ProductSerializer})
    def update(self, request: Request, pk: Optional[str] = None) -> Response:
        """PUT /api/v1/products/{pk}/"""
        id = _parse_id(pk)
        dto = _parse_body(request, ReplaceProductDTO)
        product = async_to_sync(self._service.replace_product)(id, dto)
        return Response(ProductSerializer(product).data)

    @extend_schema(request=PatchProductDTO, responses={200: ProductSerializer})
    def partial_update(self, request: Request, pk: Optional[str] = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        id = _parse_id(pk)
        dto = _parse_body(request, PatchProductDTO)
        product = async_to_sync(self._service.patch_product)(id, dto)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: Optional[str] = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        id = _parse_id(pk)
        if not async_to_sync(self._service.remove_product)(id):
            raise ResourceNotFound(RESOURCE, id)
        return Response(status=status.HTTP_204_NO_CONTENT)
