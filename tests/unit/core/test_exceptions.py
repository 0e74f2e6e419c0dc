"""Unit tests for the business error taxonomy."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from modules.core.exceptions import (
    BusinessError,
    DuplicateResource,
    ErrorKind,
    ResourceNotFound,
    ValidationFailed,
)

pytestmark = pytest.mark.unit


class _Payload(BaseModel):
    name: str
    stock: int


class TestResourceNotFound:
    def test_message_names_resource_and_key(self):
        exc = ResourceNotFound("Product", 7)
        assert exc.message == "Product with id '7' was not found."
        assert exc.kind is ErrorKind.NOT_FOUND
        assert exc.code == "NOT_FOUND"

    def test_message_without_key(self):
        assert ResourceNotFound("Product").message == "Product was not found."


class TestValidationFailed:
    def test_single_field_message(self):
        exc = ValidationFailed.for_field("price", "Price must be greater than zero.")
        assert exc.errors == {"price": ["Price must be greater than zero."]}
        assert "price" in exc.message
        assert exc.code == "VALIDATION_ERROR"
        assert exc.kind is ErrorKind.VALIDATION

    def test_multiple_fields_message(self):
        exc = ValidationFailed({"name": ["a"], "stock": ["b"]})
        assert exc.message == "One or more validation errors occurred."

    def test_errors_are_copied(self):
        source = {"name": ["a"]}
        exc = ValidationFailed(source)
        source["name"].append("b")
        assert exc.errors == {"name": ["a"]}

    def test_from_pydantic_keys_by_field(self):
        with pytest.raises(ValidationError) as exc_info:
            _Payload.model_validate({"stock": "many"})

        exc = ValidationFailed.from_pydantic(exc_info.value)

        assert set(exc.errors) == {"name", "stock"}

    def test_from_pydantic_non_object_body(self):
        with pytest.raises(ValidationError) as exc_info:
            _Payload.model_validate([1, 2])

        exc = ValidationFailed.from_pydantic(exc_info.value)

        assert list(exc.errors) == ["non_field_errors"]


class TestDuplicateResource:
    def test_conflict_kind(self):
        exc = DuplicateResource("Product", "name", "Widget")
        assert exc.kind is ErrorKind.CONFLICT
        assert exc.code == "DUPLICATE"
        assert exc.message == "Product with name 'Widget' already exists."


class TestTaxonomy:
    @pytest.mark.parametrize(
        "exc",
        [
            ResourceNotFound("Product", 1),
            ValidationFailed.for_field("id", "bad"),
            DuplicateResource("Product", "name", "x"),
        ],
    )
    def test_all_kinds_are_business_errors(self, exc):
        assert isinstance(exc, BusinessError)

    def test_internal_errors_are_not_business_errors(self):
        assert not isinstance(RuntimeError("db down"), BusinessError)
