"""Unit tests for the Product model.

Covers:
- Integer primary key assigned by the database.
- CHECK constraints for price > 0 and stock >= 0.
- Natural ordering and __str__ representation.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.products.models import Product

pytestmark = pytest.mark.unit


def _create(**overrides) -> Product:
    defaults = {
        "name": "Widget",
        "description": "",
        "price": Decimal("9.99"),
        "stock": 5,
        "created_at": timezone.now(),
    }
    defaults.update(overrides)
    return Product.objects.create(**defaults)


class TestProductCreation:
    def test_assigns_integer_id(self):
        product = _create()
        assert isinstance(product.id, int)
        assert product.id > 0

    def test_ids_increase(self):
        first = _create()
        second = _create(name="Gadget")
        assert second.id > first.id

    def test_description_defaults_to_empty(self):
        product = Product.objects.create(
            name="Widget", price=Decimal("1.00"), created_at=timezone.now()
        )
        assert product.description == ""
        assert product.stock == 0


class TestProductConstraints:
    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-1.00")])
    def test_price_must_be_positive(self, price):
        with pytest.raises(IntegrityError), transaction.atomic():
            _create(price=price)

    def test_stock_cannot_be_negative(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            _create(stock=-1)


class TestProductDisplay:
    def test_ordering_is_by_id(self):
        b = _create(name="Bravo")
        a = _create(name="Alpha")
        assert list(Product.objects.all()) == [b, a]

    def test_str(self):
        product = _create(name="Widget")
        assert str(product) == f"#{product.id} - Widget"
