"""Unit tests for the product factory.

Covers:
- Successful construction with ``created_at`` stamped.
- Invariant checks in order: name, price, stock.
- No persistence side effects.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.utils import timezone

from modules.products.factory import InvalidProductArgument, build_product
from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestBuildProductValid:
    def test_returns_unsaved_product(self):
        product = build_product("Widget", "A small widget", Decimal("9.99"), 5)

        assert isinstance(product, Product)
        assert product.pk is None
        assert product.name == "Widget"
        assert product.description == "A small widget"
        assert product.price == Decimal("9.99")
        assert product.stock == 5

    def test_stamps_created_at_with_current_time(self):
        before = timezone.now()
        product = build_product("Widget", "", Decimal("1.00"), 0)
        after = timezone.now()

        assert before <= product.created_at <= after

    def test_keeps_strings_as_given(self):
        product = build_product("  Widget  ", " desc ", Decimal("1.00"), 0)

        assert product.name == "  Widget  "
        assert product.description == " desc "

    def test_zero_stock_is_allowed(self):
        assert build_product("Widget", "", Decimal("1.00"), 0).stock == 0

    def test_does_not_touch_storage(self):
        build_product("Widget", "", Decimal("1.00"), 0)

        assert Product.objects.count() == 0


class TestBuildProductInvalid:
    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name_names_name_field(self, name):
        with pytest.raises(InvalidProductArgument) as exc_info:
            build_product(name, "", Decimal("1.00"), 0)

        assert exc_info.value.field == "name"

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-0.01"), Decimal("NaN")])
    def test_non_positive_price_names_price_field(self, price):
        with pytest.raises(InvalidProductArgument) as exc_info:
            build_product("Widget", "", price, 0)

        assert exc_info.value.field == "price"

    def test_negative_stock_names_stock_field(self):
        with pytest.raises(InvalidProductArgument) as exc_info:
            build_product("Widget", "", Decimal("1.00"), -1)

        assert exc_info.value.field == "stock"

    def test_name_is_checked_before_price_and_stock(self):
        with pytest.raises(InvalidProductArgument) as exc_info:
            build_product("", "", Decimal("0"), -1)

        assert exc_info.value.field == "name"

    def test_price_is_checked_before_stock(self):
        with pytest.raises(InvalidProductArgument) as exc_info:
            build_product("Widget", "", Decimal("-5"), -1)

        assert exc_info.value.field == "price"

    def test_is_a_value_error(self):
        with pytest.raises(ValueError, match="Stock cannot be negative"):
            build_product("Widget", "", Decimal("1.00"), -3)
