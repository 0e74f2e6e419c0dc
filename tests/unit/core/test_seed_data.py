from io import StringIO

import pytest
from django.core.management import call_command

from modules.core.management.commands.seed_data import CATALOG
from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestSeedDataCommand:
    def test_seeds_whole_catalog(self):
        out = StringIO()
        call_command("seed_data", stdout=out)

        assert Product.objects.count() == len(CATALOG)
        assert f"products={len(CATALOG)}" in out.getvalue()

    def test_second_run_skips_existing(self):
        call_command("seed_data", stdout=StringIO())
        out = StringIO()
        call_command("seed_data", stdout=out)

        assert Product.objects.count() == len(CATALOG)
        assert "products=0" in out.getvalue()
        assert f"skipped={len(CATALOG)}" in out.getvalue()

    def test_seeded_products_satisfy_business_rules(self):
        call_command("seed_data", stdout=StringIO())

        for product in Product.objects.all():
            assert product.price > 0
            assert product.stock >= 0
            assert 3 <= len(product.name) <= 100
