from __future__ import annotations

import random
from decimal import Decimal

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

CATALOG = [
    ("Monitor 27\"", "IPS panel, 144 Hz", Decimal("1299.90")),
    ("Mechanical Keyboard", "Brown switches, ABNT2 layout", Decimal("399.90")),
    ("Gaming Mouse", "16000 DPI optical sensor", Decimal("249.90")),
    ("Notebook 14\"", "16 GB RAM, 512 GB SSD", Decimal("3999.00")),
    ("Headset", "Closed-back, detachable microphone", Decimal("299.90")),
    ("Office Desk", "120 x 60 cm, oak finish", Decimal("899.00")),
    ("Ergonomic Chair", "Adjustable lumbar support", Decimal("1499.00")),
    ("Bookshelf", "Five shelves", Decimal("699.00")),
    ("A4 Paper", "500 sheets, 75 g/m2", Decimal("29.90")),
    ("Blue Pen", "", Decimal("4.90")),
    ("Notebook Stand", "Aluminium, foldable", Decimal("149.90")),
    ("LED Lamp", "Dimmable desk lamp", Decimal("59.90")),
]


class Command(BaseCommand):
    help = "Seed database with sample catalog products."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Creating products...")

        service = ProductService(repository_factory=ProductDjangoRepository)
        create = async_to_sync(service.create_product)

        created = 0
        for name, description, price in CATALOG:
            if Product.objects.filter(name=name).exists():
                continue
            create(
                CreateProductDTO(
                    name=name,
                    description=description,
                    price=price,
                    stock=random.randint(0, 200),
                )
            )
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={created}, "
                f"skipped={len(CATALOG) - created}"
            )
        )
