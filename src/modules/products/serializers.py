"""Product DRF serializers for API output.

The serializer operates at the Interface layer (API Views) and only
renders responses; it reads plain attributes, so it accepts both a
``Product`` instance and a ``ProductOutputDTO``.  Input is parsed into
the Pydantic DTOs from ``dtos.py`` and validated by the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "stock",
            "created_at",
        ]
        read_only_fields = fields
