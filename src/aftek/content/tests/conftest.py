"""Shared pytest fixtures for aftek.content tests."""

from decimal import Decimal

import pytest


@pytest.fixture
def product(db):
    """Create an active catalog product."""
    from aftek.content.models import Product

    return Product.objects.create(
        name="4K Bullet Camera",
        description="Weatherproof outdoor camera",
        price=Decimal("129.00"),
        model="BC-4K",
        category="cameras",
        features=["4K", "IP67"],
        translations={"ja": {"name": "4Kバレットカメラ"}},
    )
