"""Pytest fixtures: demo carts used across the pricing tests."""

from typing import List

import pytest

from checkout_pricing.models import CartItem


@pytest.fixture
def cart_a() -> List[CartItem]:
    # subtotal 600
    return [
        CartItem(sku="TS", name="T-Shirt", category="Clothing", unit_price=350, quantity=1),
        CartItem(sku="HAT", name="Hat", category="Accessories", unit_price=250, quantity=1),
    ]


@pytest.fixture
def cart_b() -> List[CartItem]:
    # subtotal 2540, Clothing 1050
    return [
        CartItem(sku="TS", name="T-Shirt", category="Clothing", unit_price=350, quantity=1),
        CartItem(sku="HOOD", name="Hoodie", category="Clothing", unit_price=700, quantity=1),
        CartItem(sku="WATCH", name="Watch", category="Electronics", unit_price=850, quantity=1),
        CartItem(sku="BAG", name="Bag", category="Accessories", unit_price=640, quantity=1),
    ]


@pytest.fixture
def cart_c() -> List[CartItem]:
    # subtotal 830
    return [
        CartItem(sku="TS", name="T-Shirt", category="Clothing", unit_price=350, quantity=1),
        CartItem(sku="HAT", name="Hat", category="Accessories", unit_price=250, quantity=1),
        CartItem(sku="BELT", name="Belt", category="Accessories", unit_price=230, quantity=1),
    ]
