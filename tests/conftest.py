"""Pytest configuration and fixtures"""
import os
from datetime import date, timedelta
from unittest.mock import Mock

import pytest

# Keep notifier selection deterministic regardless of the developer's shell
os.environ.setdefault("SHIPPING_NOTIFIER", "none")

from storefront.checkout import CheckoutEngine
from storefront.models import Customer, Product

TODAY = date(2026, 3, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def tv():
    """Heavy shippable product without expiry."""
    return Product(name="TV", price="499.99", quantity=10, requires_shipping=True, weight="15.5")


@pytest.fixture
def cheese():
    """Perishable shippable product, fresh for a week."""
    return Product(
        name="Cheese",
        price="5.99",
        quantity=20,
        can_expire=True,
        expiry_date=TODAY + timedelta(days=7),
        requires_shipping=True,
        weight="0.5",
    )


@pytest.fixture
def mobile_card():
    """Digital product: no expiry, no shipping."""
    return Product(name="Mobile Card", price="10.0", quantity=100)


@pytest.fixture
def expired_milk():
    return Product(
        name="Milk",
        price="1.20",
        quantity=5,
        can_expire=True,
        expiry_date=TODAY - timedelta(days=1),
        requires_shipping=True,
        weight="1.0",
    )


@pytest.fixture
def customer():
    return Customer(name="Alice", balance="2000.00")


@pytest.fixture
def notifier():
    """Mock shipping notifier"""
    return Mock()


@pytest.fixture
def engine(notifier):
    """Checkout engine pinned to TODAY"""
    return CheckoutEngine(notifier=notifier, today=lambda: TODAY)
