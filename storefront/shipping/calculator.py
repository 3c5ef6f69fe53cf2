"""Shipping fee: a flat base charge plus a per-kilogram rate."""
from decimal import Decimal
from typing import Union

from storefront.money import multiply, to_decimal

BASE_SHIPPING = Decimal("5.0")
PER_KG_RATE = Decimal("2.0")


def calculate_shipping_fee(total_weight: Union[int, float, Decimal, str]) -> Decimal:
    """
    Fee for ``total_weight`` kilograms of shippable goods.

    A weight of zero still costs the base charge.
    """
    return BASE_SHIPPING + multiply(PER_KG_RATE, to_decimal(total_weight))
