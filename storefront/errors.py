"""
Checkout and cart failure reasons.

Every failure in the storefront is a returned value, never a raised
exception: callers inspect ``result.ok`` and show ``failure.message``.
Message texts are centralized here so the presentation layer and the
tests agree on them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Cart errors
ERROR_INVALID_QUANTITY = "Quantity must be positive"
ERROR_INSUFFICIENT_STOCK = "Not enough stock for {name}"

# Checkout errors
ERROR_EMPTY_CART = "Cannot checkout - your cart is empty"
ERROR_OUT_OF_STOCK = "Checkout failed - {name} is out of stock"
ERROR_EXPIRED = "Checkout failed - {name} has expired"
ERROR_INSUFFICIENT_BALANCE = "Checkout failed - insufficient balance"


class FailureReason(str, Enum):
    """Why a cart or checkout operation was rejected."""
    INVALID_QUANTITY = "invalid_quantity"
    INSUFFICIENT_STOCK = "insufficient_stock"
    EXPIRED = "expired"
    EMPTY_CART = "empty_cart"
    INSUFFICIENT_BALANCE = "insufficient_balance"


@dataclass(frozen=True)
class Failure:
    """A rejected operation: the reason plus the offending product, if any."""
    reason: FailureReason
    product_name: Optional[str] = None
    during_checkout: bool = False

    @property
    def message(self) -> str:
        """Human-readable message for display."""
        name = self.product_name or "item"
        if self.reason == FailureReason.INVALID_QUANTITY:
            return ERROR_INVALID_QUANTITY
        if self.reason == FailureReason.INSUFFICIENT_STOCK:
            template = ERROR_OUT_OF_STOCK if self.during_checkout else ERROR_INSUFFICIENT_STOCK
            return template.format(name=name)
        if self.reason == FailureReason.EXPIRED:
            return ERROR_EXPIRED.format(name=name)
        if self.reason == FailureReason.EMPTY_CART:
            return ERROR_EMPTY_CART
        return ERROR_INSUFFICIENT_BALANCE


def invalid_quantity() -> Failure:
    return Failure(FailureReason.INVALID_QUANTITY)


def insufficient_stock(product_name: str, during_checkout: bool = False) -> Failure:
    return Failure(FailureReason.INSUFFICIENT_STOCK, product_name, during_checkout)


def expired(product_name: str) -> Failure:
    return Failure(FailureReason.EXPIRED, product_name, during_checkout=True)


def empty_cart() -> Failure:
    return Failure(FailureReason.EMPTY_CART, during_checkout=True)


def insufficient_balance() -> Failure:
    return Failure(FailureReason.INSUFFICIENT_BALANCE, during_checkout=True)
