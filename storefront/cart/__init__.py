"""Cart package: cart lines and the cart itself."""
from .models import AddLineResult, Cart, CartLine

__all__ = [
    "AddLineResult",
    "Cart",
    "CartLine",
]
