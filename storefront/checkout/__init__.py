"""Checkout package: the engine and its result types."""
from .results import CheckoutResult, Receipt, ReceiptLine
from .service import CheckoutEngine

__all__ = [
    "CheckoutEngine",
    "CheckoutResult",
    "Receipt",
    "ReceiptLine",
]
