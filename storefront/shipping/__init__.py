"""Shipping: fee calculation and shipment notifiers."""
from .calculator import BASE_SHIPPING, PER_KG_RATE, calculate_shipping_fee
from .notifiers import (
    CarrierWebhookNotifier,
    ConsoleShippingNotifier,
    LoggingShippingNotifier,
    NullShippingNotifier,
    ShippingNotifier,
    build_notifier,
)

__all__ = [
    "BASE_SHIPPING",
    "PER_KG_RATE",
    "calculate_shipping_fee",
    "CarrierWebhookNotifier",
    "ConsoleShippingNotifier",
    "LoggingShippingNotifier",
    "NullShippingNotifier",
    "ShippingNotifier",
    "build_notifier",
]
