"""
Storefront Package

Single-process storefront simulation:
- models: Product and Customer entities (pydantic)
- cart: cart lines and add-to-cart validation
- shipping: shipping fee and shipment notifiers
- checkout: validation gates, settlement and receipts
- catalog / display / cli: in-memory catalog and the text menu
"""

__version__ = "1.0.0"
