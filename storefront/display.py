"""Text rendering of the catalog, the cart and receipts."""
from typing import List

from storefront.cart.models import Cart
from storefront.catalog import Catalog
from storefront.checkout.results import Receipt
from storefront.money import format_money, to_decimal

RECEIPT_HEADER = "=== RECEIPT ==="
RECEIPT_FOOTER = "==============="


def format_catalog(catalog: Catalog) -> List[str]:
    """One line per product with price, stock, expiry and weight."""
    lines = ["Available Products:"]
    for number, product in enumerate(catalog, start=1):
        text = f"{number}. {product.name} - {format_money(product.price)} (Qty: {product.quantity})"
        if product.can_expire:
            text += f" - Expires: {product.expiry_date.isoformat()}"
        if product.requires_shipping:
            text += f" - Weight: {to_decimal(product.weight):.2f}kg"
        lines.append(text)
    return lines


def format_product_choices(catalog: Catalog) -> List[str]:
    lines = ["Available Products:"]
    lines.extend(f"{number}. {product.name}" for number, product in enumerate(catalog, start=1))
    return lines


def format_cart(cart: Cart) -> List[str]:
    if cart.is_empty:
        return ["Your cart is empty"]
    lines = ["Your Cart:"]
    for line in cart:
        lines.append(f"- {line.quantity} x {line.product.name}: {format_money(line.total_price)}")
    lines.append(f"Subtotal: {format_money(cart.subtotal)}")
    return lines


def format_receipt(receipt: Receipt) -> List[str]:
    lines = [
        RECEIPT_HEADER,
        f"Customer: {receipt.customer_name}",
        "Items Purchased:",
    ]
    for item in receipt.lines:
        lines.append(f"- {item.quantity} x {item.product_name}: {format_money(item.line_total)}")
    lines.extend([
        f"Subtotal: {format_money(receipt.subtotal)}",
        f"Shipping: {format_money(receipt.shipping_fee)}",
        f"Total: {format_money(receipt.total)}",
        f"Remaining balance: {format_money(receipt.remaining_balance)}",
        RECEIPT_FOOTER,
    ])
    return lines
