"""
Checkout engine.

Runs the checkout gates in order and settles the purchase only when every
gate passes:

1. empty cart
2. per line, in cart order: stock still available, product not expired
3. subtotal, shipping weight and fee, total
4. balance covers total

Gates have no side effects, so a rejected checkout leaves the balance,
the catalog and the cart exactly as they were and can simply be retried.

Assumes a single session at a time: with several customers sharing a
catalog, the stock gate and the stock decrement would have to run as one
locked transaction.
"""
from datetime import date
from typing import Callable, Dict, List, Optional

from storefront import errors
from storefront.cart.models import CartLine
from storefront.checkout.results import CheckoutResult, Receipt, ReceiptLine
from storefront.errors import Failure
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import Customer
from storefront.money import total
from storefront.shipping.calculator import calculate_shipping_fee
from storefront.shipping.notifiers import NullShippingNotifier, ShippingNotifier

logger = get_logger(__name__)

ReceiptHandler = Callable[[Receipt], None]


class CheckoutEngine:
    """
    Validates and settles a customer's cart.

    Args:
        notifier: Told which products ship after settlement
        today: Clock returning the current date for expiry checks
        receipt_handler: Optional callback receiving the receipt before the
            cart is cleared (e.g. a console printer)
    """

    def __init__(
        self,
        notifier: Optional[ShippingNotifier] = None,
        today: Callable[[], date] = date.today,
        receipt_handler: Optional[ReceiptHandler] = None,
    ):
        self.notifier = notifier if notifier is not None else NullShippingNotifier()
        self._today = today
        self._receipt_handler = receipt_handler

    def _validate_lines(self, lines: List[CartLine]) -> Optional[Failure]:
        """
        First failing line wins; later lines are not inspected.

        Stock is compared with the units requested so far for the same
        product, so several lines of one product cannot oversell it.
        """
        today = self._today()
        requested: Dict[int, int] = {}
        for line in lines:
            product = line.product
            requested[id(product)] = requested.get(id(product), 0) + line.quantity
            if requested[id(product)] > product.quantity:
                return errors.insufficient_stock(product.name, during_checkout=True)
            if product.is_expired(today):
                return errors.expired(product.name)
        return None

    def _reject(self, customer: Customer, failure: Failure) -> CheckoutResult:
        logger.warning(
            f"Checkout rejected for {sanitize_string_for_logging(customer.name)}: "
            f"{failure.reason.value}"
            + (f" ({sanitize_string_for_logging(failure.product_name)})" if failure.product_name else "")
        )
        return CheckoutResult(failure=failure)

    def checkout(self, customer: Customer) -> CheckoutResult:
        """
        Check out the customer's cart.

        Args:
            customer: Customer whose cart is purchased

        Returns:
            CheckoutResult with a Receipt, or with an EmptyCart /
            InsufficientStock / Expired / InsufficientBalance failure
        """
        cart = customer.cart
        if cart.is_empty:
            return self._reject(customer, errors.empty_cart())

        failure = self._validate_lines(cart.lines)
        if failure is not None:
            return self._reject(customer, failure)

        subtotal = total(line.total_price for line in cart.lines)

        shippable = cart.shippable_lines
        total_weight = total(line.shipping_weight for line in shippable)
        # Base fee applies even when nothing ships
        shipping_fee = calculate_shipping_fee(total_weight)
        grand_total = subtotal + shipping_fee

        if grand_total > customer.balance:
            return self._reject(customer, errors.insufficient_balance())

        # Settlement: nothing below can fail
        customer.balance -= grand_total
        for line in cart.lines:
            line.product.quantity -= line.quantity

        shipped_products = [line.product for line in shippable]
        if shipped_products:
            try:
                self.notifier.notify(shipped_products)
            except Exception:
                logger.exception("Shipping notifier failed after settlement")

        receipt = Receipt(
            customer_name=customer.name,
            lines=[
                ReceiptLine(
                    quantity=line.quantity,
                    product_name=line.product.name,
                    line_total=line.total_price,
                )
                for line in cart.lines
            ],
            subtotal=subtotal,
            shipping_fee=shipping_fee,
            total=grand_total,
            remaining_balance=customer.balance,
            total_weight=total_weight,
            shipped_items=[product.name for product in shipped_products],
        )
        logger.info(
            f"Checkout settled for {sanitize_string_for_logging(customer.name)}: "
            f"{len(receipt.lines)} line(s), total {grand_total}, balance left {customer.balance}"
        )

        if self._receipt_handler is not None:
            try:
                self._receipt_handler(receipt)
            except Exception:
                logger.exception("Receipt handler failed after settlement")

        cart.clear()
        return CheckoutResult(receipt=receipt)
