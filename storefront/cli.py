"""
Interactive menu for the storefront.

``StorefrontSession`` owns the catalog, the customer and the checkout
engine for one shopper, prompts for input and prints results. All business
decisions are delegated to ``Cart.add_line`` and ``CheckoutEngine.checkout``.
"""

import sys
from datetime import date
from typing import Callable, Iterable, Optional

from storefront.catalog import Catalog, seed_catalog
from storefront.checkout import CheckoutEngine, CheckoutResult, Receipt
from storefront.display import (
    format_cart,
    format_catalog,
    format_product_choices,
    format_receipt,
)
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import Customer
from storefront.money import parse_money
from storefront.shipping import ShippingNotifier, build_notifier

logger = get_logger(__name__)

MENU = (
    "\n===== MENU =====",
    "1. View Products",
    "2. Add to Cart",
    "3. View Cart",
    "4. Checkout",
    "5. Exit",
)


class StorefrontSession:
    """One shopper's interactive session against a catalog."""

    def __init__(
        self,
        customer: Customer,
        catalog: Catalog,
        notifier: Optional[ShippingNotifier] = None,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        today: Callable[[], date] = date.today,
    ):
        self.customer = customer
        self.catalog = catalog
        self._input = input_fn
        self._output = output
        self.engine = CheckoutEngine(
            notifier=notifier if notifier is not None else build_notifier(),
            today=today,
            receipt_handler=self.show_receipt,
        )

    def _write(self, lines: Iterable[str]) -> None:
        for line in lines:
            self._output(line)

    def _read_int(self, prompt: str) -> Optional[int]:
        raw = self._input(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            self._output("Please enter a whole number.")
            return None

    def view_products(self) -> None:
        self._output("")
        self._write(format_catalog(self.catalog))

    def add_to_cart(self) -> None:
        self._output("")
        self._write(format_product_choices(self.catalog))
        number = self._read_int("Select product number: ")
        if number is None:
            return
        product = self.catalog.get(number)
        if product is None:
            self._output("Invalid product number")
            return
        quantity = self._read_int("Enter quantity: ")
        if quantity is None:
            return
        result = self.customer.cart.add_line(product, quantity)
        self._output(result.message)

    def view_cart(self) -> None:
        if not self.customer.cart.is_empty:
            self._output("")
        self._write(format_cart(self.customer.cart))

    def checkout(self) -> CheckoutResult:
        result = self.engine.checkout(self.customer)
        if not result.ok:
            self._output(result.message)
        return result

    def show_receipt(self, receipt: Receipt) -> None:
        self._output("")
        self._write(format_receipt(receipt))

    def run(self) -> None:
        """Menu loop; returns when the shopper exits or input ends."""
        actions = {
            1: self.view_products,
            2: self.add_to_cart,
            3: self.view_cart,
            4: self.checkout,
        }
        while True:
            self._write(MENU)
            try:
                choice = self._read_int("Choose an option: ")
            except EOFError:
                return
            if choice is None:
                continue
            if choice == 5:
                self._output("Thank you for shopping with us!")
                return
            action = actions.get(choice)
            if action is None:
                self._output("Invalid choice")
                continue
            try:
                action()
            except EOFError:
                return


def prompt_customer(
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> Customer:
    """Ask for the shopper's name and starting balance."""
    name = input_fn("Enter your name: ").strip()
    while True:
        raw = input_fn("Enter your balance: ")
        try:
            balance = parse_money(raw)
        except ValueError:
            output("Please enter a valid amount.")
            continue
        if balance < 0:
            output("Balance cannot be negative.")
            continue
        return Customer(name=name, balance=balance)


def main() -> int:
    """Console entry point."""
    try:
        customer = prompt_customer()
        logger.info(f"Session started for {sanitize_string_for_logging(customer.name)}")
        StorefrontSession(customer=customer, catalog=seed_catalog()).run()
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted by user. Exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
