"""
Tests for CheckoutEngine
"""

from decimal import Decimal
from unittest.mock import Mock

from storefront.checkout import CheckoutEngine
from storefront.errors import FailureReason
from storefront.models import Customer
from storefront.shipping import CarrierWebhookNotifier


def _state(customer, *products):
    """Everything a rejected checkout must leave untouched."""
    return (
        customer.balance,
        [p.quantity for p in products],
        [(line.product.name, line.quantity) for line in customer.cart],
    )


class TestPricing:
    """Subtotal, shipping and total."""

    def test_two_tvs(self, engine, tv, notifier):
        customer = Customer(name="Bob", balance="1066.98")
        customer.cart.add_line(tv, 2)

        result = engine.checkout(customer)

        assert result.ok
        receipt = result.receipt
        assert receipt.subtotal == Decimal("999.98")
        assert receipt.total_weight == Decimal("31.0")
        assert receipt.shipping_fee == Decimal("67.0")
        assert receipt.total == Decimal("1066.98")
        assert receipt.remaining_balance == Decimal("0")
        assert customer.balance == Decimal("0")

    def test_one_cent_short(self, engine, tv):
        customer = Customer(name="Bob", balance="1066.97")
        customer.cart.add_line(tv, 2)

        result = engine.checkout(customer)

        assert not result.ok
        assert result.failure.reason == FailureReason.INSUFFICIENT_BALANCE
        assert result.message == "Checkout failed - insufficient balance"

    def test_only_shipping_lines_count_toward_weight(self, engine, customer, cheese, mobile_card):
        customer.cart.add_line(cheese, 4)
        customer.cart.add_line(mobile_card, 3)

        receipt = engine.checkout(customer).receipt

        assert receipt.subtotal == Decimal("53.96")
        assert receipt.total_weight == Decimal("2.0")
        assert receipt.shipping_fee == Decimal("9.0")
        assert receipt.total == Decimal("62.96")

    def test_base_fee_charged_when_nothing_ships(self, engine, customer, mobile_card, notifier):
        customer.cart.add_line(mobile_card, 2)

        receipt = engine.checkout(customer).receipt

        assert receipt.shipping_fee == Decimal("5.0")
        assert receipt.total == Decimal("25.0")
        assert receipt.shipped_items == []
        notifier.notify.assert_not_called()


class TestSettlement:
    def test_success_mutates_everything(self, engine, customer, tv, cheese, notifier):
        customer.cart.add_line(tv, 1)
        customer.cart.add_line(cheese, 2)

        result = engine.checkout(customer)

        assert result.ok
        assert tv.quantity == 9
        assert cheese.quantity == 18
        # 499.99 + 11.98 + 5 + 2 * (15.5 + 1.0)
        assert customer.balance == Decimal("2000.00") - Decimal("549.97")
        assert customer.cart.is_empty
        notifier.notify.assert_called_once_with([tv, cheese])

    def test_receipt_snapshot_survives_cart_clear(self, engine, customer, tv, mobile_card):
        customer.cart.add_line(tv, 1)
        customer.cart.add_line(mobile_card, 3)

        receipt = engine.checkout(customer).receipt

        assert customer.cart.is_empty
        assert receipt.customer_name == "Alice"
        assert [(item.quantity, item.product_name, item.line_total) for item in receipt.lines] == [
            (1, "TV", Decimal("499.99")),
            (3, "Mobile Card", Decimal("30.0")),
        ]

    def test_receipt_handler_runs_before_cart_clear(self, customer, tv, today):
        seen = []

        def handler(receipt):
            seen.append((receipt.total, len(customer.cart)))

        engine = CheckoutEngine(today=lambda: today, receipt_handler=handler)
        customer.cart.add_line(tv, 1)
        engine.checkout(customer)

        assert seen == [(Decimal("535.99"), 1)]

    def test_stock_can_reach_zero(self, engine, customer, cheese):
        customer.cart.add_line(cheese, 20)
        customer.balance = Decimal("500")

        assert engine.checkout(customer).ok
        assert cheese.quantity == 0

    def test_second_checkout_is_empty_cart(self, engine, customer, tv):
        customer.cart.add_line(tv, 1)
        assert engine.checkout(customer).ok

        result = engine.checkout(customer)

        assert result.failure.reason == FailureReason.EMPTY_CART

    def test_default_notifier_is_silent(self, customer, tv, today):
        engine = CheckoutEngine(today=lambda: today)
        customer.cart.add_line(tv, 1)

        assert engine.checkout(customer).ok


class TestGates:
    """A failed gate never changes balance, stock or cart."""

    def test_empty_cart(self, engine, customer, notifier):
        result = engine.checkout(customer)

        assert not result.ok
        assert result.receipt is None
        assert result.failure.reason == FailureReason.EMPTY_CART
        assert result.message == "Cannot checkout - your cart is empty"
        assert customer.balance == Decimal("2000.00")
        notifier.notify.assert_not_called()

    def test_stock_sold_after_adding(self, engine, customer, tv, cheese):
        customer.cart.add_line(cheese, 1)
        customer.cart.add_line(tv, 5)
        tv.quantity = 3  # sold elsewhere before checkout
        before = _state(customer, tv, cheese)

        result = engine.checkout(customer)

        assert result.failure.reason == FailureReason.INSUFFICIENT_STOCK
        assert result.failure.product_name == "TV"
        assert result.message == "Checkout failed - TV is out of stock"
        assert _state(customer, tv, cheese) == before

    def test_retry_after_restock(self, engine, customer, tv):
        customer.cart.add_line(tv, 2)
        tv.quantity = 1
        assert not engine.checkout(customer).ok
        assert len(customer.cart) == 1

        tv.quantity = 2
        result = engine.checkout(customer)

        assert result.ok
        assert tv.quantity == 0

    def test_expired_yesterday(self, engine, customer, expired_milk, mobile_card, notifier):
        customer.cart.add_line(mobile_card, 1)
        customer.cart.add_line(expired_milk, 1)
        before = _state(customer, expired_milk, mobile_card)

        result = engine.checkout(customer)

        assert result.failure.reason == FailureReason.EXPIRED
        assert result.failure.product_name == "Milk"
        assert result.message == "Checkout failed - Milk has expired"
        assert _state(customer, expired_milk, mobile_card) == before
        notifier.notify.assert_not_called()

    def test_expiry_day_itself_is_fine(self, customer, cheese):
        engine = CheckoutEngine(today=lambda: cheese.expiry_date)
        customer.cart.add_line(cheese, 1)

        assert engine.checkout(customer).ok

    def test_first_failing_line_is_reported(self, engine, customer, tv, expired_milk):
        customer.cart.add_line(expired_milk, 1)
        customer.cart.add_line(tv, 2)
        tv.quantity = 0

        result = engine.checkout(customer)

        assert result.failure.reason == FailureReason.EXPIRED
        assert result.failure.product_name == "Milk"

    def test_stock_checked_before_expiry_on_same_line(self, engine, customer, expired_milk):
        customer.cart.add_line(expired_milk, 5)
        expired_milk.quantity = 1

        result = engine.checkout(customer)

        assert result.failure.reason == FailureReason.INSUFFICIENT_STOCK

    def test_balance_gate_leaves_state(self, engine, tv):
        customer = Customer(name="Carol", balance="100")
        customer.cart.add_line(tv, 1)
        before = _state(customer, tv)

        result = engine.checkout(customer)

        assert result.failure.reason == FailureReason.INSUFFICIENT_BALANCE
        assert _state(customer, tv) == before

    def test_lines_of_same_product_cannot_oversell(self, engine, customer, tv):
        customer.cart.add_line(tv, 6)
        customer.cart.add_line(tv, 5)
        customer.balance = Decimal("10000")
        before = _state(customer, tv)

        result = engine.checkout(customer)

        assert result.failure.reason == FailureReason.INSUFFICIENT_STOCK
        assert _state(customer, tv) == before

    def test_lines_of_same_product_within_stock(self, engine, customer, tv):
        customer.cart.add_line(tv, 1)
        customer.cart.add_line(tv, 2)
        customer.balance = Decimal("10000")

        assert engine.checkout(customer).ok
        assert tv.quantity == 7

    def test_notifier_gets_only_shippable_products(self, customer, cheese, mobile_card, today):
        notifier = Mock()
        engine = CheckoutEngine(notifier=notifier, today=lambda: today)
        customer.cart.add_line(mobile_card, 1)
        customer.cart.add_line(cheese, 1)

        engine.checkout(customer)

        notifier.notify.assert_called_once_with([cheese])


class TestAfterSettlement:
    """Collaborators called after settlement cannot undo or repeat it."""

    def test_failing_notifier_still_clears_cart(self, customer, tv, today):
        notifier = Mock()
        notifier.notify.side_effect = RuntimeError("carrier down")
        engine = CheckoutEngine(notifier=notifier, today=lambda: today)
        customer.cart.add_line(tv, 1)

        result = engine.checkout(customer)

        assert result.ok
        assert customer.cart.is_empty
        assert customer.balance == Decimal("2000.00") - Decimal("535.99")
        assert tv.quantity == 9

    def test_retry_after_notifier_failure_charges_once(self, customer, tv, today):
        notifier = CarrierWebhookNotifier(url="https://carrier.test/\x00bad", retries=0)
        engine = CheckoutEngine(notifier=notifier, today=lambda: today)
        customer.cart.add_line(tv, 1)

        assert engine.checkout(customer).ok
        retry = engine.checkout(customer)

        assert retry.failure.reason == FailureReason.EMPTY_CART
        assert customer.balance == Decimal("1464.01")
        assert tv.quantity == 9

    def test_failing_receipt_handler_still_clears_cart(self, customer, tv, today):
        def handler(receipt):
            raise ValueError("printer jammed")

        engine = CheckoutEngine(today=lambda: today, receipt_handler=handler)
        customer.cart.add_line(tv, 1)

        result = engine.checkout(customer)

        assert result.ok
        assert customer.cart.is_empty
        assert customer.balance == Decimal("1464.01")

    def test_falsy_notifier_is_kept(self, customer, tv, today):
        class SilentNotifier:
            calls = []

            def __bool__(self):
                return False

            def notify(self, products):
                self.calls.append(list(products))

        notifier = SilentNotifier()
        engine = CheckoutEngine(notifier=notifier, today=lambda: today)
        customer.cart.add_line(tv, 1)

        engine.checkout(customer)

        assert engine.notifier is notifier
        assert notifier.calls == [[tv]]
