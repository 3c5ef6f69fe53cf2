"""Checkout outcome: a receipt on success, a failure reason otherwise."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from storefront.errors import Failure


@dataclass(frozen=True)
class ReceiptLine:
    """Snapshot of one purchased cart line."""
    quantity: int
    product_name: str
    line_total: Decimal


@dataclass(frozen=True)
class Receipt:
    """Everything the presentation layer needs after a settled checkout."""
    customer_name: str
    lines: List[ReceiptLine]
    subtotal: Decimal
    shipping_fee: Decimal
    total: Decimal
    remaining_balance: Decimal
    total_weight: Decimal = Decimal("0")
    shipped_items: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CheckoutResult:
    receipt: Optional[Receipt] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def message(self) -> str:
        if self.failure is not None:
            return self.failure.message
        return "Checkout successful"
