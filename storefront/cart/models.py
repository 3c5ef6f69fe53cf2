"""Cart models with Decimal-based pricing."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Iterator, List, Optional

from storefront.errors import Failure, insufficient_stock, invalid_quantity
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.money import multiply, total

if TYPE_CHECKING:
    from storefront.models import Product

logger = get_logger(__name__)


@dataclass
class CartLine:
    """Requested quantity of a product.

    The product is shared with the catalog, not copied, so price and stock
    seen here are always current.
    """
    product: Product
    quantity: int

    @property
    def total_price(self) -> Decimal:
        """Price for all units, unrounded."""
        return multiply(self.product.price, self.quantity)

    @property
    def is_shippable(self) -> bool:
        return self.product.requires_shipping

    @property
    def shipping_weight(self) -> Decimal:
        """Weight this line contributes to shipping (0 if it does not ship)."""
        if not self.is_shippable:
            return Decimal("0")
        return multiply(self.product.weight, self.quantity)


@dataclass
class AddLineResult:
    """Outcome of ``Cart.add_line``: the new line, or why it was refused."""
    line: Optional[CartLine] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def message(self) -> str:
        if self.failure is not None:
            return self.failure.message
        return f"{self.line.quantity} {self.line.product.name}(s) added to cart"


@dataclass
class Cart:
    """Ordered cart lines; insertion order is the receipt order."""
    lines: List[CartLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def subtotal(self) -> Decimal:
        """Sum of line totals at current prices."""
        return total(line.total_price for line in self.lines)

    @property
    def shippable_lines(self) -> List[CartLine]:
        return [line for line in self.lines if line.is_shippable]

    def add_line(self, product: Product, quantity: int) -> AddLineResult:
        """
        Append a line for ``quantity`` units of ``product``.

        Stock is checked against the product's quantity right now but is not
        reserved; checkout validates it again.

        Args:
            product: Catalog product (kept by reference)
            quantity: Requested units

        Returns:
            AddLineResult with the new line, or an InvalidQuantity /
            InsufficientStock failure
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            return AddLineResult(failure=invalid_quantity())
        if quantity > product.quantity:
            logger.info(
                f"Refused {quantity} x {sanitize_string_for_logging(product.name)}: "
                f"only {product.quantity} in stock"
            )
            return AddLineResult(failure=insufficient_stock(product.name))

        line = CartLine(product=product, quantity=quantity)
        self.lines.append(line)
        logger.debug(f"Added {quantity} x {sanitize_string_for_logging(product.name)} to cart")
        return AddLineResult(line=line)

    def clear(self) -> None:
        self.lines.clear()
