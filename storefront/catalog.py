"""In-memory product catalog owned by a storefront session."""
from datetime import date, timedelta
from typing import Iterator, List, Optional

from storefront.models import Product


class Catalog:
    """Ordered products, addressed by 1-based number in the menu."""

    def __init__(self, products: Optional[List[Product]] = None):
        self.products: List[Product] = list(products or [])

    def __len__(self) -> int:
        return len(self.products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self.products)

    def add(self, product: Product) -> Product:
        self.products.append(product)
        return product

    def get(self, number: int) -> Optional[Product]:
        """Product at 1-based ``number``, or None if out of range."""
        if number < 1 or number > len(self.products):
            return None
        return self.products[number - 1]

    def find(self, name: str) -> Optional[Product]:
        """Case-insensitive lookup by product name."""
        wanted = name.strip().lower()
        return next((p for p in self.products if p.name.lower() == wanted), None)


def seed_catalog(today: Optional[date] = None) -> Catalog:
    """Default store stock; perishable expiry dates are relative to ``today``."""
    today = today or date.today()
    return Catalog([
        Product(name="TV", price="499.99", quantity=10, requires_shipping=True, weight="15.5"),
        Product(
            name="Cheese", price="5.99", quantity=20,
            can_expire=True, expiry_date=today + timedelta(days=7),
            requires_shipping=True, weight="0.5",
        ),
        Product(name="Mobile Card", price="10.0", quantity=100),
        Product(
            name="Biscuits", price="3.50", quantity=15,
            can_expire=True, expiry_date=today + timedelta(days=30),
            requires_shipping=True, weight="0.3",
        ),
    ])
