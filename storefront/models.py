"""Entity models - Pydantic models for catalog products and customers."""
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from storefront.cart.models import Cart
from storefront.money import to_decimal as _to_decimal


class Product(BaseModel):
    """Catalog product.

    ``expiry_date`` is only consulted when ``can_expire`` is set, and
    ``weight`` only when ``requires_shipping`` is set. ``quantity`` is
    decremented in place by checkout settlement, so carts hold references
    to the same instance the catalog holds.
    """
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=0)
    can_expire: bool = False
    expiry_date: Optional[date] = None
    requires_shipping: bool = False
    weight: Decimal = Field(default=Decimal("0"), ge=0)  # kg per unit

    @field_validator("price", "weight", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return _to_decimal(v)

    @model_validator(mode="after")
    def check_expiry_date(self) -> "Product":
        if self.can_expire and self.expiry_date is None:
            raise ValueError("expiry_date is required when can_expire is set")
        return self

    def is_expired(self, today: Optional[date] = None) -> bool:
        """True once ``today`` is strictly after the expiry date."""
        if not self.can_expire:
            return False
        today = today or date.today()
        return today > self.expiry_date


class Customer(BaseModel):
    """Shopper with a balance and exactly one cart.

    The cart lives in a private attribute so it is created once per
    customer and never copied or revalidated by pydantic.
    """
    name: str
    balance: Decimal = Field(default=Decimal("0"), ge=0)

    _cart: Cart = PrivateAttr(default_factory=Cart)

    @field_validator("balance", mode="before")
    @classmethod
    def convert_balance_to_decimal(cls, v):
        return _to_decimal(v)

    @property
    def cart(self) -> Cart:
        return self._cart
