"""
Money Utilities - Decimal operations for prices, balances and fees.

Amounts stay Decimal from input to settlement; rounding to cents happens
only when a value is displayed.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Iterable, Union

Number = Union[str, int, float, Decimal]

# Display precision (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOL = "$"


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal.

    Floats go through ``str`` so that 499.99 becomes Decimal("499.99")
    rather than its binary approximation.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None

    Raises:
        ValueError: If the value is not a number
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a monetary value: {value!r}") from e


def parse_money(text: str) -> Decimal:
    """Parse user-entered amount such as ``"250"``, ``"$1,066.98"``."""
    cleaned = text.strip().lstrip(CURRENCY_SYMBOL).replace(",", "")
    value = to_decimal(cleaned)
    if not value.is_finite():
        raise ValueError(f"Not a monetary value: {text!r}")
    return value


def round_money(value: Number) -> Decimal:
    """Round a monetary value to cents (ROUND_HALF_UP)."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Number) -> str:
    """Format a monetary value for display, e.g. ``$1066.98``."""
    return f"{CURRENCY_SYMBOL}{round_money(value):.2f}"


def multiply(value: Number, factor: Number) -> Decimal:
    """Multiplication of a monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def total(values: Iterable[Number]) -> Decimal:
    """Sum monetary values; an empty iterable sums to Decimal("0")."""
    return sum((to_decimal(v) for v in values), Decimal("0"))
