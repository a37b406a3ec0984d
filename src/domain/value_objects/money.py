"""
Money helpers.

Amounts are ``Decimal`` values in the major currency unit, rounded half-up to
cents wherever they are stored or shown.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value: Number) -> Decimal:
    """Round an amount to cents."""
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_whole_units(value: Number) -> Decimal:
    """Round an amount to whole currency units."""
    return to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def to_minor_units(value: Number) -> int:
    """Convert an amount to integer cents."""
    return int(to_money(value) * 100)
