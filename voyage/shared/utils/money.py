from decimal import ROUND_HALF_UP, Decimal
from typing import Union

# Type alias for money values
Money = Decimal

Number = Union[Decimal, float, int, str]


def round_money(value: Number) -> Decimal:
    """
    Round monetary value to 2 decimal places using ROUND_HALF_UP.

    Examples:
        >>> round_money(10.125)
        Decimal('10.13')
        >>> round_money("10.115")
        Decimal('10.12')
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def percent_of(amount: Number, percent: Number | None) -> Decimal:
    """Tax amount for a percentage of a base amount, rounded to paise."""
    if percent is None:
        return Decimal("0.00")
    return round_money(Decimal(str(amount)) * Decimal(str(percent)) / Decimal("100"))
