from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percentage(part: Number, whole: Number) -> Decimal:
    """`part / whole * 100` rounded to two places; a zero or missing whole gives 0."""

    if not whole:
        return ZERO
    return (to_decimal(part) / to_decimal(whole) * 100).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def plain_number(value: Number) -> Union[int, float]:
    """JSON-friendly number: ints stay ints, 17.50 becomes 17.5."""

    d = to_decimal(value)
    if d == d.to_integral_value():
        return int(d)
    return float(d)
