"""Conversion of exact fractional day counts to whole days.

Everything upstream of these helpers is exact ``Fraction`` arithmetic; this
module is the single point where a value is approximated, using a
fixed-precision decimal context with banker's rounding rather than binary
floats so repeated subdivision across six levels cannot accumulate
representation error.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Context, Decimal
from fractions import Fraction
from typing import Union

Number = Union[int, Decimal, Fraction]

_CONTEXT = Context(prec=34, rounding=ROUND_HALF_EVEN)


def as_fraction(value: Union[Number, float, str]) -> Fraction:
    """Return ``value`` as an exact ``Fraction``.

    Floats go through their shortest decimal text (``0.1`` becomes 1/10, not
    the binary expansion), matching how callers write the number.
    """

    if isinstance(value, bool):
        raise TypeError("boolean is not a numeric quantity")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, (int, Decimal)):
        return Fraction(value)
    if isinstance(value, float):
        return Fraction(repr(value))
    if isinstance(value, str):
        return Fraction(value.strip())
    raise TypeError(f"unsupported numeric type: {type(value).__name__}")


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Fraction):
        return _CONTEXT.divide(Decimal(value.numerator), Decimal(value.denominator))
    return _CONTEXT.create_decimal(value)


def round_half_even(value: Number) -> int:
    """Round to the nearest integer, ties to even."""

    return int(_to_decimal(value).to_integral_value(rounding=ROUND_HALF_EVEN, context=_CONTEXT))


def to_days(value: Number) -> int:
    """Round a fractional day count to whole days, never below one day."""

    return max(1, round_half_even(value))


__all__ = ["as_fraction", "round_half_even", "to_days"]
