"""
LibraNet Money — Decimal Coercion
===================================
Amounts are Decimal, never float. Floats go through str so 0.1
stays 0.1 and not its binary expansion.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Union

from libranet.errors import InvalidArgument

Amount = Union[Decimal, int, str]


def to_decimal(name: str, value: Any) -> Decimal:
    """
    Coerce value to Decimal.

    Raises:
        InvalidArgument: value is not a decimal amount (bools included).
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be a decimal amount, got {value!r}.")
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidArgument(
            f"{name} must be a decimal amount, got {value!r}."
        ) from None


def to_finite_decimal(name: str, value: Any) -> Decimal:
    """to_decimal, additionally rejecting NaN and infinities."""
    amount = to_decimal(name, value)
    if not amount.is_finite():
        raise InvalidArgument(f"{name} must be finite, got {amount}.")
    return amount
