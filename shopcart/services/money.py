"""
Money Utilities - Decimal operations for product costs and wallet balances.

Costs and balances share one unit; all arithmetic goes through Decimal so a
checkout total never picks up float drift.
"""
from decimal import Decimal, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # str() keeps the shortest repr, e.g. 0.1 -> "0.1"
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_money(value: Number) -> Decimal:
    """
    Strict conversion for stored prices.

    Unlike to_decimal, bad input is an error rather than zero.

    Raises:
        ValueError: value is missing, unparseable or not finite
    """
    if value is None or isinstance(value, bool):
        raise ValueError("amount is required")
    try:
        amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise ValueError(f"invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"invalid amount: {value!r}")
    return amount


def to_float(value: Number) -> float:
    """
    Convert to float for JSON serialization.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def subtract(a: Number, b: Number) -> Decimal:
    """Safe subtraction of monetary values."""
    return to_decimal(a) - to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def compare(a: Number, b: Number) -> int:
    """
    Compare two monetary values.

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b
    """
    diff = to_decimal(a) - to_decimal(b)
    if diff < 0:
        return -1
    elif diff > 0:
        return 1
    return 0
