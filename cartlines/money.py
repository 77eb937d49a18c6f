"""
Money Utilities - Decimal conversion for caller-supplied amounts.

Line item prices belong to the pricing engine; handlers only normalize
what callers pass in (custom prices, credit amounts).
"""
from decimal import Decimal, InvalidOperation
from typing import Union


def to_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Convert any value to Decimal leniently.

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
        # Go through str() so floats keep their printed precision
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_amount(value: object) -> Decimal:
    """
    Convert a caller-supplied amount to Decimal, rejecting garbage.

    Unlike to_decimal() this never falls back to zero.

    Raises:
        ValueError: If the value is missing, not numeric or not finite
    """
    if value is None or isinstance(value, bool):
        raise ValueError("amount is required")
    if not isinstance(value, (str, int, float, Decimal)):
        raise ValueError(f"amount must be numeric, got {type(value).__name__}")

    try:
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"amount is not a number: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"amount must be finite: {value!r}")
    return result
