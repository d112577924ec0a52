"""
Decimal arithmetic helpers shared by the billable-page and pricing calculators.

All pricing arithmetic runs on ``decimal.Decimal``. Floats are converted
through their string representation so 1.15 stays 1.15 and not
1.149999999999999911182158029987...
"""

from decimal import Decimal, InvalidOperation, ROUND_CEILING, ROUND_HALF_UP
from typing import Optional, Union

from app.exceptions.pricing_exceptions import ConfigurationMissingError, InvalidInputError

Number = Union[int, float, Decimal, str]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Optional[Number], field: str) -> Decimal:
    """
    Convert a numeric input to Decimal.

    Raises:
        ConfigurationMissingError: If value is None.
        InvalidInputError: If value is not numeric or not finite.
    """
    if value is None:
        raise ConfigurationMissingError(f"{field} is required", field=field)
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number, got bool", field=field)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInputError(f"{field} must be a number, got {value!r}", field=field) from None
    if not result.is_finite():
        raise InvalidInputError(f"{field} must be finite, got {value!r}", field=field)
    return result


def require_positive(value: Optional[Number], field: str) -> Decimal:
    result = to_decimal(value, field)
    if result <= 0:
        raise InvalidInputError(f"{field} must be positive, received: {value}", field=field)
    return result


def require_non_negative(value: Optional[Number], field: str) -> Decimal:
    result = to_decimal(value, field)
    if result < 0:
        raise InvalidInputError(f"{field} cannot be negative, received: {value}", field=field)
    return result


def round_up_to_increment(value: Decimal, increment: Decimal) -> Decimal:
    """
    Round value UP to the nearest multiple of increment.

    Examples:
        >>> round_up_to_increment(Decimal("1.00444"), Decimal("0.1"))
        Decimal('1.1')
        >>> round_up_to_increment(Decimal("65"), Decimal("2.50"))
        Decimal('65.00')
    """
    steps = (value / increment).to_integral_value(rounding=ROUND_CEILING)
    return steps * increment


def round_money(value: Decimal) -> Decimal:
    """Round a money amount half-up to cents."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
