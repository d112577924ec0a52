"""
Amount conversion utilities for quote totals.

Provides conversion between the money representations used around pricing:
- Decimal dollars, as produced by the pricing core
- Integer cents, as expected by the payment processor (checkout / payment links)

All conversions keep Decimal precision and validate inputs.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union


class AmountConverter:
    """
    Static utility class for converting amounts between representations.

    All methods validate inputs and raise ValueError for negative amounts.
    """

    # Constants
    CENTS_PER_DOLLAR = 100
    DECIMAL_PLACES = 2

    @staticmethod
    def cents_to_dollars(cents: int) -> Decimal:
        """
        Convert cents to Decimal dollars.

        Raises:
            ValueError: If cents is negative
            TypeError: If cents is not an integer

        Examples:
            >>> AmountConverter.cents_to_dollars(6825)
            Decimal('68.25')
            >>> AmountConverter.cents_to_dollars(0)
            Decimal('0.00')
        """
        if isinstance(cents, bool) or not isinstance(cents, int):
            raise TypeError(f"Cents must be an integer, got {type(cents).__name__}")

        if cents < 0:
            raise ValueError(f"Amount cannot be negative: {cents} cents")

        return (Decimal(cents) / AmountConverter.CENTS_PER_DOLLAR).quantize(
            Decimal('0.01'), rounding=ROUND_HALF_UP
        )

    @staticmethod
    def dollars_to_cents(dollars: Union[float, int, Decimal]) -> int:
        """
        Convert dollars to cents.

        Used when handing a quote total to the payment processor.
        Floats go through str() so 0.1 converts as 0.1.

        Raises:
            ValueError: If dollars is negative
            TypeError: If dollars cannot be converted to Decimal

        Examples:
            >>> AmountConverter.dollars_to_cents(Decimal("68.25"))
            6825
            >>> AmountConverter.dollars_to_cents(0.01)
            1
        """
        try:
            decimal_amount = Decimal(str(dollars))
        except (InvalidOperation, ValueError, TypeError) as e:
            raise TypeError(f"Cannot convert {dollars} to Decimal: {e}")

        if decimal_amount < 0:
            raise ValueError(f"Amount cannot be negative: {dollars} dollars")

        cents_decimal = (decimal_amount * AmountConverter.CENTS_PER_DOLLAR).quantize(
            Decimal('1'), rounding=ROUND_HALF_UP
        )

        return int(cents_decimal)

    @staticmethod
    def format_dollars(dollars: Union[float, int, Decimal], currency_symbol: str = "$") -> str:
        """
        Format dollar amount as currency string.

        Examples:
            >>> AmountConverter.format_dollars(Decimal("1234.5"))
            '$1,234.50'
            >>> AmountConverter.format_dollars(0)
            '$0.00'
        """
        if dollars < 0:
            return f"-{currency_symbol}{abs(dollars):,.2f}"
        return f"{currency_symbol}{dollars:,.2f}"
