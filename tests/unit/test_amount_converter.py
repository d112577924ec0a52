"""
Unit tests for AmountConverter.
"""

import pytest
from decimal import Decimal

from app.utils.amount_converter import AmountConverter


class TestCentsToDollars:

    def test_converts(self):
        assert AmountConverter.cents_to_dollars(6825) == Decimal("68.25")

    def test_zero(self):
        assert str(AmountConverter.cents_to_dollars(0)) == "0.00"

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            AmountConverter.cents_to_dollars(-1)

    @pytest.mark.parametrize("value", [12.5, "100", True])
    def test_non_integer_rejected(self, value):
        with pytest.raises(TypeError):
            AmountConverter.cents_to_dollars(value)


class TestDollarsToCents:

    def test_decimal(self):
        assert AmountConverter.dollars_to_cents(Decimal("374.03")) == 37403

    def test_float_keeps_precision(self):
        assert AmountConverter.dollars_to_cents(0.1) == 10
        assert AmountConverter.dollars_to_cents(19.99) == 1999

    def test_half_cent_rounds_up(self):
        assert AmountConverter.dollars_to_cents(Decimal("0.005")) == 1

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            AmountConverter.dollars_to_cents(Decimal("-5"))

    def test_garbage_rejected(self):
        with pytest.raises(TypeError):
            AmountConverter.dollars_to_cents("five dollars")


class TestFormatDollars:

    def test_thousands_separator(self):
        assert AmountConverter.format_dollars(Decimal("1234.5")) == "$1,234.50"

    def test_negative(self):
        assert AmountConverter.format_dollars(Decimal("-3.25")) == "-$3.25"

    def test_custom_symbol(self):
        assert AmountConverter.format_dollars(10, currency_symbol="C$") == "C$10.00"
