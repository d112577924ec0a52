"""
Unit tests for pricing error types and their HTTP conversion.
"""

import pytest
from fastapi import HTTPException

from app.exceptions.pricing_exceptions import (
    ConfigurationMissingError,
    InvalidInputError,
    PricingError,
    QuoteLockedError,
    pricing_error_to_http_exception,
)


class TestPricingErrors:
    """Error hierarchy."""

    def test_invalid_input(self):
        error = InvalidInputError("Word count cannot be negative", field="word_count")

        assert isinstance(error, PricingError)
        assert isinstance(error, ValueError)
        assert error.status_code == 400
        assert error.field == "word_count"
        assert str(error) == "Word count cannot be negative"

    def test_configuration_missing(self):
        error = ConfigurationMissingError(field="base_rate")

        assert isinstance(error, LookupError)
        assert error.status_code == 422
        assert error.message == "Required pricing configuration is missing"

    def test_quote_locked(self):
        error = QuoteLockedError("Quote Q-1 is 'paid'; pricing is frozen", status="paid")

        assert error.status_code == 409
        assert error.status == "paid"
        assert error.field == "status"


class TestHttpConversion:

    @pytest.mark.parametrize("error, status_code, code", [
        (InvalidInputError("bad", field="tax_rate"), 400, "invalid_input"),
        (ConfigurationMissingError("missing", field="base_rate"), 422, "configuration_missing"),
        (QuoteLockedError("locked", status="completed"), 409, "quote_locked"),
        (PricingError("boom"), 500, "pricing_error"),
    ])
    def test_conversion(self, error, status_code, code):
        result = pricing_error_to_http_exception(error)

        assert isinstance(result, HTTPException)
        assert result.status_code == status_code
        assert result.detail["error"] == code
        assert result.detail["message"] == error.message
        assert result.detail["field"] == error.field
