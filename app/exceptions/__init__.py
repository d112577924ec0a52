"""
Custom exceptions for the quote pricing application.
"""

from .pricing_exceptions import (
    PricingError,
    InvalidInputError,
    ConfigurationMissingError,
    QuoteLockedError,
    pricing_error_to_http_exception,
)

__all__ = [
    "PricingError",
    "InvalidInputError",
    "ConfigurationMissingError",
    "QuoteLockedError",
    "pricing_error_to_http_exception",
]
