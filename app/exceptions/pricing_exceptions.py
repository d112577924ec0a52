"""
Pricing specific exceptions and error handling.
"""

from typing import Optional
from fastapi import HTTPException


class PricingError(Exception):
    """Base class for pricing related errors."""

    def __init__(self, message: str, status_code: int = 500, field: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.field = field
        super().__init__(self.message)


class InvalidInputError(PricingError, ValueError):
    """Raised when a pricing input is out of range (negative word count, non-positive rate, ...)."""

    def __init__(self, message: str = "Invalid pricing input", field: Optional[str] = None):
        super().__init__(message, 400, field)


class ConfigurationMissingError(PricingError, LookupError):
    """Raised when a required rate or multiplier is absent and no default applies."""

    def __init__(self, message: str = "Required pricing configuration is missing", field: Optional[str] = None):
        super().__init__(message, 422, field)


class QuoteLockedError(PricingError):
    """Raised when repricing is requested for a quote whose status is frozen."""

    def __init__(self, message: str = "Quote pricing is locked", status: Optional[str] = None):
        self.status = status
        super().__init__(message, 409, "status")


def pricing_error_to_http_exception(error: PricingError) -> HTTPException:
    """
    Convert PricingError to FastAPI HTTPException.

    Args:
        error: PricingError instance

    Returns:
        HTTPException: FastAPI compatible exception
    """
    if isinstance(error, InvalidInputError):
        error_code = "invalid_input"
    elif isinstance(error, ConfigurationMissingError):
        error_code = "configuration_missing"
    elif isinstance(error, QuoteLockedError):
        error_code = "quote_locked"
    else:
        error_code = "pricing_error"

    return HTTPException(
        status_code=error.status_code,
        detail={
            "error": error_code,
            "message": error.message,
            "field": error.field,
        }
    )
