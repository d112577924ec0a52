"""
Models package exports.
"""

from app.models.quote import QuoteStatus, FROZEN_STATUSES
from app.models.pricing import (
    # Requests
    BillablePagesRequest,
    PageRequest,
    DocumentGroupRequest,
    DocumentGroupPricingRequest,
    QuoteTotalsRequest,
    # Responses
    BillablePagesResponse,
    GroupPricingResponse,
    QuoteTotalsResponse,
    TaxRateResponse,
    TurnaroundOptionResponse,
    PricingSettingsResponse,
)

__all__ = [
    "QuoteStatus",
    "FROZEN_STATUSES",
    # Requests
    "BillablePagesRequest",
    "PageRequest",
    "DocumentGroupRequest",
    "DocumentGroupPricingRequest",
    "QuoteTotalsRequest",
    # Responses
    "BillablePagesResponse",
    "GroupPricingResponse",
    "QuoteTotalsResponse",
    "TaxRateResponse",
    "TurnaroundOptionResponse",
    "PricingSettingsResponse",
]
