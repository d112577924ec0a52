"""
Pricing API endpoints.

Thin HTTP layer over PricingService. PricingError subclasses raised by the
service propagate to the exception handler registered in app.main, which
converts them to HTTP responses.
"""

import logging
from fastapi import APIRouter

from app.models.pricing import (
    BillablePagesRequest,
    BillablePagesResponse,
    DocumentGroupPricingRequest,
    GroupPricingResponse,
    PricingSettingsResponse,
    QuoteTotalsRequest,
    QuoteTotalsResponse,
    TaxRateResponse,
)
from app.services.pricing_service import pricing_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/pricing", tags=["Pricing"])


@router.post("/billable-pages", response_model=BillablePagesResponse)
async def calculate_billable_pages(request: BillablePagesRequest):
    """
    Billable pages for one page.

    billable = CEIL(word_count / words_per_page × complexity multiplier, 0.1)
    """
    logger.info(f"Billable pages requested: {request.word_count} words, complexity='{request.complexity}'")
    return pricing_service.calculate_page_billable(
        request.word_count,
        request.complexity,
        request.complexity_multiplier,
    )


@router.post("/document-groups", response_model=GroupPricingResponse)
async def price_document_group(request: DocumentGroupPricingRequest):
    """Price a single document group from its pages."""
    logger.info(f"Group pricing requested: '{request.group.name}' with {len(request.group.pages)} pages")
    return pricing_service.price_document_group(request.group, request.source_language)


@router.post("/quotes/totals", response_model=QuoteTotalsResponse)
async def calculate_quote_totals(request: QuoteTotalsRequest):
    """
    Reprice a quote from scratch.

    Every group is rebuilt from its pages and the whole quote is re-aggregated:
    subtotal, rush fee, delivery fee, tax and total. Returns 409 when the
    quote status is past payment.
    """
    logger.info(
        f"Quote totals requested: quote_id={request.quote_id}, "
        f"{len(request.groups)} groups, status={request.status}"
    )
    return pricing_service.price_quote(request)


@router.get("/tax-rates/{region_code}", response_model=TaxRateResponse)
async def get_tax_rate(region_code: str):
    """Resolve the tax rate for a billing province or country code."""
    tax = pricing_service.get_tax_rate(region_code)
    logger.info(f"Tax rate resolved: {tax.region_code} = {tax.rate}")
    return TaxRateResponse(
        region_code=tax.region_code,
        region_name=tax.region_name,
        tax_name=tax.tax_name,
        display_name=tax.display_name,
        rate=tax.rate,
    )


@router.get("/settings", response_model=PricingSettingsResponse)
async def get_pricing_settings():
    """Effective pricing settings: page size, rounding, multipliers, turnaround and delivery fees."""
    return pricing_service.get_settings()
