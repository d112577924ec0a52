"""
Request and response models for the pricing API.

Incoming rows from the quoting application arrive as loosely shaped JSON;
these models pin them to an explicit schema before anything reaches the
pricing core. Range checks (negative counts, non-positive rates) are left
to the core so every caller gets the same InvalidInputError.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.quote import QuoteStatus
from app.pricing.types import PageInput


# ============================================================================
# Requests
# ============================================================================

class BillablePagesRequest(BaseModel):
    """Billable pages for a single page."""
    word_count: int = Field(..., description="Words on the page")
    complexity: str = Field("medium", description="Complexity tier: easy, medium or hard")
    complexity_multiplier: Optional[Decimal] = Field(
        None, description="Explicit multiplier, overrides the tier lookup"
    )

    model_config = {
        'json_schema_extra': {
            'example': {
                'word_count': 500,
                'complexity': 'medium'
            }
        }
    }


class PageRequest(BaseModel):
    """One physical page of an analyzed document."""
    word_count: int = Field(..., description="Words on the page")
    complexity: str = Field("medium", description="Complexity tier")
    complexity_multiplier: Optional[Decimal] = Field(None, description="Explicit multiplier override")
    is_included: bool = Field(True, description="Excluded pages do not count toward totals")
    page_number: Optional[int] = Field(None, description="1-based page number in the source file")

    def to_page_input(self) -> PageInput:
        return PageInput(**self.model_dump())


class DocumentGroupRequest(BaseModel):
    """
    A priced document group.

    Billable pages come from, in order of precedence: an explicit
    billable_pages value (manual staff entry), the pages list, or a
    whole-file word_count priced at the group complexity.
    """
    name: Optional[str] = Field(None, description="Display name, e.g. 'Birth certificate'")
    pages: List[PageRequest] = Field(default_factory=list)
    word_count: Optional[int] = Field(None, description="Whole-file word count when not split into pages")
    complexity: str = Field("medium", description="Group complexity for whole-file pricing")
    billable_pages: Optional[Decimal] = Field(None, description="Manual billable pages override")
    base_rate: Optional[Decimal] = Field(None, description="Per-billable-page rate")
    language_multiplier: Optional[Decimal] = Field(None, description="Source language multiplier")
    certification_type: Optional[str] = Field(None, description="Certification type code")
    certification_fee: Decimal = Field(Decimal("0"), description="Flat certification fee")

    model_config = {
        'json_schema_extra': {
            'example': {
                'name': 'Birth certificate',
                'pages': [
                    {'word_count': 180, 'complexity': 'easy'},
                    {'word_count': 40, 'complexity': 'easy', 'is_included': False}
                ],
                'base_rate': 65.00,
                'language_multiplier': 1.0,
                'certification_type': 'notarized',
                'certification_fee': 50.00
            }
        }
    }


class DocumentGroupPricingRequest(BaseModel):
    """Price a single group outside of a quote."""
    group: DocumentGroupRequest
    source_language: Optional[str] = Field(None, description="Language code for multiplier lookup")


class QuoteTotalsRequest(BaseModel):
    """Full quote repricing request."""
    quote_id: Optional[str] = Field(None, description="Quote identifier, echoed back")
    status: Optional[QuoteStatus] = Field(None, description="Current quote status")
    source_language: Optional[str] = Field(None, description="Language code for multiplier lookup")
    base_rate: Optional[Decimal] = Field(None, description="Quote-level rate for groups without one")
    language_multiplier: Optional[Decimal] = Field(None, description="Quote-level language multiplier")
    groups: List[DocumentGroupRequest] = Field(default_factory=list)
    rush_fee: Optional[Decimal] = Field(None, description="Explicit rush fee, overrides turnaround")
    turnaround: Optional[str] = Field(None, description="Turnaround option code, e.g. 'rush'")
    delivery_fee: Optional[Decimal] = Field(None, description="Explicit delivery fee")
    delivery_option: Optional[str] = Field(None, description="Delivery option code")
    tax_rate: Optional[Decimal] = Field(None, description="Precomputed tax rate in [0, 1]")
    tax_name: Optional[str] = Field(None, description="Display name for an explicit tax rate")
    tax_region: Optional[str] = Field(None, description="Billing province/country code for tax lookup")


# ============================================================================
# Responses
# ============================================================================

class BillablePagesResponse(BaseModel):
    """Billable pages result."""
    success: bool = True
    word_count: int
    complexity: Optional[str] = None
    complexity_multiplier: Decimal
    billable_pages: Decimal


class GroupPricingResponse(BaseModel):
    """Per-group pricing line."""
    name: Optional[str] = None
    page_count: int = 0
    total_words: int = 0
    billable_pages: Decimal
    base_rate: Decimal
    language_multiplier: Decimal
    translation_cost: Decimal
    certification_type: Optional[str] = None
    certification_fee: Decimal
    group_total: Decimal


class QuoteTotalsResponse(BaseModel):
    """Full quote breakdown."""
    success: bool = True
    quote_id: Optional[str] = None
    document_count: int = 0
    total_pages: int = 0
    total_words: int = 0
    total_billable_pages: Decimal = Decimal("0")
    translation_subtotal: Decimal
    certification_subtotal: Decimal
    subtotal: Decimal
    rush_fee: Decimal
    turnaround: Optional[str] = None
    delivery_fee: Decimal
    tax_rate: Decimal
    tax_name: Optional[str] = None
    tax_amount: Decimal
    total: Decimal
    total_cents: int
    groups: List[GroupPricingResponse] = Field(default_factory=list)
    calculated_at: datetime = Field(default_factory=datetime.utcnow)


class TaxRateResponse(BaseModel):
    success: bool = True
    region_code: str
    region_name: str
    tax_name: str
    display_name: str
    rate: Decimal


class TurnaroundOptionResponse(BaseModel):
    code: str
    name: str
    fee_type: str
    fee_value: Decimal
    estimated_days: int
    is_default: bool = False


class PricingSettingsResponse(BaseModel):
    """Effective pricing settings."""
    success: bool = True
    words_per_page: Decimal
    rounding_increment: Decimal
    min_billable_pages: Decimal
    translation_rounding_increment: Decimal
    base_rate: Optional[Decimal] = None
    complexity_multipliers: Dict[str, Decimal]
    language_multipliers: Dict[str, Decimal]
    turnaround_options: List[TurnaroundOptionResponse]
    delivery_options: Dict[str, Decimal]
    tax_regions: List[str]
