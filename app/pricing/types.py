"""
Immutable value objects consumed and produced by the pricing core.

These are plain carriers. Range checks (negative word counts, non-positive
rates, ...) are performed by the calculator functions so that they raise
InvalidInputError rather than a schema error.
"""

from decimal import Decimal
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.pricing.rounding import ZERO

FeeType = Literal["percentage", "fixed"]


class PageInput(BaseModel):
    """
    One physical page of an uploaded document.

    Attributes:
        word_count: Words detected on the page.
        complexity: Complexity tier name (e.g. "easy", "medium", "hard").
        complexity_multiplier: Explicit multiplier; overrides the tier lookup.
        is_included: Excluded pages do not count toward any total.
        page_number: Optional 1-based position in the source file.
    """

    model_config = ConfigDict(frozen=True)

    word_count: int
    complexity: str = "medium"
    complexity_multiplier: Optional[Decimal] = None
    is_included: bool = True
    page_number: Optional[int] = None


class GroupPageSummary(BaseModel):
    """Aggregated page figures for one document group."""

    model_config = ConfigDict(frozen=True)

    page_count: int
    total_words: int
    billable_pages: Decimal


class PricedGroup(BaseModel):
    """A document group ready for pricing."""

    model_config = ConfigDict(frozen=True)

    billable_pages: Decimal
    base_rate: Optional[Decimal] = None
    language_multiplier: Optional[Decimal] = None
    certification_fee: Decimal = ZERO
    name: Optional[str] = None


class QuoteModifiers(BaseModel):
    """Quote-level fees and the precomputed tax rate."""

    model_config = ConfigDict(frozen=True)

    rush_fee: Decimal = ZERO
    delivery_fee: Decimal = ZERO
    tax_rate: Decimal = ZERO
    tax_name: Optional[str] = None


class GroupPricing(BaseModel):
    """Per-group line of a quote breakdown."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    billable_pages: Decimal
    translation_cost: Decimal
    certification_fee: Decimal
    group_total: Decimal


class QuoteTotals(BaseModel):
    """Full quote breakdown."""

    model_config = ConfigDict(frozen=True)

    translation_subtotal: Decimal = ZERO
    certification_subtotal: Decimal = ZERO
    subtotal: Decimal = ZERO
    rush_fee: Decimal = ZERO
    delivery_fee: Decimal = ZERO
    tax_rate: Decimal = ZERO
    tax_name: Optional[str] = None
    tax_amount: Decimal = ZERO
    total: Decimal = ZERO
    groups: Tuple[GroupPricing, ...] = ()


class TurnaroundOption(BaseModel):
    """Turnaround speed option. Rush surcharges are derived from it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    fee_type: FeeType = "percentage"
    fee_value: Decimal = ZERO
    estimated_days: int = 5
    is_default: bool = False
