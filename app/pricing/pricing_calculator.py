"""
Pricing aggregator for translation quotes.

This module provides the quote pricing logic: translation cost per document
group, group totals, rush surcharge and the full quote breakdown.

    translation_cost(group) = CEIL(billable × base_rate × language_multiplier / 2.50) × 2.50
    group_total(group)      = translation_cost + certification_fee
    subtotal                = Σ translation_cost + Σ certification_fee
    taxable_base            = subtotal + rush_fee + delivery_fee
    tax_amount              = taxable_base × tax_rate   (half-up to cents)
    total                   = taxable_base + tax_amount

Translation cost is rounded per group before summation. Every call is a
from-scratch reduction over its inputs; nothing is cached or patched.
"""

from decimal import Decimal
from typing import Iterable, Optional

from app.exceptions.pricing_exceptions import InvalidInputError
from app.pricing.rounding import (
    Number,
    ZERO,
    require_non_negative,
    require_positive,
    round_money,
    round_up_to_increment,
    to_decimal,
)
from app.pricing.types import GroupPricing, PricedGroup, QuoteModifiers, QuoteTotals, TurnaroundOption

DEFAULT_TRANSLATION_ROUNDING_INCREMENT = Decimal("2.50")
DEFAULT_MIN_BILLABLE_PAGES_PER_GROUP = Decimal("1.0")

ONE_HUNDRED = Decimal("100")


def compute_translation_cost(
    billable_pages: Number,
    base_rate: Optional[Number],
    language_multiplier: Optional[Number],
    rounding_increment: Number = DEFAULT_TRANSLATION_ROUNDING_INCREMENT,
) -> Decimal:
    """
    Translation cost for one group, rounded UP to the nearest increment.

    Raises:
        InvalidInputError: Negative billable pages, non-positive rate,
            multiplier or increment.
        ConfigurationMissingError: base_rate or language_multiplier is None.

    Examples:
        >>> compute_translation_cost(1, 65, 1)
        Decimal('65.00')
        >>> compute_translation_cost(Decimal("2.6"), 65, Decimal("1.2"))
        Decimal('205.00')
    """
    pages = require_non_negative(billable_pages, "billable_pages")
    rate = require_positive(base_rate, "base_rate")
    multiplier = require_positive(language_multiplier, "language_multiplier")
    increment = require_positive(rounding_increment, "translation_rounding_increment")

    cost = round_up_to_increment(pages * rate * multiplier, increment)
    return round_money(cost)


def compute_group_total(translation_cost: Number, certification_fee: Number) -> Decimal:
    cost = require_non_negative(translation_cost, "translation_cost")
    fee = require_non_negative(certification_fee, "certification_fee")
    return round_money(cost + fee)


def compute_rush_fee(subtotal: Number, turnaround: Optional[TurnaroundOption]) -> Decimal:
    """
    Rush surcharge for a turnaround option.

    Percentage options charge subtotal × fee_value / 100 (half-up to cents);
    fixed options charge fee_value. No option, or a zero fee, charges nothing.
    """
    base = require_non_negative(subtotal, "subtotal")
    if turnaround is None:
        return round_money(ZERO)

    value = require_non_negative(turnaround.fee_value, "fee_value")
    if turnaround.fee_type == "percentage":
        return round_money(base * value / ONE_HUNDRED)
    return round_money(value)


def _validate_tax_rate(tax_rate: Number) -> Decimal:
    rate = to_decimal(tax_rate, "tax_rate")
    if rate < 0 or rate > 1:
        raise InvalidInputError(
            f"Tax rate must be between 0 and 1, received: {tax_rate}", field="tax_rate"
        )
    return rate


def price_group(
    group: PricedGroup,
    translation_rounding_increment: Number = DEFAULT_TRANSLATION_ROUNDING_INCREMENT,
    min_billable_pages_per_group: Number = DEFAULT_MIN_BILLABLE_PAGES_PER_GROUP,
) -> GroupPricing:
    """
    Price a single group.

    A positive billable figure below the group minimum is raised to it.
    Zero billable pages means the group has no included pages and carries
    no translation cost.
    """
    minimum = require_non_negative(min_billable_pages_per_group, "min_billable_pages_per_group")
    billable = require_non_negative(group.billable_pages, "billable_pages")
    if billable > 0:
        billable = max(minimum, billable)

    translation_cost = compute_translation_cost(
        billable,
        group.base_rate,
        group.language_multiplier,
        rounding_increment=translation_rounding_increment,
    )
    certification_fee = round_money(require_non_negative(group.certification_fee, "certification_fee"))

    return GroupPricing(
        name=group.name,
        billable_pages=billable,
        translation_cost=translation_cost,
        certification_fee=certification_fee,
        group_total=compute_group_total(translation_cost, certification_fee),
    )


def compute_quote_totals(
    groups: Iterable[PricedGroup],
    modifiers: Optional[QuoteModifiers] = None,
    translation_rounding_increment: Number = DEFAULT_TRANSLATION_ROUNDING_INCREMENT,
    min_billable_pages_per_group: Number = DEFAULT_MIN_BILLABLE_PAGES_PER_GROUP,
) -> QuoteTotals:
    """
    Compute the full breakdown for a quote.

    Args:
        groups: Document groups to price. An empty collection is a valid,
            transient editing state and produces all-zero totals.
        modifiers: Rush fee, delivery fee and tax rate. Defaults to zeros.
        translation_rounding_increment: Per-group cost rounding (default $2.50).
        min_billable_pages_per_group: Floor for groups with any billable pages (default 1.0).

    Returns:
        QuoteTotals: Immutable breakdown with per-group lines.

    Raises:
        InvalidInputError: Any negative fee or page figure, non-positive rate
            or multiplier, or a tax rate outside [0, 1].
        ConfigurationMissingError: A group is missing its base rate or
            language multiplier.

    Examples:
        >>> totals = compute_quote_totals(
        ...     [PricedGroup(billable_pages=1, base_rate=65, language_multiplier=1)],
        ...     QuoteModifiers(tax_rate=Decimal("0.05")),
        ... )
        >>> totals.tax_amount, totals.total
        (Decimal('3.25'), Decimal('68.25'))
    """
    modifiers = modifiers or QuoteModifiers()
    rush_fee = round_money(require_non_negative(modifiers.rush_fee, "rush_fee"))
    delivery_fee = round_money(require_non_negative(modifiers.delivery_fee, "delivery_fee"))
    tax_rate = _validate_tax_rate(modifiers.tax_rate)

    lines = tuple(
        price_group(
            group,
            translation_rounding_increment=translation_rounding_increment,
            min_billable_pages_per_group=min_billable_pages_per_group,
        )
        for group in groups
    )

    translation_subtotal = round_money(sum((line.translation_cost for line in lines), ZERO))
    certification_subtotal = round_money(sum((line.certification_fee for line in lines), ZERO))
    subtotal = translation_subtotal + certification_subtotal

    taxable_base = subtotal + rush_fee + delivery_fee
    tax_amount = round_money(taxable_base * tax_rate)

    return QuoteTotals(
        translation_subtotal=translation_subtotal,
        certification_subtotal=certification_subtotal,
        subtotal=subtotal,
        rush_fee=rush_fee,
        delivery_fee=delivery_fee,
        tax_rate=tax_rate,
        tax_name=modifiers.tax_name,
        tax_amount=tax_amount,
        total=taxable_base + tax_amount,
        groups=lines,
    )
