"""
Billable-pages calculator.

Converts per-page word counts and a complexity multiplier into billable
pages, and aggregates pages into a document group total.

Formula (per page):
    billable = CEIL((word_count / words_per_page) × multiplier / increment) × increment

Group total:
    Σ billable of included pages, rounded up to the increment, never below
    min_billable_pages once at least one included page exists.

This module is pure: no logging, no I/O, no state between calls.
"""

from decimal import Decimal
from typing import Iterable, Mapping, Optional

from app.exceptions.pricing_exceptions import ConfigurationMissingError, InvalidInputError
from app.pricing.rounding import (
    Number,
    ZERO,
    require_non_negative,
    require_positive,
    round_up_to_increment,
)
from app.pricing.types import GroupPageSummary, PageInput

DEFAULT_WORDS_PER_PAGE = Decimal("225")
DEFAULT_ROUNDING_INCREMENT = Decimal("0.1")
DEFAULT_MIN_BILLABLE_PAGES = Decimal("1.0")

DEFAULT_COMPLEXITY_MULTIPLIERS: Mapping[str, Decimal] = {
    "easy": Decimal("1.00"),
    "medium": Decimal("1.15"),
    "hard": Decimal("1.25"),
}


def _validate_word_count(word_count: int) -> int:
    if isinstance(word_count, bool) or not isinstance(word_count, int):
        raise InvalidInputError(
            f"Word count must be an integer, received: {word_count!r}", field="word_count"
        )
    if word_count < 0:
        raise InvalidInputError(
            f"Word count cannot be negative, received: {word_count}", field="word_count"
        )
    return word_count


def compute_billable_pages(
    word_count: int,
    complexity_multiplier: Number,
    words_per_page: Number = DEFAULT_WORDS_PER_PAGE,
    rounding_increment: Number = DEFAULT_ROUNDING_INCREMENT,
) -> Decimal:
    """
    Compute billable pages for a single page.

    Args:
        word_count: Words on the page. Must be a non-negative integer.
        complexity_multiplier: Positive multiplier (1.00 / 1.15 / 1.25 for
            easy / medium / hard in the default configuration).
        words_per_page: Words that make up one billable page (default 225).
        rounding_increment: Granularity the result is rounded UP to (default 0.1).

    Returns:
        Decimal: Billable pages, a multiple of rounding_increment. Zero words
        yields zero; the group-level minimum is applied by
        compute_group_billable_pages.

    Raises:
        InvalidInputError: Negative word count, non-positive multiplier,
            words_per_page or rounding_increment.

    Examples:
        >>> compute_billable_pages(226, 1.0)
        Decimal('1.1')
        >>> compute_billable_pages(500, 1.15)
        Decimal('2.6')
        >>> compute_billable_pages(0, 1.25)
        Decimal('0.0')
    """
    _validate_word_count(word_count)
    multiplier = require_positive(complexity_multiplier, "complexity_multiplier")
    per_page = require_positive(words_per_page, "words_per_page")
    increment = require_positive(rounding_increment, "rounding_increment")

    # Multiply before dividing so exact quotients stay exact.
    raw = Decimal(word_count) * multiplier / per_page
    return round_up_to_increment(raw, increment)


def complexity_multiplier_for(
    complexity: Optional[str],
    multipliers: Optional[Mapping[str, Number]] = None,
) -> Decimal:
    """
    Look up the multiplier for a complexity tier.

    Raises:
        ConfigurationMissingError: If the tier has no configured multiplier.
    """
    table = DEFAULT_COMPLEXITY_MULTIPLIERS if multipliers is None else multipliers
    tier = (complexity or "").strip().lower()
    if tier not in table:
        available = ", ".join(table.keys())
        raise ConfigurationMissingError(
            f"No multiplier configured for complexity '{complexity}'. Available: {available}",
            field="complexity",
        )
    return require_positive(table[tier], f"complexity multiplier for '{tier}'")


def page_multiplier(page: PageInput, multipliers: Optional[Mapping[str, Number]] = None) -> Decimal:
    """Return the page's explicit multiplier override, else its tier multiplier."""
    if page.complexity_multiplier is not None:
        return require_positive(page.complexity_multiplier, "complexity_multiplier")
    return complexity_multiplier_for(page.complexity, multipliers)


def compute_page_billable(
    page: PageInput,
    multipliers: Optional[Mapping[str, Number]] = None,
    words_per_page: Number = DEFAULT_WORDS_PER_PAGE,
    rounding_increment: Number = DEFAULT_ROUNDING_INCREMENT,
) -> Decimal:
    return compute_billable_pages(
        page.word_count,
        page_multiplier(page, multipliers),
        words_per_page=words_per_page,
        rounding_increment=rounding_increment,
    )


def compute_group_billable_pages(
    pages: Iterable[PageInput],
    multipliers: Optional[Mapping[str, Number]] = None,
    words_per_page: Number = DEFAULT_WORDS_PER_PAGE,
    rounding_increment: Number = DEFAULT_ROUNDING_INCREMENT,
    min_billable_pages: Number = DEFAULT_MIN_BILLABLE_PAGES,
) -> GroupPageSummary:
    """
    Aggregate pages into a document group summary.

    Pages with is_included=False are skipped entirely: they add neither
    words nor billable pages, and their multipliers are not looked up.
    A group with at least one included page bills no less than
    min_billable_pages, even when every page has zero words.

    Examples:
        >>> summary = compute_group_billable_pages([PageInput(word_count=0)])
        >>> summary.billable_pages
        Decimal('1.0')
    """
    increment = require_positive(rounding_increment, "rounding_increment")
    minimum = require_non_negative(min_billable_pages, "min_billable_pages")

    page_count = 0
    total_words = 0
    billable = ZERO
    for page in pages:
        if not page.is_included:
            continue
        page_count += 1
        total_words += _validate_word_count(page.word_count)
        billable += compute_page_billable(
            page,
            multipliers,
            words_per_page=words_per_page,
            rounding_increment=increment,
        )

    if page_count == 0:
        return GroupPageSummary(page_count=0, total_words=0, billable_pages=ZERO)

    billable = max(minimum, round_up_to_increment(billable, increment))
    return GroupPageSummary(page_count=page_count, total_words=total_words, billable_pages=billable)
