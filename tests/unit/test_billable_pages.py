"""
Unit tests for the billable-pages calculator.

Formula: billable = CEIL((words / 225) × complexity × 10) / 10
Group:   max(1.0, Σ included page billable) when any page is included
"""

import pytest
from decimal import Decimal

from app.exceptions.pricing_exceptions import ConfigurationMissingError, InvalidInputError
from app.pricing.billable_pages import (
    complexity_multiplier_for,
    compute_billable_pages,
    compute_group_billable_pages,
    compute_page_billable,
)
from app.pricing.types import PageInput


class TestComputeBillablePages:
    """Single-page billable pages."""

    def test_rounds_up_just_over_one_page(self):
        """226 words at 1.0 is 1.00444 pages, billed as 1.1 (never 1.0)."""
        assert compute_billable_pages(226, 1.0) == Decimal("1.1")

    def test_medium_complexity_example(self):
        """500 words × 1.15 / 225 = 2.5556 → 2.6"""
        assert compute_billable_pages(500, Decimal("1.15")) == Decimal("2.6")

    def test_exact_page_is_not_rounded_up(self):
        assert compute_billable_pages(225, 1) == Decimal("1.0")

    def test_exact_product_with_float_multiplier(self):
        """450 × 1.15 / 225 is exactly 2.3; float arithmetic must not push it to 2.4."""
        assert compute_billable_pages(450, 1.15) == Decimal("2.3")

    def test_zero_words_is_zero(self):
        for multiplier in (1.0, 1.15, 1.25, 7):
            assert compute_billable_pages(0, multiplier) == 0

    def test_hard_complexity(self):
        """180 words × 1.25 / 225 = 1.0 exactly"""
        assert compute_billable_pages(180, 1.25) == Decimal("1.0")

    def test_custom_words_per_page(self):
        assert compute_billable_pages(251, 1, words_per_page=250) == Decimal("1.1")

    def test_custom_rounding_increment(self):
        """1.00444 rounded up to a quarter page is 1.25"""
        assert compute_billable_pages(226, 1, rounding_increment=Decimal("0.25")) == Decimal("1.25")

    def test_monotonic_in_word_count(self):
        previous = Decimal("0")
        for word_count in range(0, 2000, 37):
            current = compute_billable_pages(word_count, Decimal("1.15"))
            assert current >= previous
            previous = current

    def test_monotonic_in_multiplier(self):
        previous = Decimal("0")
        for multiplier in ("0.5", "1.0", "1.15", "1.25", "2", "3.3"):
            current = compute_billable_pages(700, Decimal(multiplier))
            assert current >= previous
            previous = current

    def test_never_below_raw_value(self):
        for word_count in (1, 99, 226, 1001, 4500):
            billable = compute_billable_pages(word_count, Decimal("1.15"))
            raw = Decimal(word_count) * Decimal("1.15") / Decimal("225")
            assert billable >= raw
            assert billable - raw < Decimal("0.1")


class TestComputeBillablePagesValidation:
    """Input validation."""

    def test_negative_word_count_rejected(self):
        with pytest.raises(InvalidInputError, match="cannot be negative"):
            compute_billable_pages(-1, 1.0)

    def test_non_integer_word_count_rejected(self):
        with pytest.raises(InvalidInputError, match="must be an integer"):
            compute_billable_pages(12.5, 1.0)

    def test_zero_multiplier_rejected(self):
        with pytest.raises(InvalidInputError, match="complexity_multiplier must be positive"):
            compute_billable_pages(100, 0)

    def test_negative_multiplier_rejected(self):
        with pytest.raises(InvalidInputError):
            compute_billable_pages(100, Decimal("-1.15"))

    def test_zero_words_per_page_rejected(self):
        with pytest.raises(InvalidInputError, match="words_per_page"):
            compute_billable_pages(100, 1, words_per_page=0)

    def test_invalid_input_is_a_value_error(self):
        """Plain-Python callers can catch ValueError."""
        with pytest.raises(ValueError):
            compute_billable_pages(-5, 1)


class TestComplexityMultiplier:
    """Tier lookup."""

    def test_default_tiers(self):
        assert complexity_multiplier_for("easy") == Decimal("1.00")
        assert complexity_multiplier_for("medium") == Decimal("1.15")
        assert complexity_multiplier_for("hard") == Decimal("1.25")

    def test_case_insensitive(self):
        assert complexity_multiplier_for("HARD") == Decimal("1.25")

    def test_unknown_tier_is_not_silently_defaulted(self):
        with pytest.raises(ConfigurationMissingError, match="extreme"):
            complexity_multiplier_for("extreme")

    def test_custom_table(self):
        assert complexity_multiplier_for("legal", {"legal": Decimal("1.5")}) == Decimal("1.5")

    def test_page_override_wins(self):
        page = PageInput(word_count=225, complexity="easy", complexity_multiplier=Decimal("2"))
        assert compute_page_billable(page) == Decimal("2.0")


class TestGroupBillablePages:
    """Aggregation of pages into a document group."""

    def test_sums_included_pages(self):
        pages = [
            PageInput(word_count=226, complexity="easy"),  # 1.1
            PageInput(word_count=500, complexity="medium"),  # 2.6
        ]
        summary = compute_group_billable_pages(pages)

        assert summary.page_count == 2
        assert summary.total_words == 726
        assert summary.billable_pages == Decimal("3.7")

    def test_zero_word_page_bills_minimum(self):
        summary = compute_group_billable_pages([PageInput(word_count=0)])

        assert summary.page_count == 1
        assert summary.total_words == 0
        assert summary.billable_pages == Decimal("1.0")

    def test_small_group_floored_to_minimum(self):
        summary = compute_group_billable_pages([PageInput(word_count=50, complexity="easy")])
        assert summary.billable_pages == Decimal("1.0")

    def test_custom_minimum(self):
        summary = compute_group_billable_pages(
            [PageInput(word_count=50, complexity="easy")], min_billable_pages=Decimal("0.5")
        )
        assert summary.billable_pages == Decimal("0.5")

    def test_excluded_page_removed_from_both_sums(self):
        included = PageInput(word_count=500, complexity="medium")
        excluded = PageInput(word_count=900, complexity="hard", is_included=False)

        before = compute_group_billable_pages([included, excluded.model_copy(update={"is_included": True})])
        after = compute_group_billable_pages([included, excluded])

        assert before.total_words == 1400
        assert before.billable_pages == Decimal("2.6") + Decimal("5.0")
        assert after.total_words == 500
        assert after.billable_pages == Decimal("2.6")
        assert after.page_count == 1

    def test_all_pages_excluded_is_empty(self):
        summary = compute_group_billable_pages([PageInput(word_count=300, is_included=False)])

        assert summary.page_count == 0
        assert summary.total_words == 0
        assert summary.billable_pages == 0

    def test_no_pages_is_empty(self):
        assert compute_group_billable_pages([]).billable_pages == 0

    def test_excluded_page_with_unknown_tier_is_ignored(self):
        pages = [
            PageInput(word_count=225, complexity="easy"),
            PageInput(word_count=225, complexity="unknown", is_included=False),
        ]
        assert compute_group_billable_pages(pages).billable_pages == Decimal("1.0")

    def test_negative_page_word_count_rejected(self):
        with pytest.raises(InvalidInputError):
            compute_group_billable_pages([PageInput(word_count=-10)])

    def test_recomputation_is_idempotent(self):
        pages = [PageInput(word_count=n * 97, complexity="hard") for n in range(1, 8)]
        assert compute_group_billable_pages(pages) == compute_group_billable_pages(pages)
