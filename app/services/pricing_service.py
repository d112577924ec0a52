"""
Pricing Service for the quote pricing server.

Orchestrates billable-page and quote pricing calculations.
Provides a unified interface for all pricing-related operations: it resolves
multipliers, rates, turnaround, delivery and tax from the pricing settings,
enforces the quote lifecycle guard, then hands explicit value objects to the
pure calculators in app.pricing.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from app.config import settings
from app.exceptions.pricing_exceptions import (
    ConfigurationMissingError,
    PricingError,
    QuoteLockedError,
)
from app.models.pricing import (
    BillablePagesResponse,
    DocumentGroupRequest,
    GroupPricingResponse,
    PricingSettingsResponse,
    QuoteTotalsRequest,
    QuoteTotalsResponse,
    TurnaroundOptionResponse,
)
from app.models.quote import QuoteStatus
from app.pricing.billable_pages import (
    complexity_multiplier_for,
    compute_billable_pages,
    compute_group_billable_pages,
)
from app.pricing.pricing_calculator import compute_quote_totals, compute_rush_fee, price_group
from app.pricing.pricing_config import PricingConfig, load_pricing_config
from app.pricing.rounding import ZERO, require_non_negative
from app.pricing.tax_rates import TaxRate, TaxRateResolver
from app.pricing.types import GroupPageSummary, PageInput, PricedGroup, QuoteModifiers
from app.utils.amount_converter import AmountConverter

# Set up module logger
logger = logging.getLogger(__name__)


class PricingService:
    """
    Service for pricing translation quotes.

    This service acts as an orchestration layer that:
    1. Resolves configuration (multipliers, rates, fees, tax) for a request
    2. Rebuilds every document group from its pages
    3. Delegates arithmetic to the pure pricing calculators

    Every call recomputes from scratch; the service keeps no per-quote state.
    The config and tax resolver can be injected for testing.
    """

    def __init__(
        self,
        config: Optional[PricingConfig] = None,
        tax_resolver: Optional[TaxRateResolver] = None,
    ):
        """
        Initialize the pricing service.

        Args:
            config: Optional pricing configuration for testing.
                If None, loads config from the default YAML file.
            tax_resolver: Optional tax resolver. If None, one is built from
                the config's tax_rates table.
        """
        if config is None:
            logger.debug("Loading default pricing configuration")
            config = load_pricing_config()
        else:
            logger.debug("Using injected pricing configuration")

        self._config = config
        self._tax_resolver = tax_resolver or TaxRateResolver(config.tax_rates)
        logger.info("PricingService initialized successfully")

    @property
    def config(self) -> PricingConfig:
        return self._config

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def calculate_page_billable(
        self,
        word_count: int,
        complexity: Optional[str] = "medium",
        complexity_multiplier: Optional[Decimal] = None,
    ) -> BillablePagesResponse:
        """
        Billable pages for one page.

        Examples:
            >>> service = PricingService()
            >>> service.calculate_page_billable(500, "medium").billable_pages
            Decimal('2.6')
        """
        if complexity_multiplier is None:
            complexity_multiplier = complexity_multiplier_for(
                complexity, self._config.complexity_multipliers
            )

        billable = compute_billable_pages(
            word_count,
            complexity_multiplier,
            words_per_page=self._config.words_per_page,
            rounding_increment=self._config.rounding_increment,
        )
        logger.debug(
            f"Page billable: {word_count} words × {complexity_multiplier} "
            f"({complexity}) = {billable} pages"
        )
        return BillablePagesResponse(
            word_count=word_count,
            complexity=complexity,
            complexity_multiplier=complexity_multiplier,
            billable_pages=billable,
        )

    def summarize_group_pages(self, group: DocumentGroupRequest) -> GroupPageSummary:
        """
        Billable figures for a group.

        Precedence: manual billable_pages, then the pages list, then a
        whole-file word_count at the group complexity.
        """
        if group.pages:
            summary = compute_group_billable_pages(
                [page.to_page_input() for page in group.pages],
                multipliers=self._config.complexity_multipliers,
                words_per_page=self._config.words_per_page,
                rounding_increment=self._config.rounding_increment,
                min_billable_pages=self._config.min_billable_pages,
            )
        elif group.word_count is not None:
            summary = compute_group_billable_pages(
                [PageInput(word_count=group.word_count, complexity=group.complexity)],
                multipliers=self._config.complexity_multipliers,
                words_per_page=self._config.words_per_page,
                rounding_increment=self._config.rounding_increment,
                min_billable_pages=self._config.min_billable_pages,
            )
        else:
            summary = GroupPageSummary(page_count=0, total_words=0, billable_pages=ZERO)

        if group.billable_pages is not None:
            override = require_non_negative(group.billable_pages, "billable_pages")
            logger.debug(
                f"Group '{group.name}': manual billable pages {override} "
                f"replaces computed {summary.billable_pages}"
            )
            summary = GroupPageSummary(
                page_count=summary.page_count,
                total_words=summary.total_words,
                billable_pages=override,
            )

        return summary

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def resolve_language_multiplier(
        self,
        explicit: Optional[Decimal] = None,
        source_language: Optional[str] = None,
    ) -> Decimal:
        """
        Explicit multiplier, else the configured multiplier for the language.

        Raises:
            ConfigurationMissingError: Neither is available.
        """
        if explicit is not None:
            return explicit

        if source_language:
            code = source_language.strip().lower()
            multiplier = self._config.language_multipliers.get(code)
            if multiplier is not None:
                return multiplier
            available = ", ".join(sorted(self._config.language_multipliers))
            error_msg = (
                f"No language multiplier configured for '{source_language}'. "
                f"Available languages: {available}"
            )
        else:
            error_msg = "Language multiplier is required: pass language_multiplier or source_language"

        logger.error(error_msg)
        raise ConfigurationMissingError(error_msg, field="language_multiplier")

    def resolve_base_rate(self, *candidates: Optional[Decimal]) -> Decimal:
        """First non-None candidate, else the configured base rate."""
        for candidate in candidates:
            if candidate is not None:
                return candidate
        if self._config.base_rate is not None:
            return self._config.base_rate

        error_msg = "Base rate is required: no rate supplied and none configured"
        logger.error(error_msg)
        raise ConfigurationMissingError(error_msg, field="base_rate")

    def _priced_group(
        self,
        group: DocumentGroupRequest,
        summary: GroupPageSummary,
        quote_base_rate: Optional[Decimal] = None,
        quote_language_multiplier: Optional[Decimal] = None,
        source_language: Optional[str] = None,
    ) -> PricedGroup:
        return PricedGroup(
            name=group.name,
            billable_pages=summary.billable_pages,
            base_rate=self.resolve_base_rate(group.base_rate, quote_base_rate),
            language_multiplier=self.resolve_language_multiplier(
                group.language_multiplier
                if group.language_multiplier is not None
                else quote_language_multiplier,
                source_language,
            ),
            certification_fee=group.certification_fee,
        )

    def _group_response(
        self,
        group: DocumentGroupRequest,
        summary: GroupPageSummary,
        priced: PricedGroup,
    ) -> GroupPricingResponse:
        line = price_group(
            priced,
            translation_rounding_increment=self._config.translation_rounding_increment,
            min_billable_pages_per_group=self._config.min_billable_pages,
        )
        return GroupPricingResponse(
            name=group.name,
            page_count=summary.page_count,
            total_words=summary.total_words,
            billable_pages=line.billable_pages,
            base_rate=priced.base_rate,
            language_multiplier=priced.language_multiplier,
            translation_cost=line.translation_cost,
            certification_type=group.certification_type,
            certification_fee=line.certification_fee,
            group_total=line.group_total,
        )

    def price_document_group(
        self,
        group: DocumentGroupRequest,
        source_language: Optional[str] = None,
    ) -> GroupPricingResponse:
        """
        Price one document group: pages, translation cost and group total.

        Raises:
            InvalidInputError: Out-of-range page, rate or fee values.
            ConfigurationMissingError: Unknown complexity tier, or no rate /
                language multiplier can be resolved.
        """
        logger.debug(f"price_document_group called: name='{group.name}', pages={len(group.pages)}")

        summary = self.summarize_group_pages(group)
        priced = self._priced_group(group, summary, source_language=source_language)
        result = self._group_response(group, summary, priced)

        logger.info(
            f"Group priced: '{group.name}' {result.billable_pages} pages × "
            f"${result.base_rate} × {result.language_multiplier} = "
            f"{AmountConverter.format_dollars(result.group_total)}"
        )
        return result

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    @staticmethod
    def ensure_pricing_editable(status: Optional[QuoteStatus], quote_id: Optional[str] = None) -> None:
        """
        Raise QuoteLockedError once a payment has been confirmed.

        A missing status is treated as editable (ad-hoc estimates).
        """
        if status is None or status.is_pricing_editable:
            return

        label = f"Quote {quote_id}" if quote_id else "Quote"
        error_msg = f"{label} is '{status.value}'; pricing is frozen"
        logger.warning(error_msg)
        raise QuoteLockedError(error_msg, status=status.value)

    def resolve_tax(self, request: QuoteTotalsRequest) -> Tuple[Decimal, Optional[str]]:
        """Explicit tax rate, else the billing region's rate, else zero."""
        if request.tax_rate is not None:
            return request.tax_rate, request.tax_name

        if request.tax_region:
            tax: TaxRate = self._tax_resolver.resolve(request.tax_region)
            return tax.rate, tax.display_name

        return ZERO, None

    def resolve_delivery_fee(self, request: QuoteTotalsRequest) -> Decimal:
        if request.delivery_fee is not None:
            return request.delivery_fee

        if request.delivery_option:
            code = request.delivery_option.strip().lower()
            fee = self._config.delivery_options.get(code)
            if fee is None:
                available = ", ".join(sorted(self._config.delivery_options))
                error_msg = (
                    f"Unknown delivery option: '{request.delivery_option}'. "
                    f"Available options: {available}"
                )
                logger.error(error_msg)
                raise ConfigurationMissingError(error_msg, field="delivery_option")
            return fee

        return ZERO

    def resolve_rush_fee(self, request: QuoteTotalsRequest, subtotal: Decimal) -> Tuple[Decimal, Optional[str]]:
        """Explicit rush fee, else the turnaround option's surcharge on the subtotal."""
        if request.rush_fee is not None:
            return request.rush_fee, request.turnaround

        code = request.turnaround or self._config.default_turnaround
        if not code:
            return ZERO, None

        option = self._config.turnaround_options.get(code.strip().lower())
        if option is None:
            available = ", ".join(sorted(self._config.turnaround_options))
            error_msg = f"Unknown turnaround option: '{code}'. Available options: {available}"
            logger.error(error_msg)
            raise ConfigurationMissingError(error_msg, field="turnaround")

        return compute_rush_fee(subtotal, option), code.strip().lower()

    def price_quote(self, request: QuoteTotalsRequest) -> QuoteTotalsResponse:
        """
        Reprice a full quote from scratch.

        Groups with no included pages (and no manual billable figure) are
        dropped before aggregation. The rush surcharge is computed on the
        subtotal, so the aggregator runs once without it to obtain the
        subtotal and once more with every modifier in place.

        Raises:
            QuoteLockedError: The quote status is frozen.
            InvalidInputError / ConfigurationMissingError: As raised by the
                calculators and resolvers.
        """
        logger.debug(
            f"price_quote called: quote_id={request.quote_id}, status={request.status}, "
            f"groups={len(request.groups)}"
        )

        try:
            self.ensure_pricing_editable(request.status, request.quote_id)

            built: List[Tuple[DocumentGroupRequest, GroupPageSummary, PricedGroup]] = []
            for group in request.groups:
                summary = self.summarize_group_pages(group)
                if summary.page_count == 0 and group.billable_pages is None:
                    logger.debug(f"Skipping group '{group.name}': no included pages")
                    continue
                priced = self._priced_group(
                    group,
                    summary,
                    quote_base_rate=request.base_rate,
                    quote_language_multiplier=request.language_multiplier,
                    source_language=request.source_language,
                )
                built.append((group, summary, priced))

            priced_groups = [priced for _, _, priced in built]
            tax_rate, tax_name = self.resolve_tax(request)
            delivery_fee = self.resolve_delivery_fee(request)

            base_totals = compute_quote_totals(
                priced_groups,
                translation_rounding_increment=self._config.translation_rounding_increment,
                min_billable_pages_per_group=self._config.min_billable_pages,
            )
            rush_fee, turnaround = self.resolve_rush_fee(request, base_totals.subtotal)

            totals = compute_quote_totals(
                priced_groups,
                QuoteModifiers(
                    rush_fee=rush_fee,
                    delivery_fee=delivery_fee,
                    tax_rate=tax_rate,
                    tax_name=tax_name,
                ),
                translation_rounding_increment=self._config.translation_rounding_increment,
                min_billable_pages_per_group=self._config.min_billable_pages,
            )
        except PricingError as e:
            logger.error(f"Quote pricing failed for quote_id={request.quote_id}: {e.message}")
            raise

        group_lines = [
            self._group_response(group, summary, priced) for group, summary, priced in built
        ]

        response = QuoteTotalsResponse(
            quote_id=request.quote_id,
            document_count=len(group_lines),
            total_pages=sum(line.page_count for line in group_lines),
            total_words=sum(line.total_words for line in group_lines),
            total_billable_pages=sum((line.billable_pages for line in group_lines), ZERO),
            translation_subtotal=totals.translation_subtotal,
            certification_subtotal=totals.certification_subtotal,
            subtotal=totals.subtotal,
            rush_fee=totals.rush_fee,
            turnaround=turnaround,
            delivery_fee=totals.delivery_fee,
            tax_rate=totals.tax_rate,
            tax_name=totals.tax_name,
            tax_amount=totals.tax_amount,
            total=totals.total,
            total_cents=AmountConverter.dollars_to_cents(totals.total),
            groups=group_lines,
        )

        logger.info(
            f"Quote priced: quote_id={request.quote_id}, {response.document_count} documents, "
            f"subtotal={AmountConverter.format_dollars(response.subtotal)}, "
            f"total={AmountConverter.format_dollars(response.total)}"
        )
        return response

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_supported_complexities(self) -> List[str]:
        return list(self._config.complexity_multipliers.keys())

    def get_turnaround_options(self) -> List[TurnaroundOptionResponse]:
        return [
            TurnaroundOptionResponse(code=code, **option.model_dump())
            for code, option in self._config.turnaround_options.items()
        ]

    def get_tax_rate(self, region_code: str) -> TaxRate:
        return self._tax_resolver.resolve(region_code)

    def get_settings(self) -> PricingSettingsResponse:
        config = self._config
        return PricingSettingsResponse(
            words_per_page=config.words_per_page,
            rounding_increment=config.rounding_increment,
            min_billable_pages=config.min_billable_pages,
            translation_rounding_increment=config.translation_rounding_increment,
            base_rate=config.base_rate,
            complexity_multipliers=dict(config.complexity_multipliers),
            language_multipliers=dict(config.language_multipliers),
            turnaround_options=self.get_turnaround_options(),
            delivery_options=dict(config.delivery_options),
            tax_regions=self._tax_resolver.regions(),
        )


# Global pricing service instance
# This singleton is used throughout the application for production code
pricing_service = PricingService(load_pricing_config(settings.pricing_config_path))
