"""
Tax rate resolution keyed by billing region.

The pricing aggregator treats the tax rate as an opaque multiplier; this
resolver is the default lookup used by the pricing service, backed by the
``tax_rates`` table in the pricing settings.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Mapping

from pydantic import BaseModel, ConfigDict

from app.exceptions.pricing_exceptions import ConfigurationMissingError
from app.pricing.pricing_config import TaxRateEntry

logger = logging.getLogger(__name__)


class TaxRate(BaseModel):
    """Resolved tax rate with its customer-facing display name."""

    model_config = ConfigDict(frozen=True)

    region_code: str
    region_name: str
    tax_name: str
    rate: Decimal

    @property
    def display_name(self) -> str:
        """E.g. 'HST 13% (Ontario)'."""
        percent = (self.rate * 100).normalize()
        return f"{self.tax_name} {percent:f}% ({self.region_name})"


class TaxRateResolver:
    """Resolve region codes (province or country) to tax rates."""

    def __init__(self, tax_rates: Mapping[str, TaxRateEntry]):
        self._rates: Dict[str, TaxRateEntry] = {code.upper(): entry for code, entry in tax_rates.items()}
        logger.debug(f"TaxRateResolver initialized with {len(self._rates)} regions")

    def resolve(self, region_code: str) -> TaxRate:
        """
        Resolve a region code.

        Raises:
            ConfigurationMissingError: If no rate is configured for the region.
        """
        code = (region_code or "").strip().upper()
        entry = self._rates.get(code)
        if entry is None:
            available = ", ".join(sorted(self._rates))
            logger.error(f"No tax rate configured for region '{region_code}'")
            raise ConfigurationMissingError(
                f"No tax rate configured for region '{region_code}'. Available regions: {available}",
                field="tax_region",
            )

        logger.debug(f"Resolved tax rate for {code}: {entry.tax_name} {entry.rate}")
        return TaxRate(
            region_code=code,
            region_name=entry.region_name,
            tax_name=entry.tax_name,
            rate=entry.rate,
        )

    def regions(self) -> List[str]:
        return sorted(self._rates)
