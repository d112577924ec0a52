"""
Pricing module for translation quotes.
"""

from .billable_pages import compute_billable_pages, compute_group_billable_pages
from .pricing_calculator import compute_quote_totals
from .pricing_config import PricingConfig, load_pricing_config

__all__ = [
    "PricingConfig",
    "load_pricing_config",
    "compute_billable_pages",
    "compute_group_billable_pages",
    "compute_quote_totals",
]
