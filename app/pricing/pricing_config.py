"""
Pricing configuration loader for the quote pricing service.

Loads and validates pricing settings from a YAML file.
Implements caching for performance optimization.
"""

import logging
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.pricing.types import TurnaroundOption

# Set up module logger
logger = logging.getLogger(__name__)

DEFAULT_PRICING_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "pricing-settings.yaml"


class TaxRateEntry(BaseModel):
    """A single region's tax rate."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    region_name: str
    tax_name: str
    rate: Decimal = Field(..., ge=0, le=1)


class PricingConfig(BaseModel):
    """
    Top-level pricing configuration model.

    Validates the structure of pricing settings loaded from YAML.
    Uses strict validation to reject unknown fields.

    Attributes:
        words_per_page: Words that make up one billable page (225).
        rounding_increment: Billable pages are rounded UP to this (0.1).
        min_billable_pages: Floor for a non-empty document group (1.0).
        translation_rounding_increment: Translation cost rounds UP to this (2.50).
        base_rate: Default per-billable-page price before multipliers.
        complexity_multipliers: Tier name to multiplier.
            Example: {"easy": 1.0, "medium": 1.15, "hard": 1.25}
        language_multipliers: Source language code to multiplier.
            Example: {"es": 1.0, "ja": 1.4}
        turnaround_options: Turnaround code to option.
        delivery_options: Delivery code to flat fee.
        tax_rates: Region code to tax rate entry.
    """

    model_config = ConfigDict(
        extra="forbid",  # Reject unknown fields
        frozen=True,  # Make immutable after creation
    )

    words_per_page: Decimal = Field(Decimal("225"), gt=0)
    rounding_increment: Decimal = Field(Decimal("0.1"), gt=0)
    min_billable_pages: Decimal = Field(Decimal("1.0"), ge=0)
    translation_rounding_increment: Decimal = Field(Decimal("2.50"), gt=0)
    base_rate: Optional[Decimal] = Field(None, gt=0)
    complexity_multipliers: Dict[str, Decimal]
    language_multipliers: Dict[str, Decimal] = {}
    turnaround_options: Dict[str, TurnaroundOption] = {}
    delivery_options: Dict[str, Decimal] = {}
    tax_rates: Dict[str, TaxRateEntry] = {}

    @field_validator("complexity_multipliers", "language_multipliers")
    @classmethod
    def validate_multipliers(cls, v):
        """Multipliers must be positive; keys are matched case-insensitively."""
        for key, value in v.items():
            if value <= 0:
                raise ValueError(f"Multiplier for '{key}' must be positive, got {value}")
        return {key.lower(): value for key, value in v.items()}

    @field_validator("delivery_options")
    @classmethod
    def validate_delivery_fees(cls, v):
        for key, value in v.items():
            if value < 0:
                raise ValueError(f"Delivery fee for '{key}' cannot be negative, got {value}")
        return v

    @field_validator("tax_rates")
    @classmethod
    def normalize_region_codes(cls, v):
        return {key.upper(): value for key, value in v.items()}

    @property
    def default_turnaround(self) -> Optional[str]:
        """Code of the turnaround option flagged as default, if any."""
        for code, option in self.turnaround_options.items():
            if option.is_default:
                return code
        return None


@lru_cache(maxsize=4)
def load_pricing_config(path: str = str(DEFAULT_PRICING_CONFIG_PATH)) -> PricingConfig:
    """
    Load and validate pricing configuration from YAML file.

    This function is cached using @lru_cache to avoid re-loading the YAML file
    on every call. The cache is keyed by path.

    Args:
        path: Path to YAML configuration file (default: pricing-settings.yaml
            at the repository root). Relative paths are resolved from the
            current working directory.

    Returns:
        PricingConfig: Validated and immutable pricing configuration object.

    Raises:
        FileNotFoundError: If configuration file doesn't exist at the specified path.
        yaml.YAMLError: If YAML file contains syntax errors.
        ValidationError: If YAML structure doesn't match PricingConfig schema.

    Example:
        >>> config = load_pricing_config()
        >>> config.words_per_page
        Decimal('225')
        >>> config.complexity_multipliers["hard"]
        Decimal('1.25')
    """
    config_path = Path(path).resolve()

    logger.info(f"Loading pricing configuration from: {config_path}")

    if not config_path.exists():
        logger.error(f"Pricing configuration file not found: {config_path}")
        raise FileNotFoundError(
            f"Pricing configuration file not found: {config_path}\n"
            f"Expected location: {config_path.absolute()}"
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML file: {e}")
        raise yaml.YAMLError(f"Invalid YAML format in {config_path}: {e}") from e

    if not isinstance(data, dict):
        logger.error(f"Pricing configuration root must be a mapping, got {type(data).__name__}")
        raise yaml.YAMLError(f"Invalid YAML format in {config_path}: root must be a mapping")

    logger.debug(f"Successfully loaded YAML data with keys: {list(data.keys())}")

    try:
        config = PricingConfig(**data)
        logger.info(
            f"Successfully validated pricing config: "
            f"{len(config.complexity_multipliers)} complexity tiers, "
            f"{len(config.language_multipliers)} languages, "
            f"{len(config.tax_rates)} tax regions"
        )
        return config
    except ValidationError as e:
        logger.error(f"Pricing configuration validation failed: {e}")
        raise
