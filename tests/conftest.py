"""
Pytest configuration and shared fixtures.

Settings are strict (ENVIRONMENT and CORS_ORIGINS are required), so the test
environment is set here before anything imports app.config.
"""

import os
import tempfile

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:3000")
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "pricing-tests.log"))

import pytest
from decimal import Decimal
from pathlib import Path

from app.pricing.pricing_config import PricingConfig, load_pricing_config

PRICING_SETTINGS_PATH = Path(__file__).parent.parent / "pricing-settings.yaml"


def pytest_configure(config):
    """Refuse to run outside test mode."""
    from app.config import settings

    if not settings.is_test_mode():
        pytest.exit(
            f"Tests must run with ENVIRONMENT=test (current: {settings.environment})",
            returncode=1
        )


@pytest.fixture
def pricing_config() -> PricingConfig:
    """The repository's default pricing settings."""
    return load_pricing_config(str(PRICING_SETTINGS_PATH))


@pytest.fixture
def pricing_service(pricing_config):
    """PricingService with the default settings injected."""
    from app.services.pricing_service import PricingService

    return PricingService(config=pricing_config)


@pytest.fixture
def minimal_config() -> PricingConfig:
    """Config with no base rate, no languages and no tax table."""
    return PricingConfig(
        complexity_multipliers={
            "easy": Decimal("1.00"),
            "medium": Decimal("1.15"),
            "hard": Decimal("1.25"),
        }
    )


@pytest.fixture
def client():
    """HTTP test client for the FastAPI app."""
    from fastapi.testclient import TestClient
    from app.main import app

    return TestClient(app)
