"""
Configuration management for the Quote Pricing Server.

STRICT CONFIGURATION POLICY:
- NO default values for critical settings
- Server MUST fail to start if required values are missing
- Configuration from environment / .env file
- Clear error messages for missing configuration

Pricing rules themselves (rates, multipliers, tax table) live in the YAML
file named by PRICING_CONFIG_PATH, not here.
"""

from functools import lru_cache
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import os

DEFAULT_PRICING_CONFIG = str(Path(__file__).resolve().parent.parent / "pricing-settings.yaml")


class Settings(BaseSettings):
    """
    Application settings with STRICT validation.

    Critical fields are REQUIRED and have NO defaults.
    Server will fail to start with clear error if configuration is missing.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration - Basic defaults OK
    app_name: str = "QuotePricingServer"
    app_version: str = "1.0.0"
    environment: str  # REQUIRED - no default
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Pricing - Sensible default OK
    pricing_config_path: str = DEFAULT_PRICING_CONFIG

    # Logging - Sensible defaults OK
    log_level: str = "INFO"
    log_file: str = "./logs/pricing.log"

    # CORS Configuration - REQUIRED, no defaults
    cors_origins: str  # REQUIRED - no default
    cors_credentials: bool = True
    cors_methods: str = "GET,POST,OPTIONS"
    cors_headers: str = "*"

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is one of the known values."""
        allowed = {"development", "test", "staging", "production"}
        if v.lower() not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of {sorted(allowed)}, got '{v}'")
        return v.lower()

    @field_validator('cors_origins')
    @classmethod
    def validate_cors_origins(cls, v):
        """CORS origins cannot be empty."""
        if not v or not v.strip():
            raise ValueError("CORS_ORIGINS must be set")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got '{v}'")
        return level

    @property
    def cors_origin_list(self) -> List[str]:
        """Parse CORS origins to list."""
        return [origin.strip() for origin in self.cors_origins.split(',') if origin.strip()]

    @property
    def cors_method_list(self) -> List[str]:
        """Parse CORS methods to list."""
        return [method.strip() for method in self.cors_methods.split(',') if method.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    def is_test_mode(self) -> bool:
        """Check if running in test mode."""
        return self.environment == "test"

    @property
    def log_config(self) -> dict:
        """Get logging configuration."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S"
                },
                "json": {
                    "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                    "format": "%(asctime)s %(name)s %(levelname)s %(message)s"
                }
            },
            "handlers": {
                "default": {
                    "formatter": "default",
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout"
                },
                "file": {
                    "formatter": "json" if self.is_production else "default",
                    "class": "logging.FileHandler",
                    "filename": self.log_file,
                    "mode": "a"
                }
            },
            "root": {
                "level": self.log_level,
                "handlers": ["default", "file"]
            }
        }

    def ensure_directories(self):
        """Ensure the log directory exists."""
        directory = os.path.dirname(self.log_file) if self.log_file else None
        if directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Note: Call get_settings.cache_clear() to re-read the environment.
    """
    return Settings()


# Global settings instance
settings = get_settings()
