"""
Unit tests for configuration and environment variable handling.
"""

import pytest
import os
from unittest.mock import patch
from pydantic import ValidationError

from app.config import Settings, get_settings

REQUIRED_ENV = {
    'ENVIRONMENT': 'test',
    'CORS_ORIGINS': 'http://localhost:3000',
}


class TestSettingsValidation:
    """Test settings validation and environment variable handling."""

    def test_settings_with_minimal_required_env_vars(self):
        """Test settings creation with minimal required environment variables."""
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            settings = Settings(_env_file=None)

            assert settings.environment == 'test'
            assert settings.cors_origins == 'http://localhost:3000'
            assert settings.app_name == 'QuotePricingServer'
            assert settings.debug is False
            assert settings.log_level == 'INFO'
            assert settings.pricing_config_path.endswith('pricing-settings.yaml')

    def test_missing_environment_rejected(self):
        with patch.dict(os.environ, {'CORS_ORIGINS': 'http://localhost:3000'}, clear=True):
            with pytest.raises(ValidationError, match="environment"):
                Settings(_env_file=None)

    def test_missing_cors_origins_rejected(self):
        with patch.dict(os.environ, {'ENVIRONMENT': 'test'}, clear=True):
            with pytest.raises(ValidationError, match="cors_origins"):
                Settings(_env_file=None)

    def test_empty_cors_origins_rejected(self):
        env_vars = {**REQUIRED_ENV, 'CORS_ORIGINS': '   '}

        with patch.dict(os.environ, env_vars, clear=True):
            with pytest.raises(ValidationError, match="CORS_ORIGINS must be set"):
                Settings(_env_file=None)

    def test_unknown_environment_rejected(self):
        env_vars = {**REQUIRED_ENV, 'ENVIRONMENT': 'qa'}

        with patch.dict(os.environ, env_vars, clear=True):
            with pytest.raises(ValidationError, match="ENVIRONMENT must be one of"):
                Settings(_env_file=None)

    def test_environment_is_lowercased(self):
        env_vars = {**REQUIRED_ENV, 'ENVIRONMENT': 'Production'}

        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings(_env_file=None)

            assert settings.environment == 'production'
            assert settings.is_production is True
            assert settings.is_test_mode() is False

    def test_log_level_validation(self):
        env_vars = {**REQUIRED_ENV, 'LOG_LEVEL': 'debug'}

        with patch.dict(os.environ, env_vars, clear=True):
            assert Settings(_env_file=None).log_level == 'DEBUG'

        env_vars['LOG_LEVEL'] = 'chatty'
        with patch.dict(os.environ, env_vars, clear=True):
            with pytest.raises(ValidationError, match="LOG_LEVEL"):
                Settings(_env_file=None)

    def test_settings_cors_origins_parsing(self):
        """Test CORS origins parsing."""
        env_vars = {
            **REQUIRED_ENV,
            'CORS_ORIGINS': 'http://localhost:3000, https://example.com ,  http://test.local  ',
        }

        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings(_env_file=None)

            assert settings.cors_origin_list == [
                'http://localhost:3000',
                'https://example.com',
                'http://test.local',
            ]

    def test_cors_methods_parsing(self):
        env_vars = {**REQUIRED_ENV, 'CORS_METHODS': 'GET, POST'}

        with patch.dict(os.environ, env_vars, clear=True):
            assert Settings(_env_file=None).cors_method_list == ['GET', 'POST']

    def test_pricing_config_path_override(self):
        env_vars = {**REQUIRED_ENV, 'PRICING_CONFIG_PATH': '/etc/pricing/custom.yaml'}

        with patch.dict(os.environ, env_vars, clear=True):
            assert Settings(_env_file=None).pricing_config_path == '/etc/pricing/custom.yaml'


class TestLogConfig:
    """dictConfig produced from settings."""

    def test_plain_file_logs_outside_production(self):
        with patch.dict(os.environ, {**REQUIRED_ENV, 'ENVIRONMENT': 'development'}, clear=True):
            config = Settings(_env_file=None).log_config

            assert config['handlers']['file']['formatter'] == 'default'
            assert config['root']['level'] == 'INFO'

    def test_json_file_logs_in_production(self):
        with patch.dict(os.environ, {**REQUIRED_ENV, 'ENVIRONMENT': 'production'}, clear=True):
            config = Settings(_env_file=None).log_config

            assert config['handlers']['file']['formatter'] == 'json'
            assert config['formatters']['json']['()'] == 'pythonjsonlogger.jsonlogger.JsonFormatter'

    def test_ensure_directories_creates_log_dir(self, tmp_path):
        log_file = tmp_path / 'nested' / 'logs' / 'pricing.log'
        env_vars = {**REQUIRED_ENV, 'LOG_FILE': str(log_file)}

        with patch.dict(os.environ, env_vars, clear=True):
            Settings(_env_file=None).ensure_directories()

        assert log_file.parent.is_dir()


class TestGetSettings:

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_runs_in_test_mode(self):
        assert get_settings().is_test_mode()
