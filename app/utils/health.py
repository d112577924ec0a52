"""
Health check utilities for monitoring application status.
"""

import time
import logging
from typing import Any, Callable, Dict

from app.config import settings

logger = logging.getLogger(__name__)


class HealthChecker:
    """Health checker for pricing configuration and service status."""

    def __init__(self):
        self.checks: Dict[str, Callable[[], Dict[str, Any]]] = {
            'pricing_config': self._check_pricing_config,
            'tax_rates': self._check_tax_rates,
        }

    def check_health(self) -> Dict[str, Any]:
        """Run every check; any failing check marks the service unhealthy."""
        start_time = time.time()
        results = {}
        overall_status = "healthy"

        for check_name, check_func in self.checks.items():
            try:
                result = check_func()
            except Exception as e:
                logger.error(f"Health check '{check_name}' failed: {e}")
                result = {'status': 'error', 'error': str(e)}
            results[check_name] = result
            if result.get('status') != 'healthy':
                overall_status = "unhealthy"

        return {
            'status': overall_status,
            'timestamp': time.time(),
            'version': settings.app_version,
            'environment': settings.environment,
            'check_duration': round(time.time() - start_time, 3),
            'checks': results
        }

    def _check_pricing_config(self) -> Dict[str, Any]:
        from app.services.pricing_service import pricing_service

        config = pricing_service.config
        return {
            'status': 'healthy',
            'words_per_page': str(config.words_per_page),
            'complexity_tiers': len(config.complexity_multipliers),
            'base_rate_configured': config.base_rate is not None,
        }

    def _check_tax_rates(self) -> Dict[str, Any]:
        from app.services.pricing_service import pricing_service

        regions = len(pricing_service.config.tax_rates)
        return {
            'status': 'healthy' if regions else 'degraded',
            'regions': regions,
        }


# Global health checker instance
health_checker = HealthChecker()
