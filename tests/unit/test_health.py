"""
Unit tests for the health checker.
"""

from app.utils.health import HealthChecker


class TestHealthChecker:

    def test_healthy(self):
        result = HealthChecker().check_health()

        assert result['status'] == 'healthy'
        assert set(result['checks']) == {'pricing_config', 'tax_rates'}
        assert result['environment'] == 'test'

    def test_failing_check_marks_unhealthy(self):
        checker = HealthChecker()

        def broken():
            raise RuntimeError("pricing settings unreadable")

        checker.checks['pricing_config'] = broken
        result = checker.check_health()

        assert result['status'] == 'unhealthy'
        assert result['checks']['pricing_config'] == {
            'status': 'error',
            'error': 'pricing settings unreadable',
        }
