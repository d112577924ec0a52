"""
Logging middleware for request/response tracking.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import time
import logging
import uuid
from typing import Dict

from app.config import settings


# Configure logger
logger = logging.getLogger("pricing.middleware")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    def __init__(self, app):
        super().__init__(app)
        self.sensitive_headers = {
            'authorization', 'x-api-key', 'cookie', 'x-auth-token'
        }

    async def dispatch(self, request: Request, call_next):
        """Process request with logging."""
        request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        self._log_request(request, request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            self._log_error(request, e, request_id, process_time)
            raise

        process_time = time.time() - start_time
        self._log_response(request, response, request_id, process_time)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}s"
        return response

    def _log_request(self, request: Request, request_id: str):
        """Log incoming request."""
        client_ip = request.client.host if request.client else "unknown"
        forwarded_for = request.headers.get('X-Forwarded-For')
        if forwarded_for:
            client_ip = forwarded_for.split(',')[0].strip()

        log_data = {
            'request_id': request_id,
            'method': request.method,
            'path': request.url.path,
            'query_params': dict(request.query_params),
            'client_ip': client_ip,
            'user_agent': request.headers.get('User-Agent', 'Unknown'),
            'headers': self._sanitize_headers(dict(request.headers)),
        }

        if settings.is_development:
            logger.info(f"Incoming request: {request.method} {request.url.path}")
            logger.debug(f"Request details: {log_data}")
        else:
            logger.info(
                f"Request - {request_id} - {request.method} {request.url.path} - {client_ip}",
                extra={'request_data': log_data}
            )

    def _log_response(self, request: Request, response, request_id: str, process_time: float):
        """Log outgoing response; level follows the status code."""
        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            f"Response - {request_id} - {response.status_code} - {process_time:.4f}s - "
            f"{request.method} {request.url.path}",
            extra={'response_data': {
                'request_id': request_id,
                'status_code': response.status_code,
                'process_time': process_time,
            }}
        )

    def _log_error(self, request: Request, error: Exception, request_id: str, process_time: float):
        """Log request processing error."""
        logger.error(
            f"Request error - {request_id} - {type(error).__name__}: {str(error)}",
            extra={'error_data': {
                'request_id': request_id,
                'error_type': type(error).__name__,
                'process_time': process_time,
                'method': request.method,
                'path': request.url.path,
            }},
            exc_info=True
        )

    def _sanitize_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Remove sensitive information from headers."""
        return {
            key: "[REDACTED]" if key.lower() in self.sensitive_headers else value
            for key, value in headers.items()
        }
