"""
Main FastAPI application for the Quote Pricing Server.
"""

from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from contextlib import asynccontextmanager
import logging
import logging.config
import time

# Import configuration
from app.config import settings

# Import routers
from app.routers import pricing

# Import middleware, exceptions and utilities
from app.middleware.logging import LoggingMiddleware
from app.exceptions.pricing_exceptions import PricingError, pricing_error_to_http_exception
from app.utils.health import health_checker


def configure_logging():
    """Apply the dictConfig from settings (JSON file logs in production)."""
    settings.ensure_directories()
    logging.config.dictConfig(settings.log_config)


# Application lifespan events
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    logging.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.environment})")

    from app.services.pricing_service import pricing_service
    logging.info(
        f"Pricing settings: {pricing_service.config.words_per_page} words/page, "
        f"{len(pricing_service.config.tax_rates)} tax regions"
    )

    yield

    logging.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Translation quote pricing: billable pages, document groups and quote totals",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan
)

# ============================================================================
# MIDDLEWARE CONFIGURATION - ORDER MATTERS!
# ============================================================================
# Middleware added LAST executes FIRST (outermost layer).
# CORSMiddleware is added last of the add_middleware calls so it wraps
# every response, including error responses from the logging layer.
# ============================================================================
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=settings.cors_credentials,
    allow_methods=settings.cors_method_list,
    allow_headers=["*"] if settings.cors_headers == "*" else settings.cors_headers.split(','),
    expose_headers=["X-Request-ID", "X-Process-Time"]
)

# Include routers
app.include_router(pricing.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "healthy",
        "environment": settings.environment,
        "documentation": "/docs" if settings.debug else "Documentation disabled",
        "endpoints": {
            "billable_pages": "/api/v1/pricing/billable-pages",
            "document_groups": "/api/v1/pricing/document-groups",
            "quote_totals": "/api/v1/pricing/quotes/totals",
            "tax_rates": "/api/v1/pricing/tax-rates/{region_code}",
            "settings": "/api/v1/pricing/settings",
            "health": "/health"
        }
    }


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for monitoring and load balancers."""
    result = health_checker.check_health()
    status_code = 200 if result["status"] == "healthy" else 503
    return JSONResponse(content=result, status_code=status_code)


# Custom exception handlers
@app.exception_handler(PricingError)
async def pricing_exception_handler(request: Request, exc: PricingError):
    """Map pricing errors to 400 / 409 / 422 with the standard error envelope."""
    http_exc = pricing_error_to_http_exception(exc)
    logging.warning(f"Pricing error on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=http_exc.status_code,
        content={
            "success": False,
            "error": {
                "code": http_exc.status_code,
                "message": exc.message,
                "type": http_exc.detail["error"],
                "field": exc.field
            },
            "timestamp": time.time(),
            "path": str(request.url)
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request schema errors."""
    safe_errors = [
        {key: value if isinstance(value, str) else str(value) for key, value in error.items()}
        for error in exc.errors()
    ]
    logging.warning(f"Request validation failed on {request.url.path}: {len(safe_errors)} errors")

    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": {
                "code": 422,
                "message": "Request validation failed",
                "type": "validation_error",
                "details": safe_errors
            },
            "timestamp": time.time(),
            "path": str(request.url)
        }
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent error response format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": {
                "code": exc.status_code,
                "message": exc.detail,
                "type": "http_error"
            },
            "timestamp": time.time(),
            "path": str(request.url)
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions with error logging."""
    logging.error(f"Unhandled exception: {exc}", exc_info=True)

    if settings.debug:
        error_detail = str(exc)
    else:
        error_detail = "Internal server error"

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": {
                "code": 500,
                "message": error_detail,
                "type": "internal_error"
            },
            "timestamp": time.time(),
            "path": str(request.url)
        }
    )


# Development server runner
if __name__ == "__main__":
    configure_logging()

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True
    )
