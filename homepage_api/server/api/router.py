"""API router with health endpoint.

This module composes the calculator, market data and portfolio routers
under the ``/api`` prefix and serves the health check.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, status

from homepage_api.server.api import calculator, market, portfolio
from homepage_api.server.config import settings
from homepage_api.server.models.common import HealthResponse, ServiceStatus

logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(prefix="/api")

# Include sub-routers
router.include_router(calculator.router)
router.include_router(market.router)
router.include_router(portfolio.router)


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["health"],
    summary="Health check endpoint",
    description="Returns service health including market data configuration",
)
def health_check() -> HealthResponse:
    """Health check endpoint.

    Returns:
        Health status with version, environment and service availability

    Example:
        >>> GET /api/health
        >>> {
        >>>     "status": "healthy",
        >>>     "timestamp": "2026-10-17T10:00:00",
        >>>     "version": "1.0.0",
        >>>     "environment": "dev",
        >>>     "services": {"alpha_vantage": "available"}
        >>> }
    """
    alpha_vantage = "available" if settings.alpha_vantage_configured else "not_configured"

    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version=settings.version,
        environment=settings.environment,
        services=ServiceStatus(alpha_vantage=alpha_vantage),
    )
