"""FastAPI dependencies shared by the API routers."""

import logging

from fastapi import Depends, HTTPException, status

from homepage_api.exceptions import (
    AlphaVantageRateLimitError,
    MarketDataError,
    ServiceNotConfiguredError,
    SymbolNotFoundError,
)
from homepage_api.server.config import settings
from homepage_api.server.services.market_data_service import (
    MarketDataService,
    get_market_data_service,
)
from homepage_api.server.services.portfolio_service import RiskMetricsService

logger = logging.getLogger(__name__)


def require_market_data() -> MarketDataService:
    """Provide the market data service or fail with 503.

    Returns:
        MarketDataService instance

    Raises:
        HTTPException: If Alpha Vantage is not configured
    """
    try:
        return get_market_data_service()
    except ServiceNotConfiguredError as e:
        logger.warning(f"Market data request rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e),
        ) from e


def market_data_http_error(e: Exception) -> HTTPException:
    """Translate a market data failure into an HTTP error.

    Args:
        e: Exception raised by a market data call

    Returns:
        HTTPException with the matching status code
    """
    if isinstance(e, SymbolNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(e, AlphaVantageRateLimitError):
        code = status.HTTP_429_TOO_MANY_REQUESTS
    elif isinstance(e, ServiceNotConfiguredError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(e, MarketDataError):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_400_BAD_REQUEST

    logger.warning(f"Market data request failed ({code}): {e}")
    return HTTPException(status_code=code, detail=str(e))


def require_risk_metrics(
    market_data: MarketDataService = Depends(require_market_data),
) -> RiskMetricsService:
    """Provide the risk metrics service backed by market data."""
    return RiskMetricsService(market_data, settings.risk_free_rate)
