"""Portfolio API endpoints.

This module provides REST API endpoints for portfolio allocation analysis
and return-based risk metrics.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from homepage_api.exceptions import InsufficientDataError, MarketDataError
from homepage_api.server.dependencies import market_data_http_error, require_risk_metrics
from homepage_api.server.models.portfolio import (
    PortfolioAnalysisRequest,
    PortfolioAnalysisResponse,
    RiskMetricsResponse,
)
from homepage_api.server.services.portfolio_service import PortfolioService, RiskMetricsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.post(
    "/analyze",
    response_model=PortfolioAnalysisResponse,
    summary="Analyze portfolio",
    description="Computes weights, concentration and diversification for holdings",
)
def analyze_portfolio(request: PortfolioAnalysisRequest) -> PortfolioAnalysisResponse:
    """Analyze portfolio holdings.

    Args:
        request: Holdings to analyze

    Returns:
        Portfolio analysis

    Raises:
        HTTPException: If holdings are invalid

    Example:
        >>> POST /api/portfolio/analyze
        >>> {"holdings": [{"symbol": "AAPL", "shares": 10, "price": 190.0}]}
    """
    service = PortfolioService()
    try:
        return service.analyze(request)
    except ValueError as e:
        logger.warning(f"Portfolio analysis failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e


@router.get(
    "/risk-metrics",
    response_model=RiskMetricsResponse,
    summary="Get risk metrics",
    description="Volatility, Sharpe ratio, max drawdown and beta from daily closes",
)
def get_risk_metrics(
    symbol: str = Query(..., min_length=1, description="Ticker symbol"),
    benchmark: str = Query("SPY", min_length=1, description="Benchmark symbol for beta"),
    lookback_days: int = Query(100, ge=3, le=100, description="Sessions of history"),
    service: RiskMetricsService = Depends(require_risk_metrics),
) -> RiskMetricsResponse:
    """Get return-based risk metrics for a symbol.

    Args:
        symbol: Ticker symbol
        benchmark: Benchmark symbol
        lookback_days: Sessions of history
        service: Risk metrics service

    Returns:
        Risk metrics

    Raises:
        HTTPException: 422 if history is too short, otherwise the market
            data error mapping
    """
    try:
        return service.get_risk_metrics(symbol, benchmark, lookback_days)
    except InsufficientDataError as e:
        logger.warning(f"Risk metrics unavailable for {symbol}: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e
    except (MarketDataError, ValueError) as e:
        raise market_data_http_error(e) from e
