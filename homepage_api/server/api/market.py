"""Market data API endpoints.

This module provides REST API endpoints for stock quotes, options chains
and market index snapshots, all backed by Alpha Vantage.
"""

import logging

from fastapi import APIRouter, Depends

from homepage_api.exceptions import MarketDataError
from homepage_api.server.dependencies import market_data_http_error, require_market_data
from homepage_api.server.models.market import (
    MarketIndicesResponse,
    OptionsChainResponse,
    StockQuoteResponse,
)
from homepage_api.server.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["market-data"])


@router.get(
    "/options/stock/{symbol}",
    response_model=StockQuoteResponse,
    summary="Get stock quote",
    description="Returns the latest quote for a stock symbol",
)
def get_stock_quote(
    symbol: str,
    service: MarketDataService = Depends(require_market_data),
) -> StockQuoteResponse:
    """Get the latest quote for a symbol.

    Args:
        symbol: Ticker symbol
        service: Market data service

    Returns:
        Stock quote

    Raises:
        HTTPException: 400 invalid symbol, 404 unknown symbol, 429 rate
            limited, 502 upstream failure, 503 not configured
    """
    try:
        return service.get_stock_quote(symbol)
    except (MarketDataError, ValueError) as e:
        raise market_data_http_error(e) from e


@router.get(
    "/options/chain/{symbol}",
    response_model=OptionsChainResponse,
    summary="Get options chain",
    description="Returns the stock price with call and put contracts for a symbol",
)
def get_options_chain(
    symbol: str,
    service: MarketDataService = Depends(require_market_data),
) -> OptionsChainResponse:
    """Get the options chain for a symbol.

    Args:
        symbol: Ticker symbol
        service: Market data service

    Returns:
        Options chain split into calls and puts
    """
    try:
        return service.get_options_chain(symbol)
    except (MarketDataError, ValueError) as e:
        raise market_data_http_error(e) from e


@router.get(
    "/market/indices",
    response_model=MarketIndicesResponse,
    summary="Get market indices",
    description="Returns snapshots for the configured market index proxies",
)
def get_market_indices(
    service: MarketDataService = Depends(require_market_data),
) -> MarketIndicesResponse:
    """Get market index snapshots.

    Args:
        service: Market data service

    Returns:
        Index snapshots; indices that fail to quote are omitted
    """
    try:
        return service.get_market_indices()
    except MarketDataError as e:
        raise market_data_http_error(e) from e
