"""Service layer for market data lookups.

Wraps the Alpha Vantage client and shapes its results into API responses.
"""

import logging
from typing import Optional

from homepage_api.alphavantage_client import AlphaVantageClient
from homepage_api.exceptions import (
    AlphaVantageAPIError,
    MarketDataError,
    ServiceNotConfiguredError,
)
from homepage_api.models import OptionQuote, PriceSeries, StockQuote
from homepage_api.server.config import settings
from homepage_api.server.models.market import (
    MarketIndexResponse,
    MarketIndicesResponse,
    OptionQuoteResponse,
    OptionsChainResponse,
    StockQuoteResponse,
)

logger = logging.getLogger(__name__)


class MarketDataService:
    """Service for quotes, options chains and index snapshots.

    Attributes:
        client: Alpha Vantage client
        index_symbols: Index display name to proxy symbol
    """

    def __init__(self, client: AlphaVantageClient, index_symbols: dict[str, str]):
        """Initialize market data service.

        Args:
            client: Configured Alpha Vantage client
            index_symbols: Index display name to proxy symbol
        """
        self.client = client
        self.index_symbols = index_symbols

    def get_stock_quote(self, symbol: str) -> StockQuoteResponse:
        """Get the latest quote for a symbol.

        Args:
            symbol: Ticker symbol

        Returns:
            Stock quote response
        """
        quote = self.client.get_stock_quote(symbol)
        return StockQuoteResponse.model_validate(quote)

    def get_options_chain(self, symbol: str) -> OptionsChainResponse:
        """Get the options chain for a symbol.

        The stock quote is required. If the chain itself can't be fetched,
        the response carries the stock price with empty calls and puts.

        Args:
            symbol: Ticker symbol

        Returns:
            Options chain response
        """
        quote: StockQuote = self.client.get_stock_quote(symbol)

        chain: list[OptionQuote] = []
        try:
            chain = self.client.get_options_chain(quote.symbol)
        except AlphaVantageAPIError as e:
            logger.warning(f"Options data not available for {quote.symbol}: {e}")

        calls = [OptionQuoteResponse.model_validate(o) for o in chain if o.option_type == "call"]
        puts = [OptionQuoteResponse.model_validate(o) for o in chain if o.option_type == "put"]
        expirations = sorted({o.expiration for o in chain if o.expiration})

        logger.info(
            f"Options chain for {quote.symbol}: {len(calls)} calls, {len(puts)} puts, "
            f"stock price ${quote.price:.2f}"
        )
        return OptionsChainResponse(
            symbol=quote.symbol,
            stock_price=quote.price,
            calls=calls,
            puts=puts,
            expiration_dates=expirations,
        )

    def get_market_indices(self) -> MarketIndicesResponse:
        """Get snapshots for the configured market indices.

        Indices whose quote fails are skipped.

        Returns:
            Market indices response

        Raises:
            AlphaVantageAPIError: If no index could be quoted
        """
        indices = []
        errors = []
        for name, symbol in self.index_symbols.items():
            try:
                quote = self.client.get_stock_quote(symbol)
            except MarketDataError as e:
                logger.warning(f"Skipping index {name} ({symbol}): {e}")
                errors.append(f"{symbol}: {e}")
                continue

            indices.append(
                MarketIndexResponse(
                    name=name,
                    symbol=quote.symbol,
                    value=quote.price,
                    change=quote.change,
                    change_percent=quote.change_percent,
                )
            )

        if not indices and errors:
            raise AlphaVantageAPIError(f"No market indices available ({'; '.join(errors)})")

        return MarketIndicesResponse(indices=indices)

    def get_daily_closes(self, symbol: str, lookback_days: int) -> PriceSeries:
        """Get daily closing prices for a symbol.

        Args:
            symbol: Ticker symbol
            lookback_days: Sessions to keep

        Returns:
            Price series ordered oldest first
        """
        return self.client.fetch_daily_closes(symbol, lookback_days=lookback_days)


# Global service instance
_market_data_service: Optional[MarketDataService] = None


def get_market_data_service() -> MarketDataService:
    """Get the global market data service instance.

    Returns:
        MarketDataService instance

    Raises:
        ServiceNotConfiguredError: If no Alpha Vantage API key is configured
    """
    global _market_data_service
    if _market_data_service is None:
        if not settings.alpha_vantage_configured:
            raise ServiceNotConfiguredError("Alpha Vantage API service not configured")
        client = AlphaVantageClient(settings.get_alpha_vantage_config())
        _market_data_service = MarketDataService(client, settings.index_symbols)
    return _market_data_service


def shutdown_market_data_service() -> None:
    """Close the global service's HTTP session, if one was created."""
    global _market_data_service
    if _market_data_service is not None:
        _market_data_service.client.close()
        _market_data_service = None
