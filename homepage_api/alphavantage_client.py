"""
Alpha Vantage API client for quotes, options chains and daily prices.

This module provides the Alpha Vantage data provider adapter, handling all
HTTP communication with the Alpha Vantage API.

API Documentation: https://www.alphavantage.co/documentation/
Get API Key: https://www.alphavantage.co/support/#api-key

Usage:
    from homepage_api.config import AlphaVantageConfig
    from homepage_api.alphavantage_client import AlphaVantageClient

    config = AlphaVantageConfig.from_env()
    with AlphaVantageClient(config) as client:
        quote = client.get_stock_quote("AAPL")
        chain = client.get_options_chain("AAPL")
"""

import logging
from typing import Any, Optional

import requests

from .api.base_client import BaseAPIClient
from .config import AlphaVantageConfig
from .exceptions import (
    AlphaVantageAPIError,
    AlphaVantageRateLimitError,
    SymbolNotFoundError,
)
from .models import OptionQuote, PriceSeries, StockQuote
from .utils.validation import normalize_symbol, validate_closes

logger = logging.getLogger(__name__)


def _to_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    if value in (None, "", "None", "-"):
        return default
    try:
        return float(str(value).rstrip("%"))
    except ValueError:
        return default


def _to_int(value: Any) -> int:
    number = _to_float(value, 0.0)
    return int(number) if number is not None else 0


class AlphaVantageClient(BaseAPIClient):
    """
    Client for Alpha Vantage API.

    Handles:
    - GLOBAL_QUOTE endpoint for latest stock quotes
    - HISTORICAL_OPTIONS endpoint for options chains
    - TIME_SERIES_DAILY endpoint for closing prices
    - Translation of in-body API errors into exceptions
    """

    BASE_URL = "https://www.alphavantage.co"
    QUERY_ENDPOINT = "/query"
    MAX_LOOKBACK_DAYS = 100  # Free tier max data points (compact output)

    def __init__(self, config: AlphaVantageConfig):
        """
        Initialize Alpha Vantage client.

        Args:
            config: AlphaVantageConfig instance with API credentials
        """
        self.config = config
        super().__init__(
            base_url=config.base_url,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            timeout=config.timeout,
        )

    def get_stock_quote(self, symbol: str) -> StockQuote:
        """
        Fetch the latest quote for a symbol.

        Args:
            symbol: Stock ticker symbol (e.g., "AAPL")

        Returns:
            StockQuote with price and daily change

        Raises:
            ValueError: If symbol is invalid
            SymbolNotFoundError: If Alpha Vantage has no quote for the symbol
            AlphaVantageRateLimitError: If rate limited
            AlphaVantageAPIError: If the API call fails
        """
        symbol = normalize_symbol(symbol)
        logger.info(f"Fetching stock quote for {symbol}")

        data = self._query("GLOBAL_QUOTE", symbol)
        quote = data.get("Global Quote")
        if not quote:
            raise SymbolNotFoundError(f"No data found for symbol: {symbol}")

        price = _to_float(quote.get("05. price"))
        if price is None:
            raise AlphaVantageAPIError(f"Quote for {symbol} is missing a price")

        return StockQuote(
            symbol=quote.get("01. symbol", symbol),
            price=price,
            change=_to_float(quote.get("09. change"), 0.0),
            change_percent=_to_float(quote.get("10. change percent"), 0.0),
            volume=_to_int(quote.get("06. volume")),
            latest_trading_day=quote.get("07. latest trading day"),
            previous_close=_to_float(quote.get("08. previous close")),
        )

    def get_options_chain(self, symbol: str, date: Optional[str] = None) -> list[OptionQuote]:
        """
        Fetch the options chain for a symbol.

        Args:
            symbol: Stock ticker symbol
            date: Trading date (YYYY-MM-DD); latest session when omitted

        Returns:
            List of OptionQuote, calls and puts mixed

        Raises:
            ValueError: If symbol is invalid
            AlphaVantageRateLimitError: If rate limited
            AlphaVantageAPIError: If the API call fails
        """
        symbol = normalize_symbol(symbol)
        logger.info(f"Fetching options chain for {symbol}")

        extra = {"date": date} if date else None
        data = self._query("HISTORICAL_OPTIONS", symbol, extra)

        contracts = []
        for row in data.get("data", []):
            option_type = str(row.get("type", "")).lower()
            strike = _to_float(row.get("strike"))
            if option_type not in ("call", "put") or strike is None:
                logger.debug(f"Skipping malformed contract row: {row.get('contractID')}")
                continue

            contracts.append(
                OptionQuote(
                    contract_id=row.get("contractID", ""),
                    symbol=row.get("symbol", symbol),
                    strike=strike,
                    expiration=row.get("expiration", ""),
                    option_type=option_type,
                    bid=_to_float(row.get("bid"), 0.0),
                    ask=_to_float(row.get("ask"), 0.0),
                    last=_to_float(row.get("last")),
                    mark=_to_float(row.get("mark")),
                    volume=_to_int(row.get("volume")),
                    open_interest=_to_int(row.get("open_interest")),
                    implied_volatility=_to_float(row.get("implied_volatility")),
                )
            )

        logger.info(f"Parsed {len(contracts)} option contracts for {symbol}")
        return contracts

    def fetch_daily_closes(self, symbol: str, lookback_days: int = 100) -> PriceSeries:
        """
        Fetch daily closing prices.

        Args:
            symbol: Stock ticker symbol
            lookback_days: Number of most recent sessions to keep

        Returns:
            PriceSeries ordered oldest first

        Raises:
            ValueError: If the symbol is invalid
            SymbolNotFoundError: If no price data is available
            AlphaVantageRateLimitError: If rate limited
            AlphaVantageAPIError: If the API call fails or returns unusable closes
        """
        symbol = normalize_symbol(symbol)

        if lookback_days > self.MAX_LOOKBACK_DAYS:
            logger.warning(
                f"Requested {lookback_days} days but compact output is limited to "
                f"{self.MAX_LOOKBACK_DAYS} days. Capping request."
            )
            lookback_days = self.MAX_LOOKBACK_DAYS

        logger.info(f"Fetching {lookback_days} days of closes for {symbol}")
        data = self._query("TIME_SERIES_DAILY", symbol, {"outputsize": "compact"})

        time_series = data.get("Time Series (Daily)")
        if not time_series:
            raise SymbolNotFoundError(f"No price data available for {symbol}")

        try:
            dates = sorted(time_series.keys())[-lookback_days:]
            closes = [round(float(time_series[d]["4. close"]), 2) for d in dates]
            validate_closes(closes, symbol)
            return PriceSeries(symbol=symbol, dates=dates, closes=closes)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed daily prices for {symbol}: {e}")
            raise AlphaVantageAPIError(f"Malformed daily prices for {symbol}: {e}") from e

    def _query(
        self, function: str, symbol: str, extra: Optional[dict[str, str]] = None
    ) -> dict[str, Any]:
        """
        Call the Alpha Vantage query endpoint.

        Args:
            function: Alpha Vantage function name
            symbol: Normalized ticker symbol
            extra: Additional query parameters

        Returns:
            Raw API response dictionary

        Raises:
            AlphaVantageAPIError: If API call fails
            AlphaVantageRateLimitError: If rate limited
        """
        params = {"function": function, "symbol": symbol, "apikey": self.config.api_key}
        if extra:
            params.update(extra)

        try:
            response = self.get(self.QUERY_ENDPOINT, params=params)
            if response.status_code == 429:
                raise AlphaVantageRateLimitError("Alpha Vantage rate limit exceeded (HTTP 429)")
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout as err:
            raise AlphaVantageAPIError(
                f"Request timeout after {self.config.timeout}s for symbol {symbol}"
            ) from err
        except requests.exceptions.RequestException as e:
            raise AlphaVantageAPIError(f"API request failed: {e}") from e
        except ValueError as e:
            raise AlphaVantageAPIError(f"Invalid JSON response from API: {e}") from e

        self._check_api_errors(data)
        return data

    @staticmethod
    def _check_api_errors(data: dict[str, Any]) -> None:
        """Raise for error payloads Alpha Vantage returns with HTTP 200."""
        if "Error Message" in data:
            raise AlphaVantageAPIError(f"Alpha Vantage API error: {data['Error Message']}")

        if "Note" in data:
            raise AlphaVantageRateLimitError(f"Alpha Vantage rate limit: {data['Note']}")

        if "Information" in data:
            info = data["Information"]
            if "rate limit" in info.lower():
                raise AlphaVantageRateLimitError(f"Alpha Vantage rate limit: {info}")
            raise AlphaVantageAPIError(f"Alpha Vantage API info: {info}")
