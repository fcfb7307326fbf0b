"""
Data models for market data returned by the provider clients.

These are provider-neutral containers; the server layer converts them
into its pydantic response schemas.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class StockQuote:
    """
    Latest quote for a security.

    Attributes:
        symbol: Ticker symbol
        price: Last traded price
        change: Absolute change from previous close
        change_percent: Percent change from previous close
        volume: Shares traded in the latest session
        latest_trading_day: Date of the latest session (YYYY-MM-DD)
        previous_close: Previous session close
        currency: Quote currency
    """

    symbol: str
    price: float
    change: float = 0.0
    change_percent: float = 0.0
    volume: Optional[int] = None
    latest_trading_day: Optional[str] = None
    previous_close: Optional[float] = None
    currency: str = "USD"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "symbol": self.symbol,
            "price": self.price,
            "change": self.change,
            "change_percent": self.change_percent,
            "volume": self.volume,
            "latest_trading_day": self.latest_trading_day,
            "previous_close": self.previous_close,
            "currency": self.currency,
        }


@dataclass
class OptionQuote:
    """
    Single option contract quote from an options chain.

    Attributes:
        contract_id: Provider contract identifier (OCC-style symbol)
        symbol: Underlying ticker symbol
        strike: Strike price
        expiration: Expiration date (YYYY-MM-DD)
        option_type: "call" or "put"
        bid: Bid price
        ask: Ask price
        last: Last traded price
        mark: Provider mark price
        volume: Contracts traded
        open_interest: Open contracts
        implied_volatility: Implied volatility as decimal
    """

    contract_id: str
    symbol: str
    strike: float
    expiration: str
    option_type: str
    bid: float
    ask: float
    last: Optional[float] = None
    mark: Optional[float] = None
    volume: int = 0
    open_interest: int = 0
    implied_volatility: Optional[float] = None


@dataclass
class PriceSeries:
    """
    Daily closing prices in chronological order.

    Attributes:
        symbol: Ticker symbol
        dates: ISO dates, oldest first
        closes: Closing prices aligned with dates
    """

    symbol: str
    dates: list[str]
    closes: list[float]

    def __post_init__(self) -> None:
        """Validate that dates and closes line up."""
        if len(self.dates) != len(self.closes):
            raise ValueError("dates and closes must have equal length")

    def as_mapping(self) -> dict[str, float]:
        """Map each date to its close."""
        return dict(zip(self.dates, self.closes))
