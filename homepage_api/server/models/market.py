"""Pydantic models for market data API responses."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class StockQuoteResponse(BaseModel):
    """Response schema for a stock quote.

    Attributes:
        symbol: Ticker symbol
        price: Last traded price
        change: Change from previous close
        change_percent: Percent change from previous close
        volume: Shares traded in the latest session
        latest_trading_day: Date of the latest session
        previous_close: Previous session close
        currency: Quote currency
    """

    symbol: str = Field(..., description="Ticker symbol")
    price: float = Field(..., description="Last traded price")
    change: float = Field(0.0, description="Change from previous close")
    change_percent: float = Field(0.0, description="Percent change from previous close")
    volume: Optional[int] = Field(None, description="Shares traded")
    latest_trading_day: Optional[str] = Field(None, description="Latest session date")
    previous_close: Optional[float] = Field(None, description="Previous session close")
    currency: str = Field("USD", description="Quote currency")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "symbol": "AAPL",
                "price": 189.84,
                "change": 1.23,
                "change_percent": 0.65,
                "volume": 51234567,
                "latest_trading_day": "2026-10-16",
                "previous_close": 188.61,
                "currency": "USD",
            }
        },
    }


class OptionQuoteResponse(BaseModel):
    """Response schema for one option contract in a chain."""

    contract_id: str
    symbol: str
    strike: float
    expiration: str
    option_type: Literal["call", "put"]
    bid: float
    ask: float
    last: Optional[float] = None
    mark: Optional[float] = None
    volume: int = 0
    open_interest: int = 0
    implied_volatility: Optional[float] = None

    model_config = {"from_attributes": True}


class OptionsChainResponse(BaseModel):
    """Response schema for an options chain.

    Attributes:
        symbol: Underlying ticker symbol
        stock_price: Current underlying price
        calls: Call contracts
        puts: Put contracts
        expiration_dates: Distinct expirations, ascending
    """

    symbol: str
    stock_price: float
    calls: list[OptionQuoteResponse] = Field(default_factory=list)
    puts: list[OptionQuoteResponse] = Field(default_factory=list)
    expiration_dates: list[str] = Field(default_factory=list)


class MarketIndexResponse(BaseModel):
    """Response schema for one market index snapshot.

    Attributes:
        name: Index display name
        symbol: Proxy symbol quoted for the index
        value: Latest proxy price
        change: Change from previous close
        change_percent: Percent change from previous close
    """

    name: str
    symbol: str
    value: float
    change: float
    change_percent: float


class MarketIndicesResponse(BaseModel):
    """Response schema for the market indices snapshot."""

    indices: list[MarketIndexResponse]
    retrieved_at: datetime = Field(default_factory=datetime.utcnow)
