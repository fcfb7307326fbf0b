"""Pydantic models for Portfolio API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class HoldingInput(BaseModel):
    """Request schema for one portfolio holding.

    Attributes:
        symbol: Ticker symbol
        shares: Share count
        price: Price per share
        sector: Optional sector label
    """

    symbol: str = Field(..., min_length=1, max_length=10, description="Ticker symbol")
    shares: float = Field(..., gt=0, allow_inf_nan=False, description="Share count")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Price per share")
    sector: Optional[str] = Field(None, max_length=50, description="Sector label")

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        """Uppercase and strip the symbol."""
        return v.upper().strip()


class PortfolioAnalysisRequest(BaseModel):
    """Request schema for portfolio analysis."""

    holdings: list[HoldingInput] = Field(..., min_length=1, description="Portfolio holdings")

    @field_validator("holdings")
    @classmethod
    def validate_unique_symbols(cls, v: list[HoldingInput]) -> list[HoldingInput]:
        """Reject duplicate symbols.

        Raises:
            ValueError: If a symbol appears more than once
        """
        seen = set()
        for holding in v:
            if holding.symbol in seen:
                raise ValueError(f"Duplicate holding: {holding.symbol}")
            seen.add(holding.symbol)
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "holdings": [
                    {"symbol": "AAPL", "shares": 50, "price": 190.0, "sector": "Technology"},
                    {"symbol": "JNJ", "shares": 40, "price": 155.0, "sector": "Healthcare"},
                ]
            }
        }
    }


class PositionWeightResponse(BaseModel):
    """Value and weight of one position."""

    symbol: str
    value: float
    weight: float = Field(..., description="Fraction of total value (0.0 to 1.0)")


class PortfolioAnalysisResponse(BaseModel):
    """Response schema for portfolio analysis.

    Attributes:
        total_value: Sum of position values
        positions: Positions sorted by weight, largest first
        largest_position: Heaviest position
        concentration_index: Herfindahl index (sum of squared weights)
        effective_positions: Equivalent number of equal-weight positions
        sector_weights: Weight per sector
        diversification: Diversification label
        risk_level: Concentration risk label
        recommendations: Suggested actions
        analyzed_at: Analysis timestamp
    """

    total_value: float
    positions: list[PositionWeightResponse]
    largest_position: PositionWeightResponse
    concentration_index: float
    effective_positions: float
    sector_weights: dict[str, float]
    diversification: str
    risk_level: str
    recommendations: list[str]
    analyzed_at: datetime = Field(default_factory=datetime.utcnow)


class RiskMetricsResponse(BaseModel):
    """Response schema for return-based risk metrics.

    Attributes:
        symbol: Ticker symbol analyzed
        benchmark: Benchmark symbol for beta
        volatility: Annualized volatility as decimal
        sharpe_ratio: Annualized Sharpe ratio, null if volatility is zero
        max_drawdown: Largest peak-to-trough decline as decimal
        beta: Beta to benchmark, null if unavailable
        data_points: Daily returns used
        calculated_at: Calculation timestamp
    """

    symbol: str
    benchmark: str
    volatility: float
    sharpe_ratio: Optional[float] = None
    max_drawdown: float
    beta: Optional[float] = None
    data_points: int
    calculated_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = {
        "json_schema_extra": {
            "example": {
                "symbol": "AAPL",
                "benchmark": "SPY",
                "volatility": 0.2412,
                "sharpe_ratio": 1.1832,
                "max_drawdown": 0.0815,
                "beta": 1.0521,
                "data_points": 99,
                "calculated_at": "2026-10-17T10:00:00",
            }
        }
    }
