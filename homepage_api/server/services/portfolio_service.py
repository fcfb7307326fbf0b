"""Service layer for portfolio analysis and risk metrics."""

import logging
from datetime import datetime
from typing import Optional

from homepage_api.analysis import (
    Holding,
    PortfolioAnalyzer,
    PositionWeight,
    calculate_risk_metrics,
)
from homepage_api.server.models.portfolio import (
    PortfolioAnalysisRequest,
    PortfolioAnalysisResponse,
    PositionWeightResponse,
    RiskMetricsResponse,
)
from homepage_api.server.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)


def _position_response(position: PositionWeight) -> PositionWeightResponse:
    return PositionWeightResponse(
        symbol=position.symbol, value=position.value, weight=round(position.weight, 4)
    )


class PortfolioService:
    """Service for portfolio allocation analysis."""

    def __init__(self, analyzer: Optional[PortfolioAnalyzer] = None):
        """Initialize portfolio service.

        Args:
            analyzer: Portfolio analyzer (default: new PortfolioAnalyzer)
        """
        self.analyzer = analyzer or PortfolioAnalyzer()

    def analyze(self, request: PortfolioAnalysisRequest) -> PortfolioAnalysisResponse:
        """Analyze portfolio holdings.

        Args:
            request: Validated analysis request

        Returns:
            Portfolio analysis response

        Raises:
            ValueError: If holdings are invalid
        """
        holdings = [
            Holding(symbol=h.symbol, shares=h.shares, price=h.price, sector=h.sector)
            for h in request.holdings
        ]
        analysis = self.analyzer.analyze(holdings)

        positions = [_position_response(p) for p in analysis.positions]
        return PortfolioAnalysisResponse(
            total_value=analysis.total_value,
            positions=positions,
            largest_position=_position_response(analysis.largest_position),
            concentration_index=round(analysis.concentration_index, 4),
            effective_positions=round(analysis.effective_positions, 2),
            sector_weights={k: round(v, 4) for k, v in analysis.sector_weights.items()},
            diversification=analysis.diversification,
            risk_level=analysis.risk_level,
            recommendations=analysis.recommendations,
            analyzed_at=datetime.utcnow(),
        )


class RiskMetricsService:
    """Service for return-based risk metrics backed by market data.

    Attributes:
        market_data: Market data service used to fetch daily closes
        risk_free_rate: Annual risk-free rate as decimal
    """

    def __init__(self, market_data: MarketDataService, risk_free_rate: float):
        """Initialize risk metrics service.

        Args:
            market_data: Market data service
            risk_free_rate: Annual risk-free rate as decimal
        """
        self.market_data = market_data
        self.risk_free_rate = risk_free_rate

    def get_risk_metrics(
        self, symbol: str, benchmark: str, lookback_days: int
    ) -> RiskMetricsResponse:
        """Compute risk metrics for a symbol against a benchmark.

        Args:
            symbol: Ticker symbol
            benchmark: Benchmark ticker symbol
            lookback_days: Sessions of history to use

        Returns:
            Risk metrics response

        Raises:
            InsufficientDataError: If there is not enough history
            MarketDataError: If prices cannot be fetched
        """
        asset = self.market_data.get_daily_closes(symbol, lookback_days)
        if benchmark.strip().upper() == asset.symbol:
            bench = asset
        else:
            bench = self.market_data.get_daily_closes(benchmark, lookback_days)

        metrics = calculate_risk_metrics(asset, bench, risk_free_rate=self.risk_free_rate)
        return RiskMetricsResponse(**metrics.to_dict(), calculated_at=datetime.utcnow())
