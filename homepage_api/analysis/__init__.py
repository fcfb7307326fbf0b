"""
Portfolio and risk analysis package.

This package contains modules for analyzing holdings and price history:
- portfolio: Allocation weights, concentration and recommendations
- risk_metrics: Volatility, Sharpe ratio, drawdown and beta from daily closes

All classes and functions are re-exported at the package level for convenience.
"""

from homepage_api.analysis.portfolio import (
    Holding,
    PortfolioAnalysis,
    PortfolioAnalyzer,
    PositionWeight,
)
from homepage_api.analysis.risk_metrics import (
    ReturnRiskMetrics,
    annualized_volatility,
    beta,
    calculate_risk_metrics,
    daily_returns,
    max_drawdown,
    sharpe_ratio,
)

__all__ = [
    # portfolio
    "Holding",
    "PortfolioAnalysis",
    "PortfolioAnalyzer",
    "PositionWeight",
    # risk_metrics
    "ReturnRiskMetrics",
    "annualized_volatility",
    "beta",
    "calculate_risk_metrics",
    "daily_returns",
    "max_drawdown",
    "sharpe_ratio",
]
