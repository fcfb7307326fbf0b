"""
Return-based risk metrics.

This module computes historical risk statistics from daily closing prices:
annualized volatility, Sharpe ratio, maximum drawdown and beta against a
benchmark. All functions are pure; fetching prices is the caller's job.

Formulas:
- Daily return: r_t = P_t / P_{t-1} - 1
- Volatility: sample std-dev of r_t * sqrt(252)
- Sharpe: (mean(r_t) * 252 - risk_free_rate) / volatility
- Max drawdown: max over t of (peak_t - P_t) / peak_t
- Beta: cov(r_asset, r_bench) / var(r_bench)
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional

from ..constants import DEFAULT_RISK_FREE_RATE, TRADING_DAYS_PER_YEAR
from ..exceptions import InsufficientDataError
from ..models import PriceSeries

logger = logging.getLogger(__name__)


@dataclass
class ReturnRiskMetrics:
    """
    Risk statistics for one security.

    Attributes:
        symbol: Ticker symbol
        benchmark: Benchmark ticker symbol
        volatility: Annualized volatility as decimal (0.25 = 25%)
        sharpe_ratio: Annualized Sharpe ratio; None when volatility is zero
        max_drawdown: Largest peak-to-trough decline as positive decimal
        beta: Beta to benchmark; None when benchmark variance is zero
        data_points: Number of daily returns used
    """

    symbol: str
    benchmark: str
    volatility: float
    sharpe_ratio: Optional[float]
    max_drawdown: float
    beta: Optional[float]
    data_points: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "symbol": self.symbol,
            "benchmark": self.benchmark,
            "volatility": round(self.volatility, 4),
            "sharpe_ratio": round(self.sharpe_ratio, 4) if self.sharpe_ratio is not None else None,
            "max_drawdown": round(self.max_drawdown, 4),
            "beta": round(self.beta, 4) if self.beta is not None else None,
            "data_points": self.data_points,
        }


def daily_returns(closes: Sequence[float]) -> list[float]:
    """Simple day-over-day returns."""
    return [closes[i] / closes[i - 1] - 1 for i in range(1, len(closes))]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _covariance(a: Sequence[float], b: Sequence[float]) -> float:
    mean_a = _mean(a)
    mean_b = _mean(b)
    return sum((x - mean_a) * (y - mean_b) for x, y in zip(a, b)) / (len(a) - 1)


def annualized_volatility(
    returns: Sequence[float], periods_per_year: int = TRADING_DAYS_PER_YEAR
) -> float:
    """
    Annualized sample standard deviation of returns.

    Raises:
        InsufficientDataError: If fewer than 2 returns are supplied
    """
    if len(returns) < 2:
        raise InsufficientDataError("At least 2 returns are required for volatility")
    return math.sqrt(_covariance(returns, returns)) * math.sqrt(periods_per_year)


def sharpe_ratio(
    returns: Sequence[float],
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    periods_per_year: int = TRADING_DAYS_PER_YEAR,
) -> Optional[float]:
    """Annualized Sharpe ratio, or None for a zero-volatility series."""
    volatility = annualized_volatility(returns, periods_per_year)
    if volatility == 0:
        return None
    return (_mean(returns) * periods_per_year - risk_free_rate) / volatility


def max_drawdown(closes: Sequence[float]) -> float:
    """Largest peak-to-trough decline as a positive fraction."""
    peak = closes[0]
    worst = 0.0
    for price in closes:
        peak = max(peak, price)
        worst = max(worst, (peak - price) / peak)
    return worst


def beta(asset_returns: Sequence[float], benchmark_returns: Sequence[float]) -> Optional[float]:
    """
    Beta of asset returns against benchmark returns.

    Raises:
        ValueError: If the series lengths differ
        InsufficientDataError: If fewer than 2 paired returns are supplied
    """
    if len(asset_returns) != len(benchmark_returns):
        raise ValueError("Return series must have equal length")
    if len(asset_returns) < 2:
        raise InsufficientDataError("At least 2 paired returns are required for beta")

    variance = _covariance(benchmark_returns, benchmark_returns)
    if variance == 0:
        return None
    return _covariance(asset_returns, benchmark_returns) / variance


def align_series(asset: PriceSeries, benchmark: PriceSeries) -> tuple[list[float], list[float]]:
    """Closing prices of both series restricted to their shared dates."""
    bench_by_date = benchmark.as_mapping()
    shared = [d for d in asset.dates if d in bench_by_date]
    asset_by_date = asset.as_mapping()
    return [asset_by_date[d] for d in shared], [bench_by_date[d] for d in shared]


def calculate_risk_metrics(
    asset: PriceSeries,
    benchmark: PriceSeries,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> ReturnRiskMetrics:
    """
    Compute the full set of risk metrics for an asset.

    Args:
        asset: Daily closes for the security
        benchmark: Daily closes for the benchmark
        risk_free_rate: Annual risk-free rate as decimal

    Returns:
        ReturnRiskMetrics

    Raises:
        InsufficientDataError: If there are fewer than 2 returns to work with
    """
    returns = daily_returns(asset.closes)
    if len(returns) < 2:
        raise InsufficientDataError(
            f"Not enough price history for {asset.symbol}: {len(asset.closes)} closes"
        )

    asset_closes, bench_closes = align_series(asset, benchmark)
    paired_asset = daily_returns(asset_closes)
    paired_bench = daily_returns(bench_closes)

    beta_value: Optional[float] = None
    if len(paired_asset) >= 2:
        beta_value = beta(paired_asset, paired_bench)
    else:
        logger.warning(
            f"Only {len(asset_closes)} shared dates between {asset.symbol} and "
            f"{benchmark.symbol}; beta unavailable"
        )

    metrics = ReturnRiskMetrics(
        symbol=asset.symbol,
        benchmark=benchmark.symbol,
        volatility=annualized_volatility(returns),
        sharpe_ratio=sharpe_ratio(returns, risk_free_rate),
        max_drawdown=max_drawdown(asset.closes),
        beta=beta_value,
        data_points=len(returns),
    )
    logger.debug(f"Risk metrics for {asset.symbol}: {metrics.to_dict()}")
    return metrics
