"""
Tests for return-based risk metrics.
"""

import math

import pytest

from homepage_api.analysis.risk_metrics import (
    align_series,
    annualized_volatility,
    beta,
    calculate_risk_metrics,
    daily_returns,
    max_drawdown,
    sharpe_ratio,
)
from homepage_api.exceptions import InsufficientDataError
from homepage_api.models import PriceSeries


def make_series(symbol, closes, start_day=1):
    dates = [f"2026-09-{day:02d}" for day in range(start_day, start_day + len(closes))]
    return PriceSeries(symbol=symbol, dates=dates, closes=closes)


class TestDailyReturns:
    def test_simple_returns(self):
        assert daily_returns([100.0, 110.0, 99.0]) == pytest.approx([0.1, -0.1])

    def test_single_price_has_no_returns(self):
        assert daily_returns([100.0]) == []


class TestVolatility:
    def test_known_value(self):
        # Sample std-dev of [0.01, -0.01] is sqrt(0.0002)
        expected = math.sqrt(0.0002) * math.sqrt(252)
        assert annualized_volatility([0.01, -0.01]) == pytest.approx(expected)

    def test_constant_returns_zero_volatility(self):
        assert annualized_volatility([0.01, 0.01, 0.01]) == pytest.approx(0.0)

    def test_requires_two_returns(self):
        with pytest.raises(InsufficientDataError):
            annualized_volatility([0.01])


class TestSharpeRatio:
    def test_zero_volatility_returns_none(self):
        assert sharpe_ratio([0.0, 0.0, 0.0]) is None

    def test_positive_excess_return(self):
        returns = [0.01, 0.0, 0.01, 0.0]
        expected = (0.005 * 252 - 0.05) / annualized_volatility(returns)
        assert sharpe_ratio(returns, risk_free_rate=0.05) == pytest.approx(expected)


class TestMaxDrawdown:
    def test_peak_to_trough(self):
        assert max_drawdown([100.0, 120.0, 90.0, 130.0]) == pytest.approx(0.25)

    def test_rising_series_has_no_drawdown(self):
        assert max_drawdown([1.0, 2.0, 3.0]) == 0.0


class TestBeta:
    def test_identical_series(self):
        returns = [0.01, -0.02, 0.015, 0.005]
        assert beta(returns, returns) == pytest.approx(1.0)

    def test_levered_series(self):
        bench = [0.01, -0.02, 0.015, 0.005]
        asset = [2 * r for r in bench]
        assert beta(asset, bench) == pytest.approx(2.0)

    def test_flat_benchmark_returns_none(self):
        assert beta([0.01, 0.02, -0.01], [0.0, 0.0, 0.0]) is None

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="equal length"):
            beta([0.01, 0.02], [0.01])


def test_align_series_uses_shared_dates():
    asset = make_series("AAPL", [10.0, 11.0, 12.0, 13.0], start_day=1)
    bench = make_series("SPY", [20.0, 21.0, 22.0], start_day=2)

    asset_closes, bench_closes = align_series(asset, bench)

    assert asset_closes == [11.0, 12.0, 13.0]
    assert bench_closes == [20.0, 21.0, 22.0]


class TestCalculateRiskMetrics:
    def test_full_metrics(self):
        asset = make_series("AAPL", [100.0, 102.0, 99.0, 103.0, 104.0])
        bench = make_series("SPY", [400.0, 402.0, 401.0, 405.0, 406.0])

        metrics = calculate_risk_metrics(asset, bench, risk_free_rate=0.04)

        assert metrics.symbol == "AAPL"
        assert metrics.benchmark == "SPY"
        assert metrics.data_points == 4
        assert metrics.volatility > 0
        assert metrics.sharpe_ratio is not None
        assert metrics.max_drawdown == pytest.approx(3.0 / 102.0)
        assert metrics.beta is not None

    def test_benchmark_is_self(self):
        asset = make_series("SPY", [400.0, 402.0, 401.0, 405.0])
        metrics = calculate_risk_metrics(asset, asset)
        assert metrics.beta == pytest.approx(1.0)

    def test_insufficient_history(self):
        asset = make_series("AAPL", [100.0, 101.0])
        with pytest.raises(InsufficientDataError, match="Not enough price history"):
            calculate_risk_metrics(asset, asset)

    def test_no_overlap_leaves_beta_empty(self):
        asset = make_series("AAPL", [100.0, 101.0, 99.0], start_day=1)
        bench = make_series("SPY", [400.0, 401.0, 399.0], start_day=10)

        metrics = calculate_risk_metrics(asset, bench)

        assert metrics.beta is None

    def test_to_dict_rounds(self):
        asset = make_series("AAPL", [100.0, 102.0, 99.0, 103.0])
        data = calculate_risk_metrics(asset, asset).to_dict()

        assert data["beta"] == 1.0
        assert data["volatility"] == round(data["volatility"], 4)
        assert data["data_points"] == 3
