"""Tests for portfolio API endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from homepage_api.alphavantage_client import AlphaVantageClient
from homepage_api.config import AlphaVantageConfig
from homepage_api.exceptions import AlphaVantageRateLimitError
from homepage_api.models import PriceSeries
from homepage_api.server.dependencies import require_market_data
from homepage_api.server.main import app
from homepage_api.server.services.market_data_service import MarketDataService

ANALYZE = "/api/portfolio/analyze"
RISK = "/api/portfolio/risk-metrics"

DATES = ["2026-10-12", "2026-10-13", "2026-10-14", "2026-10-15", "2026-10-16"]
CLOSES = {
    "AAPL": [186.0, 188.5, 185.2, 189.1, 189.84],
    "SPY": [565.0, 568.2, 566.9, 570.4, 571.2],
}


@pytest.fixture
def price_history(av_client: MagicMock) -> MagicMock:
    """Serve canned daily closes per symbol."""

    def fetch(symbol: str, lookback_days: int = 100) -> PriceSeries:
        symbol = symbol.upper()
        return PriceSeries(symbol=symbol, dates=DATES, closes=CLOSES[symbol])

    av_client.fetch_daily_closes.side_effect = fetch
    return av_client


class TestAnalyzePortfolio:
    """Tests for POST /api/portfolio/analyze."""

    def test_analysis(self, client: TestClient):
        payload = {
            "holdings": [
                {"symbol": "aapl", "shares": 50, "price": 190.0, "sector": "Technology"},
                {"symbol": "JNJ", "shares": 40, "price": 155.0, "sector": "Healthcare"},
            ]
        }

        response = client.post(ANALYZE, json=payload)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_value"] == 15700.0
        assert data["largest_position"]["symbol"] == "AAPL"
        assert data["largest_position"] == data["positions"][0]
        assert data["positions"][0]["weight"] == round(9500 / 15700, 4)
        assert data["diversification"] == "Concentrated"
        assert data["risk_level"] == "High"
        assert set(data["sector_weights"]) == {"Technology", "Healthcare"}
        assert data["recommendations"]

    def test_balanced_portfolio(self, client: TestClient):
        payload = {
            "holdings": [
                {"symbol": symbol, "shares": 10, "price": 100.0}
                for symbol in ["AAPL", "MSFT", "JNJ", "XOM", "PG"]
            ]
        }

        response = client.post(ANALYZE, json=payload)

        data = response.json()
        assert data["concentration_index"] == 0.2
        assert data["effective_positions"] == 5.0
        assert data["recommendations"] == ["Allocation looks balanced; no changes suggested"]

    @pytest.mark.parametrize(
        "holdings",
        [
            [],
            [{"symbol": "AAPL", "shares": 0, "price": 190.0}],
            [{"symbol": "AAPL", "shares": 10, "price": -1}],
            [
                {"symbol": "AAPL", "shares": 10, "price": 190.0},
                {"symbol": "aapl", "shares": 5, "price": 190.0},
            ],
        ],
    )
    def test_invalid_holdings(self, client: TestClient, holdings: list):
        response = client.post(ANALYZE, json={"holdings": holdings})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "ValidationError"

    def test_invalid_symbol(self, client: TestClient):
        payload = {"holdings": [{"symbol": "BAD!", "shares": 10, "price": 190.0}]}

        response = client.post(ANALYZE, json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Symbol must be" in response.json()["detail"]


class TestRiskMetrics:
    """Tests for GET /api/portfolio/risk-metrics."""

    def test_metrics(self, market_client: TestClient, price_history: MagicMock):
        response = market_client.get(RISK, params={"symbol": "AAPL"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["benchmark"] == "SPY"
        assert data["data_points"] == 4
        assert data["volatility"] > 0
        assert data["beta"] is not None
        assert price_history.fetch_daily_closes.call_count == 2

    def test_benchmark_same_as_symbol(self, market_client: TestClient, price_history: MagicMock):
        response = market_client.get(RISK, params={"symbol": "SPY", "benchmark": "spy"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["beta"] == 1.0
        price_history.fetch_daily_closes.assert_called_once_with("SPY", lookback_days=100)

    def test_lookback_passed_through(self, market_client: TestClient, price_history: MagicMock):
        market_client.get(RISK, params={"symbol": "SPY", "benchmark": "SPY", "lookback_days": 30})

        price_history.fetch_daily_closes.assert_called_once_with("SPY", lookback_days=30)

    def test_lookback_out_of_range(self, market_client: TestClient, price_history: MagicMock):
        response = market_client.get(RISK, params={"symbol": "AAPL", "lookback_days": 500})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_insufficient_history(self, market_client: TestClient, av_client: MagicMock):
        av_client.fetch_daily_closes.return_value = PriceSeries(
            symbol="NEW", dates=["2026-10-16"], closes=[10.0]
        )

        response = market_client.get(RISK, params={"symbol": "NEW", "benchmark": "NEW"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_rate_limited(self, market_client: TestClient, av_client: MagicMock):
        av_client.fetch_daily_closes.side_effect = AlphaVantageRateLimitError("rate limit")

        response = market_client.get(RISK, params={"symbol": "AAPL"})

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS

    def test_malformed_upstream_closes(self):
        """A provider answering with an unusable close surfaces as a bad gateway."""
        upstream = MagicMock()
        upstream.status_code = 200
        upstream.json.return_value = {
            "Time Series (Daily)": {
                "2026-10-15": {"4. close": "188.61"},
                "2026-10-16": {"4. close": "0"},
            }
        }
        av_client = AlphaVantageClient(AlphaVantageConfig(api_key="test_key", max_retries=0))
        service = MarketDataService(av_client, {"S&P 500": "SPY"})
        app.dependency_overrides[require_market_data] = lambda: service

        try:
            with patch.object(av_client.session, "request", return_value=upstream):
                with TestClient(app) as test_client:
                    response = test_client.get(RISK, params={"symbol": "AAPL"})
        finally:
            app.dependency_overrides.clear()
            av_client.close()

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert "Malformed daily prices" in response.json()["detail"]
