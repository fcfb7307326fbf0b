"""Tests for market data API endpoints."""

from unittest.mock import MagicMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from homepage_api.exceptions import (
    AlphaVantageAPIError,
    AlphaVantageRateLimitError,
    SymbolNotFoundError,
)
from homepage_api.models import OptionQuote, StockQuote
from homepage_api.server.config import settings
from homepage_api.server.services import market_data_service


def make_quote(symbol: str = "AAPL", price: float = 189.84) -> StockQuote:
    return StockQuote(
        symbol=symbol,
        price=price,
        change=1.23,
        change_percent=0.65,
        volume=51234567,
        latest_trading_day="2026-10-16",
        previous_close=188.61,
    )


def make_option(option_type: str, strike: float, expiration: str) -> OptionQuote:
    return OptionQuote(
        contract_id=f"AAPL{expiration.replace('-', '')}{option_type[0].upper()}{int(strike)}",
        symbol="AAPL",
        strike=strike,
        expiration=expiration,
        option_type=option_type,
        bid=4.05,
        ask=4.25,
    )


class TestStockQuote:
    """Tests for GET /api/options/stock/{symbol}."""

    def test_returns_quote(self, market_client: TestClient, av_client: MagicMock):
        av_client.get_stock_quote.return_value = make_quote()

        response = market_client.get("/api/options/stock/AAPL")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["price"] == 189.84
        assert data["change_percent"] == 0.65
        assert data["currency"] == "USD"
        av_client.get_stock_quote.assert_called_once_with("AAPL")

    @pytest.mark.parametrize(
        "error,expected_status",
        [
            (SymbolNotFoundError("No data found for symbol: ZZZZ"), status.HTTP_404_NOT_FOUND),
            (AlphaVantageRateLimitError("rate limit"), status.HTTP_429_TOO_MANY_REQUESTS),
            (AlphaVantageAPIError("upstream failure"), status.HTTP_502_BAD_GATEWAY),
            (ValueError("Symbol must be 1-10 alphanumeric characters"),
             status.HTTP_400_BAD_REQUEST),
        ],
    )
    def test_error_mapping(
        self,
        market_client: TestClient,
        av_client: MagicMock,
        error: Exception,
        expected_status: int,
    ):
        av_client.get_stock_quote.side_effect = error

        response = market_client.get("/api/options/stock/ZZZZ")

        assert response.status_code == expected_status
        assert response.json()["detail"] == str(error)

    def test_not_configured_returns_503(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "alpha_vantage_api_key", "")
        monkeypatch.setattr(market_data_service, "_market_data_service", None)

        response = client.get("/api/options/stock/AAPL")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert "not configured" in response.json()["detail"]


class TestOptionsChain:
    """Tests for GET /api/options/chain/{symbol}."""

    def test_splits_calls_and_puts(self, market_client: TestClient, av_client: MagicMock):
        av_client.get_stock_quote.return_value = make_quote()
        av_client.get_options_chain.return_value = [
            make_option("call", 190.0, "2026-12-18"),
            make_option("put", 185.0, "2026-11-20"),
            make_option("call", 195.0, "2026-11-20"),
        ]

        response = market_client.get("/api/options/chain/aapl")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["symbol"] == "AAPL"
        assert data["stock_price"] == 189.84
        assert [c["strike"] for c in data["calls"]] == [190.0, 195.0]
        assert [p["strike"] for p in data["puts"]] == [185.0]
        assert data["expiration_dates"] == ["2026-11-20", "2026-12-18"]

    def test_chain_failure_falls_back_to_empty(
        self, market_client: TestClient, av_client: MagicMock
    ):
        av_client.get_stock_quote.return_value = make_quote()
        av_client.get_options_chain.side_effect = AlphaVantageAPIError("premium endpoint")

        response = market_client.get("/api/options/chain/AAPL")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["stock_price"] == 189.84
        assert data["calls"] == []
        assert data["puts"] == []
        assert data["expiration_dates"] == []

    def test_quote_failure_is_an_error(self, market_client: TestClient, av_client: MagicMock):
        av_client.get_stock_quote.side_effect = SymbolNotFoundError("No data found for symbol: X")

        response = market_client.get("/api/options/chain/X")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        av_client.get_options_chain.assert_not_called()


class TestMarketIndices:
    """Tests for GET /api/market/indices."""

    def test_returns_indices(self, market_client: TestClient, av_client: MagicMock):
        prices = {"SPY": 571.2, "QQQ": 489.5}
        av_client.get_stock_quote.side_effect = lambda symbol: make_quote(symbol, prices[symbol])

        response = market_client.get("/api/market/indices")

        assert response.status_code == status.HTTP_200_OK
        indices = response.json()["indices"]
        assert [i["name"] for i in indices] == ["S&P 500", "NASDAQ 100"]
        assert indices[0]["symbol"] == "SPY"
        assert indices[0]["value"] == 571.2

    def test_failed_index_skipped(self, market_client: TestClient, av_client: MagicMock):
        def quote(symbol: str) -> StockQuote:
            if symbol == "QQQ":
                raise AlphaVantageRateLimitError("rate limit")
            return make_quote(symbol, 571.2)

        av_client.get_stock_quote.side_effect = quote

        response = market_client.get("/api/market/indices")

        assert response.status_code == status.HTTP_200_OK
        assert [i["symbol"] for i in response.json()["indices"]] == ["SPY"]

    def test_all_indices_failing(self, market_client: TestClient, av_client: MagicMock):
        av_client.get_stock_quote.side_effect = AlphaVantageAPIError("down")

        response = market_client.get("/api/market/indices")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
