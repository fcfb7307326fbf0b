"""Pytest fixtures for FastAPI server tests.

This module provides test clients and a mocked market data provider
so that no test talks to Alpha Vantage.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from homepage_api.alphavantage_client import AlphaVantageClient
from homepage_api.server.dependencies import require_market_data
from homepage_api.server.main import app
from homepage_api.server.services.market_data_service import MarketDataService


@pytest.fixture(scope="function")
def client() -> TestClient:
    """Create a test client with no dependency overrides.

    Returns:
        FastAPI TestClient for making test requests

    Example:
        >>> def test_health(client):
        >>>     response = client.get("/api/health")
        >>>     assert response.status_code == 200
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def av_client() -> MagicMock:
    """Create a mocked Alpha Vantage client.

    Returns:
        MagicMock constrained to the AlphaVantageClient interface
    """
    return MagicMock(spec=AlphaVantageClient)


@pytest.fixture(scope="function")
def market_client(av_client: MagicMock) -> TestClient:
    """Create a test client whose market data comes from av_client.

    The real MarketDataService is used so response shaping is exercised;
    only the HTTP client underneath is mocked.

    Args:
        av_client: Mocked Alpha Vantage client fixture

    Returns:
        FastAPI TestClient for making test requests
    """
    service = MarketDataService(
        av_client,
        {"S&P 500": "SPY", "NASDAQ 100": "QQQ"},
    )
    app.dependency_overrides[require_market_data] = lambda: service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
