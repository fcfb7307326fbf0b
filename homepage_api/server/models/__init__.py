"""Pydantic request and response models."""

from homepage_api.server.models.calculator import (
    CalculationRequest,
    CalculationResultResponse,
    CalculationSummaryResponse,
    OptionContractInput,
)
from homepage_api.server.models.common import ErrorResponse, HealthResponse, ServiceStatus
from homepage_api.server.models.market import (
    MarketIndicesResponse,
    OptionsChainResponse,
    StockQuoteResponse,
)
from homepage_api.server.models.portfolio import (
    PortfolioAnalysisRequest,
    PortfolioAnalysisResponse,
    RiskMetricsResponse,
)

__all__ = [
    # Common models
    "ErrorResponse",
    "HealthResponse",
    "ServiceStatus",
    # Calculator models
    "CalculationRequest",
    "CalculationResultResponse",
    "CalculationSummaryResponse",
    "OptionContractInput",
    # Market data models
    "MarketIndicesResponse",
    "OptionsChainResponse",
    "StockQuoteResponse",
    # Portfolio models
    "PortfolioAnalysisRequest",
    "PortfolioAnalysisResponse",
    "RiskMetricsResponse",
]
