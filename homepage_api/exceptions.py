"""Custom exceptions for market data and calculator operations."""


class MarketDataError(Exception):
    """Base exception for market data operations."""

    pass


class ServiceNotConfiguredError(MarketDataError):
    """Market data provider has no API key configured."""

    pass


class AlphaVantageAPIError(MarketDataError):
    """Exception raised for Alpha Vantage API errors."""

    pass


class AlphaVantageRateLimitError(AlphaVantageAPIError):
    """Exception raised when the Alpha Vantage rate limit is exceeded."""

    pass


class SymbolNotFoundError(MarketDataError):
    """Provider returned no data for the requested symbol."""

    pass


class CalculationInputError(ValueError):
    """Calculator input failed validation before computation."""

    pass


class InsufficientDataError(ValueError):
    """Not enough price history to compute a statistic."""

    pass
