"""Configuration management for the FastAPI server.

This module handles configuration loading from environment variables,
``.env`` files and credential files, providing sensible defaults for
development and production.
"""

import logging
import os
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from homepage_api.config import AlphaVantageConfig

logger = logging.getLogger(__name__)

# Project root (three levels up from this file: homepage_api/server/config.py)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Application configuration settings.

    Attributes:
        app_name: Application name
        version: Application version
        debug: Debug mode flag
        environment: Deployment environment label reported by health checks
        cors_origins: List of allowed CORS origins
        host: Server host address
        port: Server port number
        alpha_vantage_api_key: Alpha Vantage API key (env ALPHA_VANTAGE_API_KEY)
        alpha_vantage_key_file: Fallback key file, relative to project root
        alpha_vantage_timeout: Alpha Vantage request timeout in seconds
        risk_free_rate: Annual risk-free rate used for Sharpe ratios
        index_symbols: Index display name to tradable proxy symbol
    """

    app_name: str = "Homepage API"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = "dev"

    # CORS configuration - allow local frontend dev servers
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:8080",
    ]

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8080

    # Market data configuration
    alpha_vantage_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ALPHA_VANTAGE_API_KEY", "HOMEPAGE_ALPHA_VANTAGE_API_KEY"),
    )
    alpha_vantage_key_file: str = "config/alpha_vantage_api_key.txt"
    alpha_vantage_timeout: int = 10

    risk_free_rate: float = 0.05
    index_symbols: dict[str, str] = {
        "S&P 500": "SPY",
        "NASDAQ 100": "QQQ",
        "Dow Jones": "DIA",
    }

    class Config:
        """Pydantic configuration."""
        env_prefix = "HOMEPAGE_"
        env_file = (".env", ".env.local")
        extra = "ignore"
        case_sensitive = False

    @property
    def alpha_vantage_configured(self) -> bool:
        """Whether an Alpha Vantage API key is available."""
        return bool(self.alpha_vantage_api_key)

    def get_alpha_vantage_config(self) -> AlphaVantageConfig:
        """Build the client configuration.

        Returns:
            AlphaVantageConfig for the market data client

        Raises:
            ValueError: If no API key is configured
        """
        return AlphaVantageConfig(
            api_key=self.alpha_vantage_api_key,
            timeout=self.alpha_vantage_timeout,
        )


def _load_credentials() -> None:
    """Load the Alpha Vantage key from the credential file.

    Only used when neither the environment nor a .env file supplied
    a key. The file format is ``alpha_vantage_api_key = 'value'``.
    """
    if settings.alpha_vantage_api_key or os.environ.get("ALPHA_VANTAGE_API_KEY"):
        return

    key_path = PROJECT_ROOT / settings.alpha_vantage_key_file
    if not key_path.is_file():
        logger.debug("No Alpha Vantage key file at %s", key_path)
        return

    try:
        settings.alpha_vantage_api_key = AlphaVantageConfig.from_file(key_path).api_key
        logger.info("Loaded ALPHA_VANTAGE_API_KEY from %s", key_path)
    except ValueError as e:
        logger.warning("Ignoring unreadable key file %s: %s", key_path, e)


# Global settings instance
settings = Settings()

# Load credentials from files on module import
_load_credentials()
