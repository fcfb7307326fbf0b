"""Configuration management for the Alpha Vantage market data client."""

import os
import re
from dataclasses import dataclass
from pathlib import Path


@dataclass
class AlphaVantageConfig:
    """
    Configuration for Alpha Vantage API client.

    Attributes:
        api_key: Alpha Vantage API key for authentication
        base_url: Base URL for Alpha Vantage API
        timeout: Request timeout in seconds
        max_retries: Maximum number of retry attempts for failed requests
        retry_delay: Initial delay between retries (seconds)
    """

    api_key: str
    base_url: str = "https://www.alphavantage.co"
    timeout: int = 10
    max_retries: int = 3
    retry_delay: float = 1.0

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.api_key:
            raise ValueError("API key cannot be empty")

        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")

        if self.max_retries < 0:
            raise ValueError("Max retries cannot be negative")

        if self.retry_delay <= 0:
            raise ValueError("Retry delay must be positive")

    @classmethod
    def from_env(cls, api_key_var: str = "ALPHA_VANTAGE_API_KEY") -> "AlphaVantageConfig":
        """
        Load configuration from environment variables.

        Args:
            api_key_var: Name of environment variable containing API key

        Returns:
            AlphaVantageConfig instance

        Raises:
            ValueError: If API key environment variable is not set
        """
        api_key = os.getenv(api_key_var)
        if not api_key:
            raise ValueError(
                f"{api_key_var} environment variable not set. "
                f"Get your API key from https://www.alphavantage.co/support/#api-key"
            )

        return cls(api_key=api_key)

    @classmethod
    def from_file(cls, file_path: Path) -> "AlphaVantageConfig":
        """
        Load configuration from a key file.

        The file should contain a line in the format:
        alpha_vantage_api_key = 'value'

        Args:
            file_path: Path to the API key file

        Returns:
            AlphaVantageConfig instance

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the API key cannot be parsed
        """
        if not file_path.exists():
            raise FileNotFoundError(
                f"API key file not found at {file_path}. "
                f"Please create the file with format: alpha_vantage_api_key = 'your_key'"
            )

        content = file_path.read_text().strip()

        match = re.search(r"alpha_vantage_api_key\s*=\s*['\"](.+?)['\"]", content)
        if not match:
            raise ValueError(
                f"Could not parse API key from {file_path}. "
                f"Expected format: alpha_vantage_api_key = 'your_key'"
            )

        return cls(api_key=match.group(1))
