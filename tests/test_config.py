"""
Tests for client and server configuration.
"""

import pytest

from homepage_api.config import AlphaVantageConfig
from homepage_api.server.config import Settings


class TestAlphaVantageConfig:
    """Tests for AlphaVantageConfig."""

    def test_defaults(self):
        config = AlphaVantageConfig(api_key="abc")
        assert config.base_url == "https://www.alphavantage.co"
        assert config.timeout == 10
        assert config.max_retries == 3
        assert config.retry_delay == 1.0

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"api_key": ""}, "API key cannot be empty"),
            ({"api_key": "abc", "timeout": 0}, "Timeout must be positive"),
            ({"api_key": "abc", "max_retries": -1}, "Max retries cannot be negative"),
            ({"api_key": "abc", "retry_delay": 0}, "Retry delay must be positive"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            AlphaVantageConfig(**kwargs)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", "env_key")
        assert AlphaVantageConfig.from_env().api_key == "env_key"

    def test_from_env_custom_variable(self, monkeypatch):
        monkeypatch.setenv("MY_AV_KEY", "custom_key")
        assert AlphaVantageConfig.from_env("MY_AV_KEY").api_key == "custom_key"

    def test_from_env_missing(self, monkeypatch):
        monkeypatch.delenv("ALPHA_VANTAGE_API_KEY", raising=False)
        with pytest.raises(ValueError, match="environment variable not set"):
            AlphaVantageConfig.from_env()

    def test_from_file(self, tmp_path):
        key_file = tmp_path / "alpha_vantage_api_key.txt"
        key_file.write_text("alpha_vantage_api_key = 'file_key'\n")
        assert AlphaVantageConfig.from_file(key_file).api_key == "file_key"

    def test_from_file_double_quotes(self, tmp_path):
        key_file = tmp_path / "key.txt"
        key_file.write_text('alpha_vantage_api_key="quoted"')
        assert AlphaVantageConfig.from_file(key_file).api_key == "quoted"

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AlphaVantageConfig.from_file(tmp_path / "missing.txt")

    def test_from_file_unparseable(self, tmp_path):
        key_file = tmp_path / "key.txt"
        key_file.write_text("just_a_key")
        with pytest.raises(ValueError, match="Could not parse"):
            AlphaVantageConfig.from_file(key_file)


class TestSettings:
    """Tests for server Settings."""

    def test_prefixed_environment_variables(self, monkeypatch):
        monkeypatch.setenv("HOMEPAGE_PORT", "9090")
        monkeypatch.setenv("HOMEPAGE_DEBUG", "true")

        settings = Settings(_env_file=None)

        assert settings.port == 9090
        assert settings.debug is True

    def test_api_key_from_unprefixed_variable(self, monkeypatch):
        monkeypatch.delenv("HOMEPAGE_ALPHA_VANTAGE_API_KEY", raising=False)
        monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", "plain_key")

        settings = Settings(_env_file=None)

        assert settings.alpha_vantage_configured
        assert settings.get_alpha_vantage_config().api_key == "plain_key"

    def test_not_configured(self, monkeypatch):
        monkeypatch.delenv("ALPHA_VANTAGE_API_KEY", raising=False)
        monkeypatch.delenv("HOMEPAGE_ALPHA_VANTAGE_API_KEY", raising=False)

        settings = Settings(_env_file=None)

        assert not settings.alpha_vantage_configured
        with pytest.raises(ValueError):
            settings.get_alpha_vantage_config()

    def test_default_index_symbols(self, monkeypatch):
        settings = Settings(_env_file=None)
        assert settings.index_symbols["S&P 500"] == "SPY"
