"""
Unit tests for Settings.

Run: pytest tests/test_settings.py -v
"""

import pytest
from pydantic import ValidationError

from settings import DEFAULT_API_BASE_URL, Settings, get_settings

ENV_VARS = (
    "ENVIRONMENT", "API_BASE_URL", "API_BASE_URL_DEV", "API_BASE_URL_PROD",
    "REQUEST_TIMEOUT_SECONDS", "POLL_INTERVAL_SECONDS", "POLL_TIMEOUT_SECONDS", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_settings(**values) -> Settings:
    return Settings(_env_file=None, **values)


class TestResolvedApiBaseUrl:
    """Tests for Settings.resolved_api_base_url"""

    def test_default_when_unset(self):
        assert make_settings().resolved_api_base_url == DEFAULT_API_BASE_URL

    def test_generic_url_trailing_slash_removed(self):
        assert make_settings(api_base_url="https://api.example.com/").resolved_api_base_url == "https://api.example.com"

    def test_dev_url_wins_outside_production(self):
        settings = make_settings(api_base_url="https://generic", api_base_url_dev="https://dev", api_base_url_prod="https://prod")

        assert settings.resolved_api_base_url == "https://dev"

    def test_prod_url_wins_in_production(self):
        settings = make_settings(environment="production", api_base_url="https://generic", api_base_url_prod="https://prod")

        assert settings.is_production
        assert settings.resolved_api_base_url == "https://prod"

    def test_blank_mode_url_falls_through(self):
        settings = make_settings(api_base_url="https://generic", api_base_url_dev="   ")

        assert settings.resolved_api_base_url == "https://generic"


class TestValidation:
    def test_bad_environment_rejected(self):
        with pytest.raises(ValidationError):
            make_settings(environment="qa")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_settings(request_timeout_seconds=0)

    def test_poll_timeout(self):
        assert make_settings().poll_timeout_seconds == 3600.0
        with pytest.raises(ValidationError):
            make_settings(poll_timeout_seconds=0)

    def test_reads_environment(self, monkeypatch):
        """get_settings() should pick up env vars after a cache clear."""
        monkeypatch.setenv("API_BASE_URL", "https://from-env")
        monkeypatch.setenv("POLL_INTERVAL_SECONDS", "5")

        settings = get_settings()

        assert settings.api_base_url == "https://from-env"
        assert settings.poll_interval_seconds == 5.0
        assert get_settings() is settings
