"""Unit tests for configuration loading and validation."""

from typing import Dict

import pytest
from pydantic import ValidationError

from edgefinder.config import get_config, reset_config
from edgefinder.config.settings import AppConfig


@pytest.fixture
def base_env() -> Dict[str, str]:
    """Provide minimal valid environment variables."""
    return {"ENV": "dev"}


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Clean environment variables before each test."""
    env_vars = [
        "ENV",
        "LOG_LEVEL",
        "REFERENCE_BOOK",
        "SERVER_HOST",
        "SERVER_PORT",
        "HTTP_TIMEOUT_SECONDS",
        "HTTP_RETRIES",
        "CACHE_TTL_SECONDS",
        "SEASON",
        "ODDS_API_KEY",
        "APISPORTS_KEY",
        "SPORTRADAR_API_KEY",
        "EV_THRESHOLD_PERCENT",
        "MIN_ARB_PERCENT",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)


def test_defaults(monkeypatch, clean_env):
    """Test that every field has a usable default."""
    config = AppConfig()

    assert config.env == "dev"
    assert config.log_level == "INFO"
    assert config.reference_book == "pinnacle"
    assert config.server_port == 8080
    assert config.http_timeout_seconds == 10
    assert config.http_retries == 2
    assert config.cache_ttl_seconds == 300
    assert config.ev_threshold_percent == 2.0
    assert config.min_arb_percent == 1.5
    assert config.odds_api_key.get_secret_value() == ""


def test_valid_config_all_fields(monkeypatch, clean_env, base_env):
    """Test valid configuration with all fields specified."""
    env = {
        **base_env,
        "LOG_LEVEL": "DEBUG",
        "REFERENCE_BOOK": "Circa",
        "SERVER_PORT": "9000",
        "HTTP_RETRIES": "0",
        "CACHE_TTL_SECONDS": "0",
        "SEASON": "2024",
        "ODDS_API_KEY": "test-odds-key",
        "APISPORTS_KEY": "test-apisports-key",
        "SPORTRADAR_API_KEY": "test-sportradar-key",
        "EV_THRESHOLD_PERCENT": "3.5",
        "MIN_ARB_PERCENT": "0.5",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)

    config = AppConfig()

    assert config.log_level == "DEBUG"
    assert config.reference_book == "Circa"
    assert config.server_port == 9000
    assert config.http_retries == 0
    assert config.cache_ttl_seconds == 0
    assert config.season == 2024
    assert config.odds_api_key.get_secret_value() == "test-odds-key"
    assert config.apisports_key.get_secret_value() == "test-apisports-key"
    assert config.sportradar_api_key.get_secret_value() == "test-sportradar-key"
    assert config.ev_threshold_percent == 3.5
    assert config.min_arb_percent == 0.5


def test_invalid_env_value(monkeypatch, clean_env, base_env):
    """Test that invalid ENV value raises validation error."""
    base_env["ENV"] = "production"  # Not in allowed set
    for key, value in base_env.items():
        monkeypatch.setenv(key, value)

    with pytest.raises(ValidationError) as exc_info:
        AppConfig()

    errors = exc_info.value.errors()
    assert any(
        error["loc"] == ("env",) and "literal_error" in error["type"]
        for error in errors
    )


def test_valid_env_values(monkeypatch, clean_env, base_env):
    """Test all valid ENV values are accepted."""
    for env_value in ["dev", "staging", "prod"]:
        base_env["ENV"] = env_value
        for key, value in base_env.items():
            monkeypatch.setenv(key, value)

        config = AppConfig()
        assert config.env == env_value


def test_blank_reference_book(monkeypatch, clean_env):
    """Test that a blank reference book is rejected."""
    monkeypatch.setenv("REFERENCE_BOOK", "   ")

    with pytest.raises(ValidationError) as exc_info:
        AppConfig()

    errors = exc_info.value.errors()
    assert any(error["loc"] == ("reference_book",) for error in errors)


def test_reference_book_stripped(monkeypatch, clean_env):
    monkeypatch.setenv("REFERENCE_BOOK", "  Pinnacle ")
    assert AppConfig().reference_book == "Pinnacle"


@pytest.mark.parametrize("port", ["0", "65536"])
def test_server_port_out_of_range(monkeypatch, clean_env, port):
    """Test that server_port outside [1, 65535] raises validation error."""
    monkeypatch.setenv("SERVER_PORT", port)

    with pytest.raises(ValidationError) as exc_info:
        AppConfig()

    errors = exc_info.value.errors()
    assert any(error["loc"] == ("server_port",) for error in errors)


def test_retries_above_maximum(monkeypatch, clean_env):
    """Test that http_retries > 5 raises validation error."""
    monkeypatch.setenv("HTTP_RETRIES", "6")

    with pytest.raises(ValidationError) as exc_info:
        AppConfig()

    errors = exc_info.value.errors()
    assert any(
        error["loc"] == ("http_retries",) and "less_than_equal" in error["type"]
        for error in errors
    )


def test_negative_threshold(monkeypatch, clean_env):
    """Test that a negative EV threshold raises validation error."""
    monkeypatch.setenv("EV_THRESHOLD_PERCENT", "-1")

    with pytest.raises(ValidationError) as exc_info:
        AppConfig()

    errors = exc_info.value.errors()
    assert any(
        error["loc"] == ("ev_threshold_percent",) and "greater_than_equal" in error["type"]
        for error in errors
    )


def test_extra_env_vars_ignored(monkeypatch, clean_env, base_env):
    """Test that extra environment variables are ignored."""
    for key, value in base_env.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("UNKNOWN_VAR", "should_be_ignored")

    config = AppConfig()
    assert not hasattr(config, "unknown_var")


def test_case_insensitive_env_vars(monkeypatch, clean_env):
    """Test that environment variables are case-insensitive."""
    monkeypatch.setenv("env", "staging")
    monkeypatch.setenv("reference_book", "circa")

    config = AppConfig()

    assert config.env == "staging"
    assert config.reference_book == "circa"


def test_get_config_singleton(monkeypatch, clean_env):
    """Test that get_config caches until reset."""
    monkeypatch.setenv("REFERENCE_BOOK", "Circa")
    first = get_config()
    monkeypatch.setenv("REFERENCE_BOOK", "Pinnacle")

    assert get_config() is first
    assert get_config().reference_book == "Circa"

    reset_config()
    assert get_config().reference_book == "Pinnacle"


def test_retries_description_matches_backoff():
    """fetch_json sleeps 1s, 2s, ... between attempts."""
    description = AppConfig.model_fields["http_retries"].description
    assert "linear" in description
    assert "exponential" not in description
