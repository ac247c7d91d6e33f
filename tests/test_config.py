"""
Tests for configuration loading.

Covers precedence (explicit value > environment > .env file), URL
normalisation and the errors raised for missing settings.
"""

import logging

import pytest

from leantime_mcp.config import API_KEY_ENV, URL_ENV, Config, load_config, normalize_url
from leantime_mcp.errors import ConfigurationError

logger = logging.getLogger(__name__)


# ============== Precedence ==============


def test_explicit_values_override_environment(clean_env, monkeypatch):
    monkeypatch.setenv(URL_ENV, "https://env.example.com")
    monkeypatch.setenv(API_KEY_ENV, "env-key")

    config = load_config(url="https://cli.example.com", api_key="cli-key")

    assert config == Config(service_url="https://cli.example.com", api_key="cli-key")


def test_environment_used_when_no_override(clean_env, monkeypatch):
    monkeypatch.setenv(URL_ENV, "https://env.example.com/")
    monkeypatch.setenv(API_KEY_ENV, "env-key")

    config = load_config()

    assert config.service_url == "https://env.example.com"
    assert config.api_key == "env-key"


def test_mixed_sources(clean_env, monkeypatch):
    """URL from the command line, key from the environment."""
    monkeypatch.setenv(API_KEY_ENV, "env-key")

    config = load_config(url="https://cli.example.com")

    assert config.service_url == "https://cli.example.com"
    assert config.api_key == "env-key"


def test_empty_override_falls_back_to_environment(clean_env, monkeypatch):
    monkeypatch.setenv(URL_ENV, "https://env.example.com")
    monkeypatch.setenv(API_KEY_ENV, "env-key")

    config = load_config(url="", api_key="")

    assert config.service_url == "https://env.example.com"
    assert config.api_key == "env-key"


def test_dotenv_file_is_read(clean_env):
    (clean_env / ".env").write_text(f"{URL_ENV}=https://dotenv.example.com/\n{API_KEY_ENV}=dotenv-key\n")

    config = load_config()

    assert config.service_url == "https://dotenv.example.com"
    assert config.api_key == "dotenv-key"


def test_environment_wins_over_dotenv_file(clean_env, monkeypatch):
    (clean_env / ".env").write_text(f"{URL_ENV}=https://dotenv.example.com\n{API_KEY_ENV}=dotenv-key\n")
    monkeypatch.setenv(URL_ENV, "https://env.example.com")

    config = load_config()

    assert config.service_url == "https://env.example.com"
    assert config.api_key == "dotenv-key"


def test_config_is_immutable():
    config = Config(service_url="https://x", api_key="k")
    with pytest.raises(AttributeError):
        config.api_key = "other"


# ============== URL normalisation ==============


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://leantime.example.com/", "https://leantime.example.com"),
        ("https://leantime.example.com", "https://leantime.example.com"),
        ("https://example.com/leantime/", "https://example.com/leantime"),
        ("https://example.com/leantime//", "https://example.com/leantime/"),
        ("http://localhost:8080/a/b", "http://localhost:8080/a/b"),
    ],
)
def test_normalize_url_strips_one_trailing_slash(raw, expected):
    assert normalize_url(raw) == expected


def test_loaded_url_keeps_inner_slashes(clean_env):
    config = load_config(url="https://example.com/tools/leantime/", api_key="k")
    assert config.service_url == "https://example.com/tools/leantime"


# ============== Missing settings ==============


def test_missing_url_names_url_variable(clean_env):
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(api_key="key")

    assert exc_info.value.missing == [URL_ENV]
    assert URL_ENV in str(exc_info.value)
    assert API_KEY_ENV not in str(exc_info.value)


def test_missing_api_key_names_key_variable(clean_env):
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(url="https://leantime.example.com")

    assert exc_info.value.missing == [API_KEY_ENV]
    assert API_KEY_ENV in str(exc_info.value)


def test_missing_both_names_both_variables(clean_env):
    with pytest.raises(ConfigurationError) as exc_info:
        load_config()

    assert exc_info.value.missing == [URL_ENV, API_KEY_ENV]
    message = str(exc_info.value)
    assert URL_ENV in message and API_KEY_ENV in message
    logger.info("✓ missing configuration reported for both variables")
