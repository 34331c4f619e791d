"""
Unit tests for gateway configuration loading.
"""

import pytest
from structlog.testing import capture_logs

from shared.config import (
    DEFAULT_AUTH_PASSKEY,
    DEFAULT_PORT,
    DEFAULT_UPSTREAM_BASE_URL,
    get_config,
    report_defaults,
)

CONFIG_ENV_VARS = ["AUTH_PASSKEY", "DOTNET_PRODUCTS_API_URL", "PORT", "GATEWAY_ENV", "GATEWAY_LOG_LEVEL", "GATEWAY_HOST"]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every gateway variable from the environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_when_environment_is_empty(clean_env):
    config = get_config()

    assert config.auth_passkey == DEFAULT_AUTH_PASSKEY
    assert config.upstream_base_url == DEFAULT_UPSTREAM_BASE_URL
    assert config.port == DEFAULT_PORT
    assert config.env == "local"
    assert config.uses_default_passkey is True


def test_values_read_from_environment(clean_env):
    clean_env.setenv("AUTH_PASSKEY", "s3cret")
    clean_env.setenv("DOTNET_PRODUCTS_API_URL", "http://products:8080")
    clean_env.setenv("PORT", "9000")

    config = get_config()

    assert config.auth_passkey == "s3cret"
    assert config.upstream_base_url == "http://products:8080"
    assert config.port == 9000
    assert config.uses_default_passkey is False


def test_empty_passkey_falls_back_to_default(clean_env):
    clean_env.setenv("AUTH_PASSKEY", "")

    config = get_config()

    assert config.auth_passkey == DEFAULT_AUTH_PASSKEY
    assert config.uses_default_passkey is True


def test_config_is_immutable(clean_env):
    config = get_config()
    with pytest.raises(Exception):
        config.auth_passkey = "changed"


def test_report_defaults_warns_for_each_missing_value(clean_env):
    config = get_config()

    with capture_logs() as logs:
        report_defaults(config)

    warnings = [entry["event"] for entry in logs if entry["log_level"] == "warning"]
    assert len(warnings) == 3
    assert any("AUTH_PASSKEY" in event for event in warnings)
    assert any("DOTNET_PRODUCTS_API_URL" in event for event in warnings)
    assert any("PORT" in event for event in warnings)
    assert not [entry for entry in logs if entry["log_level"] == "error"]


def test_report_defaults_flags_default_passkey_outside_local(clean_env):
    clean_env.setenv("GATEWAY_ENV", "production")
    config = get_config()

    with capture_logs() as logs:
        report_defaults(config)

    errors = [entry for entry in logs if entry["log_level"] == "error"]
    assert len(errors) == 1
    assert errors[0]["env"] == "production"


def test_report_defaults_silent_when_fully_configured(clean_env):
    config = get_config(auth_passkey="s3cret", upstream_base_url="http://products:8080", port=9000)

    with capture_logs() as logs:
        report_defaults(config)

    assert logs == []
