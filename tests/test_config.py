"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from config import AppConfig, ConverterConfig, ServerConfig


def test_defaults():
    config = AppConfig(_env_file=None)

    assert config.converter.api_key is None
    assert config.converter.api_host == "youtube-mp36.p.rapidapi.com"
    assert config.converter.endpoint_path == "/dl"
    assert config.server.port == 3000
    assert config.server.environment is None
    assert config.debug is False


def test_legacy_environment_names(monkeypatch):
    monkeypatch.setenv("API_KEY", "legacy-key")
    monkeypatch.setenv("API_HOST", "example.p.rapidapi.com")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("APP_ENV", "development")

    converter = ConverterConfig(_env_file=None)
    server = ServerConfig(_env_file=None)

    assert converter.api_key == "legacy-key"
    assert converter.api_host == "example.p.rapidapi.com"
    assert server.port == 8080
    assert server.is_development


def test_prefixed_names_win_over_legacy(monkeypatch):
    monkeypatch.setenv("API_KEY", "legacy-key")
    monkeypatch.setenv("YTMP3_CONVERTER_API_KEY", "prefixed-key")
    monkeypatch.setenv("YTMP3_CONVERTER_ENDPOINT_PATH", "/v2/dl")

    converter = ConverterConfig(_env_file=None)

    assert converter.api_key == "prefixed-key"
    assert converter.endpoint_path == "/v2/dl"


def test_credentials_require_key():
    assert ConverterConfig(_env_file=None).credentials() is None

    credentials = ConverterConfig(_env_file=None, api_key="k", api_host="h").credentials()
    assert credentials.api_key == "k"
    assert credentials.api_host == "h"
    assert credentials.is_complete()


@pytest.mark.parametrize("port", ["0", "70000", "not-a-port"])
def test_invalid_port_is_rejected(monkeypatch, port):
    monkeypatch.setenv("PORT", port)
    with pytest.raises(ValidationError):
        ServerConfig(_env_file=None)


def test_endpoint_path_must_be_absolute():
    with pytest.raises(ValidationError):
        ConverterConfig(_env_file=None, endpoint_path="dl")


def test_unrelated_environment_variable_is_ignored(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("HOST", "10.0.0.1")

    server = ServerConfig(_env_file=None)

    assert server.environment is None
    assert server.host == "0.0.0.0"
