"""Shared fixtures: fake HTTP sessions and isolated configuration."""

import os

import pytest
import requests

from config import AppConfig, ConverterConfig, ServerConfig
from core.convert import ApiCredentials
from tests.fakes import FakeResponse, FakeSession

CONFIG_ENV_VARS = ("API_KEY", "API_HOST", "PORT", "APP_ENV")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the host environment from leaking into configuration."""
    for name in list(os.environ):
        if name.upper() in CONFIG_ENV_VARS or name.upper().startswith("YTMP3_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials():
    return ApiCredentials(api_key="test-key", api_host="youtube-mp36.p.rapidapi.com")


@pytest.fixture
def ok_session():
    return FakeSession(FakeResponse(payload={
        'status': 'ok',
        'link': 'https://cdn.example.com/song.mp3',
        'title': 'Never Gonna Give You Up',
    }))


@pytest.fixture
def failing_session():
    return FakeSession(error=requests.ConnectionError("connection refused"))


@pytest.fixture
def make_config():
    """Factory for an AppConfig that ignores .env files."""

    def _make(api_key="test-key", api_host="youtube-mp36.p.rapidapi.com", environment=None):
        return AppConfig(
            _env_file=None,
            converter=ConverterConfig(_env_file=None, api_key=api_key, api_host=api_host),
            server=ServerConfig(_env_file=None, environment=environment),
        )

    return _make
