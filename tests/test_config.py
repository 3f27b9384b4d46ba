from __future__ import annotations

import pytest
from pydantic import ValidationError

from pool_reader.core.config import Settings
from shared_models.pool_data import PoolProvider


def test_defaults(monkeypatch: pytest.MonkeyPatch):
    for name in ("HOST", "PORT", "API_TIMEOUT_SECS", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)

    config = Settings(_env_file=None)

    assert config.host == "0.0.0.0"
    assert config.port == 3000
    assert config.api_timeout_secs == 10
    assert config.get_bind_address() == "0.0.0.0:3000"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("API_TIMEOUT_SECS", "4")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = Settings(_env_file=None)

    assert config.get_bind_address() == "127.0.0.1:8080"
    assert config.api_timeout_secs == 4
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [
        {"api_timeout_secs": 0},
        {"port": 70000},
        {"log_level": "chatty"},
        {"log_format": "xml"},
    ],
)
def test_rejects_invalid_values(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_provider_urls_strip_trailing_slash():
    config = Settings(_env_file=None, meteora_api_url="https://meteora.example/")

    urls = config.get_provider_urls()

    assert urls[PoolProvider.METEORA] == "https://meteora.example"
    assert urls[PoolProvider.RAYDIUM] == "https://api-v3.raydium.io"
