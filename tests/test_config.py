"""Tests for client configuration."""

import pytest

from avatica_client.core.config import (
    DEFAULT_CLIENT_HOST,
    DEFAULT_MAX_FRAME_SIZE,
    DEFAULT_MAX_ROW_COUNT,
    ClientConfig,
    resolve_config,
)
from avatica_client.core.exceptions import ConfigError

_ENV_VARS = (
    "AVATICA_URL",
    "AVATICA_USER",
    "AVATICA_PASSWORD",
    "AVATICA_MAX_FRAME_SIZE",
    "AVATICA_MAX_ROW_COUNT",
    "AVATICA_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# ClientConfig model
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestClientConfig:
    def test_default_values(self):
        config = ClientConfig(url="http://localhost:8765/")
        assert config.user is None
        assert config.password is None
        assert config.max_frame_size == DEFAULT_MAX_FRAME_SIZE == 100
        assert config.max_row_count == DEFAULT_MAX_ROW_COUNT == 9999999
        assert config.default_timeout is None
        assert config.client_host == DEFAULT_CLIENT_HOST

    def test_https_url(self):
        config = ClientConfig(url="https://avatica.example.com/")
        assert config.url == "https://avatica.example.com/"

    def test_invalid_url_scheme(self):
        with pytest.raises(Exception, match="Invalid Avatica URL"):
            ClientConfig(url="jdbc:avatica:remote:url=http://x")

    def test_url_without_host(self):
        with pytest.raises(Exception, match="Invalid Avatica URL"):
            ClientConfig(url="http://")

    def test_validate_max_frame_size(self):
        assert ClientConfig(url="http://h/", max_frame_size=1).max_frame_size == 1
        with pytest.raises(Exception, match="Invalid max_frame_size"):
            ClientConfig(url="http://h/", max_frame_size=0)

    def test_validate_max_row_count(self):
        assert ClientConfig(url="http://h/", max_row_count=-1).max_row_count == -1
        with pytest.raises(Exception, match="Invalid max_row_count"):
            ClientConfig(url="http://h/", max_row_count=0)

    def test_validate_default_timeout(self):
        assert ClientConfig(url="http://h/", default_timeout=2.5).default_timeout == 2.5
        with pytest.raises(Exception, match="Invalid default_timeout"):
            ClientConfig(url="http://h/", default_timeout=0)


# ---------------------------------------------------------------------------
# resolve_config precedence
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestResolveConfig:
    def test_overrides_only(self):
        config = resolve_config(url="http://localhost:8765/", user="sa")
        assert config.url == "http://localhost:8765/"
        assert config.user == "sa"

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("AVATICA_URL", "http://envhost:8765/")
        monkeypatch.setenv("AVATICA_USER", "envuser")
        monkeypatch.setenv("AVATICA_PASSWORD", "envpass")
        monkeypatch.setenv("AVATICA_MAX_FRAME_SIZE", "250")
        monkeypatch.setenv("AVATICA_TIMEOUT", "12.5")

        config = resolve_config()
        assert config.url == "http://envhost:8765/"
        assert config.user == "envuser"
        assert config.password == "envpass"
        assert config.max_frame_size == 250
        assert config.default_timeout == 12.5

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("AVATICA_URL", "http://envhost:8765/")
        monkeypatch.setenv("AVATICA_MAX_FRAME_SIZE", "250")

        config = resolve_config(url="http://clihost:8765/", max_frame_size=10)
        assert config.url == "http://clihost:8765/"
        assert config.max_frame_size == 10

    def test_none_override_ignored(self, monkeypatch):
        monkeypatch.setenv("AVATICA_USER", "envuser")
        config = resolve_config(url="http://h/", user=None)
        assert config.user == "envuser"

    def test_missing_url(self):
        with pytest.raises(ConfigError, match="No Avatica URL configured"):
            resolve_config()

    def test_invalid_numeric_env(self, monkeypatch):
        monkeypatch.setenv("AVATICA_URL", "http://h/")
        monkeypatch.setenv("AVATICA_MAX_ROW_COUNT", "lots")
        with pytest.raises(ConfigError, match="Invalid AVATICA_MAX_ROW_COUNT value"):
            resolve_config()

    def test_unknown_override(self):
        with pytest.raises(ConfigError, match="Unknown configuration option"):
            resolve_config(url="http://h/", pool_size=4)

    def test_invalid_value_wrapped(self):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config(url="ftp://h/")
