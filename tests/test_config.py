"""Tests for configuration loading and endpoint resolution."""

import pytest

from countdown.config import LOCAL_BASE_URL, Config, load_config, resolve_base_url
from countdown.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("COUNTDOWN_API_BASE_URL", raising=False)
    monkeypatch.delenv("COUNTDOWN_ENV", raising=False)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.conf")
        assert config == Config()

    def test_reads_keys(self, tmp_path):
        path = tmp_path / "countdown.conf"
        path.write_text(
            "# Countdown settings\n"
            'API_BASE_URL="https://todo.example.com/api" # production\n'
            "DEPLOYED=true\n"
            "REQUEST_TIMEOUT=5\n"
            "TICK_INTERVAL=0.5  # faster\n"
            "not a setting\n"
        )

        config = load_config(path)

        assert config.api_base_url == "https://todo.example.com/api"
        assert config.deployed is True
        assert config.request_timeout == 5.0
        assert config.tick_interval == 0.5

    def test_bad_number_keeps_default(self, tmp_path):
        path = tmp_path / "countdown.conf"
        path.write_text("REQUEST_TIMEOUT=soon\nTICK_INTERVAL=-1\n")
        config = load_config(path)
        assert config.request_timeout == 10.0
        assert config.tick_interval == 1.0

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "countdown.conf"
        path.write_text("API_BASE_URL=http://from-file\n")
        monkeypatch.setenv("COUNTDOWN_API_BASE_URL", "http://from-env")
        monkeypatch.setenv("COUNTDOWN_ENV", "production")

        config = load_config(path)

        assert config.api_base_url == "http://from-env"
        assert config.deployed is True


class TestResolveBaseUrl:
    @pytest.mark.parametrize(
        "configured, expected",
        [
            ("https://api.example.com", "https://api.example.com/todos"),
            ("https://api.example.com/", "https://api.example.com/todos"),
            ("https://api.example.com///", "https://api.example.com/todos"),
            ("https://api.example.com/todos", "https://api.example.com/todos"),
            ("https://api.example.com/todos/", "https://api.example.com/todos"),
            ("  https://api.example.com  ", "https://api.example.com/todos"),
        ],
    )
    def test_normalizes(self, configured, expected):
        assert resolve_base_url(Config(api_base_url=configured)) == expected

    def test_local_default(self):
        assert resolve_base_url(Config()) == LOCAL_BASE_URL

    @pytest.mark.parametrize("configured", ["", "   "])
    def test_deployed_without_url(self, configured):
        with pytest.raises(ConfigurationError):
            resolve_base_url(Config(api_base_url=configured, deployed=True))
