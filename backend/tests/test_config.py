"""Tests for Settings.from_env."""

import os
from unittest.mock import patch

import pytest

from stockwatch.config import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        assert settings.alpha_vantage_api_key == ""
        assert settings.storage_path == ""
        assert settings.refresh_interval == 300.0
        assert settings.search_debounce == 0.3
        assert settings.cache_ttl == 300.0
        assert settings.log_level == "INFO"

    def test_reads_environment(self):
        env = {
            "ALPHA_VANTAGE_API_KEY": " key-123 ",
            "STOCKWATCH_STORAGE_PATH": "/tmp/watchlist.json",
            "STOCKWATCH_REFRESH_INTERVAL": "60",
            "STOCKWATCH_SEARCH_DEBOUNCE": "0.5",
            "STOCKWATCH_CACHE_TTL": "120",
            "STOCKWATCH_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()

        assert settings.alpha_vantage_api_key == "key-123"
        assert settings.storage_path == "/tmp/watchlist.json"
        assert settings.refresh_interval == 60.0
        assert settings.search_debounce == 0.5
        assert settings.cache_ttl == 120.0
        assert settings.log_level == "DEBUG"

    def test_explicit_mapping(self):
        settings = Settings.from_env({"STOCKWATCH_REFRESH_INTERVAL": "  "})
        assert settings.refresh_interval == 300.0

    def test_invalid_number_names_variable(self):
        with pytest.raises(ValueError, match="STOCKWATCH_CACHE_TTL"):
            Settings.from_env({"STOCKWATCH_CACHE_TTL": "five minutes"})

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError, match="STOCKWATCH_REFRESH_INTERVAL"):
            Settings.from_env({"STOCKWATCH_REFRESH_INTERVAL": "-1"})

    def test_server_address(self):
        settings = Settings.from_env({"STOCKWATCH_HOST": "0.0.0.0", "STOCKWATCH_PORT": "9000"})
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000

    def test_server_address_defaults(self):
        settings = Settings.from_env({})
        assert settings.host == "127.0.0.1"
        assert settings.port == 8000

    @pytest.mark.parametrize("raw", ["http", "0", "70000"])
    def test_invalid_port_names_variable(self, raw):
        with pytest.raises(ValueError, match="STOCKWATCH_PORT"):
            Settings.from_env({"STOCKWATCH_PORT": raw})
