#!/usr/bin/env python3
"""
Integration tests for configuration module.

Tests global configuration loading, caching and validation.
"""

import pytest

from waybill_sync.core import config as config_module
from waybill_sync.core.config import Environment, get_config, reload_config


@pytest.fixture(autouse=True)
def reset_global_config(monkeypatch):
    """Start and finish each test without a cached configuration."""
    monkeypatch.setattr(config_module, "_config", None)
    yield
    config_module._config = None


@pytest.mark.integration
class TestConfigLoading:
    """Test configuration loading and structure."""

    def test_config_loads_successfully(self, monkeypatch):
        monkeypatch.setenv("WAYBILL_SYNC_ENV", "test")
        monkeypatch.setenv("STORE", "store-1")

        config = get_config()

        assert config.environment == Environment.TEST
        assert config.job.store_id == "store-1"

    def test_config_is_cached(self, monkeypatch):
        monkeypatch.setenv("WAYBILL_SYNC_ENV", "test")

        assert get_config() is get_config()

    def test_reload_picks_up_environment_changes(self, monkeypatch):
        monkeypatch.setenv("WAYBILL_SYNC_ENV", "test")
        monkeypatch.setenv("STORE", "store-1")
        first = get_config()

        monkeypatch.setenv("STORE", "store-2")
        second = reload_config()

        assert first.job.store_id == "store-1"
        assert second.job.store_id == "store-2"

    def test_invalid_configuration_raises(self, monkeypatch):
        monkeypatch.setenv("WAYBILL_SYNC_ENV", "production")
        monkeypatch.delenv("STORE", raising=False)

        with pytest.raises(ValueError, match="STORE is required in production"):
            get_config()
