"""Unit tests for HVACDesk configuration management.

Tests AppConfig loading from environment variables, validation, and defaults.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from hvacdesk.config import AppConfig, get_config, reset_config

_ENV_VARS = [
    "HVACDESK_DATA_DIR",
    "HVACDESK_STORAGE_BACKEND",
    "LOG_LEVEL",
    "INVOICE_PREFIX",
    "INVOICE_NUMBER_WIDTH",
    "INVOICE_DUE_DAYS",
    "MAINTENANCE_INTERVAL_MONTHS",
    "COMMERCIAL_RECOMMENDATION_MONTHS",
    "RESIDENTIAL_RECOMMENDATION_MONTHS",
    "MAINTENANCE_WINDOW_DAYS",
    "CURRENCY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


class TestAppConfig:
    """Test AppConfig creation and validation."""

    def test_defaults(self):
        config = AppConfig.from_env()

        assert config.log_level == "INFO"
        assert config.storage.backend == "json"
        assert config.storage.data_dir == Path.home() / ".hvacdesk"
        assert config.invoicing.number_prefix == "INV"
        assert config.invoicing.number_width == 4
        assert config.invoicing.maintenance_interval_months == 6
        assert config.invoicing.commercial_recommendation_months == 3
        assert config.invoicing.residential_recommendation_months == 6
        assert config.invoicing.default_due_days == 30
        assert config.dashboard.maintenance_window_days == 15
        assert config.locale.currency == "DOP"

    def test_custom_values(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HVACDESK_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("HVACDESK_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("INVOICE_PREFIX", "FAC")
        monkeypatch.setenv("MAINTENANCE_WINDOW_DAYS", "30")
        monkeypatch.setenv("COMMERCIAL_RECOMMENDATION_MONTHS", "2")

        config = AppConfig.from_env()

        assert config.storage.data_dir == tmp_path
        assert config.storage.backend == "memory"
        assert config.invoicing.number_prefix == "FAC"
        assert config.dashboard.maintenance_window_days == 30
        assert config.invoicing.commercial_recommendation_months == 2

    def test_invalid_integer(self, monkeypatch):
        monkeypatch.setenv("INVOICE_DUE_DAYS", "thirty")

        with pytest.raises(ValueError) as exc_info:
            AppConfig.from_env()

        assert "INVOICE_DUE_DAYS" in str(exc_info.value)

    def test_invalid_backend(self, monkeypatch):
        monkeypatch.setenv("HVACDESK_STORAGE_BACKEND", "redis")

        with pytest.raises(ValueError, match="HVACDESK_STORAGE_BACKEND"):
            AppConfig.from_env()

    def test_blank_integer_uses_default(self, monkeypatch):
        monkeypatch.setenv("INVOICE_NUMBER_WIDTH", "")
        assert AppConfig.from_env().invoicing.number_width == 4


class TestGetConfig:
    def test_singleton(self):
        assert get_config() is get_config()

    def test_reset_rereads_environment(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("INVOICE_PREFIX", "NEW")
        reset_config()
        second = get_config()
        assert second is not first
        assert second.invoicing.number_prefix == "NEW"
