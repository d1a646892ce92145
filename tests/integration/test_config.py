#!/usr/bin/env python3
"""
Integration tests for configuration module.

Tests environment loading, validation and the cached instance.
"""

import logging
from pathlib import Path

import pytest

from bizledger.core.config import (
    Config,
    Environment,
    get_config,
    reload_config,
)


@pytest.mark.integration
class TestConfigLoading:
    """Test configuration loading and structure."""

    def test_config_loads_in_test_environment(self):
        config = get_config()

        assert config.environment == Environment.TEST

    def test_directories_exist(self):
        config = get_config()

        assert isinstance(config.data_dir, Path)
        assert config.data_dir.exists()
        assert config.output_dir == config.data_dir / "reports"
        assert config.output_dir.exists()
        assert config.forecast.output_dir == config.data_dir / "cash_flow"

    def test_defaults(self, monkeypatch):
        for name in ["MATCH_TOLERANCE_CENTS", "FORECAST_WEEKS", "RED_WEEK_THRESHOLD", "CHART_DPI"]:
            monkeypatch.delenv(name, raising=False)

        config = Config.from_environment()

        assert config.reconciliation.default_currency == "MXN"
        assert config.reconciliation.match_tolerance_cents == 1
        assert config.forecast.horizon_weeks == 13
        assert config.forecast.red_week_threshold_cents == 0
        assert config.forecast.chart_dpi == 150
        assert config.validate() == []

    def test_environment_overrides(self, monkeypatch, temp_dir):
        monkeypatch.setenv("BIZLEDGER_DATA_DIR", str(temp_dir / "data"))
        monkeypatch.setenv("DEFAULT_CURRENCY", "USD")
        monkeypatch.setenv("MATCH_TOLERANCE_CENTS", "0")
        monkeypatch.setenv("FORECAST_WEEKS", "26")
        monkeypatch.setenv("RED_WEEK_THRESHOLD", "5000.50")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = Config.from_environment()

        assert config.data_dir == temp_dir / "data"
        assert (temp_dir / "data" / "reports").exists()
        assert config.reconciliation.default_currency == "USD"
        assert config.reconciliation.match_tolerance_cents == 0
        assert config.forecast.horizon_weeks == 26
        assert config.forecast.red_week_threshold_cents == 500050
        assert config.log_level == "DEBUG"

    def test_reload_returns_fresh_instance(self):
        first = get_config()
        second = reload_config()

        assert first is not second
        assert second.environment == Environment.TEST


@pytest.mark.integration
class TestConfigValidation:
    """Test Config.validate error reporting."""

    @pytest.mark.parametrize("currency", ["mxn", "PESO", "M1N", ""])
    def test_invalid_currency(self, monkeypatch, currency):
        monkeypatch.setenv("DEFAULT_CURRENCY", currency)

        errors = Config.from_environment().validate()

        # Empty DEFAULT_CURRENCY is still an explicit (invalid) value
        assert any("DEFAULT_CURRENCY" in e for e in errors)

    def test_invalid_numbers(self, monkeypatch):
        monkeypatch.setenv("MATCH_TOLERANCE_CENTS", "-1")
        monkeypatch.setenv("FORECAST_WEEKS", "0")
        monkeypatch.setenv("CHART_WIDTH", "0")
        monkeypatch.setenv("CHART_DPI", "-5")

        errors = Config.from_environment().validate()

        assert "Match tolerance must be non-negative" in errors
        assert "Forecast horizon must be positive" in errors
        assert "Chart dimensions must be positive" in errors
        assert "Chart DPI must be positive" in errors

    def test_to_dict_is_json_friendly(self):
        data = get_config().to_dict()

        assert data["environment"] == "test"
        assert isinstance(data["data_dir"], str)
        assert data["reconciliation"]["default_currency"] == "MXN"
        assert isinstance(data["forecast"]["output_dir"], str)


@pytest.mark.integration
def test_setup_logging_quiets_matplotlib():
    get_config().setup_logging()

    assert logging.getLogger("matplotlib").level == logging.WARNING
