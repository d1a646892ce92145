#!/usr/bin/env python3
"""
Integration tests for CLI Main Entry Point

Tests end-to-end CLI command execution with real command invocation.
"""

import json

import pytest
from click.testing import CliRunner

from bizledger.cli.main import main


@pytest.mark.integration
class TestCLIMainIntegration:
    """Test main CLI entry point with real command execution."""

    def setup_method(self):
        """Set up test environment."""
        self.runner = CliRunner()

    def test_help_command_lists_all_subcommands(self):
        """Test bizledger --help shows all registered subcommands."""
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Reconciliation and Cash-Flow Tools" in result.output

        for command in ["reconcile", "cashflow", "version", "config"]:
            assert command in result.output

    def test_version_command_shows_version_info(self):
        result = self.runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "bizledger v0.1.0" in result.output
        assert "Author:" in result.output

    def test_config_command_shows_configuration(self):
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Current Configuration:" in result.output
        assert "Environment: test" in result.output
        assert "Data Directory:" in result.output
        assert "Output Directory:" in result.output
        assert "Default Currency: MXN" in result.output
        assert "Match Tolerance (cents):" in result.output
        assert "Forecast Horizon (weeks):" in result.output
        assert "Debug Mode:" in result.output
        assert "Log Level:" in result.output

    def test_config_shows_forecast_settings(self):
        result = self.runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Red-Week Threshold: $0.00" in result.output
        assert "Chart: 12x6 in @ 150 dpi" in result.output

    def test_config_json(self):
        result = self.runner.invoke(main, ["--default-currency", "USD", "config", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["environment"] == "test"
        assert data["reconciliation"]["default_currency"] == "USD"
        assert data["forecast"]["horizon_weeks"] == 13

    def test_default_currency_override_shown(self):
        result = self.runner.invoke(main, ["--default-currency", "USD", "config"])

        assert result.exit_code == 0
        assert "Default Currency: USD" in result.output

    @pytest.mark.parametrize("code", ["usd", "DOLLAR", "U1D"])
    def test_default_currency_rejects_bad_codes(self, code):
        result = self.runner.invoke(main, ["--default-currency", code, "config"])

        assert result.exit_code == 2
        assert "3-letter ISO code" in result.output

    def test_invalid_command_shows_error(self):
        result = self.runner.invoke(main, ["invalid-command"])

        assert result.exit_code != 0
        assert "Error" in result.output or "No such" in result.output

    def test_verbose_flag_enables_verbose_output(self):
        result = self.runner.invoke(main, ["--verbose", "config"])

        assert result.exit_code == 0
        assert "Data directory:" in result.output
        assert "Current Configuration:" in result.output

    @pytest.mark.parametrize(
        "group,commands",
        [
            ("reconcile", ["match", "allocate", "batch"]),
            ("cashflow", ["aggregate", "summary", "chart"]),
        ],
    )
    def test_subcommand_help(self, group, commands):
        result = self.runner.invoke(main, [group, "--help"])

        assert result.exit_code == 0
        for command in commands:
            assert command in result.output
