#!/usr/bin/env python3
"""
Integration tests for the cashflow CLI commands.

Runs aggregate, summary and chart against forecast files in a temp dir.
"""

import pandas as pd
import pytest
from click.testing import CliRunner

from bizledger.cli.cashflow import cashflow
from bizledger.core.json_utils import read_json


@pytest.mark.integration
@pytest.mark.forecast
class TestCashFlowAggregateCLI:
    """Test bizledger cashflow aggregate."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_aggregate_json(self, write_json_file, temp_dir, sample_forecast_weeks):
        weeks_file = write_json_file("weeks.json", {"weeks": sample_forecast_weeks})
        output_dir = temp_dir / "out"

        result = self.runner.invoke(cashflow, ["aggregate", str(weeks_file), "--output-dir", str(output_dir)])

        assert result.exit_code == 0, result.output
        assert "Aggregated 4 weeks" in result.output

        files = list(output_dir.glob("*_cash_flow_weeks.json"))
        assert len(files) == 1
        weeks = read_json(files[0])["weeks"]
        assert [w["cumulative_cash_flow"] for w in weeks] == ["60.00", "30.00", "-100.00", "40.00"]
        assert weeks[0]["ending_balance"] is None

    def test_aggregate_csv_with_initial_balance(self, write_json_file, temp_dir, sample_forecast_weeks):
        weeks_file = write_json_file("weeks.json", sample_forecast_weeks)
        output_dir = temp_dir / "csv"

        result = self.runner.invoke(
            cashflow,
            [
                "aggregate",
                str(weeks_file),
                "--output-dir",
                str(output_dir),
                "--format",
                "csv",
                "--initial-balance",
                "1000",
            ],
        )

        assert result.exit_code == 0, result.output
        df = pd.read_csv(next(output_dir.glob("*_cash_flow_weeks.csv")), index_col="week_number")
        assert df.loc[4, "ending_balance"] == pytest.approx(1040.0)

    def test_aggregate_verbose(self, write_json_file, temp_dir, sample_forecast_weeks):
        weeks_file = write_json_file("weeks.json", sample_forecast_weeks)

        result = self.runner.invoke(
            cashflow, ["aggregate", str(weeks_file), "--output-dir", str(temp_dir), "-v"]
        )

        assert result.exit_code == 0, result.output
        assert "Week 3" in result.output
        assert "-$130.00" in result.output

    def test_aggregate_invalid_balance(self, write_json_file, temp_dir, sample_forecast_weeks):
        weeks_file = write_json_file("weeks.json", sample_forecast_weeks)

        result = self.runner.invoke(
            cashflow,
            ["aggregate", str(weeks_file), "--output-dir", str(temp_dir), "--initial-balance", "lots"],
        )

        assert result.exit_code == 2
        assert "--initial-balance" in result.output

    @pytest.mark.parametrize(
        "payload",
        [
            [{"predicted_inflows": 10}],
            [{"week_number": None}],
            [{"week_number": 1.5}],
            {"weeks": [{"week_number": 1, "week_start_date": 20240902}]},
            {"weeks": "week 1"},
        ],
    )
    def test_aggregate_bad_week(self, write_json_file, temp_dir, payload):
        weeks_file = write_json_file("weeks.json", payload)

        result = self.runner.invoke(cashflow, ["aggregate", str(weeks_file), "--output-dir", str(temp_dir)])

        assert result.exit_code == 1
        assert "Could not load forecast weeks" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_aggregate_null_weeks(self, write_json_file, temp_dir):
        weeks_file = write_json_file("weeks.json", {"weeks": None})

        result = self.runner.invoke(cashflow, ["aggregate", str(weeks_file), "--output-dir", str(temp_dir)])

        assert result.exit_code == 0, result.output
        assert "Aggregated 0 weeks" in result.output


@pytest.mark.integration
@pytest.mark.forecast
class TestCashFlowSummaryCLI:
    """Test bizledger cashflow summary."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_summary_flags_red_weeks(self, write_json_file, temp_dir, sample_forecast_weeks):
        weeks_file = write_json_file("weeks.json", sample_forecast_weeks)
        output = temp_dir / "summary.json"

        result = self.runner.invoke(
            cashflow, ["summary", str(weeks_file), "--threshold", "0", "--output", str(output)]
        )

        assert result.exit_code == 0, result.output
        assert "[SUMMARY] Forecast:" in result.output
        assert "Weeks: 4" in result.output
        assert "Ending Balance: $40.00" in result.output
        assert "Lowest Balance: -$100.00 (week 3)" in result.output
        assert "[RED WEEKS] Below $0.00:" in result.output
        assert "Week 3: ending -$100.00, short $100.00 (high_outflows)" in result.output

        data = read_json(output)
        assert data["summary"]["week_count"] == 4
        assert [w["week_number"] for w in data["red_weeks"]] == [3]

    def test_summary_no_red_weeks(self, write_json_file, sample_forecast_weeks):
        weeks_file = write_json_file("weeks.json", sample_forecast_weeks)

        result = self.runner.invoke(
            cashflow, ["summary", str(weeks_file), "--initial-balance", "25000", "--threshold", "5000"]
        )

        assert result.exit_code == 0, result.output
        assert "Initial Balance: $25,000.00" in result.output
        assert "No weeks below $5,000.00" in result.output


@pytest.mark.integration
@pytest.mark.forecast
class TestCashFlowChartCLI:
    """Test bizledger cashflow chart."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_chart_png(self, write_json_file, temp_dir, sample_forecast_weeks):
        weeks_file = write_json_file("weeks.json", sample_forecast_weeks)
        output_dir = temp_dir / "charts"

        result = self.runner.invoke(cashflow, ["chart", str(weeks_file), "--output-dir", str(output_dir)])

        assert result.exit_code == 0, result.output
        assert "Chart saved to:" in result.output
        assert len(list(output_dir.glob("*_cash_flow_forecast.png"))) == 1

    def test_chart_empty_forecast(self, write_json_file, temp_dir):
        weeks_file = write_json_file("weeks.json", {"weeks": []})

        result = self.runner.invoke(cashflow, ["chart", str(weeks_file), "--output-dir", str(temp_dir)])

        assert result.exit_code == 1
        assert "No forecast weeks" in result.output

    def test_chart_rejects_unknown_format(self, write_json_file, temp_dir, sample_forecast_weeks):
        weeks_file = write_json_file("weeks.json", sample_forecast_weeks)

        result = self.runner.invoke(
            cashflow, ["chart", str(weeks_file), "--output-dir", str(temp_dir), "--format", "gif"]
        )

        assert result.exit_code == 2
