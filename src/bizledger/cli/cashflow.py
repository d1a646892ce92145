#!/usr/bin/env python3
"""
Cash Flow CLI - Forecast Commands

Command-line interface for weekly cash-flow aggregation and reporting.
"""

from datetime import datetime
from pathlib import Path

import click

from ..core.config import get_config
from ..core.currency import format_cents
from ..core.json_utils import write_json
from ..core.money import Money
from ..forecast import (
    CashFlowAggregator,
    ChartConfig,
    ForecastChart,
    load_forecast_weeks,
    weeks_to_dataframe,
)


def _parse_amount(value: str | None, option: str) -> Money | None:
    if value is None:
        return None
    try:
        return Money.from_amount(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint=option) from e


def _load_weeks(weeks_file: Path):
    try:
        return load_forecast_weeks(weeks_file)
    except (ValueError, KeyError, TypeError) as e:
        raise click.ClickException(f"Could not load forecast weeks: {e}") from e


@click.group()
def cashflow() -> None:
    """Cash-flow forecast commands."""
    pass


@cashflow.command()
@click.argument("weeks_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--initial-balance", help="Opening balance; adds starting/ending balance per week")
@click.option(
    "--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Override output directory"
)
@click.option(
    "--format", type=click.Choice(["json", "csv"]), default="json", help="Output format (default: json)"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def aggregate(
    ctx: click.Context,
    weeks_file: Path,
    initial_balance: str | None,
    output_dir: Path | None,
    format: str,
    verbose: bool,
) -> None:
    """
    Compute net and cumulative cash flow for each forecast week.

    Examples:
      bizledger cashflow aggregate weeks.json
      bizledger cashflow aggregate weeks.json --initial-balance 25000 --format csv
    """
    config = get_config()
    opening = _parse_amount(initial_balance, "--initial-balance")
    weeks = _load_weeks(weeks_file)

    output_path = output_dir or config.forecast.output_dir
    output_path.mkdir(parents=True, exist_ok=True)

    aggregated = CashFlowAggregator().aggregate(weeks, initial_balance=opening)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    output_file = output_path / f"{timestamp}_cash_flow_weeks.{format}"

    if format == "json":
        write_json(output_file, {"weeks": [w.to_dict() for w in aggregated]})
    else:
        weeks_to_dataframe(aggregated).to_csv(output_file)

    if verbose or (ctx.obj or {}).get("verbose", False):
        for week in aggregated:
            click.echo(
                f"  {week.label:<8} net {format_cents(week.net_cash_flow.to_cents()):>14}"
                f"  cumulative {format_cents(week.cumulative_cash_flow.to_cents()):>14}"
            )

    click.echo(f"Aggregated {len(aggregated)} weeks")
    click.echo(f"Saved to: {output_file}")


@cashflow.command()
@click.argument("weeks_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--initial-balance", help="Opening balance (default: 0)")
@click.option("--threshold", help="Red-week threshold (default: RED_WEEK_THRESHOLD)")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Write summary as JSON")
def summary(
    weeks_file: Path, initial_balance: str | None, threshold: str | None, output: Path | None
) -> None:
    """
    Summarize a forecast and flag weeks that end below the threshold.

    Example:
      bizledger cashflow summary weeks.json --initial-balance 25000 --threshold 5000
    """
    config = get_config()
    opening = _parse_amount(initial_balance, "--initial-balance") or Money.zero()
    red_threshold = _parse_amount(threshold, "--threshold") or Money.from_cents(
        config.forecast.red_week_threshold_cents
    )
    weeks = _load_weeks(weeks_file)

    aggregator = CashFlowAggregator()
    stats = aggregator.summarize(weeks, initial_balance=opening)
    red_weeks = aggregator.find_red_weeks(weeks, initial_balance=opening, threshold=red_threshold)

    if output:
        write_json(output, {"summary": stats.to_dict(), "red_weeks": [w.to_dict() for w in red_weeks]})

    click.echo("[SUMMARY] Forecast:")
    click.echo(f"   Weeks: {stats.week_count}")
    click.echo(f"   Initial Balance: {format_cents(stats.initial_balance.to_cents())}")
    click.echo(f"   Total Inflows: {format_cents(stats.total_inflows.to_cents())}")
    click.echo(f"   Total Outflows: {format_cents(stats.total_outflows.to_cents())}")
    click.echo(f"   Ending Balance: {format_cents(stats.ending_balance.to_cents())}")
    if stats.lowest_balance_week is not None:
        click.echo(
            f"   Lowest Balance: {format_cents(stats.lowest_balance.to_cents())} "
            f"(week {stats.lowest_balance_week})"
        )
    click.echo(f"   Weekly Trend: {stats.weekly_trend:,.2f}/week ({stats.trend_direction})")
    click.echo(f"   Trend Confidence: {stats.trend_confidence*100:.1f}%")

    if not red_weeks:
        click.echo(f"\nNo weeks below {format_cents(red_threshold.to_cents())}")
        return

    click.echo(f"\n[RED WEEKS] Below {format_cents(red_threshold.to_cents())}:")
    for week in red_weeks:
        drivers = ", ".join(d.type for d in week.drivers) or "none"
        click.echo(
            f"   Week {week.week_number}: ending {format_cents(week.ending_balance.to_cents())}, "
            f"short {format_cents(week.shortfall.to_cents())} ({drivers})"
        )


@cashflow.command()
@click.argument("weeks_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Override output directory"
)
@click.option(
    "--format", type=click.Choice(["png", "pdf", "svg"]), default="png", help="Output format (default: png)"
)
def chart(weeks_file: Path, output_dir: Path | None, format: str) -> None:
    """Render the forecast as a line chart."""
    config = get_config()
    weeks = _load_weeks(weeks_file)
    if not weeks:
        raise click.ClickException(f"No forecast weeks in {weeks_file}")

    output_path = output_dir or config.forecast.output_dir / "charts"

    chart_config = ChartConfig(
        figure_size=(config.forecast.chart_width, config.forecast.chart_height),
        dpi=config.forecast.chart_dpi,
        output_format=format,
    )
    aggregated = CashFlowAggregator().aggregate(weeks)
    output_file = ForecastChart(chart_config).render(aggregated, output_path)

    click.echo(f"Chart saved to: {output_file}")


if __name__ == "__main__":
    cashflow()
