#!/usr/bin/env python3
"""
Main CLI Entry Point for bizledger

Provides unified command-line interface for reconciliation and cash-flow tools.
"""

import logging
import os

import click

from ..core.config import get_config
from ..core.currency import format_cents
from ..core.json_utils import format_json


def _validate_currency(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is not None and (len(value) != 3 or not value.isalpha() or not value.isupper()):
        raise click.BadParameter(f"must be a 3-letter ISO code like MXN, got {value!r}")
    return value


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option(
    "--default-currency",
    callback=_validate_currency,
    help="Currency assumed for records without one (default: DEFAULT_CURRENCY)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx: click.Context, config_env: str | None, default_currency: str | None, verbose: bool, debug: bool
) -> None:
    """
    bizledger - Reconciliation and Cash-Flow Tools

    Match expenses against invoices and project weekly cash flow.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["BIZLEDGER_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("bizledger").setLevel(logging.DEBUG)

    config = get_config()
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config
    ctx.obj["default_currency"] = default_currency or config.reconciliation.default_currency

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")
        click.echo(f"Default currency: {ctx.obj['default_currency']}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from bizledger import __author__, __version__

    click.echo(f"bizledger v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the configuration as JSON")
@click.pass_context
def config(ctx: click.Context, as_json: bool) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]
    default_currency = ctx.obj["default_currency"]

    if as_json:
        data = config_obj.to_dict()
        data["reconciliation"]["default_currency"] = default_currency
        click.echo(format_json(data))
        return

    forecast = config_obj.forecast
    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Forecast Output Directory: {forecast.output_dir}")
    click.echo(f"  Default Currency: {default_currency}")
    click.echo(f"  Match Tolerance (cents): {config_obj.reconciliation.match_tolerance_cents}")
    click.echo(f"  Forecast Horizon (weeks): {forecast.horizon_weeks}")
    click.echo(f"  Red-Week Threshold: {format_cents(forecast.red_week_threshold_cents)}")
    click.echo(f"  Chart: {forecast.chart_width}x{forecast.chart_height} in @ {forecast.chart_dpi} dpi")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .cashflow import cashflow  # noqa: E402
from .reconcile import reconcile  # noqa: E402

main.add_command(reconcile)
main.add_command(cashflow)


if __name__ == "__main__":
    main()
