#!/usr/bin/env python3
"""
Reconciliation CLI - Expense/Invoice Matching Commands

Command-line interface over the reconciliation matcher and batches.
"""

from pathlib import Path

import click

from ..core.config import get_config
from ..core.currency import MXN, USD, format_money
from ..core.json_utils import write_json
from ..reconciliation import (
    MatchStatus,
    ReconciliationBatch,
    ReconciliationMatcher,
    load_batch_items,
    load_expense,
    load_invoices,
)

STATUS_MESSAGES = {
    MatchStatus.EXACT: "Exact match - ready to reconcile",
    MatchStatus.EXPENSE_EXCESS: "Expense not fully covered - adjustment needed",
    MatchStatus.INVOICE_EXCESS: "Invoices exceed the expense (over-applied) - adjustment needed",
}


def _default_currency(ctx: click.Context) -> str:
    """Currency from the top-level --default-currency, else from configuration."""
    return (ctx.obj or {}).get("default_currency") or get_config().reconciliation.default_currency


def _matcher(ctx: click.Context) -> ReconciliationMatcher:
    config = get_config()
    return ReconciliationMatcher(
        default_currency=_default_currency(ctx),
        match_tolerance_cents=config.reconciliation.match_tolerance_cents,
    )


@click.group()
def reconcile() -> None:
    """Expense/invoice reconciliation commands."""
    pass


@reconcile.command()
@click.argument("expense_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("invoices_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Write result as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def match(
    ctx: click.Context, expense_file: Path, invoices_file: Path, output: Path | None, verbose: bool
) -> None:
    """
    Compare an expense against the invoices selected for it.

    Examples:
      bizledger reconcile match expense.json invoices.json
      bizledger reconcile match expense.json invoices.json --output result.json
    """
    verbose = verbose or (ctx.obj or {}).get("verbose", False)

    try:
        expense = load_expense(expense_file)
        invoices = load_invoices(invoices_file)
    except (ValueError, KeyError, TypeError) as e:
        raise click.ClickException(f"Could not load input: {e}") from e

    matcher = _matcher(ctx)
    result = matcher.match(expense, invoices)

    if output:
        write_json(output, {**result.to_dict(), "status": matcher.classify(result).value})

    if result.error:
        raise click.ClickException(
            f"Currency mismatch: expense is in {result.currency} "
            f"but an invoice is in {result.error_currency}"
        )

    if verbose:
        click.echo(f"Expense: {expense.id or expense_file.name} ({result.currency})")
        click.echo(f"Invoices selected: {len(invoices)}")
        if result.currency == USD:
            mxn = expense.converted_amount(MXN, matcher.default_currency)
            click.echo(f"MXN equivalent: {format_money(mxn.to_cents(), MXN)}")
        click.echo()

    expense_amount = expense.comparison_amount(matcher.default_currency)
    click.echo(f"Expense amount:  {format_money(expense_amount.to_cents(), result.currency)}")
    click.echo(f"Selected total:  {format_money(result.total_selected_amount.to_cents(), result.currency)}")
    click.echo(f"Remaining:       {format_money(result.remaining_amount.to_cents(), result.currency)}")
    click.echo(STATUS_MESSAGES[matcher.classify(result)])


@reconcile.command()
@click.argument("expense_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("invoices_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Write plan as JSON")
@click.pass_context
def allocate(ctx: click.Context, expense_file: Path, invoices_file: Path, output: Path | None) -> None:
    """
    Show how an expense would be applied across its invoices.

    Invoices are applied in file order.
    """
    try:
        expense = load_expense(expense_file)
        invoices = load_invoices(invoices_file)
    except (ValueError, KeyError, TypeError) as e:
        raise click.ClickException(f"Could not load input: {e}") from e

    plan = _matcher(ctx).allocate(expense, invoices)

    if output:
        write_json(output, plan.to_dict())

    if plan.result.error:
        raise click.ClickException(
            f"Currency mismatch: expense is in {plan.result.currency} "
            f"but an invoice is in {plan.result.error_currency}"
        )

    currency = plan.result.currency
    click.echo(f"Allocation plan ({plan.status.value}):")
    for allocation in plan.allocations:
        paid_marker = " [paid]" if allocation.fully_paid else ""
        click.echo(
            f"  {allocation.invoice.label} ({allocation.invoice.invoice_type}): "
            f"{format_money(allocation.applied_amount.to_cents(), currency)}{paid_marker}"
        )
    click.echo(f"Unapplied: {format_money(plan.unapplied_amount.to_cents(), currency)}")


@reconcile.command()
@click.argument("batch_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--description", default="", help="Batch description")
@click.pass_context
def batch(ctx: click.Context, batch_file: Path, description: str) -> None:
    """
    Check that a batch of expenses and invoices nets to zero.

    The batch file holds {"expenses": [...], "invoices": [...]}.
    """
    config = get_config()

    try:
        items = load_batch_items(batch_file, _default_currency(ctx))
    except (ValueError, KeyError, TypeError) as e:
        raise click.ClickException(f"Could not load batch: {e}") from e

    recon_batch = ReconciliationBatch(
        items=items,
        description=description,
        tolerance_cents=config.reconciliation.match_tolerance_cents,
    )

    click.echo(f"Batch items: {len(recon_batch.items)}")
    for item in recon_batch.items:
        amount = format_money(item.amount.to_cents(), item.currency)
        click.echo(f"  {item.item_type:<8} {item.id:<12} {amount}")
    click.echo(f"Total: {format_money(recon_batch.total.to_cents(), items[0].currency if items else None)}")

    errors = recon_batch.validate()
    if errors:
        raise click.ClickException("; ".join(errors))

    click.echo("Batch is balanced")


if __name__ == "__main__":
    reconcile()
